"""
Shared representation of the popup window: geometry/chrome fields, content
variants and the built-in defaults every configuration starts from.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class TitleBarStyle(Enum):
    OVERLAY = "Overlay"
    TRANSPARENT = "Transparent"
    VISIBLE = "Visible"

    @classmethod
    def from_name(cls, value: str) -> "TitleBarStyle":
        """Case-insensitive lookup by value; raises ValueError when unknown."""
        lowered = value.strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        raise ValueError(value)


class _Unset:
    """Marker for a configuration field that a source did not mention."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    return value is not UNSET


@dataclass(frozen=True, slots=True)
class WindowSpec:
    """Fully resolved window chrome. Every field carries a concrete value."""

    width: int
    height: int
    resizable: bool
    always_on_top: bool
    skip_taskbar: bool
    focus: bool
    visible_on_all_workspaces: bool
    closable: bool
    minimizable: bool
    hidden_title: bool
    title_bar_style: TitleBarStyle

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for spec_field in fields(self):
            value = getattr(self, spec_field.name)
            if isinstance(value, TitleBarStyle):
                value = value.value
            data[snake_to_camel(spec_field.name)] = value
        return data


@dataclass(frozen=True, slots=True)
class WebhookConfig:
    url: str
    payload: str


@dataclass(frozen=True, slots=True)
class NotificationContent:
    title: str
    description: str
    icon: Optional[str] = None
    button_primary_text: Optional[str] = None
    button_primary_webhook: Optional[WebhookConfig] = None
    button_secondary_text: Optional[str] = None
    button_secondary_webhook: Optional[WebhookConfig] = None

    type_name = "notification"


@dataclass(frozen=True, slots=True)
class WebviewContent:
    url: str
    window_title: Optional[str] = None

    type_name = "webview"


ContentSpec = Union[NotificationContent, WebviewContent]


@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """Window + content pair handed to the renderer for the process lifetime."""

    window: WindowSpec
    content: ContentSpec

    def to_dict(self) -> Dict[str, Any]:
        content = {"type": self.content.type_name}
        content.update(asdict(self.content))
        return {"content": content, "window": self.window.to_dict()}


@dataclass(frozen=True, slots=True)
class WindowFragment:
    """Sparse window settings from a single source; absent fields are UNSET."""

    width: Any = UNSET
    height: Any = UNSET
    resizable: Any = UNSET
    always_on_top: Any = UNSET
    skip_taskbar: Any = UNSET
    focus: Any = UNSET
    visible_on_all_workspaces: Any = UNSET
    closable: Any = UNSET
    minimizable: Any = UNSET
    hidden_title: Any = UNSET
    title_bar_style: Any = UNSET


@dataclass(frozen=True, slots=True)
class ContentFragment:
    """Sparse content settings; variant-specific validation happens at merge."""

    type: Any = UNSET
    title: Any = UNSET
    description: Any = UNSET
    icon: Any = UNSET
    url: Any = UNSET
    window_title: Any = UNSET
    button_primary_text: Any = UNSET
    button_primary_webhook: Any = UNSET
    button_secondary_text: Any = UNSET
    button_secondary_webhook: Any = UNSET


@dataclass(frozen=True, slots=True)
class ConfigFragment:
    window: WindowFragment = field(default_factory=WindowFragment)
    content: Optional[ContentFragment] = None


WEBVIEW_URL_SCHEMES = ("http://", "https://", "file://")

_DEFAULT_WINDOW = WindowSpec(
    width=800,
    height=600,
    resizable=False,
    always_on_top=True,
    skip_taskbar=True,
    focus=True,
    visible_on_all_workspaces=True,
    closable=False,
    minimizable=False,
    hidden_title=True,
    title_bar_style=TitleBarStyle.OVERLAY,
)


def defaults() -> WindowSpec:
    """Return the built-in window settings used when no source sets a field."""
    return _DEFAULT_WINDOW


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_kebab(name: str) -> str:
    """``alwaysOnTop`` -> ``always-on-top``."""
    return _CAMEL_BOUNDARY.sub("-", name).lower()


def to_camel(name: str) -> str:
    """``always-on-top`` -> ``alwaysOnTop``."""
    head, *rest = name.split("-")
    return head + "".join(part.capitalize() for part in rest)


def snake_to_camel(name: str) -> str:
    return to_camel(name.replace("_", "-"))


def camel_to_snake(name: str) -> str:
    return to_kebab(name).replace("-", "_")


WINDOW_FIELDS: Tuple[str, ...] = tuple(snake_to_camel(f.name) for f in fields(WindowSpec))
