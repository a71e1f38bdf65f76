"""
Selects the renderer for resolved content.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from popup_app.popup_app import logger as app_logger
from shared.window_definition import ContentSpec, NotificationContent, WebviewContent

_LOGGER = app_logger.get_logger()

DEFAULT_WINDOW_TITLE = "Popup"


class RenderKind(Enum):
    NOTIFICATION = "notification"
    WEBVIEW = "webview"


class FatalIntegrationError(RuntimeError):
    """The host integration is broken and no coordinated recovery is possible."""


class UnroutableContentError(FatalIntegrationError):
    """Content reached the router without a renderer to handle it."""


@dataclass(frozen=True, slots=True)
class RenderTarget:
    kind: RenderKind
    window_title: str
    url: Optional[str] = None
    notification: Optional[NotificationContent] = None


def route(content: ContentSpec) -> RenderTarget:
    """Map a content variant to its renderer contract."""
    if isinstance(content, NotificationContent):
        return RenderTarget(
            kind=RenderKind.NOTIFICATION,
            window_title=content.title,
            notification=content,
        )
    if isinstance(content, WebviewContent):
        return RenderTarget(
            kind=RenderKind.WEBVIEW,
            window_title=content.window_title or DEFAULT_WINDOW_TITLE,
            url=content.url,
        )
    _LOGGER.critical("No renderer for content of type {}", type(content).__name__)
    raise UnroutableContentError(f"No renderer for content of type {type(content).__name__}.")
