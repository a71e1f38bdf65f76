"""
Configuration schema validation shared by the YAML and command-line readers.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from popup_app.popup_app import logger as app_logger

from .window_definition import (
    ConfigFragment,
    ContentFragment,
    TitleBarStyle,
    WebhookConfig,
    WindowFragment,
    WINDOW_FIELDS,
    camel_to_snake,
)

_LOGGER = app_logger.get_logger()


class ConfigError(ValueError):
    """Raised when configuration cannot produce a valid window specification."""


class MalformedDocument(ConfigError):
    """The YAML text could not be parsed or has the wrong overall shape."""


class InvalidField(ConfigError):
    """A present field has the wrong type or an unrecognized value."""


class InvalidFlagValue(ConfigError):
    """A command-line flag value could not be parsed."""


class UnknownFlag(ConfigError):
    """A command-line flag is not recognized."""


class MissingContent(ConfigError):
    """No source defines a content block."""


class InvalidContentType(ConfigError):
    """The content type tag is not a supported variant."""


class ConfigFileError(ConfigError):
    """The configuration file could not be read."""


CONTENT_TYPES = ("notification", "webview", "custom")

_CONTENT_STRING_FIELDS = (
    "type",
    "title",
    "description",
    "icon",
    "url",
    "window_title",
    "button_primary_text",
    "button_secondary_text",
)
_CONTENT_WEBHOOK_FIELDS = ("button_primary_webhook", "button_secondary_webhook")


def load_config_file(path: str | Path) -> ConfigFragment:
    """
    Read a YAML configuration file and return its fragment.

    ``~`` is expanded and relative paths are taken from the current working
    directory.
    """
    expanded = Path(os.path.expanduser(str(path)))
    if not expanded.is_absolute():
        expanded = Path.cwd() / expanded

    try:
        text = expanded.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigFileError(f"Config file not found: {expanded}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigFileError(f"Failed to read config file '{expanded}': {exc}") from exc

    _LOGGER.debug("Loaded config file {}", expanded)
    return parse_yaml(text)


def parse_yaml(text: str) -> ConfigFragment:
    """
    Parse a YAML document into a sparse configuration fragment.

    Only fields present in the document are recorded; nothing is defaulted.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MalformedDocument(f"Failed to parse YAML config: {exc}") from exc

    if document is None:
        return ConfigFragment()
    if not isinstance(document, dict):
        raise MalformedDocument("Config root must be a mapping.")

    window_section = _optional_mapping(document.get("window"), section="window")
    content_section = _optional_mapping(document.get("content"), section="content")

    window = parse_window_section(window_section) if window_section is not None else WindowFragment()
    content = parse_content_section(content_section) if content_section is not None else None
    return ConfigFragment(window=window, content=content)


def parse_window_section(section: Mapping[str, Any]) -> WindowFragment:
    values: Dict[str, Any] = {}
    sources: Dict[str, str] = {}

    for key, raw in section.items():
        name = _window_field_name(key)
        if name is None:
            _LOGGER.warning("Ignoring unknown window setting '{}'", key)
            continue
        if name in sources:
            raise InvalidField(f"window.{name} is given twice (as '{sources[name]}' and '{key}').")
        sources[name] = str(key)
        values[camel_to_snake(name)] = validate_window_value(name, raw)

    return WindowFragment(**values)


def validate_window_value(name: str, value: Any) -> Any:
    """Validate a single window field given by its camelCase name."""
    if name in ("width", "height"):
        if isinstance(value, str):
            raise InvalidField(f"window.{name} must be a number, not a string.")
        return coerce_dimension(value, field=f"window.{name}", error=InvalidField)
    if name == "titleBarStyle":
        if not isinstance(value, str):
            raise InvalidField("window.titleBarStyle must be a string.")
        return coerce_title_bar_style(value, error=InvalidField)
    if not isinstance(value, bool):
        raise InvalidField(f"window.{name} must be true or false.")
    return value


def parse_content_section(section: Mapping[str, Any]) -> ContentFragment:
    values: Dict[str, Any] = {}

    for name in _CONTENT_STRING_FIELDS:
        if name not in section:
            continue
        raw = section[name]
        if raw is None:
            continue
        if not isinstance(raw, str):
            raise InvalidField(f"content.{name} must be a string.")
        values[name] = raw.strip() if name == "type" else raw

    for name in _CONTENT_WEBHOOK_FIELDS:
        raw = section.get(name)
        if raw is not None:
            values[name] = _parse_webhook(raw, field=f"content.{name}")

    return ContentFragment(**values)


def coerce_dimension(value: Any, *, field: str, error: type[ConfigError]) -> int:
    """Return a positive pixel size; integral floats and command-line number strings are accepted."""
    if isinstance(value, bool):
        raise error(f"{field} must be a positive integer.")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError as exc:
            raise error(f"{field} must be a positive integer, got '{value}'.") from exc
    if isinstance(value, float):
        if not value.is_integer():
            raise error(f"{field} must be a whole number of pixels.")
        value = int(value)
    if not isinstance(value, int):
        raise error(f"{field} must be a positive integer.")
    if value <= 0:
        raise error(f"{field} must be greater than zero.")
    return value


def coerce_title_bar_style(value: str, *, error: type[ConfigError]) -> TitleBarStyle:
    try:
        return TitleBarStyle.from_name(value)
    except ValueError as exc:
        allowed = ", ".join(style.value for style in TitleBarStyle)
        raise error(f"titleBarStyle must be one of: {allowed} (got '{value}').") from exc


def _parse_webhook(value: Any, *, field: str) -> WebhookConfig:
    if not isinstance(value, dict):
        raise InvalidField(f"{field} must be a mapping with 'url' and 'payload'.")
    url = value.get("url")
    payload = value.get("payload")
    if not isinstance(url, str) or not url.strip():
        raise InvalidField(f"{field}.url must be a non-empty string.")
    if not isinstance(payload, str):
        raise InvalidField(f"{field}.payload must be a string.")
    return WebhookConfig(url=url.strip(), payload=payload)


def _optional_mapping(value: Any, *, section: str) -> Optional[Mapping[str, Any]]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise MalformedDocument(f"'{section}' must be a mapping.")
    return value


def _window_field_name(key: Any) -> Optional[str]:
    """Map a camelCase or snake_case key to its camelCase window field name."""
    if not isinstance(key, str):
        return None
    if key in WINDOW_FIELDS:
        return key
    for name in WINDOW_FIELDS:
        if camel_to_snake(name) == key:
            return name
    return None
