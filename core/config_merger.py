"""
Three-tier configuration merge: command line over YAML over built-in defaults.

Window fields resolve independently field by field. Content fields overlay
the same way, except that there are no content defaults and a content block
must come from at least one source. Content-specific locking runs as a
separate pass after the generic merge.
"""

from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Dict, Mapping, Optional

from popup_app.popup_app import logger as app_logger
from shared.config_schema import InvalidContentType, InvalidField, MissingContent
from shared.window_definition import (
    WEBVIEW_URL_SCHEMES,
    ConfigFragment,
    ContentFragment,
    ContentSpec,
    NotificationContent,
    ResolvedConfig,
    TitleBarStyle,
    WebviewContent,
    WindowFragment,
    WindowSpec,
    is_set,
)

_LOGGER = app_logger.get_logger()

NOTIFICATION_LOCKED_FIELDS: Mapping[str, Any] = {
    "width": 500,
    "height": 300,
    "title_bar_style": TitleBarStyle.OVERLAY,
    "resizable": False,
    "skip_taskbar": True,
}

_WEBVIEW_ALIASES = {"webview", "custom"}


def resolve(
    defaults: WindowSpec,
    yaml_fragment: ConfigFragment,
    cli_fragment: ConfigFragment,
) -> ResolvedConfig:
    """Merge the three tiers into one immutable window/content pair."""
    content = merge_content(yaml_fragment.content, cli_fragment.content)
    window = merge_window(defaults, yaml_fragment.window, cli_fragment.window)
    window = apply_content_locks(window, content)
    _LOGGER.debug("Resolved {} content with window {}", content.type_name, window)
    return ResolvedConfig(window=window, content=content)


def merge_window(defaults: WindowSpec, *layers: WindowFragment) -> WindowSpec:
    """Later layers win; a layer only contributes the fields it has set."""
    values: Dict[str, Any] = {}
    for spec_field in fields(WindowSpec):
        value = getattr(defaults, spec_field.name)
        for layer in layers:
            candidate = getattr(layer, spec_field.name)
            if is_set(candidate):
                value = candidate
        values[spec_field.name] = value
    return WindowSpec(**values)


def apply_content_locks(window: WindowSpec, content: ContentSpec) -> WindowSpec:
    """Force the fixed operational fields of content types that lock geometry."""
    if isinstance(content, NotificationContent):
        return replace(window, **NOTIFICATION_LOCKED_FIELDS)
    return window


def merge_content(
    yaml_content: Optional[ContentFragment],
    cli_content: Optional[ContentFragment],
) -> ContentSpec:
    if cli_content is not None and is_set(cli_content.title) and not is_set(cli_content.window_title):
        # --title doubles as the webview window title.
        cli_content = replace(cli_content, window_title=cli_content.title)

    layers = [layer for layer in (yaml_content, cli_content) if layer is not None]
    if not layers:
        raise MissingContent(
            "No content defined. Provide a 'content' block via --config, or use --type."
        )

    merged: Dict[str, Any] = {}
    for spec_field in fields(ContentFragment):
        for layer in layers:
            candidate = getattr(layer, spec_field.name)
            if is_set(candidate):
                merged[spec_field.name] = candidate

    content_type = merged.get("type")
    if content_type is None:
        raise InvalidContentType("Content type is required. Must be 'webview' or 'notification'.")
    content_type = content_type.lower()

    if content_type == "notification":
        return _build_notification(merged)
    if content_type in _WEBVIEW_ALIASES:
        return _build_webview(merged)
    raise InvalidContentType(
        f"Unknown type '{merged['type']}'. Must be 'webview' or 'notification'."
    )


def _build_notification(values: Mapping[str, Any]) -> NotificationContent:
    for required in ("title", "description"):
        if not values.get(required):
            raise InvalidField(f"content.{required} is required for notification type.")
    return NotificationContent(
        title=values["title"],
        description=values["description"],
        icon=values.get("icon"),
        button_primary_text=values.get("button_primary_text"),
        button_primary_webhook=values.get("button_primary_webhook"),
        button_secondary_text=values.get("button_secondary_text"),
        button_secondary_webhook=values.get("button_secondary_webhook"),
    )


def _build_webview(values: Mapping[str, Any]) -> WebviewContent:
    url = values.get("url")
    if not url:
        raise InvalidField("content.url is required for webview type.")
    if not url.startswith(WEBVIEW_URL_SCHEMES):
        raise InvalidField(
            f"content.url must start with http://, https://, or file:// (got '{url}')."
        )
    return WebviewContent(url=url, window_title=values.get("window_title"))
