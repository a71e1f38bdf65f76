"""
Command-line reader producing a sparse configuration fragment.

Window flags are the kebab-case form of the camelCase field names
(``alwaysOnTop`` -> ``--always-on-top``). Flags that are not given stay
UNSET so they never shadow values from the config file.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from popup_app.popup_app import logger as app_logger

from .config_schema import (
    ConfigError,
    InvalidFlagValue,
    UnknownFlag,
    coerce_dimension,
    coerce_title_bar_style,
)
from .window_definition import (
    WEBVIEW_URL_SCHEMES,
    ConfigFragment,
    ContentFragment,
    WebhookConfig,
    WindowFragment,
    WINDOW_FIELDS,
    camel_to_snake,
    to_kebab,
)

_LOGGER = app_logger.get_logger()

PROGRAM_NAME = "popup"
TEMPLATES_TEXT = """Available content types:

  webview       Load external webpage or local HTML file
                Example: popup --type webview --url https://example.com

  notification  Display a notification dialog with buttons
                Example: popup --type notification --title 'Update' --description 'Please update'

Window settings can be customized via --config YAML file or CLI flags.
Run 'popup --help' for all available options."""

_WINDOW_HELP = {
    "width": "Window width in pixels.",
    "height": "Window height in pixels.",
    "resizable": "Controls whether the window can be resized.",
    "alwaysOnTop": "Keep window always on top of other windows.",
    "skipTaskbar": "Hide from taskbar/dock.",
    "focus": "Automatically focus window when opened.",
    "visibleOnAllWorkspaces": "Show on all virtual desktops.",
    "closable": "Controls whether window shows the close button.",
    "minimizable": "Controls whether window shows the minimize button.",
    "hiddenTitle": "Hide the title bar.",
    "titleBarStyle": "Title bar style: Overlay, Transparent or Visible.",
}

_CONTENT_FLAGS = {
    "type": "Content type: 'webview' or 'notification'.",
    "url": "URL to load for webview type.",
    "title": "Title (for notification or webview window title).",
    "description": "Description (for notification type).",
    "icon": "Icon URL or file path (for notification type).",
    "button-primary-text": "Primary button text (default: 'Ok').",
    "button-primary-webhook-url": "Primary button webhook URL.",
    "button-primary-webhook-payload": "Primary button webhook payload (JSON string).",
    "button-secondary-text": "Secondary button text (default: 'Cancel').",
    "button-secondary-webhook-url": "Secondary button webhook URL.",
    "button-secondary-webhook-payload": "Secondary button webhook payload (JSON string).",
}


@dataclass(frozen=True, slots=True)
class CliOptions:
    fragment: ConfigFragment
    config_path: Optional[str] = None
    show_templates: bool = False


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise InvalidFlagValue(message)


def parse_bool_token(token: str) -> bool:
    lowered = token.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise argparse.ArgumentTypeError(f"expected 'true' or 'false', got '{token}'")


def _dimension(token: str) -> int:
    try:
        return coerce_dimension(token, field="value", error=InvalidFlagValue)
    except ConfigError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _title_bar_style(token: str):
    try:
        return coerce_title_bar_style(token, error=InvalidFlagValue)
    except ConfigError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(
        prog=PROGRAM_NAME,
        description="A simple popup window tool",
        allow_abbrev=False,
        argument_default=argparse.SUPPRESS,
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to the YAML config file. You can define window settings and layout in the config file.",
    )
    parser.add_argument(
        "--templates",
        action="store_true",
        help="List available content types.",
    )

    content = parser.add_argument_group("content")
    for flag, help_text in _CONTENT_FLAGS.items():
        content.add_argument(f"--{flag}", help=help_text)
    content.add_argument(
        "--webview",
        metavar="URL",
        help="DEPRECATED: use --type webview --url instead.",
    )

    window = parser.add_argument_group("window")
    for name in WINDOW_FIELDS:
        if name in ("width", "height"):
            value_type, metavar = _dimension, "PIXELS"
        elif name == "titleBarStyle":
            value_type, metavar = _title_bar_style, "STYLE"
        else:
            value_type, metavar = parse_bool_token, "true|false"
        window.add_argument(
            f"--{to_kebab(name)}",
            dest=camel_to_snake(name),
            type=value_type,
            metavar=metavar,
            help=_WINDOW_HELP[name],
        )
    return parser


def parse_cli(args: Optional[Sequence[str]] = None) -> CliOptions:
    """Parse command-line arguments into options and a configuration fragment."""
    argv = list(sys.argv[1:] if args is None else args)
    parser = build_parser()
    namespace, extras = parser.parse_known_args(argv)
    if extras:
        flags = [item for item in extras if item.startswith("-")]
        if flags:
            raise UnknownFlag(f"Unknown flag '{flags[0].split('=', 1)[0]}'.")
        raise UnknownFlag(f"Unexpected argument '{extras[0]}'.")

    values: Dict[str, Any] = vars(namespace)
    window = WindowFragment(
        **{
            camel_to_snake(name): values[camel_to_snake(name)]
            for name in WINDOW_FIELDS
            if camel_to_snake(name) in values
        }
    )
    return CliOptions(
        fragment=ConfigFragment(window=window, content=_content_fragment(values)),
        config_path=values.get("config"),
        show_templates=values.get("templates", False),
    )


def _content_fragment(values: Dict[str, Any]) -> Optional[ContentFragment]:
    content: Dict[str, Any] = {}
    for name in ("type", "url", "title", "description", "icon", "button_primary_text", "button_secondary_text"):
        if name in values:
            content[name] = values[name]

    webview_url = values.get("webview")
    if webview_url is not None:
        _LOGGER.warning("--webview is deprecated; use --type webview --url instead.")
        if not webview_url.startswith(WEBVIEW_URL_SCHEMES):
            raise InvalidFlagValue(
                "--webview URL must start with http://, https://, or file:// "
                f"(got '{webview_url}')."
            )
        content.setdefault("type", "webview")
        content.setdefault("url", webview_url)

    for button in ("primary", "secondary"):
        webhook = _webhook_from_flags(values, button)
        if webhook is not None:
            content[f"button_{button}_webhook"] = webhook

    if not content:
        return None
    return ContentFragment(**content)


def _webhook_from_flags(values: Dict[str, Any], button: str) -> Optional[WebhookConfig]:
    url = values.get(f"button_{button}_webhook_url")
    payload = values.get(f"button_{button}_webhook_payload")
    if url is None and payload is None:
        return None
    if url is None:
        raise InvalidFlagValue(
            f"--button-{button}-webhook-url is required when --button-{button}-webhook-payload is provided."
        )
    if payload is None:
        raise InvalidFlagValue(
            f"--button-{button}-webhook-payload is required when --button-{button}-webhook-url is provided."
        )
    return WebhookConfig(url=url, payload=payload)
