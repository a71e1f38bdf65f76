import pytest

from shared.cli_options import parse_cli
from shared.config_schema import InvalidFlagValue, UnknownFlag
from shared.window_definition import UNSET, TitleBarStyle, WebhookConfig


def test_no_flags_leave_everything_unset():
    options = parse_cli([])
    assert options.config_path is None
    assert options.show_templates is False
    assert options.fragment.content is None
    assert options.fragment.window.width is UNSET
    assert options.fragment.window.resizable is UNSET


def test_window_flags_use_kebab_case():
    options = parse_cli(
        [
            "--width", "1200",
            "--resizable", "true",
            "--always-on-top", "false",
            "--visible-on-all-workspaces", "FALSE",
            "--title-bar-style", "visible",
        ]
    )
    window = options.fragment.window
    assert window.width == 1200
    assert window.resizable is True
    assert window.always_on_top is False
    assert window.visible_on_all_workspaces is False
    assert window.title_bar_style is TitleBarStyle.VISIBLE
    assert window.height is UNSET


def test_equals_form_is_accepted():
    options = parse_cli(["--height=480", "--closable=true"])
    assert options.fragment.window.height == 480
    assert options.fragment.window.closable is True


@pytest.mark.parametrize(
    "args",
    [
        ["--width", "abc"],
        ["--width", "-5"],
        ["--height", "12.5"],
        ["--resizable", "yes"],
        ["--resizable"],
        ["--focus", "--width", "300"],
        ["--title-bar-style", "Weird"],
    ],
)
def test_invalid_flag_values(args):
    with pytest.raises(InvalidFlagValue):
        parse_cli(args)


@pytest.mark.parametrize(
    "args",
    [
        ["--widht", "5"],
        ["--always-on"],
        ["--always-on-top=true", "--bogus=1"],
        ["stray"],
    ],
)
def test_unknown_flags(args):
    with pytest.raises(UnknownFlag):
        parse_cli(args)


def test_content_flags_build_a_content_fragment():
    options = parse_cli(
        [
            "--type", "notification",
            "--title", "Update",
            "--description", "Please update",
            "--button-primary-text", "Now",
            "--button-primary-webhook-url", "https://hooks.example.com/ok",
            "--button-primary-webhook-payload", '{"a": 1}',
        ]
    )
    content = options.fragment.content
    assert content.type == "notification"
    assert content.title == "Update"
    assert content.description == "Please update"
    assert content.button_primary_text == "Now"
    assert content.button_primary_webhook == WebhookConfig(
        url="https://hooks.example.com/ok", payload='{"a": 1}'
    )
    assert content.button_secondary_webhook is UNSET


@pytest.mark.parametrize(
    "args",
    [
        ["--button-primary-webhook-url", "https://hooks.example.com"],
        ["--button-secondary-webhook-payload", "{}"],
    ],
)
def test_webhook_flags_come_in_pairs(args):
    with pytest.raises(InvalidFlagValue):
        parse_cli(["--type", "notification", *args])


def test_deprecated_webview_flag():
    options = parse_cli(["--webview", "https://example.com"])
    assert options.fragment.content.type == "webview"
    assert options.fragment.content.url == "https://example.com"


def test_deprecated_webview_flag_checks_scheme():
    with pytest.raises(InvalidFlagValue):
        parse_cli(["--webview", "example.com"])


def test_config_and_templates_flags():
    options = parse_cli(["--config", "popup.yaml", "--templates"])
    assert options.config_path == "popup.yaml"
    assert options.show_templates is True
    assert options.fragment.content is None
