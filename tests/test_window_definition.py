import dataclasses

import pytest

from shared.window_definition import (
    UNSET,
    WEBVIEW_URL_SCHEMES,
    WINDOW_FIELDS,
    NotificationContent,
    ResolvedConfig,
    TitleBarStyle,
    WebhookConfig,
    WindowFragment,
    defaults,
    is_set,
    to_camel,
    to_kebab,
)


def test_defaults_table_values():
    spec = defaults()
    assert spec.width == 800
    assert spec.height == 600
    assert spec.resizable is False
    assert spec.always_on_top is True
    assert spec.skip_taskbar is True
    assert spec.focus is True
    assert spec.visible_on_all_workspaces is True
    assert spec.closable is False
    assert spec.minimizable is False
    assert spec.hidden_title is True
    assert spec.title_bar_style is TitleBarStyle.OVERLAY


def test_defaults_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        defaults().width = 10  # type: ignore[misc]


def test_window_fields_use_camel_case_names():
    assert WINDOW_FIELDS == (
        "width",
        "height",
        "resizable",
        "alwaysOnTop",
        "skipTaskbar",
        "focus",
        "visibleOnAllWorkspaces",
        "closable",
        "minimizable",
        "hiddenTitle",
        "titleBarStyle",
    )


@pytest.mark.parametrize("name", WINDOW_FIELDS)
def test_kebab_transform_is_a_bijection(name):
    kebab = to_kebab(name)
    assert to_camel(kebab) == name
    assert to_kebab(to_camel(kebab)) == kebab


def test_kebab_examples():
    assert to_kebab("alwaysOnTop") == "always-on-top"
    assert to_kebab("visibleOnAllWorkspaces") == "visible-on-all-workspaces"
    assert to_camel("title-bar-style") == "titleBarStyle"


def test_fragment_distinguishes_unset_from_false():
    fragment = WindowFragment(resizable=False)
    assert is_set(fragment.resizable)
    assert fragment.resizable is False
    assert not is_set(fragment.closable)
    assert fragment.closable is UNSET


def test_title_bar_style_lookup_is_case_insensitive():
    assert TitleBarStyle.from_name("transparent") is TitleBarStyle.TRANSPARENT
    with pytest.raises(ValueError):
        TitleBarStyle.from_name("Weird")


def test_resolved_config_to_dict_shape():
    webhook = WebhookConfig(url="https://hooks.example.com/a", payload='{"ok": true}')
    config = ResolvedConfig(
        window=defaults(),
        content=NotificationContent(title="T", description="D", button_primary_webhook=webhook),
    )
    data = config.to_dict()
    assert data["content"]["type"] == "notification"
    assert data["content"]["button_primary_webhook"] == {
        "url": "https://hooks.example.com/a",
        "payload": '{"ok": true}',
    }
    assert data["content"]["icon"] is None
    assert data["window"]["alwaysOnTop"] is True
    assert data["window"]["titleBarStyle"] == "Overlay"


@pytest.mark.parametrize("url", ["http://a", "https://a", "file:///tmp/a.html"])
def test_webview_url_schemes(url):
    assert url.startswith(WEBVIEW_URL_SCHEMES)


def test_webview_url_schemes_reject_bare_host():
    assert not "example.com".startswith(WEBVIEW_URL_SCHEMES)
