from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtWidgets")

from popup_app.main import EXIT_STARTUP_FAILURE, load_configuration, main
from shared.cli_options import parse_cli
from shared.window_definition import NotificationContent


def test_templates_listing(capsys):
    assert main(["--templates"]) == 0
    out = capsys.readouterr().out
    assert "webview" in out
    assert "notification" in out


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["--width", "900"],
        ["--type", "toast"],
        ["--type", "notification", "--title", "No description"],
        ["--resizable"],
        ["--colour", "red"],
    ],
)
def test_config_errors_abort_startup(args):
    assert main(args) == EXIT_STARTUP_FAILURE


def test_missing_config_file_aborts_startup(tmp_path: Path):
    assert main(["--config", str(tmp_path / "absent.yaml")]) == EXIT_STARTUP_FAILURE


def test_load_configuration_merges_file_and_flags(tmp_path: Path):
    config_file = tmp_path / "popup.yaml"
    config_file.write_text(
        "content:\n  type: notification\n  title: Hi\n  description: There\n"
        "window:\n  closable: true\n",
        encoding="utf-8",
    )
    options = parse_cli(["--config", str(config_file), "--minimizable", "true"])

    config = load_configuration(options.fragment, options.config_path)

    assert config.content == NotificationContent(title="Hi", description="There")
    assert config.window.closable is True
    assert config.window.minimizable is True
    assert config.window.width == 500


def test_config_error_is_reported_on_stderr(capsys):
    assert main(["--type", "toast"]) == EXIT_STARTUP_FAILURE
    err = capsys.readouterr().err
    assert "Error: Unknown type 'toast'" in err
