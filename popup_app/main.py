"""
Entry point for the popup application.
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication

from core.app import AppCoordinator
from core.config_merger import resolve
from popup_app.popup_app import logger as app_logger
from shared.cli_options import TEMPLATES_TEXT, parse_cli
from shared.config_schema import ConfigError, load_config_file
from shared.window_definition import ConfigFragment, ResolvedConfig, defaults

_LOGGER = app_logger.get_logger()

EXIT_STARTUP_FAILURE = 1


def load_configuration(options_fragment: ConfigFragment, config_path: Optional[str]) -> ResolvedConfig:
    """Resolve defaults, the optional YAML file and command-line overrides."""
    if config_path:
        yaml_fragment = load_config_file(config_path)
        _LOGGER.info("Loaded config successfully from {}", config_path)
    else:
        yaml_fragment = ConfigFragment()
        _LOGGER.debug("No config file provided, using CLI flags")
    return resolve(defaults(), yaml_fragment, options_fragment)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Resolve the configuration, then run the popup until a button exits it."""
    try:
        options = parse_cli(argv)
        if options.show_templates:
            print(TEMPLATES_TEXT)
            return 0
        config = load_configuration(options.fragment, options.config_path)
    except ConfigError as exc:
        _LOGGER.error("Startup failed: {}", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_STARTUP_FAILURE

    return _run_application(config)


def _run_application(config: ResolvedConfig) -> int:
    # Qt only gets the program name; every other argument is ours.
    app = QApplication(sys.argv[:1])
    coordinator = AppCoordinator(config=config)
    coordinator.start()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
