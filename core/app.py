"""
Application coordinator hosting the resolved popup configuration.

Exposes the two commands the renderer relies on: fetching the resolved
configuration and terminating the process with an exit code.
"""

from __future__ import annotations

import asyncio
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QApplication, QWidget

from core.action_dispatcher import (
    EXIT_PRIMARY_BUTTON,
    EXIT_SECONDARY_BUTTON,
    ActionDispatcher,
    ButtonActivation,
)
from core.content_router import RenderKind, RenderTarget, route
from core.content_window import ContentWindow
from core.notification_popup import NotificationPopup
from core.window_flags import apply_window_spec, present
from popup_app.popup_app import logger as app_logger
from shared.window_definition import ResolvedConfig, WebhookConfig

APP_NAME = "Popup"
APP_VERSION = "0.1.0"
EXIT_SHORTCUT = "Ctrl+Shift+X"


@dataclass(eq=False)
class AppCoordinator(QObject):
    config: ResolvedConfig

    exitRequested = Signal(int)

    def __post_init__(self) -> None:
        super().__init__()
        self._logger = app_logger.get_logger()
        self._target: RenderTarget = route(self.config.content)
        self._dispatcher = ActionDispatcher(self.exit_with_code)
        self._dispatch_thread: Optional[threading.Thread] = None
        self._window: Optional[QWidget] = None
        self.exitRequested.connect(self._on_exit_requested)

    def start(self) -> None:
        self._logger.info("Starting {} v{} with {} content", APP_NAME, APP_VERSION, self._target.kind.value)
        window = self._build_window(self._target)
        window.setWindowTitle(self._target.window_title)
        apply_window_spec(window, self.config.window)

        shortcut = QShortcut(QKeySequence(EXIT_SHORTCUT), window)
        shortcut.activated.connect(lambda: self.exit_with_code(EXIT_PRIMARY_BUTTON))

        self._window = window
        present(window, self.config.window)

    @property
    def window(self) -> Optional[QWidget]:
        return self._window

    def get_config(self) -> Dict[str, Any]:
        """Return the resolved configuration; safe to call any number of times."""
        return self.config.to_dict()

    def exit_with_code(self, code: int) -> None:
        """Ask the Qt event loop to exit; callable from any thread."""
        if QApplication.instance() is None:
            raise RuntimeError("No running QApplication to exit.")
        self.exitRequested.emit(code)

    def _build_window(self, target: RenderTarget) -> QWidget:
        if target.kind is RenderKind.NOTIFICATION:
            popup = NotificationPopup(target.notification)
            content = target.notification
            popup.primaryActivated.connect(
                lambda: self._on_button(EXIT_PRIMARY_BUTTON, content.button_primary_webhook)
            )
            popup.secondaryActivated.connect(
                lambda: self._on_button(EXIT_SECONDARY_BUTTON, content.button_secondary_webhook)
            )
            return popup
        self._logger.info("Loading {}", target.url)
        return ContentWindow(target.url, target.window_title)

    def _on_button(self, exit_code: int, webhook: Optional[WebhookConfig]) -> None:
        if self._dispatch_thread is not None:
            self._logger.debug("Ignoring button activation; an action is already in progress.")
            return
        activation = ButtonActivation(exit_code=exit_code, webhook=webhook)
        self._dispatch_thread = threading.Thread(
            target=self._run_dispatch,
            args=(activation,),
            name="popup-action",
            daemon=True,
        )
        self._dispatch_thread.start()

    def _run_dispatch(self, activation: ButtonActivation) -> None:
        result = asyncio.run(self._dispatcher.dispatch(activation))
        if not result.terminated:
            self._logger.critical("Exit request failed; halting with code {}", result.exit_code)
            os._exit(result.exit_code)

    def _on_exit_requested(self, code: int) -> None:
        self._logger.info("Exiting with code {}", code)
        QApplication.exit(code)
