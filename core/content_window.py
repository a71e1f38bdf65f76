"""
Top-level window that loads web content directly from a URL.
"""

from __future__ import annotations

from PySide6.QtCore import Qt, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

try:
    from PySide6.QtWebEngineWidgets import QWebEngineView
except ImportError:  # pragma: no cover - optional dependency
    QWebEngineView = None  # type: ignore

from popup_app.popup_app import logger as app_logger

_LOGGER = app_logger.get_logger()


class ContentWindow(QMainWindow):
    def __init__(self, url: str, title: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self._url = url
        self.setCentralWidget(self._build_view(url))

    @property
    def url(self) -> str:
        return self._url

    def _build_view(self, url: str) -> QWidget:
        if QWebEngineView is not None:
            view = QWebEngineView()
            view.setUrl(QUrl(url))
            return view

        _LOGGER.warning("QtWebEngine is not available; opening {} in the default browser.", url)
        QDesktopServices.openUrl(QUrl(url))
        widget = QWidget()
        layout = QVBoxLayout(widget)
        label = QLabel("Opened content in default browser.")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(label)
        return widget
