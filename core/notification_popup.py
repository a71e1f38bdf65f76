"""
Notification dialog with an icon, a title, a description and two buttons.
"""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QStyle,
    QVBoxLayout,
    QWidget,
)

from shared.window_definition import NotificationContent

DEFAULT_PRIMARY_TEXT = "Ok"
DEFAULT_SECONDARY_TEXT = "Cancel"
ICON_SIZE = 48


class NotificationPopup(QWidget):
    primaryActivated = Signal()
    secondaryActivated = Signal()

    def __init__(self, content: NotificationContent, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("NotificationPopup")
        self._content = content

        self._icon_label = QLabel()
        self._icon_label.setFixedSize(ICON_SIZE, ICON_SIZE)
        self._icon_label.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._apply_icon(content.icon)

        self._title_label = QLabel(content.title)
        self._title_label.setObjectName("NotificationTitle")
        self._title_label.setWordWrap(True)
        self._title_label.setStyleSheet("font-weight: bold; font-size: 16px;")

        self._description_label = QLabel(content.description)
        self._description_label.setObjectName("NotificationDescription")
        self._description_label.setWordWrap(True)

        self._secondary_button = QPushButton(content.button_secondary_text or DEFAULT_SECONDARY_TEXT)
        self._primary_button = QPushButton(content.button_primary_text or DEFAULT_PRIMARY_TEXT)
        self._primary_button.setDefault(True)
        for button in (self._secondary_button, self._primary_button):
            button.setCursor(Qt.CursorShape.PointingHandCursor)

        text_layout = QVBoxLayout()
        text_layout.setSpacing(4)
        text_layout.addWidget(self._title_label)
        text_layout.addWidget(self._description_label)
        text_layout.addStretch()

        content_layout = QHBoxLayout()
        content_layout.setSpacing(12)
        content_layout.addWidget(self._icon_label, alignment=Qt.AlignmentFlag.AlignTop)
        content_layout.addLayout(text_layout)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch()
        buttons_layout.addWidget(self._secondary_button)
        buttons_layout.addWidget(self._primary_button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 16)
        layout.addLayout(content_layout)
        layout.addLayout(buttons_layout)

        self._primary_button.clicked.connect(self._on_primary_clicked)
        self._secondary_button.clicked.connect(self._on_secondary_clicked)

    @property
    def content(self) -> NotificationContent:
        return self._content

    def _on_primary_clicked(self) -> None:
        self._disable_buttons()
        self.primaryActivated.emit()

    def _on_secondary_clicked(self) -> None:
        self._disable_buttons()
        self.secondaryActivated.emit()

    def _disable_buttons(self) -> None:
        # Only one activation is handled per process.
        self._primary_button.setEnabled(False)
        self._secondary_button.setEnabled(False)

    def _apply_icon(self, icon: str | None) -> None:
        if not icon:
            self._icon_label.hide()
            return
        pixmap = QPixmap()
        if not icon.lower().startswith(("http://", "https://")):
            path = Path(icon).expanduser()
            if path.exists():
                pixmap = QPixmap(str(path))
        if pixmap.isNull():
            standard = self.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation)
            pixmap = standard.pixmap(ICON_SIZE, ICON_SIZE)
        self._icon_label.setPixmap(
            pixmap.scaled(
                ICON_SIZE,
                ICON_SIZE,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        )
