"""
Applies a resolved WindowSpec to a Qt top-level widget.
"""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget

from popup_app.popup_app import logger as app_logger
from shared.window_definition import TitleBarStyle, WindowSpec

_LOGGER = app_logger.get_logger()


def build_window_flags(spec: WindowSpec) -> Qt.WindowType:
    # Tool windows stay out of the taskbar/dock.
    flags = Qt.WindowType.Tool if spec.skip_taskbar else Qt.WindowType.Window
    flags |= Qt.WindowType.CustomizeWindowHint | Qt.WindowType.WindowTitleHint
    if spec.always_on_top:
        flags |= Qt.WindowType.WindowStaysOnTopHint
    if spec.closable:
        flags |= Qt.WindowType.WindowCloseButtonHint
    if spec.minimizable:
        flags |= Qt.WindowType.WindowMinimizeButtonHint
    if spec.hidden_title and spec.title_bar_style is not TitleBarStyle.VISIBLE:
        flags |= Qt.WindowType.FramelessWindowHint
    return flags


def apply_window_spec(widget: QWidget, spec: WindowSpec) -> None:
    widget.setWindowFlags(build_window_flags(spec))
    if spec.resizable:
        widget.resize(spec.width, spec.height)
    else:
        widget.setFixedSize(spec.width, spec.height)
    if spec.title_bar_style is TitleBarStyle.TRANSPARENT:
        widget.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
    if spec.visible_on_all_workspaces:
        _LOGGER.debug("visibleOnAllWorkspaces is left to the window manager under Qt.")


def present(widget: QWidget, spec: WindowSpec) -> None:
    """Show the widget, raising and focusing it when requested."""
    widget.show()
    if spec.focus:
        widget.raise_()
        widget.activateWindow()
