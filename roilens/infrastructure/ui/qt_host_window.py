# roilens/infrastructure/ui/qt_host_window.py

from typing import Tuple, Optional

from PySide6.QtWidgets import QApplication, QMainWindow, QWidget

from roilens.domain.services.i_host_window import IHostWindow
from roilens.domain.services.i_logger_service import ILoggerService


class QtHostWindow(IHostWindow):
    """
    Host window backed by a Qt widget.

    When no widget is given, the first top-level QMainWindow is used.
    """

    def __init__(self, logger: ILoggerService, widget: Optional[QWidget] = None):
        self.logger = logger
        self.widget = widget

    def attach(self, widget: QWidget) -> None:
        """Use widget as the host from now on."""
        self.widget = widget

    def _resolve_widget(self) -> Optional[QWidget]:
        if self.widget is not None:
            return self.widget
        for widget in QApplication.topLevelWidgets():
            if isinstance(widget, QMainWindow) and widget.isVisible():
                return widget
        return None

    def position(self) -> Tuple[int, int]:
        widget = self._resolve_widget()
        if widget is None:
            # No window yet: use the primary screen
            screen = QApplication.primaryScreen()
            geometry = screen.geometry() if screen else None
            return (geometry.x(), geometry.y()) if geometry else (0, 0)
        pos = widget.frameGeometry().topLeft()
        return pos.x(), pos.y()

    def focus(self) -> None:
        widget = self._resolve_widget()
        if widget is None:
            self.logger.debug("No host window to focus")
            return
        if widget.isMinimized():
            widget.showNormal()
        widget.raise_()
        widget.activateWindow()
