# roilens/infrastructure/platform/qt_display_service.py
"""
Qt implementation of the display service using QGuiApplication.screens().
"""
from typing import List, Optional

from PySide6.QtGui import QGuiApplication, QScreen

from roilens.domain.services.i_display_service import IDisplayService
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.models.display_model import DisplayInfo, nearest_display, matching_display
from roilens.domain.models.region_model import Region


def screen_id(screen: QScreen, index: int) -> str:
    """Stable identifier for a screen, shared by the display and screenshot services."""
    return screen.name() or f"screen-{index}"


def display_from_screen(screen: QScreen, index: int) -> DisplayInfo:
    geometry = screen.geometry()
    return DisplayInfo(
        id=screen_id(screen, index),
        x=geometry.x(),
        y=geometry.y(),
        width=geometry.width(),
        height=geometry.height(),
        scale_factor=screen.devicePixelRatio() or 1.0
    )


class QtDisplayService(IDisplayService):
    """Display queries answered from the screens Qt knows about."""

    def __init__(self, logger: ILoggerService):
        self.logger = logger

    def get_displays(self) -> List[DisplayInfo]:
        displays = [display_from_screen(screen, index)
                    for index, screen in enumerate(QGuiApplication.screens())]
        self.logger.debug(f"Found {len(displays)} display(s)")
        return displays

    def get_display_nearest_point(self, x: int, y: int) -> Optional[DisplayInfo]:
        return nearest_display(self.get_displays(), x, y)

    def get_display_matching(self, region: Region) -> Optional[DisplayInfo]:
        return matching_display(self.get_displays(), region)
