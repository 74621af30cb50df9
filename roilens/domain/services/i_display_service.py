# roilens/domain/services/i_display_service.py
"""
Display service interface for enumerating physical displays.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from roilens.domain.models.display_model import DisplayInfo
from roilens.domain.models.region_model import Region


class IDisplayService(ABC):
    """Interface for querying the displays that make up the virtual desktop."""

    @abstractmethod
    def get_displays(self) -> List[DisplayInfo]:
        """
        Get all connected displays.

        Returns:
            Displays with bounds in logical pixels and their scale factor
        """
        pass

    @abstractmethod
    def get_display_nearest_point(self, x: int, y: int) -> Optional[DisplayInfo]:
        """
        Get the display containing, or closest to, a point.

        Args:
            x: Horizontal coordinate in the virtual desktop
            y: Vertical coordinate in the virtual desktop

        Returns:
            The display, or None if no display is connected
        """
        pass

    @abstractmethod
    def get_display_matching(self, region: Region) -> Optional[DisplayInfo]:
        """
        Get the display that a rectangle mostly lies on.

        Args:
            region: Rectangle in the virtual desktop

        Returns:
            The display, or None if no display is connected
        """
        pass
