#roilens/domain/services/i_host_window.py
"""
Host window abstraction.

The selector only needs to know where the application window sits (to pick
the display for the overlay) and how to hand focus back to it afterwards.
"""
from abc import ABC, abstractmethod
from typing import Tuple


class IHostWindow(ABC):
    """Interface for the main application window as seen by the core."""

    @abstractmethod
    def position(self) -> Tuple[int, int]:
        """
        Get the top-left corner of the window.

        Returns:
            (x, y) in virtual desktop coordinates
        """
        pass

    @abstractmethod
    def focus(self) -> None:
        """Bring the window to the front and give it keyboard focus."""
        pass
