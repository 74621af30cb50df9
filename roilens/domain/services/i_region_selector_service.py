# roilens/domain/services/i_region_selector_service.py
from abc import ABC, abstractmethod

from roilens.domain.common.result import Result
from roilens.domain.models.region_model import Region


class IRegionSelectorService(ABC):
    """Service that lets the user drag out the capture region on screen."""

    @abstractmethod
    def select_region(self) -> Result[Region]:
        """
        Show the selection overlay and wait for the user.

        Blocks (while still processing UI events) until the user commits a
        selection, cancels, or the overlay is closed. A committed region is
        saved to the region store before this returns.

        Returns:
            Result containing the absolute region, or a UIError when the
            selection was cancelled or the overlay closed
        """
        pass
