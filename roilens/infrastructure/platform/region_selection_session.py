# roilens/infrastructure/platform/region_selection_session.py
"""
State machine for a single region selection attempt.

The overlay can report a finished drag, an Escape press, or its own closing,
possibly more than one of them. All three feed the same resolution path, and
only the first one counts.
"""
from enum import Enum
from typing import Callable, List, Optional, Tuple

from roilens.domain.services.i_region_store import IRegionStore
from roilens.domain.services.i_host_window import IHostWindow
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.models.display_model import DisplayInfo
from roilens.domain.models.region_model import Region
from roilens.domain.common.result import Result
from roilens.domain.common.errors import ErrorCode, UIError

MIN_SELECTION_SIZE = 50


class SelectionState(Enum):
    IDLE = "idle"
    SELECTING = "selecting"
    COMMITTED = "committed"
    CANCELLED = "cancelled"
    DESTROYED = "destroyed"


class RegionSelectionSession:
    """
    One selection on one display.

    Attributes:
        state: Current SelectionState
        result: The outcome once resolved, None before
    """

    def __init__(self, display: DisplayInfo, region_store: IRegionStore,
                 host_window: IHostWindow, logger: ILoggerService,
                 close_overlay: Callable[[], None]):
        """
        Args:
            display: Display the overlay covers
            region_store: Receives the committed region
            host_window: Gets focus back after the selection ends
            logger: Logger service
            close_overlay: Tears the overlay down
        """
        self.display = display
        self.region_store = region_store
        self.host_window = host_window
        self.logger = logger
        self.close_overlay = close_overlay
        self.state = SelectionState.IDLE
        self.result: Optional[Result[Region]] = None
        self._resolved = False
        self._resolution_listeners: List[Callable[[Result[Region]], None]] = []

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    def add_resolution_listener(self, listener: Callable[[Result[Region]], None]) -> None:
        """Register a callback run once, with the outcome, when the session resolves."""
        self._resolution_listeners.append(listener)

    def begin(self) -> None:
        if self.state is SelectionState.IDLE:
            self.state = SelectionState.SELECTING

    def on_region_selected(self, local_rect: Tuple[int, int, int, int]) -> None:
        """
        Commit a drag made on the overlay.

        Args:
            local_rect: (x, y, width, height) relative to the overlay's top-left corner
        """
        if self._resolved:
            return

        x, y, width, height = local_rect
        if width < MIN_SELECTION_SIZE or height < MIN_SELECTION_SIZE:
            self.logger.debug(f"Ignoring selection smaller than {MIN_SELECTION_SIZE}px",
                              width=width, height=height)
            return

        region = Region(
            x=self.display.x + x,
            y=self.display.y + y,
            width=width,
            height=height,
            display_id=self.display.id
        )
        self.region_store.set(region)
        self.logger.info("Region selected", region=region.coordinates, display=region.display_id)
        self._resolve(SelectionState.COMMITTED, Result.ok(region))

    def on_cancelled(self) -> None:
        self._resolve(SelectionState.CANCELLED, Result.fail(UIError(
            message="Cancelled",
            code=ErrorCode.SELECTION_CANCELLED
        )))

    def on_overlay_closed(self) -> None:
        self._resolve(SelectionState.DESTROYED, Result.fail(UIError(
            message="Selection window closed",
            code=ErrorCode.SELECTION_CLOSED
        )))

    def _resolve(self, state: SelectionState, result: Result[Region]) -> None:
        if self._resolved:
            return
        self._resolved = True
        self.state = state
        self.result = result

        listeners, self._resolution_listeners = self._resolution_listeners, []
        for listener in listeners:
            listener(result)

        # A destroyed overlay is already gone
        if state is not SelectionState.DESTROYED:
            self.close_overlay()
        self.host_window.focus()
