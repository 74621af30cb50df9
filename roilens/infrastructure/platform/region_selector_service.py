# roilens/infrastructure/platform/region_selector_service.py
"""
Region selection driven by a full-screen overlay.

The overlay and the event loop are supplied as factories; the application
wires in QtRegionOverlay and QEventLoop.
"""
import traceback
from typing import Any, Callable, Protocol

from roilens.domain.services.i_region_selector_service import IRegionSelectorService
from roilens.domain.services.i_region_store import IRegionStore
from roilens.domain.services.i_display_service import IDisplayService
from roilens.domain.services.i_host_window import IHostWindow
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.models.display_model import DisplayInfo
from roilens.domain.models.region_model import Region
from roilens.domain.common.result import Result
from roilens.domain.common.errors import ErrorCode, PlatformError, UIError
from roilens.infrastructure.platform.region_selection_session import RegionSelectionSession


class SelectionOverlay(Protocol):
    """What the service needs from an overlay window."""

    region_selected: Any  # Signal carrying (x, y, width, height) in overlay coordinates
    selection_cancelled: Any
    overlay_closed: Any

    def show_overlay(self) -> None: ...

    def close(self) -> Any: ...


class EventLoop(Protocol):
    def exec(self) -> Any: ...

    def quit(self) -> None: ...


class RegionSelectorService(IRegionSelectorService):
    """Runs one RegionSelectionSession per call, waiting in a nested event loop."""

    def __init__(self, display_service: IDisplayService, region_store: IRegionStore,
                 host_window: IHostWindow, logger: ILoggerService,
                 overlay_factory: Callable[[DisplayInfo], SelectionOverlay],
                 event_loop_factory: Callable[[], EventLoop]):
        self.display_service = display_service
        self.region_store = region_store
        self.host_window = host_window
        self.logger = logger
        self.overlay_factory = overlay_factory
        self.event_loop_factory = event_loop_factory

    def select_region(self) -> Result[Region]:
        try:
            x, y = self.host_window.position()
            display = self.display_service.get_display_nearest_point(x, y)
            if display is None:
                return Result.fail(PlatformError(
                    message="No display available for region selection",
                    code=ErrorCode.NO_DISPLAY
                ))

            overlay = self.overlay_factory(display)
            session = RegionSelectionSession(
                display=display,
                region_store=self.region_store,
                host_window=self.host_window,
                logger=self.logger,
                close_overlay=overlay.close
            )
            loop = self.event_loop_factory()

            connections = [
                (overlay.region_selected, session.on_region_selected),
                (overlay.selection_cancelled, session.on_cancelled),
                (overlay.overlay_closed, session.on_overlay_closed),
            ]
            for signal, slot in connections:
                signal.connect(slot)

            def finish(_result: Result[Region]) -> None:
                for signal, slot in connections:
                    signal.disconnect(slot)
                loop.quit()

            session.add_resolution_listener(finish)
            session.begin()

            self.logger.debug("Showing region selector", display=display.id)
            overlay.show_overlay()
            if not session.is_resolved:
                loop.exec()

            return session.result
        except Exception as e:
            self.logger.error(f"Error in region selection: {e}")
            self.logger.debug(traceback.format_exc())
            return Result.fail(UIError(
                message=f"Region selection failed: {e}",
                code=ErrorCode.SELECTION_FAILED,
                inner_error=e
            ))
