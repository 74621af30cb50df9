# roilens/application/text_mode_controller.py
"""
Caller-facing operations of text mode.

Every operation returns a plain dict with a "success" key so the UI layer
can render outcomes without knowing about Result or DomainError. State
changes are also pushed to observers as (event, payload) pairs.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple

from roilens.application.capture_session import CaptureSession
from roilens.domain.services.i_region_selector_service import IRegionSelectorService
from roilens.domain.services.i_roi_capture_service import IRoiCaptureService
from roilens.domain.services.i_query_dispatcher import IQueryDispatcher
from roilens.domain.services.i_config_repository_service import IConfigRepository
from roilens.domain.services.i_background_task_service import IBackgroundTaskService, Worker
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.models.dispatch_models import DispatchRequest
from roilens.domain.common.errors import (
    ConfigurationError, DomainException, ErrorCode, UpstreamError, ValidationError
)
from roilens.domain.common.result import Result

EVENT_QUEUE_UPDATED = "queue-updated"
EVENT_STATUS = "update-status"
EVENT_RESPONSE = "update-response"

DISPATCH_TASK_ID = "dispatch-queue"

Observer = Callable[[str, Any], None]


class TextModeController:
    """Coordinates selection, capture, queueing and dispatch."""

    def __init__(self, session: CaptureSession,
                 region_selector: IRegionSelectorService,
                 capture_service: IRoiCaptureService,
                 dispatcher: IQueryDispatcher,
                 config_repository: IConfigRepository,
                 task_service: IBackgroundTaskService,
                 logger: ILoggerService):
        """
        Initialize the controller.

        Args:
            session: Region store and image queue of this run
            region_selector: Interactive region selection
            capture_service: Region screenshots
            dispatcher: Model query dispatch
            config_repository: Source of the API key, profile and models
            task_service: Runs dispatches off the UI thread
            logger: Logger service
        """
        self.session = session
        self.region_selector = region_selector
        self.capture_service = capture_service
        self.dispatcher = dispatcher
        self.config_repository = config_repository
        self.task_service = task_service
        self.logger = logger
        self._pending_query: Optional[str] = None
        self._observers: List[Observer] = []

    def register_observer(self, callback: Observer) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def unregister_observer(self, callback: Observer) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, payload: Any) -> None:
        for callback in list(self._observers):
            try:
                callback(event, payload)
            except Exception as e:
                self.logger.error(f"Error in observer for {event}: {e}")

    def _notify_queue(self) -> None:
        self._notify(EVENT_QUEUE_UPDATED, self.session.image_queue.size())

    @staticmethod
    def _failure(result: Result) -> Dict[str, Any]:
        return result.to_dict()

    # ------------------------------------------------------------------
    # Region
    # ------------------------------------------------------------------

    def select_region(self) -> Dict[str, Any]:
        self.logger.info("Starting region selection")
        result = self.region_selector.select_region()
        if result.is_failure:
            self.logger.info(f"Region selection ended without a region: {result.error.message}")
            return self._failure(result)

        self._notify(EVENT_STATUS, "Region selected")
        return {"success": True, "region": result.value.to_dict()}

    def has_region(self) -> Dict[str, Any]:
        return {"success": True, "hasRegion": self.session.region_store.has_region()}

    def clear_region(self) -> Dict[str, Any]:
        self.session.region_store.clear()
        self._notify(EVENT_STATUS, "Region cleared")
        return {"success": True}

    # ------------------------------------------------------------------
    # Queue
    # ------------------------------------------------------------------

    def capture_and_enqueue(self) -> Dict[str, Any]:
        capture = self.capture_service.capture()
        if capture.is_failure:
            self.logger.warning(f"Capture failed: {capture.error.message}")
            self._notify(EVENT_STATUS, f"Capture failed: {capture.error.message}")
            return self._failure(capture)

        try:
            pushed = self.session.image_queue.push(capture.value)
        except DomainException as e:
            self.logger.error(f"Could not queue capture: {e.error.message}")
            return self._failure(Result.fail(e.error))

        self._notify_queue()
        response = {"success": True, "count": pushed.count}
        if pushed.warning:
            response["warning"] = pushed.warning
            self._notify(EVENT_STATUS, pushed.warning)
        else:
            self._notify(EVENT_STATUS, f"Captured ({pushed.count} in queue)")
        return response

    def get_queue_count(self) -> Dict[str, Any]:
        return {"success": True, "count": self.session.image_queue.size()}

    def clear_queue(self) -> Dict[str, Any]:
        self.session.image_queue.clear()
        self._notify_queue()
        self._notify(EVENT_STATUS, "Queue cleared")
        return {"success": True}

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def set_pending_query(self, query: Optional[str]) -> Dict[str, Any]:
        """Store a query for the next dispatch only."""
        self._pending_query = query or None
        return {"success": True}

    def dispatch_queue(self, use_fallback_model: bool = False) -> Dict[str, Any]:
        """
        Send every queued image as one query and wait for the answer.

        The queue is left as it is afterwards; clearing is a separate step.

        Args:
            use_fallback_model: Send to the configured fallback model instead of the primary one
        """
        prepared = self._prepare_dispatch(use_fallback_model)
        if prepared.is_failure:
            return self._failure(prepared)
        return self._send(*prepared.value)

    def start_dispatch(self, on_finished: Callable[[Dict[str, Any]], None],
                       use_fallback_model: bool = False) -> Dict[str, Any]:
        """
        Send every queued image as one query on a background thread.

        The request is built immediately, so an empty queue or a missing API
        key fails here without starting a task. Otherwise on_finished later
        receives the same dict dispatch_queue would have returned.

        Args:
            on_finished: Called on the starting thread with the outcome
            use_fallback_model: Send to the configured fallback model instead of the primary one
        """
        if self.task_service.is_task_running(DISPATCH_TASK_ID):
            return self._failure(Result.fail(ValidationError(
                message="Dispatch already in progress",
                code=ErrorCode.DISPATCH_IN_PROGRESS
            )))

        prepared = self._prepare_dispatch(use_fallback_model)
        if prepared.is_failure:
            return self._failure(prepared)

        worker = DispatchWorker(lambda: self._send(*prepared.value))
        worker.set_on_error(lambda message: on_finished(self._failure(Result.fail(message))))

        started = self.task_service.execute_ui_task(DISPATCH_TASK_ID, worker, on_finished)
        if started.is_failure:
            return self._failure(started)
        return {"success": True}

    def _prepare_dispatch(self, use_fallback_model: bool) -> Result[Tuple[DispatchRequest, str, str]]:
        images = self.session.image_queue.drain_view()
        if not images:
            return Result.fail(ValidationError(
                message="No images in queue",
                code=ErrorCode.EMPTY_QUEUE
            ))

        api_key = self.config_repository.get_api_key()
        if not api_key:
            return Result.fail(ConfigurationError(
                message="No API key configured",
                code=ErrorCode.NO_API_KEY
            ))

        primary_model, fallback_model = self.config_repository.get_text_mode_models()
        request = DispatchRequest(
            images=images,
            profile=self.config_repository.get_selected_profile(),
            custom_prompt=self.config_repository.get_custom_prompt(),
            override_query=self._pending_query
        )
        self._pending_query = None
        return Result.ok((request, api_key, fallback_model if use_fallback_model else primary_model))

    def _send(self, request: DispatchRequest, api_key: str, model: str) -> Dict[str, Any]:
        self._notify(EVENT_STATUS, f"Sending {len(request.images)} image(s)...")
        result = Result.from_operation(
            lambda: self.dispatcher.dispatch(request, api_key, model=model),
            self.logger, UpstreamError, "Dispatch failed",
            model=model, images=len(request.images)
        )

        if result.is_failure:
            self._notify(EVENT_STATUS, f"Error: {result.error.message}")
            return self._failure(result)

        self._notify(EVENT_RESPONSE, result.value)
        self._notify(EVENT_STATUS, "Ready")
        return {"success": True, "text": result.value}


class DispatchWorker(Worker[Dict[str, Any]]):
    """Runs one prepared send off the UI thread."""

    def __init__(self, send: Callable[[], Dict[str, Any]]):
        super().__init__()
        self._send = send

    def execute(self) -> Dict[str, Any]:
        return self._send()
