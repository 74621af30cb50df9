#roilens/application/app.py

import os
from typing import Optional

from PySide6.QtCore import QEventLoop

from roilens.domain.common.di_container import DIContainer
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.services.i_config_repository_service import IConfigRepository
from roilens.domain.services.i_key_value_storage import IKeyValueStorage
from roilens.domain.services.i_display_service import IDisplayService
from roilens.domain.services.i_screenshot_service import IScreenshotService
from roilens.domain.services.i_region_store import IRegionStore
from roilens.domain.services.i_image_queue_service import IImageQueueService
from roilens.domain.services.i_roi_capture_service import IRoiCaptureService
from roilens.domain.services.i_host_window import IHostWindow
from roilens.domain.services.i_region_selector_service import IRegionSelectorService
from roilens.domain.services.i_profile_service import IProfileService
from roilens.domain.services.i_query_dispatcher import IQueryDispatcher
from roilens.domain.services.i_background_task_service import IBackgroundTaskService

from roilens.infrastructure.logging.logger_service import ConsoleLoggerService, FileLoggerService, parse_log_level
from roilens.infrastructure.config.json_config_repository import JsonConfigRepository
from roilens.infrastructure.config.region_store import RegionStore
from roilens.infrastructure.config.profile_service import ProfileService
from roilens.infrastructure.platform.qt_display_service import QtDisplayService
from roilens.infrastructure.platform.screenshot_service import QtScreenshotService
from roilens.infrastructure.platform.roi_capture_service import RoiCaptureService
from roilens.infrastructure.platform.region_selector_service import RegionSelectorService
from roilens.infrastructure.queue.image_queue_service import ImageQueueService
from roilens.infrastructure.llm.gemini_query_dispatcher import GeminiQueryDispatcher
from roilens.infrastructure.threading.qt_background_task_service import QtBackgroundTaskService
from roilens.infrastructure.ui.qt_host_window import QtHostWindow
from roilens.presentation.components.qt_region_overlay import QtRegionOverlay
from roilens.application.capture_session import CaptureSession
from roilens.application.text_mode_controller import TextModeController


def initialize_app(config_file: Optional[str] = None) -> DIContainer:
    container = DIContainer()

    # Core services
    logger = ConsoleLoggerService()

    config_file = config_file or os.path.join(os.getcwd(), "config.json")
    config_repo = JsonConfigRepository(config_file, logger)
    container.register_instance(IConfigRepository, config_repo)
    container.register_instance(IKeyValueStorage, config_repo)

    # Same underlying "ROILens" logger as the console service above
    level = parse_log_level(config_repo.get_global_setting("log_level", "INFO"))
    log_dir = config_repo.get_global_setting("log_dir", "")
    if log_dir:
        logger = FileLoggerService(level, log_dir=log_dir)
    else:
        logger.set_level(level)
    container.register_instance(ILoggerService, logger)

    # Host window and display services
    container.register_instance(IHostWindow, QtHostWindow(logger))

    container.register_factory(
        IDisplayService,
        lambda: QtDisplayService(container.resolve(ILoggerService))
    )

    container.register_factory(
        IScreenshotService,
        lambda: QtScreenshotService(container.resolve(ILoggerService))
    )

    # One region store and one queue per session
    container.register_singleton(
        IRegionStore,
        lambda: RegionStore(
            storage=container.resolve(IKeyValueStorage),
            logger=container.resolve(ILoggerService)
        )
    )

    container.register_singleton(
        IImageQueueService,
        lambda: ImageQueueService(container.resolve(ILoggerService))
    )

    container.register_singleton(
        CaptureSession,
        lambda: CaptureSession(
            region_store=container.resolve(IRegionStore),
            image_queue=container.resolve(IImageQueueService)
        )
    )

    # Capture services
    container.register_factory(
        IRoiCaptureService,
        lambda: RoiCaptureService(
            region_store=container.resolve(IRegionStore),
            display_service=container.resolve(IDisplayService),
            screenshot_service=container.resolve(IScreenshotService),
            logger=container.resolve(ILoggerService),
            thumbnail_size=config_repo.get_thumbnail_size(),
            jpeg_quality=config_repo.get_jpeg_quality()
        )
    )

    container.register_factory(
        IRegionSelectorService,
        lambda: RegionSelectorService(
            display_service=container.resolve(IDisplayService),
            region_store=container.resolve(IRegionStore),
            host_window=container.resolve(IHostWindow),
            logger=container.resolve(ILoggerService),
            overlay_factory=QtRegionOverlay,
            event_loop_factory=QEventLoop
        )
    )

    # Model services
    container.register_factory(
        IProfileService,
        lambda: ProfileService(
            config_repository=container.resolve(IConfigRepository),
            logger=container.resolve(ILoggerService)
        )
    )

    container.register_factory(
        IQueryDispatcher,
        lambda: GeminiQueryDispatcher(
            profile_service=container.resolve(IProfileService),
            logger=container.resolve(ILoggerService),
            model=config_repo.get_text_mode_models()[0]
        )
    )

    container.register_singleton(
        IBackgroundTaskService,
        lambda: QtBackgroundTaskService(container.resolve(ILoggerService))
    )

    container.register_singleton(
        TextModeController,
        lambda: TextModeController(
            session=container.resolve(CaptureSession),
            region_selector=container.resolve(IRegionSelectorService),
            capture_service=container.resolve(IRoiCaptureService),
            dispatcher=container.resolve(IQueryDispatcher),
            config_repository=container.resolve(IConfigRepository),
            task_service=container.resolve(IBackgroundTaskService),
            logger=container.resolve(ILoggerService)
        )
    )

    logger.info("Application dependencies initialized", config=config_file)

    return container
