# roilens/presentation/text_mode_window.py
"""
Main window for text mode.

Buttons and window-local shortcuts drive the TextModeController; controller
events update the queue badge, the status bar and the response pane.
"""
from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QTextEdit,
    QComboBox
)

from roilens.application.text_mode_controller import (
    TextModeController, EVENT_QUEUE_UPDATED, EVENT_STATUS, EVENT_RESPONSE
)
from roilens.domain.common.di_container import DIContainer
from roilens.domain.services.i_logger_service import ILoggerService
from roilens.domain.services.i_config_repository_service import IConfigRepository
from roilens.domain.services.i_profile_service import IProfileService
from roilens.domain.services.i_host_window import IHostWindow
from roilens.domain.services.i_background_task_service import IBackgroundTaskService
from roilens.domain.services.i_image_queue_service import WARNING_THRESHOLD
from roilens.presentation.components.ui_components import StyledButton, GroupHeader, QueueBadge


class TextModeWindow(QMainWindow):
    """Window for selecting a region, queueing captures and sending them."""

    # Controller events and config changes may arrive from a worker thread
    controller_event = Signal(str, object)
    dispatch_finished = Signal(object)
    config_changed = Signal()

    def __init__(self, container: DIContainer):
        super().__init__()

        self.logger = container.resolve(ILoggerService)
        self.config_repository = container.resolve(IConfigRepository)
        self.profile_service = container.resolve(IProfileService)
        self.task_service = container.resolve(IBackgroundTaskService)
        self.controller = container.resolve(TextModeController)

        host_window = container.resolve(IHostWindow)
        if hasattr(host_window, "attach"):
            host_window.attach(self)

        self.setWindowTitle("ROILens")
        self.resize(520, 640)

        central_widget = QWidget()
        main_layout = QVBoxLayout(central_widget)

        # Region and capture
        capture_group = GroupHeader("Capture")
        capture_layout = QHBoxLayout(capture_group)
        self.select_button = StyledButton("Select Region")
        self.select_button.clicked.connect(self.on_select_region)
        self.capture_button = StyledButton("Capture")
        self.capture_button.clicked.connect(self.on_capture)
        self.clear_region_button = StyledButton("Clear Region", role="danger")
        self.clear_region_button.clicked.connect(self.on_clear_region)
        self.queue_badge = QueueBadge(WARNING_THRESHOLD)
        capture_layout.addWidget(self.select_button)
        capture_layout.addWidget(self.capture_button)
        capture_layout.addWidget(self.clear_region_button)
        capture_layout.addWidget(self.queue_badge)
        main_layout.addWidget(capture_group)

        # Send
        send_group = GroupHeader("Send")
        send_layout = QVBoxLayout(send_group)
        self.profile_combo = QComboBox()
        self._populate_profiles()
        self.profile_combo.currentTextChanged.connect(self.on_profile_changed)
        buttons_layout = QHBoxLayout()
        self.send_button = StyledButton("Send")
        self.send_button.clicked.connect(self.on_send)
        self.clear_queue_button = StyledButton("Clear Queue", role="danger")
        self.clear_queue_button.clicked.connect(self.on_clear_queue)
        buttons_layout.addWidget(self.send_button)
        buttons_layout.addWidget(self.clear_queue_button)
        send_layout.addWidget(QLabel("Profile"))
        send_layout.addWidget(self.profile_combo)
        send_layout.addLayout(buttons_layout)
        main_layout.addWidget(send_group)

        # Response
        response_group = GroupHeader("Response")
        response_layout = QVBoxLayout(response_group)
        self.response_view = QTextEdit()
        self.response_view.setReadOnly(True)
        response_layout.addWidget(self.response_view)
        main_layout.addWidget(response_group, 1)

        self.setCentralWidget(central_widget)

        # Shortcuts only fire while this window has focus
        QShortcut(QKeySequence("Ctrl+R"), self, activated=self.on_select_region)
        QShortcut(QKeySequence("Ctrl+Shift+C"), self, activated=self.on_capture)
        QShortcut(QKeySequence("Ctrl+Return"), self, activated=self.on_send)
        QShortcut(QKeySequence("Ctrl+Shift+X"), self, activated=self.on_clear_queue)

        self.controller_event.connect(self.on_controller_event)
        self.dispatch_finished.connect(self.on_dispatch_finished)
        # Queued so the combo is never rebuilt inside its own change handler
        self.config_changed.connect(self._populate_profiles, Qt.QueuedConnection)
        self.controller.register_observer(self._forward_controller_event)
        self.config_repository.register_observer(self._forward_config_change)

        self.queue_badge.set_count(self.controller.get_queue_count()["count"])
        if not self.controller.has_region()["hasRegion"]:
            self.statusBar().showMessage("No region selected")
        else:
            self.statusBar().showMessage("Ready")

    def _populate_profiles(self):
        profiles_result = self.profile_service.get_all_profiles()
        if profiles_result.is_failure:
            self.logger.warning(f"Could not load profiles: {profiles_result.error.message}")
            return
        self.profile_combo.blockSignals(True)
        self.profile_combo.clear()
        for profile in profiles_result.value:
            self.profile_combo.addItem(profile.name)
        self.profile_combo.setCurrentText(self.config_repository.get_selected_profile())
        self.profile_combo.blockSignals(False)

    def _forward_controller_event(self, event: str, payload: Any):
        self.controller_event.emit(event, payload)

    def _forward_config_change(self):
        self.config_changed.emit()

    def on_controller_event(self, event: str, payload: Any):
        if event == EVENT_QUEUE_UPDATED:
            self.queue_badge.set_count(payload)
        elif event == EVENT_STATUS:
            self.statusBar().showMessage(str(payload))
        elif event == EVENT_RESPONSE:
            self.response_view.setPlainText(payload)

    def on_profile_changed(self, name: str):
        result = self.config_repository.set_global_setting("selected_profile", name)
        if result.is_failure:
            self.statusBar().showMessage(f"Could not save profile: {result.error.message}")

    def on_select_region(self):
        result = self.controller.select_region()
        if not result["success"]:
            self.statusBar().showMessage(result["error"])

    def on_capture(self):
        self.controller.capture_and_enqueue()

    def on_clear_region(self):
        self.controller.clear_region()

    def on_clear_queue(self):
        self.controller.clear_queue()

    def on_send(self):
        result = self.controller.start_dispatch(self.dispatch_finished.emit)
        if not result["success"]:
            self.statusBar().showMessage(result["error"])
            return
        self.send_button.setEnabled(False)

    def on_dispatch_finished(self, result: dict):
        self.send_button.setEnabled(True)
        if not result["success"]:
            self.statusBar().showMessage(result["error"])

    def closeEvent(self, event):
        self.controller.unregister_observer(self._forward_controller_event)
        self.config_repository.unregister_observer(self._forward_config_change)
        self.task_service.cancel_all_tasks()
        super().closeEvent(event)
