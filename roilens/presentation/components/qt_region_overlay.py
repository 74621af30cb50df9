# roilens/presentation/components/qt_region_overlay.py
"""
Qt-native overlay for selecting the capture region.

Covers exactly one display with a dimmed, frameless, always-on-top window and
lets the user drag out a rectangle.
"""
from PySide6.QtCore import Qt, QRect, QPoint, Signal
from PySide6.QtGui import QPainter, QPen, QColor
from PySide6.QtWidgets import QMainWindow, QWidget, QLabel

from roilens.domain.models.display_model import DisplayInfo
from roilens.infrastructure.platform.region_selection_session import MIN_SELECTION_SIZE


class QtRegionOverlay(QMainWindow):
    """
    A full-screen, semi-transparent overlay that lets the user click and drag
    to select a rectangular region on one display.
    """
    region_selected = Signal(tuple)  # (x, y, width, height) relative to the overlay
    selection_cancelled = Signal()
    overlay_closed = Signal()

    def __init__(self, display: DisplayInfo, parent=None):
        """
        Initialize the overlay.

        Args:
            display: Display to cover
            parent: Parent widget
        """
        super().__init__(parent)
        self.display = display

        # Borderless, topmost, kept out of the taskbar
        self.setWindowFlags(
            Qt.FramelessWindowHint |
            Qt.WindowStaysOnTopHint |
            Qt.Tool
        )
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setAttribute(Qt.WA_DeleteOnClose)
        self.setFocusPolicy(Qt.StrongFocus)

        self.setGeometry(QRect(display.x, display.y, display.width, display.height))
        self.setCursor(Qt.CrossCursor)

        self.central_widget = QWidget(self)
        self.central_widget.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setCentralWidget(self.central_widget)

        self.start_pos = QPoint()
        self.selection_rect = None
        self.is_selecting = False

        self.instructions = QLabel("Drag to select transcript region | ESC to cancel", self)
        self.instructions.setStyleSheet(
            "color: white; background-color: rgba(0, 0, 0, 200); padding: 12px 24px; border-radius: 8px;"
        )
        self.instructions.setAlignment(Qt.AlignCenter)
        self.instructions.adjustSize()
        self.instructions.move((display.width - self.instructions.width()) // 2, 20)

        self.dimensions_label = QLabel(self)
        self.dimensions_label.setStyleSheet(
            "color: white; background-color: rgba(0, 0, 0, 200); padding: 4px 8px; border-radius: 4px;"
        )
        self.dimensions_label.hide()

    def show_overlay(self) -> None:
        """Show the overlay and take keyboard focus so Escape reaches it."""
        self.show()
        self.raise_()
        self.activateWindow()
        self.setFocus()

    def paintEvent(self, event):
        """Dim the display and punch out the current selection."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(0, 0, 0, 77))

        if self.selection_rect:
            painter.setCompositionMode(QPainter.CompositionMode_Clear)
            painter.fillRect(self.selection_rect, Qt.transparent)
            painter.setCompositionMode(QPainter.CompositionMode_SourceOver)

            painter.fillRect(self.selection_rect, QColor(0, 122, 255, 25))
            painter.setPen(QPen(QColor(0, 122, 255), 2))
            painter.drawRect(self.selection_rect)

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.is_selecting = True
            self.start_pos = event.position().toPoint()
            self.selection_rect = QRect(self.start_pos, self.start_pos)
            self.update()

    def mouseMoveEvent(self, event):
        if not self.is_selecting:
            return

        current = event.position().toPoint()
        self.selection_rect = QRect(self.start_pos, current).normalized()

        self.dimensions_label.setText(f"{self.selection_rect.width()} x {self.selection_rect.height()}")
        self.dimensions_label.adjustSize()

        # Keep the readout under the selection and inside the display
        label_x = min(self.selection_rect.left(), self.width() - self.dimensions_label.width() - 10)
        label_y = self.selection_rect.bottom() + 5
        if label_y + self.dimensions_label.height() > self.height():
            label_y = self.selection_rect.top() - self.dimensions_label.height() - 5
        self.dimensions_label.move(max(label_x, 0), max(label_y, 0))
        self.dimensions_label.show()

        self.update()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton or not self.is_selecting:
            return
        self.is_selecting = False

        rect = self.selection_rect
        if rect is None or rect.width() < MIN_SELECTION_SIZE or rect.height() < MIN_SELECTION_SIZE:
            # Too small to be intentional; let the user try again
            self.selection_rect = None
            self.dimensions_label.hide()
            self.update()
            return

        self.region_selected.emit((rect.x(), rect.y(), rect.width(), rect.height()))

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.selection_cancelled.emit()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        self.overlay_closed.emit()
        super().closeEvent(event)
