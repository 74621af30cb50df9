from PySide6.QtCore import Qt
from PySide6.QtWidgets import QPushButton, QGroupBox, QLabel

_BUTTON_COLORS = {
    "primary": ("#3a7ca5", "#2a6b94", "#1a5a83"),
    "danger": ("#a53a3a", "#942a2a", "#831a1a"),
}


class StyledButton(QPushButton):
    """Push button in one of the two action colors."""
    def __init__(self, text, parent=None, role="primary"):
        super().__init__(text, parent)
        base, hover, pressed = _BUTTON_COLORS.get(role, _BUTTON_COLORS["primary"])
        self.setStyleSheet(f"""
            QPushButton {{
                background-color: {base};
                color: white;
                padding: 8px 16px;
                border-radius: 4px;
            }}
            QPushButton:hover {{
                background-color: {hover};
            }}
            QPushButton:pressed {{
                background-color: {pressed};
            }}
            QPushButton:disabled {{
                background-color: #9aa5ad;
            }}
        """)


class GroupHeader(QGroupBox):
    """Group box with a centered bold title."""
    def __init__(self, title, parent=None):
        super().__init__(title, parent)
        self.setStyleSheet("""
            QGroupBox {
                font-weight: bold;
                border: 1px solid #cccccc;
                border-radius: 6px;
                margin-top: 10px;
                padding-top: 15px;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                subcontrol-position: top center;
                padding: 0 5px;
            }
        """)


class QueueBadge(QLabel):
    """Pill showing how many captures are waiting; turns amber at the warning threshold."""
    def __init__(self, warning_threshold, parent=None):
        super().__init__(parent)
        self.warning_threshold = warning_threshold
        self.setAlignment(Qt.AlignCenter)
        self.set_count(0)

    def set_count(self, count):
        color = "#c98a1b" if count >= self.warning_threshold else "#4a4a4a"
        self.setText(f"{count} queued")
        self.setStyleSheet(
            f"color: white; background-color: {color}; padding: 4px 10px; border-radius: 10px;"
        )
