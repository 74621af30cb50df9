#!/usr/bin/env python3
"""
Entry point for ROILens.

Usage: python main.py [path/to/config.json]
"""
import sys
from PySide6.QtWidgets import QApplication

from roilens.application.app import initialize_app
from roilens.presentation.text_mode_window import TextModeWindow

if __name__ == "__main__":
    # Create application
    app = QApplication(sys.argv)
    app.setApplicationName("ROILens")

    container = initialize_app(sys.argv[1] if len(sys.argv) > 1 else None)

    # Create and show main window
    window = TextModeWindow(container)
    window.show()

    # Start the event loop
    sys.exit(app.exec())
