"""Application bootstrap for the Qt-based GUI."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from ..config import AppConfig
from .main_window import MainWindow


def run_app(config: AppConfig) -> int:
    """Launch the GUI application and block until the window closes."""
    app = QApplication.instance() or QApplication(sys.argv)
    window = MainWindow(config)
    window.show()
    return app.exec()
