"""Busy indicator shown while a request is in flight."""

from __future__ import annotations

from PySide6.QtWidgets import QLabel, QProgressBar, QVBoxLayout, QWidget


class ProgressPanel(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self._progress = QProgressBar()
        self._progress.setRange(0, 100)
        self._progress.setValue(0)
        self._progress.setTextVisible(False)

        self._status = QLabel("")
        self._status.setWordWrap(True)
        self._status.setObjectName("progressStatus")

        layout.addWidget(self._progress)
        layout.addWidget(self._status)

    def set_busy(self, busy: bool) -> None:
        self._progress.setRange(0, 0 if busy else 100)
        self._progress.setValue(0)
        self._status.setText(
            "Scanning sample… the first run may take a minute while the service wakes up."
            if busy
            else ""
        )
