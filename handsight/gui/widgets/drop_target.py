"""Upload zone accepting a click to browse or a dropped image file."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt, QUrl, Signal
from PySide6.QtGui import (
    QColor,
    QDragEnterEvent,
    QDragLeaveEvent,
    QDropEvent,
    QMouseEvent,
    QPainter,
    QPaintEvent,
    QPen,
    QPixmap,
)
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from ...utils.files import is_image_file


class DropTargetWidget(QWidget):
    file_dropped = Signal(object)
    clicked = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAcceptDrops(True)
        self.setObjectName("DropTarget")
        self.setMinimumHeight(320)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self._active = False
        self._has_preview = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)

        self._label = QLabel()
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setWordWrap(True)
        self._label.setStyleSheet("color: #cbd5e1;")
        layout.addWidget(self._label)
        self.clear_preview()

        self.setToolTip("Click or drop a handwriting sample (JPG, PNG).")

    def show_preview(self, data: bytes) -> None:
        pixmap = QPixmap()
        if not pixmap.loadFromData(data):
            self._label.setPixmap(QPixmap())
            self._label.setText("Preview unavailable")
        else:
            scaled = pixmap.scaled(
                self.size() * 0.9,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
            self._label.setPixmap(scaled)
        self._has_preview = True
        self.update()

    def clear_preview(self) -> None:
        self._label.setPixmap(QPixmap())
        self._label.setText("Click to Upload Image\nSupports JPG, PNG")
        self._has_preview = False
        self.update()

    def paintEvent(self, event: QPaintEvent | None = None) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = self.rect().adjusted(1, 1, -1, -1)
        painter.fillRect(rect, QColor(15, 23, 42, 220))

        if self._active:
            border_color = QColor(6, 182, 212)
        elif self._has_preview:
            border_color = QColor(21, 94, 117)
        else:
            border_color = QColor(30, 41, 59)
        pen = QPen(border_color, 2, Qt.PenStyle.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRoundedRect(rect, 16, 16)

        super().paintEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mouseReleaseEvent(event)

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if _image_paths(event.mimeData().urls()):
            event.acceptProposedAction()
            self._active = True
            self.update()
        else:
            event.ignore()

    def dropEvent(self, event: QDropEvent) -> None:
        paths = _image_paths(event.mimeData().urls())
        if not paths:
            event.ignore()
            return
        # Single-file workflow: only the first dropped image is used.
        self.file_dropped.emit(paths[0])
        event.acceptProposedAction()
        self._active = False
        self.update()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        if self._active:
            self._active = False
            self.update()


def _image_paths(urls: list[QUrl]) -> list[Path]:
    local = (Path(url.toLocalFile()) for url in urls if url.isLocalFile())
    return [path for path in local if is_image_file(path)]
