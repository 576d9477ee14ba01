"""Main Qt window implementing the user interface."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .. import build_workflow
from ..config import AppConfig
from ..models.base import InvalidFileTypeError, NoFileSelectedError
from ..services.presenter import invalid_file_message, present
from ..services.workflow import AnalysisWorkflow, WorkflowState
from ..utils.files import IMAGE_EXTENSIONS, read_image_file
from .widgets.drop_target import DropTargetWidget
from .widgets.progress_panel import ProgressPanel
from .widgets.result_panel import ResultPanel
from .workers import MainThreadDispatcher

FILE_FILTER = "Images ({})".format(" ".join(f"*{ext}" for ext in sorted(IMAGE_EXTENSIONS)))


class MainWindow(QMainWindow):
    """Primary application window; everything shown is derived from the workflow state."""

    def __init__(self, config: AppConfig) -> None:
        super().__init__()
        self.setWindowTitle("Trait Detector")
        self.resize(960, 640)

        self.config = config
        self.dispatcher = MainThreadDispatcher(self)
        self.workflow: AnalysisWorkflow = build_workflow(config, dispatch=self.dispatcher)
        self._rendered_preview: int | None = None

        self._build_ui()
        self._unsubscribe = self.workflow.subscribe(self._render)
        self._render(self.workflow.state)

    def _build_ui(self) -> None:
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)
        self.setCentralWidget(central)

        title = QLabel("Trait Detector")
        title.setStyleSheet("font-size: 28px; font-weight: bold;")
        layout.addWidget(title)
        intro = QLabel(
            "Upload a handwriting sample. The analysis service extracts writing features "
            "to predict personality traits."
        )
        intro.setWordWrap(True)
        layout.addWidget(intro)

        columns = QHBoxLayout()
        columns.setSpacing(24)
        layout.addLayout(columns, stretch=1)

        upload_column = QVBoxLayout()
        self.drop_target = DropTargetWidget()
        self.drop_target.clicked.connect(self._choose_file)
        self.drop_target.file_dropped.connect(self._load_path)
        upload_column.addWidget(self.drop_target, stretch=1)

        self.analyze_btn = QPushButton()
        self.analyze_btn.setMinimumHeight(44)
        self.analyze_btn.clicked.connect(self._analyze)
        upload_column.addWidget(self.analyze_btn)

        self.progress_panel = ProgressPanel()
        upload_column.addWidget(self.progress_panel)

        self.error_label = QLabel()
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet(
            "color: #f87171; background: rgba(69, 10, 10, 0.3); padding: 12px; border-radius: 8px;"
        )
        upload_column.addWidget(self.error_label)
        columns.addLayout(upload_column, stretch=1)

        self.result_panel = ResultPanel()
        columns.addWidget(self.result_panel, stretch=1)

        self.statusBar().showMessage(f"Service: {self.config.api_base_url}")

    # --- Event handlers -------------------------------------------------

    def _choose_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Select handwriting sample", "", FILE_FILTER)
        if path:
            self._load_path(Path(path))

    def _load_path(self, path: Path) -> None:
        try:
            data, mime_type = read_image_file(path)
        except OSError as exc:
            QMessageBox.warning(self, "Could not open file", str(exc))
            return
        try:
            self.workflow.select_file(data, mime_type, name=path.name)
        except InvalidFileTypeError as exc:
            QMessageBox.warning(self, "Unsupported file", invalid_file_message(exc.mime_type))

    def _analyze(self) -> None:
        try:
            self.workflow.analyze()
        except NoFileSelectedError as exc:
            QMessageBox.information(self, "No image selected", str(exc))

    # --- Rendering ------------------------------------------------------

    def _render(self, state: WorkflowState) -> None:
        view = present(state)
        self.drop_target.setEnabled(view.can_select)
        self.analyze_btn.setEnabled(view.can_analyze)
        self.analyze_btn.setText(view.analyze_label)
        self.progress_panel.set_busy(view.busy)
        self.error_label.setVisible(view.error_message is not None)
        self.error_label.setText(view.error_message or "")
        self.result_panel.render(view)

        preview_id = view.preview.handle_id if view.preview else None
        if preview_id != self._rendered_preview:
            data = self.workflow.session.preview_bytes()
            if data is None:
                self.drop_target.clear_preview()
            else:
                self.drop_target.show_preview(data)
            self._rendered_preview = preview_id

    def closeEvent(self, event: QCloseEvent) -> None:
        self._unsubscribe()
        self.workflow.close()
        super().closeEvent(event)
