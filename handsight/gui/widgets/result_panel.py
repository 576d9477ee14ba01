"""Personality profile: one bar per trait plus slant and pressure read-outs."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QVBoxLayout,
    QWidget,
)

from ...services.presenter import TraitRow, ViewModel

BAND_COLOURS = {
    "high": "#22c55e",
    "medium": "#06b6d4",
    "low": "#64748b",
}


class ResultPanel(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)

        self._placeholder = QLabel()
        self._placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._placeholder.setStyleSheet("color: #475569;")
        layout.addWidget(self._placeholder, stretch=1)

        self._profile = QGroupBox("Personality Profile")
        self._traits_layout = QVBoxLayout(self._profile)
        layout.addWidget(self._profile)

        metrics = QWidget()
        grid = QGridLayout(metrics)
        grid.setContentsMargins(0, 0, 0, 0)
        self._slant = QLabel()
        self._pressure = QLabel()
        for column, (title, value) in enumerate(
            (("SLANT ANGLE", self._slant), ("PEN PRESSURE", self._pressure))
        ):
            caption = QLabel(title)
            caption.setStyleSheet("color: #64748b; font-size: 11px;")
            value.setStyleSheet("font-family: monospace; font-size: 22px;")
            grid.addWidget(caption, 0, column)
            grid.addWidget(value, 1, column)
        self._metrics = metrics
        layout.addWidget(metrics)

    def render(self, view: ViewModel) -> None:
        has_result = view.placeholder is None
        self._placeholder.setVisible(not has_result)
        self._placeholder.setText(view.placeholder or "")
        self._profile.setVisible(has_result)
        self._metrics.setVisible(has_result)

        self._clear_traits()
        for row in view.traits:
            self._traits_layout.addWidget(_trait_widget(row))
        self._slant.setText(view.slant_text or "")
        self._pressure.setText(view.pressure_text or "")

    def _clear_traits(self) -> None:
        while self._traits_layout.count():
            item = self._traits_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()


def _trait_widget(row: TraitRow) -> QWidget:
    container = QWidget()
    layout = QVBoxLayout(container)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.setSpacing(4)

    header = QHBoxLayout()
    header.addWidget(QLabel(row.name))
    header.addStretch()
    percent = QLabel(row.percent_text)
    percent.setStyleSheet("color: #22d3ee; font-family: monospace;")
    header.addWidget(percent)
    layout.addLayout(header)

    bar = QProgressBar()
    bar.setRange(0, 100)
    bar.setValue(round(row.score * 100))
    bar.setTextVisible(False)
    bar.setFixedHeight(8)
    bar.setStyleSheet(
        f"QProgressBar::chunk {{ background-color: {BAND_COLOURS[row.band]}; border-radius: 4px; }}"
    )
    layout.addWidget(bar)
    return container
