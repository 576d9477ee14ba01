"""Maps a workflow state onto what the window displays."""

from __future__ import annotations

from dataclasses import dataclass

from ..models.base import RequestErrorKind
from ..models.result import AnalysisResult
from .previews import PreviewHandle
from .workflow import Failed, InFlight, Ready, Succeeded, WorkflowState

ANALYZE_LABEL = "ANALYZE HANDWRITING"
BUSY_LABEL = "PROCESSING..."
PLACEHOLDER_TEXT = "Results will appear here"
REQUEST_FAILED_MESSAGE = "Failed to connect to the AI. Is the backend waking up?"

HIGH_SCORE = 0.7
MEDIUM_SCORE = 0.4


@dataclass(frozen=True, slots=True)
class TraitRow:
    name: str
    score: float
    percent_text: str
    band: str


@dataclass(frozen=True, slots=True)
class ViewModel:
    can_select: bool
    can_analyze: bool
    busy: bool
    analyze_label: str
    preview: PreviewHandle | None = None
    error_message: str | None = None
    traits: tuple[TraitRow, ...] = ()
    slant_text: str | None = None
    pressure_text: str | None = None
    placeholder: str | None = PLACEHOLDER_TEXT


def score_band(score: float) -> str:
    if score > HIGH_SCORE:
        return "high"
    if score > MEDIUM_SCORE:
        return "medium"
    return "low"


def request_error_message(kind: RequestErrorKind) -> str:
    """Every request failure gets the same prompt to try again."""
    return REQUEST_FAILED_MESSAGE


def invalid_file_message(mime_type: str) -> str:
    shown = mime_type or "unknown"
    return f"That file is not an image ({shown}). Please choose a JPG or PNG."


def present(state: WorkflowState) -> ViewModel:
    if isinstance(state, InFlight):
        return ViewModel(
            can_select=True,
            can_analyze=False,
            busy=True,
            analyze_label=BUSY_LABEL,
            preview=state.preview,
        )
    if isinstance(state, Succeeded):
        return _present_result(state.result, state.preview)
    if isinstance(state, Failed):
        return ViewModel(
            can_select=True,
            can_analyze=True,
            busy=False,
            analyze_label=ANALYZE_LABEL,
            preview=state.preview,
            error_message=request_error_message(state.error_kind),
        )
    if isinstance(state, Ready):
        return ViewModel(
            can_select=True,
            can_analyze=True,
            busy=False,
            analyze_label=ANALYZE_LABEL,
            preview=state.preview,
        )
    return ViewModel(can_select=True, can_analyze=False, busy=False, analyze_label=ANALYZE_LABEL)


def _present_result(result: AnalysisResult, preview: PreviewHandle) -> ViewModel:
    rows = tuple(
        TraitRow(
            name=name,
            score=score,
            percent_text=f"{score * 100:.0f}%",
            band=score_band(score),
        )
        for name, score in result.traits.items()
    )
    reasoning = result.analysis_reasoning
    return ViewModel(
        can_select=True,
        can_analyze=True,
        busy=False,
        analyze_label=ANALYZE_LABEL,
        preview=preview,
        traits=rows,
        slant_text=f"{reasoning.slant_score * 100:.0f}°",
        pressure_text=f"{reasoning.pressure_score * 100:.0f}%",
        placeholder=None,
    )
