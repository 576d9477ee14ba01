"""Validated representation of a completed handwriting analysis."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .base import ResultValidationError, ValidationErrorKind

logger = logging.getLogger(__name__)

SCORE_MIN = 0.0
SCORE_MAX = 1.0
REQUIRED_REASONING_FIELDS = ("slant_score", "pressure_score")


@dataclass(frozen=True, slots=True)
class AnalysisReasoning:
    """Measurements the service derived the traits from."""

    slant_score: float
    pressure_score: float
    extras: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Trait scores plus the reasoning record, always in the [0, 1] range."""

    traits: Mapping[str, float]
    analysis_reasoning: AnalysisReasoning
    clamped_fields: tuple[str, ...] = ()

    @property
    def was_clamped(self) -> bool:
        return bool(self.clamped_fields)


def parse_result(raw: Any) -> AnalysisResult:
    """Validate an untyped response body and build an :class:`AnalysisResult`.

    Scores outside ``[0, 1]`` are clamped rather than rejected; the affected
    field paths are recorded on the result. Unknown top-level keys are ignored.
    """
    if not isinstance(raw, Mapping):
        raise ResultValidationError(
            ValidationErrorKind.MISSING_FIELD, "<root>", "expected a JSON object"
        )

    clamped: list[str] = []

    traits_raw = raw.get("traits")
    if not isinstance(traits_raw, Mapping):
        raise ResultValidationError(
            ValidationErrorKind.MISSING_FIELD, "traits", "expected a mapping of scores"
        )
    traits: dict[str, float] = {}
    for name, value in traits_raw.items():
        if not isinstance(name, str):
            raise ResultValidationError(
                ValidationErrorKind.MISSING_FIELD, "traits", f"non-string trait name {name!r}"
            )
        traits[name] = _score(value, f"traits.{name}", clamped)

    reasoning_raw = raw.get("analysis_reasoning")
    if not isinstance(reasoning_raw, Mapping):
        raise ResultValidationError(
            ValidationErrorKind.MISSING_FIELD, "analysis_reasoning", "expected an object"
        )
    scores: dict[str, float] = {}
    for key in REQUIRED_REASONING_FIELDS:
        path = f"analysis_reasoning.{key}"
        if key not in reasoning_raw:
            raise ResultValidationError(ValidationErrorKind.MISSING_FIELD, path, "missing")
        scores[key] = _score(reasoning_raw[key], path, clamped)
    extras = {
        key: value for key, value in reasoning_raw.items() if key not in REQUIRED_REASONING_FIELDS
    }

    if clamped:
        logger.info("Clamped out-of-range scores into [0, 1]: %s", ", ".join(clamped))

    return AnalysisResult(
        traits=MappingProxyType(traits),
        analysis_reasoning=AnalysisReasoning(
            slant_score=scores["slant_score"],
            pressure_score=scores["pressure_score"],
            extras=MappingProxyType(extras),
        ),
        clamped_fields=tuple(clamped),
    )


def _score(value: Any, path: str, clamped: list[str]) -> float:
    # bool is an int subclass but never a valid score.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResultValidationError(
            ValidationErrorKind.MISSING_FIELD, path, f"expected a number, got {value!r}"
        )
    try:
        number = float(value)
    except OverflowError:
        # Integers beyond float range clamp like any other out-of-range score.
        number = math.inf if value > 0 else -math.inf
    if math.isnan(number):
        raise ResultValidationError(ValidationErrorKind.OUT_OF_RANGE, path, "score is NaN")
    if number < SCORE_MIN or number > SCORE_MAX:
        clamped.append(path)
        return min(max(number, SCORE_MIN), SCORE_MAX)
    return number
