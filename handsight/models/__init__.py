"""Result model, error taxonomy and value types."""

from .base import (
    HandsightError,
    InvalidFileTypeError,
    NoFileSelectedError,
    PreviewError,
    RequestError,
    RequestErrorKind,
    ResultValidationError,
    SelectedFile,
    ValidationErrorKind,
    WorkflowClosedError,
)
from .result import AnalysisReasoning, AnalysisResult, parse_result

__all__ = [
    "AnalysisReasoning",
    "AnalysisResult",
    "HandsightError",
    "InvalidFileTypeError",
    "NoFileSelectedError",
    "PreviewError",
    "RequestError",
    "RequestErrorKind",
    "ResultValidationError",
    "SelectedFile",
    "ValidationErrorKind",
    "WorkflowClosedError",
    "parse_result",
]
