"""Error taxonomy and value types shared across the workflow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HandsightError(RuntimeError):
    """Base class for all errors raised by the client workflow."""


class InvalidFileTypeError(HandsightError):
    """Raised when the selected file does not declare an ``image/*`` mime type."""

    def __init__(self, mime_type: str) -> None:
        super().__init__(f"Unsupported file type {mime_type!r}; please choose an image.")
        self.mime_type = mime_type


class NoFileSelectedError(HandsightError):
    """Raised when analysis is requested before any file was selected."""

    def __init__(self) -> None:
        super().__init__("Select an image before starting the analysis.")


class PreviewError(HandsightError):
    """Raised when a preview handle is used after it was released."""


class WorkflowClosedError(HandsightError):
    """Raised when a workflow receives events after it was closed."""

    def __init__(self) -> None:
        super().__init__("The analysis workflow has been closed.")


class ValidationErrorKind(str, Enum):
    """Ways an analysis payload can fail validation."""

    MISSING_FIELD = "missing_field"
    OUT_OF_RANGE = "out_of_range"


class ResultValidationError(HandsightError):
    """Raised when a success payload does not have the expected shape."""

    def __init__(self, kind: ValidationErrorKind, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.kind = kind
        self.field = field


class RequestErrorKind(str, Enum):
    """Outcomes of an analysis request that did not produce a result."""

    NETWORK_FAILURE = "network_failure"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    DECODE_FAILURE = "decode_failure"


class RequestError(HandsightError):
    """Typed failure of a single analysis request."""

    def __init__(
        self,
        kind: RequestErrorKind,
        detail: str,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
        self.status_code = status_code


@dataclass(frozen=True, slots=True)
class SelectedFile:
    """Raw image bytes chosen by the user, tagged with their mime type."""

    data: bytes
    mime_type: str
    name: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def upload_name(self) -> str:
        return self.name or "upload"
