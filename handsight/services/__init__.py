"""Service layer for the upload, analyze and render workflow."""

from .client import AnalysisClient
from .controller import AnalysisRequestController, Submission
from .previews import PreviewHandle, PreviewRegistry, default_registry
from .upload_session import UploadSession
from .workflow import (
    AnalysisWorkflow,
    Failed,
    Idle,
    InFlight,
    Ready,
    Succeeded,
    WorkflowState,
)

__all__ = [
    "AnalysisClient",
    "AnalysisRequestController",
    "AnalysisWorkflow",
    "Failed",
    "Idle",
    "InFlight",
    "PreviewHandle",
    "PreviewRegistry",
    "Ready",
    "Submission",
    "Succeeded",
    "UploadSession",
    "WorkflowState",
    "default_registry",
]
