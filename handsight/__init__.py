"""Top-level package for the Handsight handwriting analysis client."""

from __future__ import annotations

from .config import AppConfig
from .models.result import AnalysisResult, parse_result
from .services.client import AnalysisClient
from .services.controller import AnalysisRequestController
from .services.upload_session import UploadSession
from .services.workflow import AnalysisWorkflow, Dispatch


def build_workflow(config: AppConfig, *, dispatch: Dispatch) -> AnalysisWorkflow:
    """Wire a workflow with its upload session, client and request controller.

    Requests complete on worker threads; ``dispatch`` must hand each completion
    callback to the thread that drives the workflow (the Qt main thread in the GUI).
    """
    controller = AnalysisRequestController(AnalysisClient(config))
    return AnalysisWorkflow(UploadSession(), controller, dispatch=dispatch)


__all__ = ["AnalysisResult", "AnalysisWorkflow", "AppConfig", "build_workflow", "parse_result"]
