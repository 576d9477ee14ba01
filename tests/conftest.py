"""Shared fakes for the workflow tests."""

from __future__ import annotations

from concurrent.futures import Future

import pytest

from handsight.models.base import SelectedFile
from handsight.services.controller import Submission
from handsight.services.previews import PreviewRegistry
from handsight.services.upload_session import UploadSession


class ManualController:
    """Stand-in for AnalysisRequestController whose futures tests resolve by hand."""

    def __init__(self) -> None:
        self.submissions: list[Submission] = []
        self.submitted_files: list[SelectedFile] = []
        self.stale_marks = 0
        self.shut_down = False

    def submit(self, selected: SelectedFile) -> Submission:
        submission = Submission(request_id=len(self.submissions) + 1, future=Future())
        self.submissions.append(submission)
        self.submitted_files.append(selected)
        return submission

    def mark_stale(self) -> None:
        self.stale_marks += 1

    def shutdown(self) -> None:
        self.shut_down = True


@pytest.fixture
def registry() -> PreviewRegistry:
    return PreviewRegistry()


@pytest.fixture
def session(registry) -> UploadSession:
    return UploadSession(registry)


@pytest.fixture
def controller() -> ManualController:
    return ManualController()
