"""Upload, analyze and render state machine.

The workflow is driven from a single event-loop thread. Network completions
arrive on worker threads and are handed to ``dispatch`` which must run the
given callable on that event-loop thread (the GUI passes a Qt signal bridge;
the default runs it inline).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from functools import partial
from types import TracebackType
from typing import Union

from ..models.base import (
    NoFileSelectedError,
    RequestError,
    RequestErrorKind,
    SelectedFile,
    WorkflowClosedError,
)
from ..models.result import AnalysisResult
from .controller import AnalysisRequestController
from .previews import PreviewHandle
from .upload_session import UploadSession

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], None]


@dataclass(frozen=True, slots=True)
class Idle:
    """Nothing selected yet."""


@dataclass(frozen=True, slots=True)
class Ready:
    file: SelectedFile
    preview: PreviewHandle


@dataclass(frozen=True, slots=True)
class InFlight:
    file: SelectedFile
    preview: PreviewHandle
    request_id: int


@dataclass(frozen=True, slots=True)
class Succeeded:
    file: SelectedFile
    preview: PreviewHandle
    result: AnalysisResult


@dataclass(frozen=True, slots=True)
class Failed:
    file: SelectedFile
    preview: PreviewHandle
    error_kind: RequestErrorKind
    message: str = ""


WorkflowState = Union[Idle, Ready, InFlight, Succeeded, Failed]
StateListener = Callable[[WorkflowState], None]


def _run_inline(callback: Callable[[], None]) -> None:
    callback()


class AnalysisWorkflow:
    """Top-level controller composing the upload session and request controller."""

    def __init__(
        self,
        session: UploadSession,
        controller: AnalysisRequestController,
        *,
        dispatch: Dispatch | None = None,
    ) -> None:
        self._session = session
        self._controller = controller
        self._dispatch = dispatch or _run_inline
        self._state: WorkflowState = Idle()
        self._listeners: list[StateListener] = []
        self._closed = False

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def session(self) -> UploadSession:
        return self._session

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for state changes and return an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # --- User events ----------------------------------------------------

    def select_file(self, data: bytes, mime_type: str, name: str | None = None) -> WorkflowState:
        """Select a new image; any previous result, error or pending request is dropped.

        Raises :class:`InvalidFileTypeError` before touching any state when the
        mime type is not an image.
        """
        self._ensure_open()
        selected = self._session.select_file(data, mime_type, name)
        if isinstance(self._state, InFlight):
            logger.info("Selection superseded pending request #%d", self._state.request_id)
            self._controller.mark_stale()
        preview = self._session.current_preview()
        assert preview is not None
        self._transition(Ready(file=selected, preview=preview))
        return self._state

    def analyze(self) -> WorkflowState:
        self._ensure_open()
        state = self._state
        if isinstance(state, Idle):
            raise NoFileSelectedError()
        if isinstance(state, InFlight):
            logger.debug("Ignoring analyze: request #%d still in flight", state.request_id)
            return state

        submission = self._controller.submit(state.file)
        self._transition(
            InFlight(file=state.file, preview=state.preview, request_id=submission.request_id)
        )
        submission.future.add_done_callback(partial(self._on_done, submission.request_id))
        return self._state

    # --- Network events -------------------------------------------------

    def request_succeeded(self, request_id: int, result: AnalysisResult) -> WorkflowState:
        state = self._state
        if not self._is_tracked(request_id):
            logger.debug("Discarding stale result of request #%d", request_id)
            return state
        assert isinstance(state, InFlight)
        self._transition(Succeeded(file=state.file, preview=state.preview, result=result))
        return self._state

    def request_failed(
        self,
        request_id: int,
        error_kind: RequestErrorKind,
        message: str | None = None,
    ) -> WorkflowState:
        state = self._state
        if not self._is_tracked(request_id):
            logger.debug("Discarding stale failure of request #%d", request_id)
            return state
        assert isinstance(state, InFlight)
        self._transition(
            Failed(
                file=state.file,
                preview=state.preview,
                error_kind=error_kind,
                message=message or "",
            )
        )
        return self._state

    # --- Teardown -------------------------------------------------------

    def close(self) -> None:
        """Drop any pending request and release the preview.

        The workflow cannot be reused afterwards; further user events raise
        :class:`WorkflowClosedError`. Closing twice is a no-op.
        """
        if self._closed:
            return
        self._closed = True
        self._controller.shutdown()
        self._session.release()
        if not isinstance(self._state, Idle):
            self._transition(Idle())

    def __enter__(self) -> AnalysisWorkflow:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # --- Internals ------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise WorkflowClosedError()

    def _is_tracked(self, request_id: int) -> bool:
        return isinstance(self._state, InFlight) and self._state.request_id == request_id

    def _on_done(self, request_id: int, future: Future[AnalysisResult]) -> None:
        # Runs on the worker thread (or inline for already-resolved futures).
        self._dispatch(partial(self._resolve, request_id, future))

    def _resolve(self, request_id: int, future: Future[AnalysisResult]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is None:
            self.request_succeeded(request_id, future.result())
        elif isinstance(exc, RequestError):
            self.request_failed(request_id, exc.kind, exc.detail)
        else:
            logger.error("Request #%d raised %r", request_id, exc)
            self.request_failed(request_id, RequestErrorKind.NETWORK_FAILURE, str(exc))

    def _transition(self, state: WorkflowState) -> None:
        logger.debug("%s -> %s", type(self._state).__name__, type(state).__name__)
        self._state = state
        for listener in list(self._listeners):
            listener(state)
