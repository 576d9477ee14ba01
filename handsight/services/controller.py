"""Runs analysis requests off the event loop and tracks which one is current."""

from __future__ import annotations

import itertools
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass

from ..models.base import RequestError, RequestErrorKind, SelectedFile
from ..models.result import AnalysisResult
from .client import AnalysisClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Submission:
    """A submitted request: its id and the future resolving to the result."""

    request_id: int
    future: Future[AnalysisResult]


class AnalysisRequestController:
    """Issues requests through an :class:`AnalysisClient` on a worker pool.

    The returned futures only ever fail with :class:`RequestError`. Marking a
    request stale does not abort the transport call; callers compare request ids
    and discard resolutions that are no longer current.
    """

    def __init__(self, client: AnalysisClient, executor: Executor | None = None) -> None:
        self._client = client
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="handsight-request"
        )
        self._ids = itertools.count(1)
        self._current: Submission | None = None

    @property
    def current_request_id(self) -> int | None:
        return self._current.request_id if self._current else None

    def submit(self, selected: SelectedFile) -> Submission:
        request_id = next(self._ids)
        future = self._executor.submit(self._run, request_id, selected)
        submission = Submission(request_id=request_id, future=future)
        self._current = submission
        logger.debug("Submitted analysis request #%d", request_id)
        return submission

    def is_current(self, request_id: int) -> bool:
        return self._current is not None and self._current.request_id == request_id

    def mark_stale(self) -> None:
        """Forget the current request; its eventual outcome must be ignored."""
        submission, self._current = self._current, None
        if submission is None:
            return
        if submission.future.cancel():
            logger.debug("Cancelled pending request #%d", submission.request_id)
        else:
            logger.debug("Request #%d marked stale", submission.request_id)

    def shutdown(self) -> None:
        self.mark_stale()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
        self._client.close()

    def _run(self, request_id: int, selected: SelectedFile) -> AnalysisResult:
        try:
            result = self._client.analyze(selected)
        except RequestError as exc:
            logger.warning("Request #%d failed (%s): %s", request_id, exc.kind.value, exc)
            raise
        except Exception as exc:  # pragma: no cover - safety net for worker threads
            logger.exception("Request #%d failed unexpectedly", request_id)
            raise RequestError(RequestErrorKind.NETWORK_FAILURE, str(exc)) from exc
        logger.info("Request #%d completed with %d traits", request_id, len(result.traits))
        return result
