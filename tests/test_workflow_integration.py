"""Workflow wired to the real request controller and HTTP client."""

from __future__ import annotations

import queue
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor

import pytest

from handsight import build_workflow
from handsight.config import AppConfig
from handsight.services.client import AnalysisClient
from handsight.services.controller import AnalysisRequestController
from handsight.services.upload_session import UploadSession
from handsight.services.workflow import AnalysisWorkflow, InFlight, Ready, Succeeded

CONFIG = AppConfig(api_base_url="http://svc.test")


class DummyResponse:
    status_code = 200
    text = "{}"

    def json(self):
        return {
            "traits": {"Openness": 0.8},
            "analysis_reasoning": {"slant_score": 0.5, "pressure_score": 0.6},
        }


class GatedSession:
    """Records each POST, then blocks until the test opens the gate."""

    def __init__(self, *, open_gate: bool = False) -> None:
        self.calls: list[dict[str, object]] = []
        self.entered = threading.Event()
        self.gate = threading.Event()
        if open_gate:
            self.gate.set()

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        self.entered.set()
        if not self.gate.wait(timeout=5):
            raise AssertionError("gate never opened")
        return DummyResponse()

    def close(self) -> None:
        return None


class PendingExecutor(Executor):
    """Leaves submitted work unstarted so it can still be cancelled."""

    def __init__(self) -> None:
        self.futures: list[Future] = []

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        self.futures.append(future)
        return future


def _workflow(session, executor, dispatched: queue.Queue, registry) -> AnalysisWorkflow:
    controller = AnalysisRequestController(
        AnalysisClient(CONFIG, session=session), executor=executor
    )
    return AnalysisWorkflow(UploadSession(registry), controller, dispatch=dispatched.put)


def _drain(dispatched: queue.Queue) -> None:
    while True:
        try:
            callback = dispatched.get_nowait()
        except queue.Empty:
            return
        callback()


@pytest.fixture
def pool():
    executor = ThreadPoolExecutor(max_workers=2)
    yield executor
    executor.shutdown(wait=True, cancel_futures=True)


def test_double_analyze_sends_one_http_request(pool, registry):
    session = GatedSession()
    dispatched: queue.Queue = queue.Queue()
    workflow = _workflow(session, pool, dispatched, registry)
    workflow.select_file(b"a", "image/png")

    workflow.analyze()
    workflow.analyze()
    session.gate.set()
    pool.shutdown(wait=True)

    assert len(session.calls) == 1
    _drain(dispatched)
    assert isinstance(workflow.state, Succeeded)


def test_success_arrives_through_queued_dispatch(pool, registry):
    session = GatedSession(open_gate=True)
    dispatched: queue.Queue = queue.Queue()
    workflow = _workflow(session, pool, dispatched, registry)
    workflow.select_file(b"a", "image/png", name="a.png")
    workflow.analyze()

    callback = dispatched.get(timeout=5)
    # Nothing changes until the event loop runs the queued completion.
    assert isinstance(workflow.state, InFlight)

    callback()

    assert isinstance(workflow.state, Succeeded)
    assert dict(workflow.state.result.traits) == {"Openness": 0.8}
    assert session.calls[0]["files"]["file"][0] == "a.png"


def test_running_request_for_superseded_file_is_discarded(pool, registry):
    session = GatedSession()
    dispatched: queue.Queue = queue.Queue()
    workflow = _workflow(session, pool, dispatched, registry)
    workflow.select_file(b"A", "image/png")
    workflow.analyze()
    assert session.entered.wait(timeout=5)

    workflow.select_file(b"B", "image/png")
    session.gate.set()
    pool.shutdown(wait=True)
    _drain(dispatched)

    assert isinstance(workflow.state, Ready)
    assert workflow.state.file.data == b"B"
    assert len(session.calls) == 1


def test_pending_request_is_cancelled_on_new_selection(registry):
    executor = PendingExecutor()
    session = GatedSession(open_gate=True)
    dispatched: queue.Queue = queue.Queue()
    workflow = _workflow(session, executor, dispatched, registry)
    workflow.select_file(b"A", "image/png")
    workflow.analyze()

    workflow.select_file(b"B", "image/png")

    (future,) = executor.futures
    assert future.cancelled()
    _drain(dispatched)
    assert isinstance(workflow.state, Ready)
    assert workflow.state.file.data == b"B"
    assert session.calls == []


def test_build_workflow_requires_dispatch():
    with pytest.raises(TypeError):
        build_workflow(CONFIG)  # type: ignore[call-arg]

    dispatched: queue.Queue = queue.Queue()
    with build_workflow(CONFIG, dispatch=dispatched.put) as workflow:
        assert isinstance(workflow.select_file(b"a", "image/png"), Ready)
    assert workflow.closed
