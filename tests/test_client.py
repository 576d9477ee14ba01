"""Tests for the HTTP analysis client."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
import requests

from handsight.config import AppConfig
from handsight.models.base import RequestError, RequestErrorKind, SelectedFile
from handsight.services.client import AnalysisClient

VALID_BODY = {
    "traits": {"Openness": 0.8},
    "analysis_reasoning": {"slant_score": 0.5, "pressure_score": 0.6},
}


class DummyResponse:
    def __init__(self, status_code: int = 200, body: object = VALID_BODY, text: str | None = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        if not isinstance(self._body, (dict, list)):
            raise ValueError("Expecting value")
        return self._body


class RecordingSession:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response or DummyResponse()
        self.error = error
        self.calls: list[dict[str, object]] = []
        self.closed = False

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


def _client(session, **config) -> AnalysisClient:
    return AnalysisClient(AppConfig(api_base_url="http://svc.test/", **config), session=session)


def _file() -> SelectedFile:
    return SelectedFile(data=b"\x89PNG", mime_type="image/png", name="sample.png")


def test_analyze_posts_single_multipart_file_part():
    session = RecordingSession()
    client = _client(session)

    result = client.analyze(_file())

    assert dict(result.traits) == {"Openness": 0.8}
    (call,) = session.calls
    assert call["url"] == "http://svc.test/analyze"
    assert call["files"] == {"file": ("sample.png", b"\x89PNG", "image/png")}
    assert call["timeout"] is None


def test_analyze_uses_configured_timeout():
    session = RecordingSession()
    _client(session, request_timeout=15).analyze(_file())

    assert session.calls[0]["timeout"] == 15.0


def test_unnamed_file_gets_placeholder_name():
    session = RecordingSession()
    _client(session).analyze(SelectedFile(data=b"x", mime_type="image/jpeg"))

    assert session.calls[0]["files"]["file"][0] == "upload"


@pytest.mark.parametrize(
    "error",
    [
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.Timeout("slow"),
    ],
)
def test_transport_errors_map_to_network_failure(error):
    client = _client(RecordingSession(error=error))

    with pytest.raises(RequestError) as excinfo:
        client.analyze(_file())

    assert excinfo.value.kind is RequestErrorKind.NETWORK_FAILURE
    assert excinfo.value.status_code is None


@pytest.mark.parametrize(
    ("status", "kind"),
    [
        (400, RequestErrorKind.CLIENT_ERROR),
        (413, RequestErrorKind.CLIENT_ERROR),
        (499, RequestErrorKind.CLIENT_ERROR),
        (500, RequestErrorKind.SERVER_ERROR),
        (503, RequestErrorKind.SERVER_ERROR),
        (304, RequestErrorKind.SERVER_ERROR),
    ],
)
def test_http_status_mapping(status, kind):
    client = _client(RecordingSession(DummyResponse(status_code=status, body={}, text="boom")))

    with pytest.raises(RequestError) as excinfo:
        client.analyze(_file())

    assert excinfo.value.kind is kind
    assert excinfo.value.status_code == status


def test_non_json_body_is_decode_failure():
    client = _client(RecordingSession(DummyResponse(body=None, text="<html>")))

    with pytest.raises(RequestError) as excinfo:
        client.analyze(_file())

    assert excinfo.value.kind is RequestErrorKind.DECODE_FAILURE


def test_invalid_payload_is_decode_failure():
    client = _client(RecordingSession(DummyResponse(body={"traits": {"Openness": 0.8}})))

    with pytest.raises(RequestError) as excinfo:
        client.analyze(_file())

    assert excinfo.value.kind is RequestErrorKind.DECODE_FAILURE
    assert "analysis_reasoning" in str(excinfo.value)


def test_close_closes_session():
    session = RecordingSession()
    _client(session).close()
    assert session.closed


def test_default_session_is_requests_session(monkeypatch):
    created = SimpleNamespace(count=0)

    class FakeSession(RecordingSession):
        def __init__(self) -> None:
            super().__init__()
            created.count += 1

    monkeypatch.setattr("handsight.services.client.requests.Session", FakeSession)

    AnalysisClient(AppConfig(api_base_url="http://svc.test"))

    assert created.count == 1


def test_oversized_integer_score_is_clamped_not_crashed():
    body = json.loads(
        '{"traits": {"Openness": 1' + "0" * 400 + '},'
        ' "analysis_reasoning": {"slant_score": 0.5, "pressure_score": 0.6}}'
    )
    client = _client(RecordingSession(DummyResponse(body=body, text="{}")))

    result = client.analyze(_file())

    assert result.traits["Openness"] == 1.0
    assert result.clamped_fields == ("traits.Openness",)
