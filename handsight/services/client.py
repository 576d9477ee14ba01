"""HTTP client for the remote handwriting analysis service."""

from __future__ import annotations

import logging

import requests
from requests import Response, Session

from ..config import AppConfig
from ..models.base import RequestError, RequestErrorKind, ResultValidationError, SelectedFile
from ..models.result import AnalysisResult, parse_result

logger = logging.getLogger(__name__)


class AnalysisClient:
    """Posts a single image to ``{base_url}/analyze`` and validates the reply."""

    def __init__(self, config: AppConfig, session: Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return self._config.analyze_url

    def analyze(self, selected: SelectedFile) -> AnalysisResult:
        response = self._post(selected)
        return self._decode(response)

    def close(self) -> None:
        self._session.close()

    # ----- HTTP helpers ----------------------------------------------------

    def _post(self, selected: SelectedFile) -> Response:
        files = {"file": (selected.upload_name, selected.data, selected.mime_type)}
        timeout = self._config.request_timeout
        logger.info(
            "Submitting %s (%d bytes) to %s", selected.upload_name, selected.size, self.endpoint
        )
        try:
            response = self._session.post(self.endpoint, files=files, timeout=timeout)
        except requests.exceptions.Timeout as exc:
            raise RequestError(
                RequestErrorKind.NETWORK_FAILURE,
                f"Analysis request timed out after {timeout}s.",
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise RequestError(
                RequestErrorKind.NETWORK_FAILURE,
                f"Failed to contact the analysis service: {exc}",
            ) from exc

        status = response.status_code
        if 200 <= status < 300:
            return response
        if 400 <= status < 500:
            kind = RequestErrorKind.CLIENT_ERROR
        else:
            kind = RequestErrorKind.SERVER_ERROR
        raise RequestError(
            kind,
            f"Analysis service returned HTTP {status}: {response.text}",
            status_code=status,
        )

    # ----- Response handling -----------------------------------------------

    def _decode(self, response: Response) -> AnalysisResult:
        try:
            payload = response.json()
        except ValueError as exc:
            raise RequestError(
                RequestErrorKind.DECODE_FAILURE,
                f"Analysis service returned non-JSON output: {response.text!r}",
                status_code=response.status_code,
            ) from exc
        try:
            return parse_result(payload)
        except ResultValidationError as exc:
            logger.warning("Rejected analysis payload (%s): %s", exc.kind.value, exc)
            raise RequestError(
                RequestErrorKind.DECODE_FAILURE,
                f"Analysis service returned an unexpected payload: {exc}",
                status_code=response.status_code,
            ) from exc
