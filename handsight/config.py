"""Deployment configuration for the analysis client."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

BASE_URL_ENV_VAR = "HANDSIGHT_API_URL"


class AppConfig(BaseModel):
    """Validates and stores runtime settings for the application."""

    api_base_url: str = Field(
        description="Base URL of the handwriting analysis service, without trailing slash.",
    )
    request_timeout: float | None = Field(
        default=None,
        ge=1.0,
        le=600.0,
        description=(
            "Optional client-side timeout (seconds) for the analyze call. "
            "When unset the request relies on the transport to complete or fail."
        ),
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level used by the entry point.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @model_validator(mode="after")
    def _normalise_base_url(self) -> AppConfig:
        base = self.api_base_url.strip()
        if not base:
            raise ValueError("The analysis service base URL must not be empty.")
        if "://" not in base:
            raise ValueError(
                "The analysis service base URL must include a scheme such as https://."
            )
        self.api_base_url = base.rstrip("/")
        return self

    @property
    def analyze_url(self) -> str:
        return f"{self.api_base_url}/analyze"

    @classmethod
    def load(cls, path: Path) -> AppConfig:
        """Load configuration from a YAML or JSON file."""
        data = _read_config_file(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:  # pragma: no cover - pass through details
            raise ValueError(f"Invalid configuration file at {path}: {exc}") from exc

    @classmethod
    def resolve(
        cls,
        *,
        path: Path | None = None,
        base_url: str | None = None,
        log_level: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> AppConfig:
        """Merge the config file, the environment and explicit overrides.

        Explicit arguments win over ``HANDSIGHT_API_URL``, which wins over the file.
        """
        env = os.environ if environ is None else environ
        data: dict[str, Any] = _read_config_file(path) if path is not None else {}

        env_url = env.get(BASE_URL_ENV_VAR)
        if env_url:
            data["api_base_url"] = env_url
        if base_url:
            data["api_base_url"] = base_url
        if log_level:
            data["log_level"] = log_level

        if not data.get("api_base_url"):
            raise ValueError(
                "No analysis service URL configured. Pass --base-url, set "
                f"{BASE_URL_ENV_VAR} or provide api_base_url in a config file."
            )
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid configuration: {exc}") from exc


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text) or {}
    return json.loads(text)
