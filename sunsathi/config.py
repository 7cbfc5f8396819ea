"""
Estimator configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
The Gemini API key is optional at startup so that the local consumption
calculator keeps working without it; the AI routes refuse to run until it
is set (see :mod:`sunsathi.api.deps`).

CHANGELOG:
- 2026-10-14: Add request_timeout_s (STORY-009)
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings

from sunsathi.constants import (
    DEFAULT_GEMINI_BASE_URL,
    DEFAULT_MODEL_ID,
    MAX_VIDEO_BYTES,
)


class SunSathiSettings(BaseSettings):
    """Runtime configuration for the Sun-Sathi API.

    Attributes:
        api_key: Gemini API key (env ``API_KEY``). Empty means unconfigured.
        model_id: Gemini model used for all three analysis flows.
        gemini_base_url: Base URL of the Generative Language REST API.
        max_video_bytes: Upload ceiling for the video efficiency audit.
        request_timeout_s: Per-call timeout in seconds, or None to let the
            service's own timeout govern.
    """

    api_key: str = ""
    model_id: str = DEFAULT_MODEL_ID
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    max_video_bytes: int = MAX_VIDEO_BYTES
    request_timeout_s: float | None = None

    @property
    def has_api_key(self) -> bool:
        """True when a non-blank API key is configured."""
        return bool(self.api_key.strip())

    @field_validator("gemini_base_url")
    @classmethod
    def gemini_base_url_must_be_https(cls, v: str) -> str:
        """Validate that the Gemini base URL uses HTTPS.

        The API key travels in a request header, so plain HTTP is rejected
        at startup.
        """
        if not v.startswith("https://"):
            raise ValueError(
                "GEMINI_BASE_URL must use HTTPS (got: " f"'{v[:30]}...')."
            )
        return v.rstrip("/")

    @field_validator("max_video_bytes")
    @classmethod
    def max_video_bytes_must_be_positive(cls, v: int) -> int:
        """Validate the video upload ceiling is positive."""
        if v < 1:
            raise ValueError("MAX_VIDEO_BYTES must be >= 1")
        return v

    @field_validator("request_timeout_s")
    @classmethod
    def request_timeout_must_be_positive(cls, v: float | None) -> float | None:
        """Validate the optional request timeout is positive when set."""
        if v is not None and v <= 0:
            raise ValueError("REQUEST_TIMEOUT_S must be > 0 when set")
        return v

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}
