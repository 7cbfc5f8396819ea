"""
Error taxonomy for the estimator.

Four kinds of failure are distinguished:

- ``ConfigurationError``: the Gemini credential is missing. Fatal for the AI
  flows and raised before any network call.
- ``LocalValidationError``: the caller's input is rejected locally (no file,
  empty file, oversized video). No network call is attempted.
- ``AnalysisError``: the Gemini call failed or returned something that does
  not decode against the expected schema. ``ServiceRequestError`` and
  ``ResponseDecodeError`` keep the two causes apart for logging while
  sharing the same generic user-facing message.
- A roof the service cannot analyse is *not* an error; it comes back as a
  normal :class:`~sunsathi.models.SolarAnalysisResult` with zero area.

CHANGELOG:
- 2026-10-13: Split AnalysisError into request/decode subclasses (STORY-006)
- 2026-10-12: Initial creation (STORY-002)

TODO:
- None
"""

from __future__ import annotations


class SunSathiError(Exception):
    """Base class for all estimator errors.

    Attributes:
        message: Text safe to show to the end user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(SunSathiError):
    """Required configuration (the Gemini API key) is missing."""


class LocalValidationError(SunSathiError):
    """Input rejected before any call to the AI service."""


class FileTooLargeError(LocalValidationError):
    """Uploaded file exceeds the configured size ceiling.

    Attributes:
        size_bytes: Size of the rejected file.
        limit_bytes: Ceiling it was checked against.
    """

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        limit_mb = limit_bytes / (1024 * 1024)
        super().__init__(
            f"File too large. Please upload a short clip under {limit_mb:g}MB."
        )
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class AnalysisError(SunSathiError):
    """The AI-backed analysis could not produce a result."""


class ServiceRequestError(AnalysisError):
    """Network failure or non-success status from the AI service."""


class ResponseDecodeError(AnalysisError):
    """The AI service replied, but the body was empty or failed validation."""
