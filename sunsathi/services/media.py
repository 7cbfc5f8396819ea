"""
Upload helpers: base64 encoding and the local size ceiling.

CHANGELOG:
- 2026-10-13: Initial creation (STORY-007)

TODO:
- None
"""

from __future__ import annotations

import base64

from sunsathi.errors import FileTooLargeError, LocalValidationError


def encode_media(data: bytes) -> str:
    """Base64-encode raw upload bytes for an ``inlineData`` part.

    Raises:
        LocalValidationError: If *data* is empty (no file selected).
    """
    if not data:
        raise LocalValidationError("No file selected. Please choose a file to upload.")
    return base64.b64encode(data).decode("ascii")


def decoded_size(data_b64: str) -> int:
    """Return the byte length *data_b64* decodes to, without decoding it."""
    stripped = data_b64.strip()
    padding = len(stripped) - len(stripped.rstrip("="))
    return (len(stripped) * 3) // 4 - padding


def ensure_within_limit(size_bytes: int, limit_bytes: int) -> None:
    """Reject a file larger than *limit_bytes*.

    Raises:
        FileTooLargeError: If ``size_bytes > limit_bytes``.
    """
    if size_bytes > limit_bytes:
        raise FileTooLargeError(size_bytes, limit_bytes)
