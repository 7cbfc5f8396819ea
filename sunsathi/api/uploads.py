"""
Helpers turning multipart uploads into base64 media for Gemini.

CHANGELOG:
- 2026-10-19: Check the declared video size before reading the body
- 2026-10-14: Initial creation (STORY-007)
"""

from fastapi import UploadFile

from sunsathi.errors import LocalValidationError
from sunsathi.services.media import encode_media, ensure_within_limit


def _check_type(file: UploadFile, prefix: str, label: str) -> None:
    """Reject uploads whose declared content type is not ``prefix/*``."""
    content_type = file.content_type or ""
    if content_type and not content_type.startswith(prefix):
        raise LocalValidationError(
            f"Unsupported file type '{content_type}'. Please upload {label}."
        )


async def read_image_upload(file: UploadFile) -> str:
    """Read an image upload and return it base64-encoded.

    Raises:
        LocalValidationError: If the file is empty or not an image.
    """
    _check_type(file, "image/", "an image")
    return encode_media(await file.read())


async def read_video_upload(file: UploadFile, max_bytes: int) -> tuple[str, str]:
    """Read a video upload and return ``(base64_data, mime_type)``.

    The size Starlette recorded while spooling the upload is checked
    against *max_bytes* before the body is read into memory.

    Raises:
        LocalValidationError: If the file is empty or not a video.
        FileTooLargeError: If the file is larger than *max_bytes*.
    """
    if not (file.content_type or "").startswith("video/"):
        raise LocalValidationError(
            "Unsupported file type. Please upload a short video clip."
        )
    if file.size is not None:
        ensure_within_limit(file.size, max_bytes)
    data = await file.read()
    ensure_within_limit(len(data), max_bytes)
    return encode_media(data), file.content_type
