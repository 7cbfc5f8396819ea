"""
POST /v1/efficiency/audit endpoint for the video efficiency audit.

Accepts a short room video, rejects clips over the configured ceiling
(10 MB by default) without contacting Gemini, and returns the audit.

CHANGELOG:
- 2026-10-14: Initial creation (STORY-007)

TODO:
- None
"""

from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from sunsathi.api.deps import Gemini, Settings
from sunsathi.api.uploads import read_video_upload
from sunsathi.models import EfficiencyResult

router = APIRouter(prefix="/v1/efficiency", tags=["efficiency"])


@router.post("/audit", response_model=EfficiencyResult)
async def audit(
    gemini: Gemini,
    settings: Settings,
    file: Annotated[UploadFile, File()],
) -> EfficiencyResult:
    """Audit a room video for old or inefficient appliances.

    Raises:
        FileTooLargeError: Mapped to HTTP 413 when the clip is too large.
    """
    video_b64, mime_type = await read_video_upload(file, settings.max_video_bytes)
    return await gemini.analyze_video_efficiency(video_b64, mime_type)
