"""
Solar check endpoints: region list and rooftop analysis.

POST /v1/solar/analyze accepts a roof photo and a region label, and returns
Gemini's SolarAnalysisResult. A roof the service could not analyse comes
back as HTTP 200 with ``usableRoofAreaSqM == 0`` and an explanation in
``reasoning``; clients must render that as the "unclear roof" panel, not as
an error.

CHANGELOG:
- 2026-10-14: Add GET /v1/regions (STORY-010)
- 2026-10-13: Initial creation (STORY-006)

TODO:
- None
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from sunsathi.api.deps import Gemini
from sunsathi.api.uploads import read_image_upload
from sunsathi.constants import REGION_SUN_HOURS, IndianRegion
from sunsathi.models import CamelModel, SolarAnalysisResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["solar"])


class RegionInfo(CamelModel):
    """A selectable region with its average peak sun hours."""

    key: str
    label: str
    peak_sun_hours: float


@router.get("/regions", response_model=list[RegionInfo])
async def regions() -> list[RegionInfo]:
    """List the regions accepted by the solar analysis."""
    return [
        RegionInfo(key=region.name, label=region.value, peak_sun_hours=hours)
        for region, hours in REGION_SUN_HOURS.items()
    ]


@router.post("/solar/analyze", response_model=SolarAnalysisResult)
async def analyze(
    gemini: Gemini,
    file: Annotated[UploadFile, File()],
    region: Annotated[IndianRegion, Form()] = IndianRegion.OTHER,
) -> SolarAnalysisResult:
    """Estimate rooftop solar potential from a roof photo.

    Args:
        gemini: Configured Gemini client.
        file: Roof photo.
        region: Region label (one of ``GET /v1/regions`` labels).

    Returns:
        SolarAnalysisResult: The estimate, possibly with zero roof area.
    """
    image_b64 = await read_image_upload(file)
    result = await gemini.analyze_solar_potential(image_b64, region)
    if not result.is_analyzable:
        logger.info("Roof not analyzable: %s", result.reasoning)
    return result
