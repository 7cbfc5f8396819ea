"""
Appliance endpoints: starter list and AI "Quick Add" detection.

GET /v1/appliances/defaults returns the starter list. POST
/v1/appliances/detect accepts a photo plus the caller's current list (as a
JSON form field), asks Gemini which appliances are visible, and returns the
merged list together with the number of detected items. POST
/v1/appliances/{id}/quantity and /v1/appliances/{id}/hours apply a single
row edit to the posted list and return the new list.

CHANGELOG:
- 2026-10-19: Add quantity and hours edit endpoints
- 2026-10-14: Initial creation (STORY-008)

TODO:
- None
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from pydantic import TypeAdapter, ValidationError

from sunsathi.api.deps import Gemini
from sunsathi.api.uploads import read_image_upload
from sunsathi.models import Appliance, CamelModel
from sunsathi.services.appliances import (
    default_appliances,
    merge_detected_appliances,
    update_hours,
    update_quantity,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/appliances", tags=["appliances"])

_APPLIANCE_LIST = TypeAdapter(list[Appliance])


class DetectionResponse(CamelModel):
    """Merged appliance list after a detection run."""

    detected: int
    appliances: list[Appliance]


class QuantityEdit(CamelModel):
    """Quantity change for one row of the posted list."""

    appliances: list[Appliance]
    delta: int


class HoursEdit(CamelModel):
    """New daily hours for one row of the posted list."""

    appliances: list[Appliance]
    daily_hours: float


def _require_row(appliances: list[Appliance], appliance_id: str) -> None:
    if not any(app.id == appliance_id for app in appliances):
        raise HTTPException(
            status_code=404, detail=f"Appliance '{appliance_id}' not in list"
        )


@router.get("/defaults", response_model=list[Appliance])
async def defaults() -> list[Appliance]:
    """Return the starter appliance list."""
    return default_appliances()


@router.post("/detect", response_model=DetectionResponse)
async def detect(
    gemini: Gemini,
    file: Annotated[UploadFile, File()],
    appliances: Annotated[str | None, Form()] = None,
) -> DetectionResponse:
    """Detect appliances in a photo and merge them into the current list.

    Args:
        gemini: Configured Gemini client.
        file: Photo of a room or appliances.
        appliances: JSON array of the caller's current appliances. When
            omitted, the starter list is used.

    Returns:
        DetectionResponse: Count of detected items and the merged list.

    Raises:
        HTTPException: 422 if *appliances* is not a valid appliance list.
    """
    if appliances is None:
        current = default_appliances()
    else:
        try:
            current = _APPLIANCE_LIST.validate_json(appliances)
        except ValidationError as exc:
            raise HTTPException(
                status_code=422,
                detail=exc.errors(include_url=False, include_context=False),
            ) from None

    image_b64 = await read_image_upload(file)
    detected = await gemini.detect_appliances(image_b64)
    merged = merge_detected_appliances(current, detected)
    logger.info(
        "Quick Add: %d detected, list grew from %d to %d",
        len(detected),
        len(current),
        len(merged),
    )
    return DetectionResponse(detected=len(detected), appliances=merged)


@router.post("/{appliance_id}/quantity", response_model=list[Appliance])
async def edit_quantity(appliance_id: str, edit: QuantityEdit) -> list[Appliance]:
    """Add *delta* to one appliance's quantity; the result never drops below 0."""
    _require_row(edit.appliances, appliance_id)
    return update_quantity(edit.appliances, appliance_id, edit.delta)


@router.post("/{appliance_id}/hours", response_model=list[Appliance])
async def edit_hours(appliance_id: str, edit: HoursEdit) -> list[Appliance]:
    """Set one appliance's daily hours, clamped to 0-24."""
    _require_row(edit.appliances, appliance_id)
    return update_hours(edit.appliances, appliance_id, edit.daily_hours)
