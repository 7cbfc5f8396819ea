"""
POST /v1/consumption endpoint for the Money Saver calculator.

Accepts the homeowner's appliance list and returns the monthly bill,
per-appliance breakdown, and recommended solar system size. Purely local:
no API key is needed and no external call is made.

CHANGELOG:
- 2026-10-13: Initial creation (STORY-004)

TODO:
- None
"""

import logging

from fastapi import APIRouter

from sunsathi.models import Appliance, CamelModel, ConsumptionAnalysis
from sunsathi.services.consumption import calculate_consumption

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["consumption"])


class ConsumptionRequest(CamelModel):
    """Appliance list to aggregate. Zero-quantity rows are allowed."""

    appliances: list[Appliance]


@router.post("/consumption", response_model=ConsumptionAnalysis)
async def consumption(payload: ConsumptionRequest) -> ConsumptionAnalysis:
    """Compute the consumption summary for an appliance list.

    Args:
        payload: The appliance list.

    Returns:
        ConsumptionAnalysis: Bill, breakdown and recommended system size.
    """
    return calculate_consumption(payload.appliances)
