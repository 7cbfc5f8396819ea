"""
Fixed numeric constants shared by the prompts and the local calculator.

These values are embedded verbatim in the Gemini prompts, so changing any of
them changes the estimates the service returns.

CHANGELOG:
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

from __future__ import annotations

from enum import Enum


class IndianRegion(str, Enum):
    """Region choices offered to the homeowner; values are the display labels."""

    NORTH = "Northern Plains (Delhi, Punjab, UP)"
    WEST = "Western India (Rajasthan, Gujarat, Maharashtra)"
    SOUTH = "Southern India (Karnataka, TN, AP, Kerala)"
    EAST = "Eastern India (Bengal, Odisha, Bihar)"
    NORTH_EAST = "North East India"
    CENTRAL = "Central India (MP, Chhattisgarh)"
    OTHER = "Other / General India"


# Average peak sun hours per day.
REGION_SUN_HOURS: dict[IndianRegion, float] = {
    IndianRegion.NORTH: 5.25,
    IndianRegion.WEST: 5.75,
    IndianRegion.SOUTH: 5.25,
    IndianRegion.EAST: 4.75,
    IndianRegion.NORTH_EAST: 4.0,
    IndianRegion.CENTRAL: 5.5,
    IndianRegion.OTHER: 5.0,
}

# Rupees per kWh.
TARIFF_PER_UNIT = 8

# Installation cost per kW before subsidy (market average, INR).
COST_PER_KW_INR = 50_000

PANEL_CAPACITY_KW = 0.4
PANEL_AREA_SQ_M = 2
PANEL_EFFICIENCY_PCT = 20

# Sizing heuristic for the Money Saver: 1 kW yields about 4 kWh per day.
KWH_PER_KW_PER_DAY = 4

DAYS_PER_MONTH = 30

PM_SURYA_GHAR_RULES = """
  - For systems up to 2 kW: ₹30,000 subsidy per kW.
  - For systems above 2 kW, up to 3 kW: ₹18,000 per kW (for the additional kW).
  - For systems above 3 kW: ₹78,000 total subsidy fixed.
"""

# Detection cannot see usage duration, so detected items get this many hours.
DETECTED_APPLIANCE_DAILY_HOURS = 4

MAX_VIDEO_BYTES = 10 * 1024 * 1024

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"

DEFAULT_MODEL_ID = "gemini-2.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
