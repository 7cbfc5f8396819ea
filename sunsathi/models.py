"""
Pydantic models for appliances, consumption summaries, and AI results.

Attributes are snake_case in Python and camelCase on the wire; the aliases
match the field names of the Gemini response schemas exactly, so the same
models validate service output and serialise API responses. Either name is
accepted on input.

CHANGELOG:
- 2026-10-13: Add DetectedAppliance and InefficientAppliance (STORY-005)
- 2026-10-12: Initial creation (STORY-001)

TODO:
- None
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ApplianceCategory = Literal[
    "cooling", "heating", "lighting", "entertainment", "kitchen", "other"
]

DetectedCondition = Literal["Old/Inefficient", "Modern/Efficient"]


class CamelModel(BaseModel):
    """Base model with camelCase aliases and population by field name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Money Saver
# ---------------------------------------------------------------------------


class Appliance(CamelModel):
    """One class of household device in the homeowner's list.

    Attributes:
        id: Identifier unique within the list.
        name: Display name, also used for detection merging.
        wattage: Rated power in watts.
        quantity: Number of units; 0 keeps the row but excludes it from totals.
        daily_hours: Average hours of use per day (0-24).
        category: Broad appliance category.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    wattage: float = Field(ge=0)
    quantity: int = Field(ge=0)
    daily_hours: float = Field(ge=0, le=24)
    category: ApplianceCategory = "other"


class BreakdownItem(CamelModel):
    """Monthly cost share of a single active appliance."""

    model_config = ConfigDict(frozen=True)

    name: str
    monthly_cost: float
    percentage: float


class ConsumptionAnalysis(CamelModel):
    """Snapshot of the household bill and the suggested solar size.

    Attributes:
        total_monthly_kwh: Monthly energy use over all active appliances.
        current_monthly_bill: Monthly cost at the fixed tariff.
        projected_solar_bill: Bill after solar under net metering (always 0).
        monthly_savings: ``current_monthly_bill - projected_solar_bill``.
        recommended_system_size_kw: Suggested capacity, a multiple of 0.5 kW.
        breakdown: Per-appliance cost and percentage share.
    """

    model_config = ConfigDict(frozen=True)

    total_monthly_kwh: float
    current_monthly_bill: float
    projected_solar_bill: float
    monthly_savings: float
    recommended_system_size_kw: float
    breakdown: list[BreakdownItem]


# ---------------------------------------------------------------------------
# Gemini results
# ---------------------------------------------------------------------------


class SolarAnalysisResult(CamelModel):
    """Rooftop solar estimate produced by the AI service.

    Only the roof area and the reasoning are mandatory; every other figure
    defaults to 0, so an unclear image may come back as just those two
    fields. The internal arithmetic is taken as returned.
    """

    usable_roof_area_sq_m: float
    number_of_panels: float = 0
    system_capacity_kw: float = 0
    daily_generation_kwh: float = 0
    monthly_generation_kwh: float = 0
    monthly_savings_inr: float = 0
    yearly_savings_inr: float = 0
    estimated_subsidy_inr: float = 0
    estimated_net_cost_inr: float = 0
    roi_years: float = 0
    reasoning: str

    @property
    def is_analyzable(self) -> bool:
        """False when the service reported no usable roof in the image.

        A zero area is a valid outcome, not a failure; ``reasoning`` then
        explains why the image could not be used.
        """
        return self.usable_roof_area_sq_m > 0


class DetectedAppliance(CamelModel):
    """Raw appliance item as returned by the detection schema."""

    name: str
    wattage: float = Field(default=0, ge=0)
    quantity: int = Field(default=1, ge=0)
    category: ApplianceCategory = "other"


class DetectedApplianceList(CamelModel):
    """Top-level object of the appliance detection schema."""

    appliances: list[DetectedAppliance] = []


class InefficientAppliance(CamelModel):
    """One appliance from the video audit with its estimated waste."""

    name: str
    detected_condition: DetectedCondition
    current_wattage: float = 0
    efficient_wattage: float = 0
    monthly_energy_loss_kwh: float = 0
    monthly_money_loss_inr: float = 0
    replacement_recommendation: str = ""


class EfficiencyResult(CamelModel):
    """Video efficiency audit produced by the AI service."""

    appliances: list[InefficientAppliance] = []
    total_monthly_loss_inr: float = 0
    efficiency_score: float = Field(default=0, ge=0, le=100)
    analysis_summary: str = ""
