"""
Money Saver aggregation: appliance list to monthly bill and solar size.

A pure function over the homeowner's appliance list. Appliances with zero
quantity stay in the caller's list but are skipped here. Net metering is
assumed, so the projected post-solar bill is always 0 and the savings equal
the current bill (fixed charges are ignored).

CHANGELOG:
- 2026-10-13: Zero bill yields 0% shares instead of dividing by zero (STORY-004)
- 2026-10-12: Initial creation (STORY-003)

TODO:
- None
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from sunsathi.constants import DAYS_PER_MONTH, KWH_PER_KW_PER_DAY, TARIFF_PER_UNIT
from sunsathi.models import Appliance, BreakdownItem, ConsumptionAnalysis

logger = logging.getLogger(__name__)


def recommend_system_size_kw(total_daily_kwh: float) -> float:
    """Size a rooftop system to cover the daily load.

    Assumes 1 kW of panels yields ``KWH_PER_KW_PER_DAY`` kWh per day and
    rounds up to the next 0.5 kW step.

    Args:
        total_daily_kwh: Household consumption per day in kWh.

    Returns:
        float: Recommended capacity in kW (a multiple of 0.5).
    """
    return math.ceil((total_daily_kwh / KWH_PER_KW_PER_DAY) * 2) / 2


def calculate_consumption(
    appliances: Sequence[Appliance],
    tariff_per_unit: float = TARIFF_PER_UNIT,
) -> ConsumptionAnalysis:
    """Compute the monthly bill, cost breakdown and recommended solar size.

    Args:
        appliances: The homeowner's appliance list; zero-quantity rows are
            ignored.
        tariff_per_unit: Rupees per kWh. The API always passes the fixed
            tariff.

    Returns:
        ConsumptionAnalysis: Totals plus one breakdown item per active
        appliance, in input order. When the bill is 0 every percentage is 0.
    """
    total_daily_wh = 0.0
    costs: list[tuple[str, float]] = []

    for appliance in appliances:
        if appliance.quantity <= 0:
            continue
        daily_wh = appliance.wattage * appliance.quantity * appliance.daily_hours
        total_daily_wh += daily_wh
        monthly_cost = (daily_wh * DAYS_PER_MONTH / 1000) * tariff_per_unit
        costs.append((appliance.name, monthly_cost))

    total_daily_kwh = total_daily_wh / 1000
    total_monthly_kwh = total_daily_kwh * DAYS_PER_MONTH
    current_monthly_bill = total_monthly_kwh * tariff_per_unit

    breakdown = [
        BreakdownItem(
            name=name,
            monthly_cost=cost,
            percentage=(
                (cost / current_monthly_bill) * 100 if current_monthly_bill > 0 else 0.0
            ),
        )
        for name, cost in costs
    ]

    projected_solar_bill = 0.0
    analysis = ConsumptionAnalysis(
        total_monthly_kwh=total_monthly_kwh,
        current_monthly_bill=current_monthly_bill,
        projected_solar_bill=projected_solar_bill,
        monthly_savings=current_monthly_bill - projected_solar_bill,
        recommended_system_size_kw=recommend_system_size_kw(total_daily_kwh),
        breakdown=breakdown,
    )
    logger.debug(
        "Consumption computed: %d active appliance(s), %.2f kWh/month, bill %.2f",
        len(breakdown),
        total_monthly_kwh,
        current_monthly_bill,
    )
    return analysis
