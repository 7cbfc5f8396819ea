"""Instruction text sent alongside the media for each Gemini flow."""

from __future__ import annotations

from sunsathi.constants import (
    COST_PER_KW_INR,
    PANEL_AREA_SQ_M,
    PANEL_CAPACITY_KW,
    PANEL_EFFICIENCY_PCT,
    PM_SURYA_GHAR_RULES,
    REGION_SUN_HOURS,
    TARIFF_PER_UNIT,
    IndianRegion,
)


def solar_potential_prompt(region: IndianRegion) -> str:
    """Build the roof analysis instruction for *region*.

    Embeds the region's peak sun hours, the tariff, the panel specs, the
    subsidy schedule and the ROI method, and asks for a zero roof area
    (with an explanation) when the image cannot be analysed.
    """
    sun_hours = REGION_SUN_HOURS[region]
    panel_w = int(PANEL_CAPACITY_KW * 1000)
    return f"""
    You are "Sun-Sathi", an expert solar engineer for India.

    Analyze the provided image of a roof.
    1. Identify flat, shadow-free areas suitable for solar panels.
    2. Estimate the Usable Roof Area in Square Meters ($m^2$). Be realistic about obstructions (tanks, stairs).
    3. Perform the following calculations based on the region and rules provided:

    **Input Context:**
    - Region: {region.value}
    - Average Peak Sun Hours: {sun_hours} hours/day
    - Electricity Rate: ₹{TARIFF_PER_UNIT} per Unit (kWh)
    - Panel Specs: {panel_w}W ({PANEL_CAPACITY_KW}kW) per panel. Size: {PANEL_AREA_SQ_M} $m^2$ per panel. Panel Efficiency: {PANEL_EFFICIENCY_PCT}%.

    **Formulas:**
    - Number of Panels = Usable Roof Area / {PANEL_AREA_SQ_M} (Round down).
    - System Capacity (kW) = Number of Panels * {PANEL_CAPACITY_KW}.
    - Daily Generation (kWh) = System Capacity * {sun_hours}.
    - Monthly Generation (kWh) = Daily Generation * 30.
    - Monthly Savings (₹) = Monthly Generation * {TARIFF_PER_UNIT}.
    - Yearly Savings (₹) = Monthly Savings * 12.

    **Subsidy Calculation (PM Surya Ghar Yojana):**
    {PM_SURYA_GHAR_RULES}

    **ROI Calculation:**
    - Estimated Installation Cost (Approx) = System Capacity * ₹{COST_PER_KW_INR:,}.
    - Net Cost = Estimated Installation Cost - Estimated Subsidy.
    - ROI Years = Net Cost / Yearly Savings.

    Return the result in valid JSON format.
    If the image is not a roof or is too unclear, return 0 for usableRoofAreaSqM and explain in 'reasoning'.
    """


APPLIANCE_DETECTION_PROMPT = """
    Identify electrical appliances in this image.
    For each identified item, estimate:
    1. A common Indian household Wattage (e.g., Ceiling Fan 75W).
    2. Quantity visible.
    3. Category (cooling, heating, lighting, entertainment, kitchen, other).

    Return a JSON object with an array 'appliances'.
    """

VIDEO_EFFICIENCY_PROMPT = f"""
    Analyze this video of a room in an Indian household.
    Scan for electrical appliances (Fans, Lights, ACs, Fridges, TVs).

    For each appliance detected:
    1. Determine if it looks "Old/Inefficient" (e.g., boxy CRT TV, yellowed plastic AC, incandescent bulb, thick blade fan) OR "Modern/Efficient" (e.g., LED, BLDC Fan, Inverter AC).
    2. Estimate its *Current Wattage* based on its visual age.
    3. Estimate the *Efficient Wattage* of a modern 5-Star rated replacement.
    4. Calculate monthly energy loss assuming standard usage (AC=8hrs, Light=6hrs, Fan=12hrs).
    5. Calculate money loss at ₹{TARIFF_PER_UNIT}/unit.

    Return a comprehensive JSON report including a total 'Efficiency Score' (0-100) and a summary.
    """
