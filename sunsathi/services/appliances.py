"""
Appliance list editing and merging of AI-detected appliances.

All operations return a new list and leave their inputs untouched;
:class:`~sunsathi.models.Appliance` instances are frozen and are replaced
via ``model_copy``.

The detection merge matches names by case-insensitive substring: the first
existing entry whose name *contains* the detected name absorbs its quantity.
This is order-dependent and can fold distinct appliances together (a
detected "Fan" lands on "Ceiling Fan" even if it is a table fan). The
behaviour is kept as-is.

CHANGELOG:
- 2026-10-14: Add update_quantity / update_hours (STORY-008)
- 2026-10-13: Initial creation (STORY-005)

TODO:
- None
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sunsathi.models import Appliance

logger = logging.getLogger(__name__)


DEFAULT_APPLIANCES: tuple[Appliance, ...] = (
    Appliance(id="1", name="Ceiling Fan", wattage=75, quantity=2, daily_hours=10, category="cooling"),
    Appliance(id="2", name="LED Bulb", wattage=9, quantity=5, daily_hours=6, category="lighting"),
    Appliance(id="3", name="AC (1.5 Ton)", wattage=1500, quantity=0, daily_hours=8, category="cooling"),
    # Wattage is an average that already accounts for compressor cycling.
    Appliance(id="4", name="Refrigerator", wattage=200, quantity=1, daily_hours=24, category="kitchen"),
    Appliance(id="5", name="Television (LED)", wattage=100, quantity=1, daily_hours=4, category="entertainment"),
    Appliance(id="6", name="Washing Machine", wattage=500, quantity=0, daily_hours=1, category="other"),
    Appliance(id="7", name="Geyser (Water Heater)", wattage=2000, quantity=0, daily_hours=1, category="heating"),
)


def default_appliances() -> list[Appliance]:
    """Return a fresh copy of the starter appliance list."""
    return list(DEFAULT_APPLIANCES)


def merge_detected_appliances(
    existing: Sequence[Appliance],
    detected: Sequence[Appliance],
) -> list[Appliance]:
    """Merge detected appliances into the current list.

    Detected items are processed in order. Each one is matched against the
    running list (including items appended earlier in the same merge): the
    first entry whose lower-cased name contains the detected lower-cased name
    gets its quantity increased by the detected quantity. Unmatched items are
    appended unchanged.

    Args:
        existing: The homeowner's current appliance list.
        detected: Appliances returned by the detection flow.

    Returns:
        list[Appliance]: The merged list.
    """
    combined = list(existing)
    for item in detected:
        needle = item.name.lower()
        index = next(
            (i for i, app in enumerate(combined) if needle in app.name.lower()),
            None,
        )
        if index is None:
            combined.append(item)
            continue
        match = combined[index]
        combined[index] = match.model_copy(
            update={"quantity": match.quantity + item.quantity}
        )
        logger.debug(
            "Merged detected '%s' into existing '%s' (+%d)",
            item.name,
            match.name,
            item.quantity,
        )
    return combined


def update_quantity(
    appliances: Sequence[Appliance], appliance_id: str, delta: int
) -> list[Appliance]:
    """Adjust one appliance's quantity by *delta*, never going below 0."""
    return [
        app.model_copy(update={"quantity": max(0, app.quantity + delta)})
        if app.id == appliance_id
        else app
        for app in appliances
    ]


def update_hours(
    appliances: Sequence[Appliance], appliance_id: str, hours: float
) -> list[Appliance]:
    """Set one appliance's daily hours, clamped to the 0-24 range."""
    clamped = min(24.0, max(0.0, hours))
    return [
        app.model_copy(update={"daily_hours": clamped}) if app.id == appliance_id else app
        for app in appliances
    ]
