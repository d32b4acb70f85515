"""Pick the morning, noon and afternoon points of the target day."""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, Sequence

from ..entities import SLOT_ORDER, ForecastPoint, SelectedForecast, Slot
from ..exceptions import InsufficientForecastData


logger = logging.getLogger(__name__)

DEFAULT_TARGET_HOURS = (7, 12, 15)


def target_day_for(now: datetime, cutoff_hour: int) -> date:
    """Today until the cutoff hour has passed, tomorrow afterwards."""

    if now.hour > cutoff_hour:
        return now.date() + timedelta(days=1)
    return now.date()


def select_representative_points(
    points: Iterable[ForecastPoint],
    now: datetime,
    *,
    target_hours: Sequence[int] = DEFAULT_TARGET_HOURS,
    cutoff_hour: int = 7,
    resolution_hours: int = 1,
) -> SelectedForecast:
    """Key the points of the target day by the slot their local hour fills.

    ``now`` must be timezone aware; its tzinfo defines local time.  A point
    covers ``resolution_hours`` hours starting at its own local hour, and the
    first point covering a slot's target hour fills that slot.
    """

    if now.tzinfo is None:
        raise ValueError("now must be timezone aware")
    if len(target_hours) != len(SLOT_ORDER):
        raise ValueError(f"expected {len(SLOT_ORDER)} target hours, got {len(target_hours)}")

    local_tz = now.tzinfo
    target_day = target_day_for(now, cutoff_hour)
    slot_hours = dict(zip(SLOT_ORDER, target_hours))
    selected: Dict[Slot, ForecastPoint] = {}

    for point in points:
        local = point.timestamp.astimezone(local_tz)
        if local.date() != target_day:
            continue
        for slot, hour in slot_hours.items():
            if slot in selected:
                continue
            if local.hour <= hour < local.hour + resolution_hours:
                selected[slot] = point
                break
        if len(selected) == len(SLOT_ORDER):
            break

    missing = [slot.value for slot in SLOT_ORDER if slot not in selected]
    if missing:
        logger.debug("Target day %s is missing slots %s", target_day, missing)
        raise InsufficientForecastData(target_day, missing)
    return SelectedForecast(target_day=target_day, points=selected)


__all__ = ["DEFAULT_TARGET_HOURS", "target_day_for", "select_representative_points"]
