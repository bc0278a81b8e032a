"""
Inspection priority for water objects.

    priority = (6 - technical_condition) * 3 + age_in_years

where ``age_in_years`` is the whole number of 365.25-day years since the
passport date, never negative. Objects without a valid passport date have
no priority (None), which is distinct from zero.

The current time is always passed in explicitly.
"""

import math
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from core.models import PriorityBand, WaterObject, parse_timestamp

log = logging.getLogger(__name__)

YEAR_SECONDS = 365.25 * 24 * 60 * 60

HIGH_PRIORITY_THRESHOLD = 12
MEDIUM_PRIORITY_THRESHOLD = 6


def _as_utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def passport_age_years(passport_date, now: datetime) -> Optional[int]:
    """Whole years elapsed since the passport date, or None if it doesn't parse."""
    issued = parse_timestamp(passport_date)
    if issued is None:
        return None
    elapsed = (_as_utc(now) - issued).total_seconds()
    return max(0, math.floor(elapsed / YEAR_SECONDS))


def compute_priority(obj: WaterObject, now: datetime) -> Optional[int]:
    """
    Compute the inspection priority of a single object.

    Args:
        obj: The water object
        now: Reference time for the passport age

    Returns:
        Integer priority, or None when the passport date is missing/invalid
    """
    age = passport_age_years(obj.passport_date, now)
    if age is None:
        return None
    # 0 / missing condition counts as 1
    condition = obj.technical_condition or 1
    return (6 - condition) * 3 + age


def priority_band(priority: Optional[int]) -> PriorityBand:
    """Map a priority score onto its display band."""
    if priority is None:
        return PriorityBand.UNKNOWN
    if priority >= HIGH_PRIORITY_THRESHOLD:
        return PriorityBand.HIGH
    if priority >= MEDIUM_PRIORITY_THRESHOLD:
        return PriorityBand.MEDIUM
    return PriorityBand.LOW


def annotate_priorities(objects: Iterable[WaterObject], now: datetime) -> List[WaterObject]:
    """Attach a freshly computed priority to every object of a loaded collection."""
    annotated = [obj.with_priority(compute_priority(obj, now)) for obj in objects]
    log.debug(f"Annotated {len(annotated)} objects with priority")
    return annotated


def recalculate_priorities(objects: Iterable[WaterObject], now: datetime) -> List[WaterObject]:
    """Recompute all priorities against a new reference time ("recalculate all")."""
    return annotate_priorities(objects, now)


def prepare_new_object(obj: WaterObject, now: datetime) -> WaterObject:
    """Give a newly created object its priority before it joins the collection."""
    return obj.with_priority(compute_priority(obj, now))


def insert_new_object(objects: Iterable[WaterObject], obj: WaterObject, now: datetime) -> List[WaterObject]:
    """Prepare a created object and put it at the front of the collection."""
    return [prepare_new_object(obj, now)] + list(objects)
