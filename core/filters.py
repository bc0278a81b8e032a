"""
Filter engine for the water object collection.

All active filters are combined with AND. A filter is active only when its
value is non-empty; with nothing active the input list comes back unchanged.
Input order is preserved.

Malformed filter values (a technical condition that is not an integer, a
date bound that does not parse) switch that filter off rather than raising.
An object whose own passport date does not parse never matches an active
date bound.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from core.models import FilterState, Role, WaterObject, parse_timestamp

log = logging.getLogger(__name__)

Predicate = Callable[[WaterObject], bool]


# ═══════════════════════════════════════════════════════════════════════════
# VALUE PARSING
# ═══════════════════════════════════════════════════════════════════════════
def _parse_fauna(value) -> Optional[bool]:
    """Tri-state fauna filter: True, False, or None (inactive)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
    return None


def _parse_condition(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        log.debug(f"Ignoring malformed technical condition filter: {value!r}")
        return None


# ═══════════════════════════════════════════════════════════════════════════
# PREDICATES
# ═══════════════════════════════════════════════════════════════════════════
def _on_or_after(bound: datetime) -> Predicate:
    def predicate(obj: WaterObject) -> bool:
        issued = parse_timestamp(obj.passport_date)
        return issued is not None and issued >= bound
    return predicate


def _on_or_before(bound: datetime) -> Predicate:
    def predicate(obj: WaterObject) -> bool:
        issued = parse_timestamp(obj.passport_date)
        return issued is not None and issued <= bound
    return predicate


def build_predicates(filters: FilterState) -> List[Predicate]:
    """Turn a filter state into the list of active predicates."""
    predicates: List[Predicate] = []

    if filters.region:
        region = filters.region
        predicates.append(lambda obj: obj.region == region)

    if filters.resource_type:
        resource_type = filters.resource_type
        predicates.append(lambda obj: obj.resource_type == resource_type)

    if filters.water_type:
        water_type = filters.water_type
        predicates.append(lambda obj: obj.water_type == water_type)

    fauna = _parse_fauna(filters.fauna)
    if fauna is not None:
        predicates.append(lambda obj: obj.fauna == fauna)

    if filters.technical_condition not in (None, ""):
        condition = _parse_condition(filters.technical_condition)
        if condition is not None:
            predicates.append(lambda obj: obj.technical_condition == condition)

    if filters.search_query:
        query = filters.search_query.lower()
        predicates.append(lambda obj: query in (obj.name or "").lower())

    if filters.passport_date_from:
        lower = parse_timestamp(filters.passport_date_from)
        if lower is not None:
            predicates.append(_on_or_after(lower))

    if filters.passport_date_to:
        upper = parse_timestamp(filters.passport_date_to)
        if upper is not None:
            predicates.append(_on_or_before(upper))

    return predicates


# ═══════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════
def apply_filters(objects: Iterable[WaterObject], filters: FilterState) -> List[WaterObject]:
    """
    Return the objects that satisfy every active filter.

    Args:
        objects: Collection to narrow
        filters: Filter state for this evaluation

    Returns:
        New list in input order
    """
    predicates = build_predicates(filters)
    if not predicates:
        return list(objects)
    return [obj for obj in objects if all(p(obj) for p in predicates)]


def has_active_filters(filters: FilterState) -> bool:
    """True if any filter other than the search box is set."""
    return any([
        filters.region,
        filters.resource_type,
        filters.water_type,
        filters.fauna,
        filters.technical_condition,
        filters.passport_date_from,
        filters.passport_date_to,
    ])


def filters_for_role(filters: FilterState, role: str) -> FilterState:
    """
    Strip the expert-only filters (passport date range, technical condition)
    for non-expert callers.
    """
    if role == Role.EXPERT.value:
        return filters
    return FilterState(
        region=filters.region,
        resource_type=filters.resource_type,
        water_type=filters.water_type,
        fauna=filters.fauna,
        search_query=filters.search_query,
    )


def available_regions(objects: Iterable[WaterObject]) -> List[str]:
    """Sorted distinct regions, used as the region filter options."""
    return sorted({obj.region for obj in objects})


def apply_layer_toggles(objects: Iterable[WaterObject], visible_types: Sequence[str]) -> List[WaterObject]:
    """Keep only the resource types whose map layer is switched on."""
    visible = set(visible_types)
    return [obj for obj in objects if obj.resource_type in visible]


def find_highlighted(objects: Iterable[WaterObject], query: str) -> Optional[WaterObject]:
    """First object whose name contains the search query (the map focus)."""
    if not query:
        return None
    needle = query.lower()
    for obj in objects:
        if needle in (obj.name or "").lower():
            return obj
    return None
