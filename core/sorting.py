"""
Sort engine for the priority table.

Sortable fields are listed explicitly in ``SORT_KEYS``. Objects with no
value for the sort field always go last, whatever the direction. Strings
compare case-insensitively; equal keys keep their input order.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from core.models import SortDirection, SortSpec, WaterObject, parse_timestamp

Accessor = Callable[[WaterObject], Any]


def _text(attr: str) -> Accessor:
    def accessor(obj: WaterObject) -> Optional[str]:
        value = getattr(obj, attr)
        return None if value is None else str(value).lower()
    return accessor


def _plain(attr: str) -> Accessor:
    return lambda obj: getattr(obj, attr)


def _timestamp(attr: str) -> Accessor:
    return lambda obj: parse_timestamp(getattr(obj, attr))


SORT_KEYS: Dict[str, Accessor] = {
    "name": _text("name"),
    "region": _text("region"),
    "resource_type": _text("resource_type"),
    "water_type": _text("water_type"),
    "fauna": _plain("fauna"),
    "technical_condition": _plain("technical_condition"),
    "passport_date": _timestamp("passport_date"),
    "priority": _plain("priority"),
    "latitude": _plain("latitude"),
    "longitude": _plain("longitude"),
    "created_at": _timestamp("created_at"),
    "updated_at": _timestamp("updated_at"),
}

DEFAULT_SORT = SortSpec(field="priority", direction=SortDirection.DESC.value)


def sort_objects(objects: Iterable[WaterObject], field: str, direction: str = "asc") -> List[WaterObject]:
    """
    Return a new list ordered by ``field``.

    Args:
        objects: Objects to order (not modified)
        field: One of ``SORT_KEYS``; anything else keeps the input order
        direction: "asc" or "desc"

    Returns:
        Sorted copy with null values trailing
    """
    items = list(objects)
    accessor = SORT_KEYS.get(field)
    if accessor is None:
        return items

    keyed = [(accessor(obj), obj) for obj in items]
    present = [pair for pair in keyed if pair[0] is not None]
    missing = [obj for key, obj in keyed if key is None]

    # sorted() is stable with reverse=True as well
    ordered = sorted(present, key=lambda pair: pair[0], reverse=direction == SortDirection.DESC.value)
    return [obj for _, obj in ordered] + missing


def toggle_sort(current: SortSpec, field: str) -> SortSpec:
    """
    Column-header click: same field flips direction, a new field starts
    descending.
    """
    if current.field == field:
        flipped = SortDirection.ASC.value if current.direction == SortDirection.DESC.value else SortDirection.DESC.value
        return SortSpec(field=field, direction=flipped)
    return SortSpec(field=field, direction=SortDirection.DESC.value)
