"""
Collection statistics for the statistics page.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Iterable, Any

from core.models import ResourceType, WaterObject, WaterType


@dataclass
class CollectionStats:
    """Aggregate counts over a set of water objects."""
    total: int = 0
    by_resource_type: Dict[str, int] = field(default_factory=dict)
    by_water_type: Dict[str, int] = field(default_factory=dict)
    with_fauna: int = 0
    avg_condition: float = 0.0
    region_count: int = 0
    good_condition: int = 0   # condition 1-2
    poor_condition: int = 0   # condition 4-5

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_statistics(objects: Iterable[WaterObject]) -> CollectionStats:
    items = list(objects)
    conditions = [o.technical_condition for o in items if o.technical_condition is not None]

    return CollectionStats(
        total=len(items),
        by_resource_type={
            rt.value: sum(1 for o in items if o.resource_type == rt.value) for rt in ResourceType
        },
        by_water_type={
            wt.value: sum(1 for o in items if o.water_type == wt.value) for wt in WaterType
        },
        with_fauna=sum(1 for o in items if o.fauna),
        avg_condition=round(sum(conditions) / len(items), 1) if items else 0.0,
        region_count=len({o.region for o in items}),
        good_condition=sum(1 for c in conditions if c <= 2),
        poor_condition=sum(1 for c in conditions if c >= 4),
    )


def share(value: int, total: int) -> float:
    """Percentage of ``value`` in ``total`` with one decimal, 0 for an empty total."""
    if total <= 0:
        return 0.0
    return round(value / total * 100, 1)
