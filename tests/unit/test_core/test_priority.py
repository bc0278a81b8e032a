import pytest
from datetime import datetime, timezone

from core.models import PriorityBand, WaterObject
from core.priority import (
    compute_priority, priority_band, annotate_priorities, recalculate_priorities,
    prepare_new_object, insert_new_object, passport_age_years,
)

NOW = datetime(2024, 10, 19, tzinfo=timezone.utc)


def make_object(**kwargs):
    defaults = {"id": "obj-1", "name": "Lake", "region": "Almaty Region"}
    defaults.update(kwargs)
    return WaterObject(**defaults)


def test_ten_year_old_passport_in_worst_condition():
    """Condition 5, passport exactly ten years old -> 13, high band."""
    obj = make_object(technical_condition=5, passport_date="2014-10-19")
    priority = compute_priority(obj, NOW)
    assert priority == 13
    assert priority_band(priority) == PriorityBand.HIGH


def test_missing_passport_date_gives_no_priority():
    for condition in (1, 3, 5, None):
        obj = make_object(technical_condition=condition, passport_date=None)
        assert compute_priority(obj, NOW) is None


def test_unparseable_passport_date_gives_no_priority():
    assert compute_priority(make_object(passport_date="not-a-date"), NOW) is None
    assert compute_priority(make_object(passport_date="2023-02-30"), NOW) is None
    assert compute_priority(make_object(passport_date=""), NOW) is None


def test_age_is_floored():
    """One day short of ten years is still nine whole years."""
    assert passport_age_years("2014-10-20", NOW) == 9
    assert passport_age_years("2014-10-19", NOW) == 10


def test_future_passport_date_clamps_age_to_zero():
    obj = make_object(technical_condition=2, passport_date="2030-01-01")
    assert compute_priority(obj, NOW) == 12


def test_missing_or_zero_condition_counts_as_one():
    assert compute_priority(make_object(technical_condition=None, passport_date="2024-01-01"), NOW) == 15
    assert compute_priority(make_object(technical_condition=0, passport_date="2024-01-01"), NOW) == 15


def test_accepts_timestamps_and_naive_now():
    obj = make_object(technical_condition=3, passport_date="2020-10-19T00:00:00Z")
    assert compute_priority(obj, datetime(2024, 10, 19)) == 13
    obj = make_object(technical_condition=3, passport_date="2020-10-19T00:00:00+00:00")
    assert compute_priority(obj, NOW) == 13


def test_priority_monotonicity():
    """Worse condition never lowers priority; older passports never lower it."""
    by_condition = [
        compute_priority(make_object(technical_condition=c, passport_date="2015-01-01"), NOW)
        for c in range(1, 6)
    ]
    assert by_condition == sorted(by_condition, reverse=True)

    by_age = [
        compute_priority(make_object(technical_condition=3, passport_date=d), NOW)
        for d in ("2023-01-01", "2018-01-01", "2010-01-01", "2000-01-01")
    ]
    assert by_age == sorted(by_age)


def test_priority_is_deterministic():
    obj = make_object(technical_condition=4, passport_date="2011-03-15")
    assert compute_priority(obj, NOW) == compute_priority(obj, NOW)


@pytest.mark.parametrize("priority,band", [
    (None, PriorityBand.UNKNOWN),
    (0, PriorityBand.LOW),
    (5, PriorityBand.LOW),
    (6, PriorityBand.MEDIUM),
    (11, PriorityBand.MEDIUM),
    (12, PriorityBand.HIGH),
    (30, PriorityBand.HIGH),
])
def test_priority_band(priority, band):
    assert priority_band(priority) == band


def test_annotate_ignores_stored_priority():
    stored = make_object(priority=99, passport_date=None)
    fresh = make_object(id="obj-2", priority=1, technical_condition=5, passport_date="2014-10-19")

    annotated = annotate_priorities([stored, fresh], NOW)

    assert [o.priority for o in annotated] == [None, 13]
    # Inputs are untouched
    assert stored.priority == 99
    assert fresh.priority == 1


def test_recalculate_uses_new_reference_time():
    obj = make_object(technical_condition=5, passport_date="2014-10-19")
    first = annotate_priorities([obj], NOW)
    later = recalculate_priorities(first, datetime(2026, 10, 19, tzinfo=timezone.utc))
    assert first[0].priority == 13
    assert later[0].priority == 15


def test_new_object_goes_to_front():
    existing = annotate_priorities([make_object(passport_date="2020-01-01")], NOW)
    created = make_object(id="new", technical_condition=4, passport_date="2024-10-19")

    collection = insert_new_object(existing, created, NOW)

    assert [o.id for o in collection] == ["new", "obj-1"]
    assert collection[0].priority == 6
    assert prepare_new_object(created, NOW).priority == 6


def test_new_object_with_invalid_date_has_no_priority():
    created = make_object(id="new", passport_date="31.12.2020")
    assert prepare_new_object(created, NOW).priority is None
