import pytest

from core.models import FilterState, WaterObject
from core.filters import (
    apply_filters, apply_layer_toggles, available_regions, filters_for_role,
    find_highlighted, has_active_filters,
)


@pytest.fixture
def objects():
    return [
        WaterObject(id="1", name="Lake Balkhash", region="Karaganda Region", resource_type="lake",
                    water_type="non-fresh", fauna=True, passport_date="2012-05-14", technical_condition=3),
        WaterObject(id="2", name="Kapshagay Reservoir", region="Almaty Region", resource_type="reservoir",
                    water_type="fresh", fauna=False, passport_date="2018-09-01", technical_condition=2),
        WaterObject(id="3", name="Big Almaty Lake", region="Almaty Region", resource_type="lake",
                    water_type="fresh", fauna=False, passport_date=None, technical_condition=5),
        WaterObject(id="4", name="Irtysh Canal", region="Pavlodar Region", resource_type="canal",
                    water_type="fresh", fauna=True, passport_date="broken", technical_condition=3),
    ]


def ids(items):
    return [o.id for o in items]


def test_no_active_filters_returns_everything_in_order(objects):
    result = apply_filters(objects, FilterState())
    assert ids(result) == ["1", "2", "3", "4"]
    assert result is not objects


def test_fauna_false_with_empty_region():
    items = [
        WaterObject(id="a", name="A", region="R1", fauna=False),
        WaterObject(id="b", name="B", region="R2", fauna=True),
        WaterObject(id="c", name="C", region="R3", fauna=False),
    ]
    assert ids(apply_filters(items, FilterState(fauna="false", region=""))) == ["a", "c"]


def test_fauna_true(objects):
    assert ids(apply_filters(objects, FilterState(fauna="true"))) == ["1", "4"]


def test_equality_filters(objects):
    assert ids(apply_filters(objects, FilterState(region="Almaty Region"))) == ["2", "3"]
    assert ids(apply_filters(objects, FilterState(resource_type="lake"))) == ["1", "3"]
    assert ids(apply_filters(objects, FilterState(water_type="fresh"))) == ["2", "3", "4"]


def test_technical_condition_is_parsed(objects):
    assert ids(apply_filters(objects, FilterState(technical_condition="3"))) == ["1", "4"]
    assert ids(apply_filters(objects, FilterState(technical_condition=" 5 "))) == ["3"]


def test_malformed_condition_switches_filter_off(objects):
    assert ids(apply_filters(objects, FilterState(technical_condition="abc"))) == ["1", "2", "3", "4"]


def test_search_is_case_insensitive_substring(objects):
    assert ids(apply_filters(objects, FilterState(search_query="LAKE"))) == ["1", "3"]
    assert ids(apply_filters(objects, FilterState(search_query="almaty"))) == ["3"]


def test_date_bounds_are_inclusive(objects):
    result = apply_filters(objects, FilterState(passport_date_from="2012-05-14", passport_date_to="2018-09-01"))
    assert ids(result) == ["1", "2"]

    assert ids(apply_filters(objects, FilterState(passport_date_from="2013-01-01"))) == ["2"]
    assert ids(apply_filters(objects, FilterState(passport_date_to="2013-01-01"))) == ["1"]


def test_unparseable_or_missing_passport_never_matches_a_date_bound(objects):
    result = apply_filters(objects, FilterState(passport_date_from="1900-01-01"))
    assert "3" not in ids(result)
    assert "4" not in ids(result)


def test_malformed_date_bound_is_ignored(objects):
    assert ids(apply_filters(objects, FilterState(passport_date_from="yesterday"))) == ["1", "2", "3", "4"]


def test_filters_are_idempotent(objects):
    filters = FilterState(water_type="fresh", search_query="a")
    once = apply_filters(objects, filters)
    assert apply_filters(once, filters) == once


def test_filters_combine_as_intersection(objects):
    by_region = FilterState(region="Almaty Region")
    by_condition = FilterState(technical_condition="2")
    both = FilterState(region="Almaty Region", technical_condition="2")

    expected = [o for o in apply_filters(objects, by_region) if o in apply_filters(objects, by_condition)]
    assert apply_filters(objects, both) == expected
    assert ids(expected) == ["2"]


def test_has_active_filters():
    assert not has_active_filters(FilterState())
    assert not has_active_filters(FilterState(search_query="lake"))
    assert has_active_filters(FilterState(fauna="false"))
    assert has_active_filters(FilterState(passport_date_to="2020-01-01"))


def test_guest_cannot_use_expert_filters():
    filters = FilterState(
        region="Almaty Region", technical_condition="4",
        passport_date_from="2010-01-01", passport_date_to="2020-01-01", search_query="lake",
    )

    guest = filters_for_role(filters, "guest")
    assert guest.technical_condition == ""
    assert guest.passport_date_from is None
    assert guest.passport_date_to is None
    assert guest.region == "Almaty Region"
    assert guest.search_query == "lake"

    assert filters_for_role(filters, "expert") == filters


def test_available_regions_sorted_and_unique(objects):
    assert available_regions(objects) == ["Almaty Region", "Karaganda Region", "Pavlodar Region"]


def test_layer_toggles(objects):
    assert ids(apply_layer_toggles(objects, ["lake", "canal"])) == ["1", "3", "4"]
    assert apply_layer_toggles(objects, []) == []


def test_highlight_is_first_name_match(objects):
    assert find_highlighted(objects, "lake").id == "1"
    assert find_highlighted(objects, "CANAL").id == "4"
    assert find_highlighted(objects, "nothing") is None
    assert find_highlighted(objects, "") is None
