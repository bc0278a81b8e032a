import pytest

from core.models import SortSpec, WaterObject
from core.sorting import DEFAULT_SORT, SORT_KEYS, sort_objects, toggle_sort


def obj(id, **kwargs):
    return WaterObject(id=id, name=kwargs.pop("name", id), region=kwargs.pop("region", "R"), **kwargs)


def ids(items):
    return [o.id for o in items]


def test_priority_desc_puts_nulls_last():
    items = [obj("a", priority=5), obj("b", priority=None), obj("c", priority=12)]
    result = sort_objects(items, "priority", "desc")
    assert [o.priority for o in result] == [12, 5, None]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_nulls_last_in_both_directions(direction):
    items = [
        obj("a", technical_condition=None),
        obj("b", technical_condition=3),
        obj("c", technical_condition=None),
        obj("d", technical_condition=1),
    ]
    result = sort_objects(items, "technical_condition", direction)
    assert ids(result[2:]) == ["a", "c"]
    assert all(o.technical_condition is not None for o in result[:2])


def test_strings_compare_case_insensitively():
    items = [obj("1", name="balkhash"), obj("2", name="Alakol"), obj("3", name="Caspian")]
    assert ids(sort_objects(items, "name", "asc")) == ["2", "1", "3"]
    assert ids(sort_objects(items, "name", "desc")) == ["3", "1", "2"]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_equal_keys_keep_input_order(direction):
    items = [obj("a", priority=7), obj("b", priority=7), obj("c", priority=3), obj("d", priority=7)]
    result = sort_objects(items, "priority", direction)
    sevens = [o.id for o in result if o.priority == 7]
    assert sevens == ["a", "b", "d"]


def test_ascending_reversed_equals_descending():
    items = [obj(str(p), priority=p) for p in (4, 9, 1, 15, 6)] + [obj("none", priority=None)]
    asc = sort_objects(items, "priority", "asc")
    desc = sort_objects(items, "priority", "desc")
    assert ids(asc[:-1])[::-1] == ids(desc[:-1])
    assert asc[-1].id == desc[-1].id == "none"


def test_unknown_field_keeps_input_order():
    items = [obj("b", priority=1), obj("a", priority=2)]
    assert ids(sort_objects(items, "does_not_exist", "desc")) == ["b", "a"]


def test_passport_date_sorts_chronologically():
    items = [
        obj("late", passport_date="2020-01-01"),
        obj("bad", passport_date="garbage"),
        obj("early", passport_date="2009-12-31T23:00:00Z"),
        obj("mid", passport_date="2015-06-01"),
    ]
    assert ids(sort_objects(items, "passport_date", "asc")) == ["early", "mid", "late", "bad"]


def test_input_is_not_modified():
    items = [obj("b", priority=1), obj("a", priority=2)]
    sort_objects(items, "priority", "desc")
    assert ids(items) == ["b", "a"]


def test_direction_defaults_to_ascending():
    items = [obj("b", priority=2), obj("a", priority=1)]
    assert ids(sort_objects(items, "priority")) == ["a", "b"]


def test_sort_keys_cover_table_columns():
    for field in ("name", "region", "technical_condition", "passport_date", "priority"):
        assert field in SORT_KEYS


def test_toggle_sort():
    assert DEFAULT_SORT == SortSpec("priority", "desc")

    flipped = toggle_sort(DEFAULT_SORT, "priority")
    assert flipped == SortSpec("priority", "asc")
    assert toggle_sort(flipped, "priority") == SortSpec("priority", "desc")

    assert toggle_sort(flipped, "name") == SortSpec("name", "desc")
