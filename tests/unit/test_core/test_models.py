import pytest
from datetime import date, datetime, timezone

from core.models import (
    WaterObject, User, Hardware, FilterState, Assessment, FeatureImportance,
    RemoteControl, Role, parse_timestamp, missing_required_fields,
)


def test_parse_timestamp_forms():
    midnight = datetime(2020, 5, 1, tzinfo=timezone.utc)
    assert parse_timestamp("2020-05-01") == midnight
    assert parse_timestamp("2020-05-01T00:00:00Z") == midnight
    assert parse_timestamp("2020-05-01T03:00:00+03:00") == midnight
    assert parse_timestamp(date(2020, 5, 1)) == midnight
    assert parse_timestamp(datetime(2020, 5, 1)) == midnight


@pytest.mark.parametrize("value", [None, "", "   ", "01/05/2020", "2020-13-01", 20200501])
def test_parse_timestamp_rejects_invalid(value):
    assert parse_timestamp(value) is None


def test_water_object_from_store_row():
    row = {
        "id": "abc",
        "name": "Lake Zaisan",
        "region": "East Kazakhstan Region",
        "resource_type": "lake",
        "water_type": "fresh",
        "fauna": "true",
        "passport_date": date(2016, 8, 1),
        "technical_condition": "4",
        "latitude": "48.0",
        "longitude": 84.0,
        "priority": None,
        "unexpected_column": "ignored",
    }
    obj = WaterObject.from_dict(row)

    assert obj.fauna is True
    assert obj.passport_date == "2016-08-01"
    assert obj.technical_condition == 4
    assert obj.latitude == 48.0
    assert obj.pdf_url is None
    assert obj.to_dict()["name"] == "Lake Zaisan"


def test_water_object_defaults_for_bad_values():
    obj = WaterObject.from_dict({"id": 7, "name": "X", "region": "Y", "technical_condition": "n/a", "latitude": "?"})
    assert obj.id == "7"
    assert obj.technical_condition is None
    assert obj.latitude is None
    assert obj.resource_type == "lake"


def test_with_priority_returns_copy():
    obj = WaterObject(id="1", name="A", region="R")
    updated = obj.with_priority(9)
    assert updated.priority == 9
    assert obj.priority is None


def test_user_roles():
    expert = User.from_dict({"id": "u1", "login": "aigerim", "role": "expert"})
    guest = User.from_dict({"id": "u2", "login": "daniyar", "role": None})
    assert expert.is_expert
    assert not guest.is_expert
    assert guest.role == Role.GUEST.value


def test_hardware_from_row():
    hw = Hardware.from_dict({"id": 1, "humidity": "55.5", "temperature": 21, "remote_control": -1})
    assert hw.humidity == 55.5
    assert hw.remote_control == RemoteControl.AUTO.value


def test_filter_state_cleared():
    assert FilterState.cleared() == FilterState()
    assert FilterState.cleared().fauna == ""


def test_assessment_to_dict():
    result = Assessment(
        score=0.5,
        label="Moderate",
        probabilities={"Moderate": 1.0},
        important_features=[FeatureImportance("ph", 7.0, -0.6)],
    )
    data = result.to_dict()
    assert data["important_features"] == [{"name": "ph", "value": 7.0, "weight": -0.6}]
    assert data["is_simulation"] is True


def test_missing_required_fields():
    assert missing_required_fields({"name": "A", "region": "R", "latitude": 0.0, "longitude": 0.0}) == []
    assert missing_required_fields({"name": "  ", "region": "R", "latitude": None}) == ["name", "latitude", "longitude"]
