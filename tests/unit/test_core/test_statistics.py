from core.models import WaterObject
from core.statistics import compute_statistics, share


def make(id, **kwargs):
    return WaterObject(id=id, name=id, region=kwargs.pop("region", "R1"), **kwargs)


def test_statistics_counts():
    objects = [
        make("1", resource_type="lake", water_type="fresh", fauna=True, technical_condition=1),
        make("2", resource_type="lake", water_type="non-fresh", technical_condition=4, region="R2"),
        make("3", resource_type="canal", water_type="fresh", technical_condition=5, region="R2"),
        make("4", resource_type="reservoir", water_type="fresh", fauna=True, technical_condition=2, region="R3"),
    ]
    stats = compute_statistics(objects)

    assert stats.total == 4
    assert stats.by_resource_type == {"lake": 2, "canal": 1, "reservoir": 1}
    assert stats.by_water_type == {"fresh": 3, "non-fresh": 1}
    assert stats.with_fauna == 2
    assert stats.avg_condition == 3.0
    assert stats.region_count == 3
    assert stats.good_condition == 2
    assert stats.poor_condition == 2


def test_missing_conditions_lower_the_average():
    stats = compute_statistics([make("1", technical_condition=3), make("2", technical_condition=None)])
    assert stats.avg_condition == 1.5


def test_empty_collection():
    stats = compute_statistics([])
    assert stats.total == 0
    assert stats.avg_condition == 0.0
    assert stats.to_dict()["by_resource_type"] == {"lake": 0, "canal": 0, "reservoir": 0}


def test_share():
    assert share(1, 3) == 33.3
    assert share(2, 0) == 0.0
