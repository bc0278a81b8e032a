from datetime import date, datetime, timezone

from core.models import WaterObject
from core.reports import ReportType, render_report, report_filename, report_title, select_objects


def sample():
    return [
        WaterObject(id="1", name="Lake Balkhash", region="Karaganda Region", resource_type="lake",
                    water_type="non-fresh", fauna=True, technical_condition=3, priority=21),
        WaterObject(id="2", name="Irtysh Canal", region="Pavlodar Region", resource_type="canal",
                    water_type="fresh", fauna=False, technical_condition=5, priority=None),
        WaterObject(id="3", name="Bukhtarma", region="East Kazakhstan Region", resource_type="reservoir",
                    water_type="fresh", fauna=True, technical_condition=4, priority=19),
    ]


def test_select_objects():
    objects = sample()
    assert len(select_objects(objects, ReportType.ALL.value)) == 3
    assert [o.id for o in select_objects(objects, ReportType.CRITICAL.value)] == ["2", "3"]
    assert [o.id for o in select_objects(objects, ReportType.REGION.value, "Pavlodar Region")] == ["2"]


def test_report_titles():
    assert report_title("all") == "All objects"
    assert report_title("critical") == "Critical condition"
    assert report_title("region", "Almaty Region") == "Region: Almaty Region"


def test_render_critical_report():
    text = render_report(sample(), ReportType.CRITICAL.value, today=date(2024, 10, 19))
    lines = text.splitlines()

    assert lines[0] == "WATER OBJECTS REPORT"
    assert lines[1] == "Date: 19.10.2024"
    assert lines[2] == "Report type: Critical condition"
    assert "Number of objects: 2" in lines
    assert "1. Irtysh Canal" in lines
    assert "   Priority: N/A" in lines
    assert "   Technical condition: 4/5" in lines
    assert "   Fauna: Yes" in lines
    assert "Lake Balkhash" not in text


def test_render_empty_report():
    text = render_report([], today=date(2024, 1, 2))
    assert "Number of objects: 0" in text
    assert not any(line.startswith("1.") for line in text.splitlines())


def test_report_filename():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert report_filename(now) == "report-1704067200000.txt"
