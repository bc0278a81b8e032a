"""
Plain-text reports over the water object collection.
"""

from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional

from core.models import WaterObject


class ReportType(str, Enum):
    ALL = "all"
    CRITICAL = "critical"   # technical condition 4-5
    REGION = "region"


CRITICAL_CONDITION = 4


def select_objects(
    objects: Iterable[WaterObject],
    report_type: str = ReportType.ALL.value,
    region: Optional[str] = None,
) -> List[WaterObject]:
    """Pick the objects that belong in a report of the given type."""
    items = list(objects)
    if report_type == ReportType.CRITICAL.value:
        return [o for o in items if (o.technical_condition or 0) >= CRITICAL_CONDITION]
    if report_type == ReportType.REGION.value and region:
        return [o for o in items if o.region == region]
    return items


def report_title(report_type: str, region: Optional[str] = None) -> str:
    if report_type == ReportType.CRITICAL.value:
        return "Critical condition"
    if report_type == ReportType.REGION.value:
        return f"Region: {region or ''}"
    return "All objects"


def _object_block(index: int, obj: WaterObject) -> str:
    priority = obj.priority if obj.priority is not None else "N/A"
    condition = obj.technical_condition if obj.technical_condition is not None else "?"
    return "\n".join([
        f"{index}. {obj.name}",
        f"   Region: {obj.region}",
        f"   Type: {obj.resource_type}",
        f"   Water type: {obj.water_type}",
        f"   Technical condition: {condition}/5",
        f"   Fauna: {'Yes' if obj.fauna else 'No'}",
        f"   Priority: {priority}",
    ])


def render_report(
    objects: Iterable[WaterObject],
    report_type: str = ReportType.ALL.value,
    region: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """
    Render the downloadable text report.

    Args:
        objects: Full collection; selection by report type happens here
        report_type: "all", "critical" or "region"
        region: Region name for region reports
        today: Report date (defaults to today)

    Returns:
        Report text
    """
    today = today or date.today()
    selected = select_objects(objects, report_type, region)

    lines = [
        "WATER OBJECTS REPORT",
        f"Date: {today.strftime('%d.%m.%Y')}",
        f"Report type: {report_title(report_type, region)}",
        "",
        f"Number of objects: {len(selected)}",
        "",
    ]
    lines.extend(_object_block(i, obj) + "\n" for i, obj in enumerate(selected, start=1))
    return "\n".join(lines)


def report_filename(now: datetime) -> str:
    return f"report-{int(now.timestamp() * 1000)}.txt"
