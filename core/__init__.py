"""
Core module for GidroAtlas.
Contains data models, priority, filtering, sorting and assessment engines.
"""

from core.models import (
    WaterObject, User, Hardware, FilterState, SortSpec, Reading, Assessment,
    FeatureImportance, ResourceType, WaterType, Role, SortDirection, PriorityBand,
    AssessmentLabel, RemoteControl,
)
from core.priority import compute_priority, annotate_priorities, recalculate_priorities, priority_band
from core.filters import apply_filters, filters_for_role
from core.sorting import sort_objects, toggle_sort, DEFAULT_SORT
from core.assessment import HeuristicAssessor, assess, assess_water_object
from core.statistics import CollectionStats, compute_statistics
from core.reports import ReportType, render_report

__all__ = [
    # Models
    "WaterObject",
    "User",
    "Hardware",
    "FilterState",
    "SortSpec",
    "Reading",
    "Assessment",
    "FeatureImportance",
    "ResourceType",
    "WaterType",
    "Role",
    "SortDirection",
    "PriorityBand",
    "AssessmentLabel",
    "RemoteControl",
    # Engines
    "compute_priority",
    "annotate_priorities",
    "recalculate_priorities",
    "priority_band",
    "apply_filters",
    "filters_for_role",
    "sort_objects",
    "toggle_sort",
    "DEFAULT_SORT",
    "HeuristicAssessor",
    "assess",
    "assess_water_object",
    # Reporting
    "CollectionStats",
    "compute_statistics",
    "ReportType",
    "render_report",
]
