"""
Core data models for GidroAtlas.

Water objects, users and the hardware panel mirror the rows kept by the
object store. Filter, sort and reading types are transient inputs owned by
the presentation layer.
"""

import re
from dataclasses import dataclass, field, asdict, replace
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


# ═══════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════
class ResourceType(str, Enum):
    """Classification of the water body."""
    LAKE = "lake"
    CANAL = "canal"
    RESERVOIR = "reservoir"


class WaterType(str, Enum):
    FRESH = "fresh"
    NON_FRESH = "non-fresh"


class Role(str, Enum):
    """User roles. Experts see management pages and advanced filters."""
    GUEST = "guest"
    EXPERT = "expert"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class PriorityBand(str, Enum):
    """Inspection urgency bands derived from the priority score."""
    HIGH = "high"          # priority >= 12
    MEDIUM = "medium"      # priority >= 6
    LOW = "low"            # priority < 6
    UNKNOWN = "unknown"    # priority could not be computed


class AssessmentLabel(str, Enum):
    """Assessment categories, in tie-break order."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    MODERATE = "Moderate"
    POOR = "Poor"
    CRITICAL = "Critical"


class RemoteControl(int, Enum):
    """Allowed values of the hardware remote-control switch."""
    ON = 1
    OFF = 0
    AUTO = -1


RESOURCE_TYPE_LABELS = {
    ResourceType.LAKE.value: "Lake",
    ResourceType.CANAL.value: "Canal",
    ResourceType.RESERVOIR.value: "Reservoir",
}

WATER_TYPE_LABELS = {
    WaterType.FRESH.value: "Fresh",
    WaterType.NON_FRESH.value: "Non-fresh",
}


# ═══════════════════════════════════════════════════════════════════════════
# TIMESTAMP PARSING
# ═══════════════════════════════════════════════════════════════════════════
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a store date/timestamp into an aware UTC datetime.

    Accepts ``date``, ``datetime`` and ISO-8601 strings (``YYYY-MM-DD`` or a
    full timestamp, ``Z`` suffix allowed). Date-only values and naive
    timestamps are taken as UTC.

    Returns:
        The parsed datetime, or None if the value is absent or invalid.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            if _DATE_ONLY.match(text):
                parsed = datetime.combine(date.fromisoformat(text), time())
            else:
                parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "t")
    return bool(value)


# ═══════════════════════════════════════════════════════════════════════════
# WATER OBJECT
# ═══════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class WaterObject:
    """
    A monitored water resource (lake, canal or reservoir).

    ``priority`` is derived from ``technical_condition`` and
    ``passport_date``; it may be stored for display but is always
    recomputed when the object enters the core.
    """
    id: str
    name: str
    region: str
    resource_type: str = ResourceType.LAKE.value
    water_type: str = WaterType.FRESH.value
    fauna: bool = False
    passport_date: Optional[str] = None
    technical_condition: Optional[int] = None  # 1 (best) .. 5 (worst)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    pdf_url: Optional[str] = None
    priority: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WaterObject":
        """Build an object from a store row, ignoring unknown columns."""
        passport = data.get("passport_date")
        if isinstance(passport, (date, datetime)):
            passport = passport.isoformat()
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            region=data.get("region") or "",
            resource_type=data.get("resource_type") or ResourceType.LAKE.value,
            water_type=data.get("water_type") or WaterType.FRESH.value,
            fauna=_to_bool(data.get("fauna", False)),
            passport_date=passport,
            technical_condition=_to_int(data.get("technical_condition")),
            latitude=_to_float(data.get("latitude")),
            longitude=_to_float(data.get("longitude")),
            pdf_url=data.get("pdf_url") or None,
            priority=_to_int(data.get("priority")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_priority(self, priority: Optional[int]) -> "WaterObject":
        return replace(self, priority=priority)


# ═══════════════════════════════════════════════════════════════════════════
# USERS & HARDWARE
# ═══════════════════════════════════════════════════════════════════════════
@dataclass
class User:
    """An application user as stored in the ``users`` table."""
    id: str
    login: str
    password_hash: str = ""
    role: str = Role.GUEST.value
    created_at: Optional[str] = None

    @property
    def is_expert(self) -> bool:
        return self.role == Role.EXPERT.value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=str(data.get("id", "")),
            login=data.get("login", ""),
            password_hash=data.get("password_hash", "") or "",
            role=data.get("role") or Role.GUEST.value,
            created_at=data.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Hardware:
    """The singleton hardware record: sensor readings plus a remote switch."""
    id: int = 1
    humidity: float = 0.0
    temperature: float = 0.0
    remote_control: int = RemoteControl.OFF.value
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Hardware":
        return cls(
            id=_to_int(data.get("id")) or 1,
            humidity=_to_float(data.get("humidity")) or 0.0,
            temperature=_to_float(data.get("temperature")) or 0.0,
            remote_control=_to_int(data.get("remote_control")) or 0,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ═══════════════════════════════════════════════════════════════════════════
# QUERY STATE
# ═══════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class FilterState:
    """
    Client-held filter parameters.

    Values keep the widget form: empty string means "any". ``fauna`` is
    ``""``, ``"true"`` or ``"false"``; ``technical_condition`` is a string.
    """
    region: str = ""
    resource_type: str = ""
    water_type: str = ""
    fauna: str = ""
    technical_condition: str = ""
    passport_date_from: Optional[str] = None
    passport_date_to: Optional[str] = None
    search_query: str = ""

    @classmethod
    def cleared(cls) -> "FilterState":
        return cls()


@dataclass(frozen=True)
class SortSpec:
    field: str = "priority"
    direction: str = SortDirection.DESC.value


@dataclass(frozen=True)
class Reading:
    """Environmental readings; any field may be missing."""
    ph: Optional[float] = None
    turbidity: Optional[float] = None           # NTU
    dissolved_oxygen: Optional[float] = None    # mg/L
    temperature: Optional[float] = None         # °C
    conductivity: Optional[float] = None        # µS/cm


# ═══════════════════════════════════════════════════════════════════════════
# ASSESSMENT
# ═══════════════════════════════════════════════════════════════════════════
@dataclass(frozen=True)
class FeatureImportance:
    name: str
    value: float
    weight: float


@dataclass(frozen=True)
class Assessment:
    """
    Output of the heuristic water-quality formula.

    Not a trained model: ``is_simulation`` is always True.
    """
    score: float
    label: str
    probabilities: Dict[str, float]
    important_features: List[FeatureImportance] = field(default_factory=list)
    explanation: str = ""
    is_simulation: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "label": self.label,
            "probabilities": dict(self.probabilities),
            "important_features": [asdict(f) for f in self.important_features],
            "explanation": self.explanation,
            "is_simulation": self.is_simulation,
        }


# Fields a new or edited water object must carry
REQUIRED_OBJECT_FIELDS = ("name", "region", "latitude", "longitude")


def missing_required_fields(data: Dict[str, Any]) -> List[str]:
    """Names of required fields that are absent or blank in a form payload."""
    missing = []
    for name in REQUIRED_OBJECT_FIELDS:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing
