"""Type definitions for EcoScore data structures.

ARCHITECTURE DECISION: TYPED DOMAIN OBJECTS + TypedDict FOR STORAGE
===================================================================

1. **Frozen dataclasses for engine inputs and outputs**:
   - Records are a tagged variant: WaterRecord, ElectricityRecord,
     TravelRecord, WasteRecord, RecycleRecord. Only TravelRecord carries a
     travel mode, so "mode present iff category is travel" is a property of
     the type rather than a convention.
   - DailyTotals, ScoreResult, LevelInfo are derived values, created per
     query and discarded after use.
   - Baselines, Weights, ScoreTuning and EcoSettings are read-only
     configuration passed to the engines by parameter.

2. **TypedDict for persisted JSON** (fixed keys known at design time):
   - RecordData: the stored record shape ({id, date, type, value, unit, meta})
   - BadgeRecordData: an issued badge ({badge_id, earned_at})

IMPORTANT: This file must NOT import from coordinator.py, store.py or any
file that imports coordinator, to avoid circular dependencies.
Only import from const.py (constants) and typing (type machinery).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, NotRequired, TypedDict

from . import const

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

RecordId = str  # UUID string
BadgeId = str  # Catalog key, e.g. "water_saver"
MissionId = str
ISODatetime = str  # ISO 8601 datetime string "2026-10-19T12:30:00+00:00"


# =============================================================================
# Persisted Shapes
# =============================================================================


class RecordMetaData(TypedDict, total=False):
    """Loosely-typed record metadata; only `mode` is interpreted."""

    mode: str


class RecordData(TypedDict):
    """A record as persisted in storage (JSON-serializable).

    Unknown keys inside `meta` are preserved and ignored.
    """

    id: RecordId
    date: ISODatetime
    type: str
    value: float
    unit: str
    meta: NotRequired[dict[str, Any]]


class BadgeRecordData(TypedDict):
    """An issued badge. Exactly one per badge_id."""

    badge_id: BadgeId
    earned_at: ISODatetime


class SettingsData(TypedDict, total=False):
    """Settings as persisted in storage."""

    baselines: dict[str, float]
    weights: dict[str, float]


# =============================================================================
# Records (tagged variant)
# =============================================================================


@dataclass(frozen=True, slots=True)
class BaseRecord:
    """Fields shared by every record kind.

    Attributes:
        record_id: Unique identifier
        timestamp: Timezone-aware instant the activity happened
        amount: Non-negative quantity in `unit`
        unit: Display unit ("L", "kWh", "km", "kg")
    """

    record_id: RecordId
    timestamp: datetime
    amount: float
    unit: str

    category = ""


@dataclass(frozen=True, slots=True)
class WaterRecord(BaseRecord):
    """Water consumption in liters."""

    category = const.CATEGORY_WATER


@dataclass(frozen=True, slots=True)
class ElectricityRecord(BaseRecord):
    """Electricity consumption in kWh."""

    category = const.CATEGORY_ELECTRICITY


@dataclass(frozen=True, slots=True)
class TravelRecord(BaseRecord):
    """Distance travelled in km.

    `mode` is one of const.TRAVEL_MODES, or None when the stored mode is
    missing or unrecognized. Such a record still counts toward the travel
    total but not toward any mode bucket.
    """

    mode: str | None = None

    category = const.CATEGORY_TRAVEL

    @property
    def is_eco(self) -> bool:
        """Return True for walk, bike and bus trips."""
        return self.mode in const.ECO_TRAVEL_MODES


@dataclass(frozen=True, slots=True)
class WasteRecord(BaseRecord):
    """Waste generated in kg."""

    category = const.CATEGORY_WASTE


@dataclass(frozen=True, slots=True)
class RecycleRecord(BaseRecord):
    """Material recycled in kg."""

    category = const.CATEGORY_RECYCLE


Record = WaterRecord | ElectricityRecord | TravelRecord | WasteRecord | RecycleRecord

RECORD_TYPES: dict[str, type[BaseRecord]] = {
    const.CATEGORY_WATER: WaterRecord,
    const.CATEGORY_ELECTRICITY: ElectricityRecord,
    const.CATEGORY_TRAVEL: TravelRecord,
    const.CATEGORY_WASTE: WasteRecord,
    const.CATEGORY_RECYCLE: RecycleRecord,
}


# =============================================================================
# Aggregates
# =============================================================================


def _empty_travel_modes() -> dict[str, float]:
    return dict.fromkeys(const.TRAVEL_MODES, 0.0)


@dataclass(frozen=True, slots=True)
class DailyTotals:
    """Per-category sums for one calendar day.

    `travel_modes` holds walk/bike/bus/car sub-sums. They add up to `travel`
    unless some travel records had no recognized mode. The mapping is a
    read-only view over a private copy.
    """

    water: float = 0.0
    electricity: float = 0.0
    travel: float = 0.0
    waste: float = 0.0
    recycle: float = 0.0
    travel_modes: Mapping[str, float] = field(default_factory=_empty_travel_modes)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "travel_modes", MappingProxyType(dict(self.travel_modes))
        )

    def get(self, category: str) -> float:
        """Return the total for a category name."""
        return float(getattr(self, category))

    @property
    def eco_travel(self) -> float:
        """Distance covered by walk, bike and bus."""
        return sum(self.travel_modes.get(mode, 0.0) for mode in const.ECO_TRAVEL_MODES)

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            const.CATEGORY_WATER: self.water,
            const.CATEGORY_ELECTRICITY: self.electricity,
            const.CATEGORY_TRAVEL: self.travel,
            const.CATEGORY_WASTE: self.waste,
            const.CATEGORY_RECYCLE: self.recycle,
            "travel_modes": dict(self.travel_modes),
        }


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class Baselines:
    """Expected daily consumption per category. All values should be > 0."""

    electricity_per_day: float = const.DEFAULT_BASELINE_ELECTRICITY_PER_DAY
    water_per_day: float = const.DEFAULT_BASELINE_WATER_PER_DAY
    travel_km_per_day: float = const.DEFAULT_BASELINE_TRAVEL_KM_PER_DAY
    waste_kg_per_day: float = const.DEFAULT_BASELINE_WASTE_KG_PER_DAY

    def for_category(self, category: str) -> float:
        """Return the baseline for a scored category."""
        return {
            const.CATEGORY_ELECTRICITY: self.electricity_per_day,
            const.CATEGORY_WATER: self.water_per_day,
            const.CATEGORY_TRAVEL: self.travel_km_per_day,
            const.CATEGORY_WASTE: self.waste_kg_per_day,
        }[category]

    def as_dict(self) -> dict[str, float]:
        """Return the persisted (camelCase) representation."""
        return {
            const.BASELINE_ELECTRICITY_PER_DAY: self.electricity_per_day,
            const.BASELINE_WATER_PER_DAY: self.water_per_day,
            const.BASELINE_TRAVEL_KM_PER_DAY: self.travel_km_per_day,
            const.BASELINE_WASTE_KG_PER_DAY: self.waste_kg_per_day,
        }


@dataclass(frozen=True, slots=True)
class Weights:
    """Share of each category in the base score.

    By convention these sum to 1.0; the engine does not enforce it.
    """

    electricity: float = const.DEFAULT_WEIGHT_ELECTRICITY
    travel: float = const.DEFAULT_WEIGHT_TRAVEL
    water: float = const.DEFAULT_WEIGHT_WATER
    waste: float = const.DEFAULT_WEIGHT_WASTE

    def for_category(self, category: str) -> float:
        """Return the weight for a scored category."""
        return float(getattr(self, category))

    @property
    def total(self) -> float:
        """Sum of all weights."""
        return self.electricity + self.travel + self.water + self.waste

    def as_dict(self) -> dict[str, float]:
        """Return the persisted representation."""
        return {
            const.CATEGORY_ELECTRICITY: self.electricity,
            const.CATEGORY_TRAVEL: self.travel,
            const.CATEGORY_WATER: self.water,
            const.CATEGORY_WASTE: self.waste,
        }


@dataclass(frozen=True, slots=True)
class ScoreTuning:
    """Product-tuning constants of the EarthScore formula."""

    saturation_multiplier: float = const.DEFAULT_SATURATION_MULTIPLIER
    eco_travel_bonus_max: float = const.DEFAULT_ECO_TRAVEL_BONUS_MAX
    recycle_bonus_per_unit: float = const.DEFAULT_RECYCLE_BONUS_PER_UNIT
    recycle_bonus_max: float = const.DEFAULT_RECYCLE_BONUS_MAX
    bonus_cap: float = const.DEFAULT_BONUS_CAP


@dataclass(frozen=True, slots=True)
class EcoSettings:
    """Versionable scoring configuration (baselines + weights + tuning)."""

    baselines: Baselines = field(default_factory=Baselines)
    weights: Weights = field(default_factory=Weights)
    tuning: ScoreTuning = field(default_factory=ScoreTuning)

    def as_dict(self) -> SettingsData:
        """Return the persisted representation.

        Tuning constants are not persisted; they are code-level parameters.
        """
        return SettingsData(
            baselines=self.baselines.as_dict(),
            weights=self.weights.as_dict(),
        )


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """EarthScore for one day.

    Attributes:
        score: Final score, integer in [0, 100]
        components: Per-category normalized score in [0, 100]
        bonus: Eco-travel + recycling bonus in [0, bonus_cap]
        breakdown: Per-category weighted contribution plus "bonus", unrounded
    """

    score: int
    components: dict[str, float]
    bonus: float
    breakdown: dict[str, float]

    @property
    def base_score(self) -> float:
        """Sum of weighted contributions (before bonus)."""
        return sum(
            value for key, value in self.breakdown.items() if key != const.ATTR_BONUS
        )


@dataclass(frozen=True, slots=True)
class LevelInfo:
    """Level reached for a cumulative EarthScore total."""

    level: int
    title: str
    total_score: int
    progress: float  # 0-100 toward the next level, 100 at max level
    next_threshold: int | None


@dataclass(frozen=True, slots=True)
class Mission:
    """Weekly goal with a target count of qualifying actions."""

    mission_id: MissionId
    title: str
    target: int
    condition: str
    description: str = ""
    icon: str = ""


@dataclass(frozen=True, slots=True)
class Preset:
    """Quick-log entry for a common activity."""

    label: str
    value: float
    mode: str | None = None


@dataclass(frozen=True, slots=True)
class Recommendation:
    """A suggested habit change derived from recent consumption."""

    recommendation_id: str
    category: str
    priority: str
    title: str
    description: str
    impact: str
    actions: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "id": self.recommendation_id,
            "category": self.category,
            "priority": self.priority,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "actions": list(self.actions),
        }


@dataclass(frozen=True, slots=True)
class MetricInsight:
    """Summary of one category over the days it was non-zero.

    `trend` is the percent change from the first to the last non-zero day.
    """

    average: float
    minimum: float
    maximum: float
    trend: float
    days: int


__all__ = [
    "RECORD_TYPES",
    "BadgeId",
    "BadgeRecordData",
    "BaseRecord",
    "Baselines",
    "DailyTotals",
    "EcoSettings",
    "ElectricityRecord",
    "ISODatetime",
    "LevelInfo",
    "Mission",
    "MetricInsight",
    "MissionId",
    "Preset",
    "Recommendation",
    "Record",
    "RecordData",
    "RecordId",
    "RecordMetaData",
    "RecycleRecord",
    "ScoreResult",
    "ScoreTuning",
    "SettingsData",
    "TravelRecord",
    "WasteRecord",
    "WaterRecord",
    "Weights",
]
