"""Gamification Engine - Pure logic for badge and mission evaluation.

This engine provides stateless, pure Python functions for:
- Badge evaluation against trailing calendar windows of the record history
- Badge progress (0.0-1.0) for badges not yet earned
- Weekly mission progress, clamped to the mission target

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions operate on passed-in data. The GamificationManager is
responsible for reading the earned set, persisting new badge records and
notifying listeners.

Badge catalog:
- water_saver: trailing 3 days, every day water <= 50 L
- eco_rider: trailing 7 days, >= 5 walk/bike/bus travel records
- recycler (Super Recycler): trailing 30 days, recycled >= 5 kg
- energy_conscious: trailing 5 days, >= 5 days with electricity < 3 kWh
- waste_warrior: trailing 7 days, every day waste <= 0.3 kg

A trailing N-day window covers the N local calendar days ending today
(today inclusive). Per-day conditions are judged on the Aggregator totals of
every day in the window; a day with nothing logged totals zero.

Mission conditions:
- travel_eco: walk/bike/bus travel records in the current week
- water_limit: days among the trailing 7 with water < 75 L
- waste_reduction: recycle records plus waste records < 0.3 kg this week
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from .. import const
from ..data_builders import build_badge_record
from ..type_defs import Mission, RecycleRecord, TravelRecord, WasteRecord
from ..utils.dt_utils import (
    dt_now_utc,
    end_of_local_day,
    local_date,
    start_of_local_day,
    start_of_local_week,
)
from ..utils.math_utils import clamp
from .aggregation_engine import AggregationEngine

if TYPE_CHECKING:
    from ..type_defs import BadgeRecordData, DailyTotals, Record


# =============================================================================
# TYPE ALIASES
# =============================================================================

# Badge predicate / progress signature: (records, today) -> result
BadgePredicate = Callable[[tuple["Record", ...], date], bool]
BadgeProgress = Callable[[tuple["Record", ...], date], float]

# Mission rule signature: (records, now) -> raw qualifying count
MissionRule = Callable[[tuple["Record", ...], datetime], int]


@dataclass(frozen=True, slots=True)
class BadgeDefinition:
    """A catalog entry: identity plus the pure functions that judge it."""

    badge_id: str
    name: str
    description: str
    icon: str
    predicate: BadgePredicate
    progress: BadgeProgress


# =============================================================================
# WINDOW HELPERS
# =============================================================================


def _window_records(
    records: tuple[Record, ...], today: date, days: int
) -> list[Record]:
    """Records inside the trailing calendar window ending at `today`."""
    first_day = today - timedelta(days=days - 1)
    return AggregationEngine.records_between(
        records, start_of_local_day(first_day), end_of_local_day(today)
    )


def _window(
    records: tuple[Record, ...], today: date, days: int
) -> list[DailyTotals]:
    """Per-day totals for the trailing window, oldest first."""
    return [
        totals
        for _day, totals in AggregationEngine.daily_series(records, days, end=today)
    ]


def _trailing_run(
    window: list[DailyTotals], check: Callable[[DailyTotals], bool]
) -> int:
    """Number of consecutive days, ending today, that pass `check`."""
    run = 0
    for totals in reversed(window):
        if not check(totals):
            break
        run += 1
    return run


def _days_passing(
    window: list[DailyTotals], check: Callable[[DailyTotals], bool]
) -> int:
    return sum(1 for totals in window if check(totals))


def _eco_trips(records: Iterable[Record]) -> int:
    return sum(
        1 for record in records if isinstance(record, TravelRecord) and record.is_eco
    )


def _fraction(value: float, target: float) -> float:
    if target <= 0:
        return 1.0
    return clamp(value / target, 0.0, 1.0)


# =============================================================================
# BADGE PREDICATES
# =============================================================================


def _low_water(totals: DailyTotals) -> bool:
    return totals.water <= const.BADGE_WATER_SAVER_MAX_LITERS


def _water_saver_met(records: tuple[Record, ...], today: date) -> bool:
    window = _window(records, today, const.BADGE_WATER_SAVER_DAYS)
    return _trailing_run(window, _low_water) == len(window)


def _water_saver_progress(records: tuple[Record, ...], today: date) -> float:
    window = _window(records, today, const.BADGE_WATER_SAVER_DAYS)
    return _fraction(_trailing_run(window, _low_water), len(window))


def _eco_rider_met(records: tuple[Record, ...], today: date) -> bool:
    window = _window_records(records, today, const.BADGE_ECO_RIDER_DAYS)
    return _eco_trips(window) >= const.BADGE_ECO_RIDER_MIN_TRIPS


def _eco_rider_progress(records: tuple[Record, ...], today: date) -> float:
    window = _window_records(records, today, const.BADGE_ECO_RIDER_DAYS)
    return _fraction(_eco_trips(window), const.BADGE_ECO_RIDER_MIN_TRIPS)


def _recycled_kg(records: tuple[Record, ...], today: date) -> float:
    return sum(
        record.amount
        for record in _window_records(records, today, const.BADGE_RECYCLER_DAYS)
        if isinstance(record, RecycleRecord)
    )


def _recycler_met(records: tuple[Record, ...], today: date) -> bool:
    return _recycled_kg(records, today) >= const.BADGE_RECYCLER_MIN_KG


def _recycler_progress(records: tuple[Record, ...], today: date) -> float:
    return _fraction(_recycled_kg(records, today), const.BADGE_RECYCLER_MIN_KG)


def _low_energy(totals: DailyTotals) -> bool:
    return totals.electricity < const.BADGE_ENERGY_CONSCIOUS_MAX_KWH


def _energy_conscious_met(records: tuple[Record, ...], today: date) -> bool:
    window = _window(records, today, const.BADGE_ENERGY_CONSCIOUS_DAYS)
    return _days_passing(window, _low_energy) >= const.BADGE_ENERGY_CONSCIOUS_MIN_DAYS


def _energy_conscious_progress(records: tuple[Record, ...], today: date) -> float:
    window = _window(records, today, const.BADGE_ENERGY_CONSCIOUS_DAYS)
    return _fraction(
        _days_passing(window, _low_energy), const.BADGE_ENERGY_CONSCIOUS_MIN_DAYS
    )


def _low_waste(totals: DailyTotals) -> bool:
    return totals.waste <= const.BADGE_WASTE_WARRIOR_MAX_KG


def _waste_warrior_met(records: tuple[Record, ...], today: date) -> bool:
    window = _window(records, today, const.BADGE_WASTE_WARRIOR_DAYS)
    return _trailing_run(window, _low_waste) == len(window)


def _waste_warrior_progress(records: tuple[Record, ...], today: date) -> float:
    window = _window(records, today, const.BADGE_WASTE_WARRIOR_DAYS)
    return _fraction(_trailing_run(window, _low_waste), len(window))


BADGE_CATALOG: tuple[BadgeDefinition, ...] = (
    BadgeDefinition(
        badge_id=const.BADGE_ID_WATER_SAVER,
        name="Water Saver",
        description="Used 50 L of water or less on each of the last 3 days",
        icon="mdi:water",
        predicate=_water_saver_met,
        progress=_water_saver_progress,
    ),
    BadgeDefinition(
        badge_id=const.BADGE_ID_ECO_RIDER,
        name="Eco Rider",
        description="Logged 5 walk, bike or bus trips within 7 days",
        icon="mdi:bike",
        predicate=_eco_rider_met,
        progress=_eco_rider_progress,
    ),
    BadgeDefinition(
        badge_id=const.BADGE_ID_RECYCLER,
        name="Super Recycler",
        description="Recycled 5 kg of material within 30 days",
        icon="mdi:recycle",
        predicate=_recycler_met,
        progress=_recycler_progress,
    ),
    BadgeDefinition(
        badge_id=const.BADGE_ID_ENERGY_CONSCIOUS,
        name="Energy Conscious",
        description="Kept electricity under 3 kWh for 5 days",
        icon="mdi:lightning-bolt",
        predicate=_energy_conscious_met,
        progress=_energy_conscious_progress,
    ),
    BadgeDefinition(
        badge_id=const.BADGE_ID_WASTE_WARRIOR,
        name="Waste Warrior",
        description="Kept waste at 0.3 kg or less every day for a week",
        icon="mdi:delete-empty",
        predicate=_waste_warrior_met,
        progress=_waste_warrior_progress,
    ),
)


DEFAULT_MISSIONS: tuple[Mission, ...] = (
    Mission(
        mission_id="m1",
        title="Eco Commuter",
        target=3,
        condition=const.MISSION_CONDITION_TRAVEL_ECO,
        description="Walk, bike or take the bus 3 times this week",
        icon="mdi:bus",
    ),
    Mission(
        mission_id="m2",
        title="Water Mindful",
        target=5,
        condition=const.MISSION_CONDITION_WATER_LIMIT,
        description="Keep water under 75 L on 5 of the last 7 days",
        icon="mdi:water-check",
    ),
    Mission(
        mission_id="m3",
        title="Zero Waste Week",
        target=4,
        condition=const.MISSION_CONDITION_WASTE_REDUCTION,
        description="Recycle or keep waste logs under 0.3 kg 4 times this week",
        icon="mdi:leaf",
    ),
)


# =============================================================================
# GAMIFICATION ENGINE
# =============================================================================


class GamificationEngine:
    """Pure logic engine for badge and mission evaluation.

    All methods are static or class methods - no instance state. This enables
    easy unit testing without any Home Assistant mocking.

    PURITY CONTRACT:
    - All data comes via parameters (records, earned ids, now)
    - No side effects, no storage access, no state mutation
    - The Manager handles persistence and notifications
    """

    # =========================================================================
    # MISSION RULE REGISTRY
    # =========================================================================

    # Maps mission condition tag to rule function
    _MISSION_RULES: dict[str, MissionRule] = {}

    @classmethod
    def _register_handlers(cls) -> None:
        """Register all mission rules.

        Called once at module load to populate _MISSION_RULES.
        """
        if cls._MISSION_RULES:
            return  # Already registered

        cls._MISSION_RULES = {
            const.MISSION_CONDITION_TRAVEL_ECO: cls._count_eco_travel,
            const.MISSION_CONDITION_WATER_LIMIT: cls._count_water_limit_days,
            const.MISSION_CONDITION_WASTE_REDUCTION: cls._count_waste_reduction,
        }

    # =========================================================================
    # BADGES
    # =========================================================================

    @staticmethod
    def evaluate_badges(
        records: Iterable[Record],
        already_earned_ids: Collection[str],
        now: datetime | None = None,
        catalog: Iterable[BadgeDefinition] = BADGE_CATALOG,
    ) -> list[BadgeRecordData]:
        """Return badge records for newly satisfied catalog entries.

        Entries whose id is in `already_earned_ids` are never evaluated and
        never re-emitted, so calling this repeatedly with the growing earned
        set is idempotent.

        Args:
            records: Full typed record history
            already_earned_ids: Badge ids already issued
            now: Evaluation instant; defaults to the current UTC time
            catalog: Badge definitions to evaluate

        Returns:
            New BadgeRecordData entries with earned_at = now, in catalog order.
        """
        when = now or dt_now_utc()
        today = local_date(when)
        history = tuple(records)
        earned = set(already_earned_ids)

        new_badges: list[BadgeRecordData] = []
        for badge in catalog:
            if badge.badge_id in earned:
                continue
            if badge.predicate(history, today):
                const.LOGGER.debug("DEBUG: Badge '%s' criteria met", badge.badge_id)
                new_badges.append(build_badge_record(badge.badge_id, when))
                earned.add(badge.badge_id)
        return new_badges

    @staticmethod
    def badge_progress(
        records: Iterable[Record],
        already_earned_ids: Collection[str],
        now: datetime | None = None,
        catalog: Iterable[BadgeDefinition] = BADGE_CATALOG,
    ) -> dict[str, float]:
        """Return progress 0.0-1.0 per badge id; earned badges report 1.0."""
        today = local_date(now or dt_now_utc())
        history = tuple(records)
        return {
            badge.badge_id: (
                1.0
                if badge.badge_id in already_earned_ids
                else badge.progress(history, today)
            )
            for badge in catalog
        }

    @staticmethod
    def get_badge(
        badge_id: str, catalog: Iterable[BadgeDefinition] = BADGE_CATALOG
    ) -> BadgeDefinition | None:
        """Look up a catalog entry by id."""
        for badge in catalog:
            if badge.badge_id == badge_id:
                return badge
        return None

    # =========================================================================
    # MISSIONS
    # =========================================================================

    @classmethod
    def mission_progress(
        cls,
        records: Iterable[Record],
        mission: Mission,
        now: datetime | None = None,
    ) -> int:
        """Return the mission's qualifying count clamped to [0, target].

        Week-based rules look at records from Monday 00:00 local time through
        `now`. An unknown condition tag yields 0.
        """
        rule = cls._MISSION_RULES.get(mission.condition)
        if rule is None:
            const.LOGGER.warning(
                "WARNING: Unknown condition '%s' for mission '%s'",
                mission.condition,
                mission.mission_id,
            )
            return 0

        raw = rule(tuple(records), now or dt_now_utc())
        return int(clamp(raw, 0, max(mission.target, 0)))

    @staticmethod
    def _week_records(records: tuple[Record, ...], now: datetime) -> list[Record]:
        return AggregationEngine.records_between(records, start_of_local_week(now), now)

    @classmethod
    def _count_eco_travel(cls, records: tuple[Record, ...], now: datetime) -> int:
        return _eco_trips(cls._week_records(records, now))

    @staticmethod
    def _count_water_limit_days(records: tuple[Record, ...], now: datetime) -> int:
        window = _window(records, local_date(now), const.MISSION_WATER_LIMIT_DAYS)
        return _days_passing(
            window,
            lambda totals: totals.water < const.MISSION_WATER_LIMIT_MAX_LITERS,
        )

    @classmethod
    def _count_waste_reduction(cls, records: tuple[Record, ...], now: datetime) -> int:
        return sum(
            1
            for record in cls._week_records(records, now)
            if isinstance(record, RecycleRecord)
            or (
                isinstance(record, WasteRecord)
                and record.amount < const.MISSION_WASTE_REDUCTION_MAX_KG
            )
        )


# Register handlers at module load
GamificationEngine._register_handlers()
