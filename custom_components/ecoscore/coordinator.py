# File: coordinator.py
"""Coordinator for the EcoScore integration.

Owns the record log snapshot and derives everything the entities show from
it: today's totals and EarthScore, the streak, the level, weekly mission
progress, badge progress, the trailing score history, tips and insights.
Nothing derived is persisted; only records, badge records and settings live
in the store.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.helpers.dispatcher import async_dispatcher_send
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from . import const
from .data_builders import (
    RecordValidationError,
    build_record,
    find_preset,
    parse_records,
    settings_from_flat,
)
from .engines import (
    DEFAULT_MISSIONS,
    AggregationEngine,
    GamificationEngine,
    RecommendationEngine,
    ScoreEngine,
    StreakEngine,
)
from .managers import GamificationManager, get_event_signal
from .utils.dt_utils import dt_now_utc, local_date

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from .store import EcoScoreStore
    from .type_defs import EcoSettings, Mission, Record, RecordData


class EcoScoreDataCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator for EcoScore integration.

    The periodic refresh re-evaluates badges and re-derives the snapshot, so
    a day rollover is reflected without any new record being logged. Trailing
    windows move with the calendar, so a badge can become due on a refresh.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        store: EcoScoreStore,
    ) -> None:
        """Initialize the EcoScoreDataCoordinator."""
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(minutes=const.DEFAULT_UPDATE_INTERVAL),
        )
        self.store = store
        self.missions: tuple[Mission, ...] = DEFAULT_MISSIONS
        self.gamification_manager = GamificationManager(hass, self)
        self._records: tuple[Record, ...] | None = None
        self._managers_ready = False

    async def async_setup(self) -> None:
        """Set up managers after the first refresh."""
        await self.gamification_manager.async_setup()
        self._managers_ready = True

    # -------------------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------------------

    @property
    def records(self) -> tuple[Record, ...]:
        """Typed record history, parsed once per change of the stored log."""
        if self._records is None:
            self._records = parse_records(self.store.list_records())
        return self._records

    @property
    def settings(self) -> EcoSettings:
        """Current scoring settings."""
        return self.store.get_settings()

    def _invalidate(self) -> None:
        self._records = None

    def build_snapshot(self, now: datetime | None = None) -> dict[str, Any]:
        """Derive every displayed value from the current record history."""
        when = now or dt_now_utc()
        today = local_date(when)
        records = self.records
        settings = self.settings
        badge_records = self.store.list_badge_records()
        earned_ids = self.store.earned_badge_ids()

        today_totals = AggregationEngine.daily_totals(records, today)
        today_score = ScoreEngine.score_for_settings(today_totals, settings)
        score_history = [
            {
                "date": day.isoformat(),
                "score": ScoreEngine.score_for_settings(totals, settings).score,
            }
            for day, totals in AggregationEngine.daily_series(
                records, const.SCORE_HISTORY_DAYS, end=today
            )
        ]

        return {
            const.SNAPSHOT_TODAY_TOTALS: today_totals,
            const.SNAPSHOT_SCORE: today_score,
            const.SNAPSHOT_STREAK: StreakEngine.streak(records, today),
            const.SNAPSHOT_LEVEL: ScoreEngine.level_for(
                ScoreEngine.total_score(records, settings)
            ),
            const.SNAPSHOT_MISSIONS: {
                mission.mission_id: GamificationEngine.mission_progress(
                    records, mission, when
                )
                for mission in self.missions
            },
            const.SNAPSHOT_BADGES_EARNED: badge_records,
            const.SNAPSHOT_BADGE_PROGRESS: GamificationEngine.badge_progress(
                records, earned_ids, when
            ),
            const.SNAPSHOT_SCORE_HISTORY: score_history,
            const.SNAPSHOT_RECOMMENDATIONS: RecommendationEngine.recommendations(
                records, today_score.score, when
            ),
            const.SNAPSHOT_INSIGHTS: RecommendationEngine.insights(records, when),
        }

    async def _async_update_data(self) -> dict[str, Any]:
        """Periodic update."""
        try:
            if self._managers_ready:
                await self.gamification_manager.async_evaluate_badges(
                    refresh_snapshot=False
                )
            return self.build_snapshot()
        except (KeyError, TypeError, ValueError) as err:
            raise UpdateFailed(f"Error updating EcoScore data: {err}") from err

    def async_refresh_snapshot(self) -> None:
        """Push a freshly derived snapshot to all entities."""
        self.async_set_updated_data(self.build_snapshot())

    # -------------------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------------------

    async def async_log_record(self, user_input: Mapping[str, Any]) -> RecordData:
        """Validate, persist and announce a new record.

        Raises:
            RecordValidationError: If the input does not describe a valid record.
        """
        record = build_record(user_input)
        await self.store.async_append_record(record)
        self._invalidate()
        const.LOGGER.info(
            "INFO: Logged %s %s %s",
            record[const.RECORD_VALUE],
            record[const.RECORD_UNIT],
            record[const.RECORD_TYPE],
        )

        self.async_refresh_snapshot()
        async_dispatcher_send(
            self.hass,
            get_event_signal(self.config_entry.entry_id, const.SIGNAL_SUFFIX_RECORD_LOGGED),
            dict(record),
        )
        return record

    async def async_log_preset(
        self, category: str, label: str, date: Any = None
    ) -> RecordData:
        """Log a record from the preset table.

        Raises:
            RecordValidationError: If no preset matches category and label.
        """
        preset = find_preset(category, label)
        if preset is None:
            raise RecordValidationError(
                field=const.FIELD_PRESET,
                translation_key="unknown_preset",
                placeholders={"preset": label, "type": category},
            )

        user_input: dict[str, Any] = {
            const.FIELD_TYPE: category,
            const.FIELD_VALUE: preset.value,
        }
        if preset.mode is not None:
            user_input[const.FIELD_MODE] = preset.mode
        if date is not None:
            user_input[const.FIELD_DATE] = date
        return await self.async_log_record(user_input)

    async def async_evaluate_badges(self) -> list[str]:
        """Evaluate badges now and return the ids newly issued."""
        issued = await self.gamification_manager.async_evaluate_badges()
        return [badge[const.BADGE_RECORD_ID] for badge in issued]

    async def async_set_settings(self, user_input: Mapping[str, Any]) -> EcoSettings:
        """Merge flat baseline/weight input over the stored settings.

        Raises:
            RecordValidationError: If any value is out of range.
        """
        settings = settings_from_flat(user_input, self.settings)
        await self.store.async_put_settings(settings)
        self.async_refresh_snapshot()
        return settings

    async def async_reset_data(self) -> None:
        """Drop all records, badges and settings."""
        await self.store.async_clear_data()
        self._invalidate()
        self.async_refresh_snapshot()
