# File: sensor.py
"""Sensors for the EcoScore integration.

Sensors Defined in This File (4 + one per mission):

01. EarthScoreSensor - today's EarthScore with components, bonus, tips and insights
02. StreakSensor - consecutive days with at least one logged record
03. LevelSensor - level reached by the cumulative EarthScore
04. BadgesSensor - number of badges earned, with per-badge progress
05. MissionProgressSensor - weekly progress of one mission
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity, SensorStateClass
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .coordinator import EcoScoreDataCoordinator
from .entity import EcoScoreCoordinatorEntity
from .engines import BADGE_CATALOG
from .type_defs import DailyTotals, LevelInfo, MetricInsight, Mission, ScoreResult
from .utils.math_utils import round_value


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for EcoScore integration."""
    data = hass.data[const.DOMAIN][entry.entry_id]
    coordinator: EcoScoreDataCoordinator = data[const.COORDINATOR]

    entities: list[SensorEntity] = [
        EarthScoreSensor(coordinator, entry),
        StreakSensor(coordinator, entry),
        LevelSensor(coordinator, entry),
        BadgesSensor(coordinator, entry),
    ]
    entities.extend(
        MissionProgressSensor(coordinator, entry, mission)
        for mission in coordinator.missions
    )
    async_add_entities(entities)


def _insight_attributes(insight: MetricInsight) -> dict[str, Any]:
    return {
        "average": round_value(insight.average),
        "min": round_value(insight.minimum),
        "max": round_value(insight.maximum),
        "trend": round_value(insight.trend),
        "days": insight.days,
    }


# ------------------------------------------------------------------------------------------
class EarthScoreSensor(EcoScoreCoordinatorEntity, SensorEntity):
    """Today's EarthScore (0-100).

    Attributes expose the per-category components, the bonus, the weighted
    breakdown, today's totals, the trailing 7-day score history, the current
    recommendations and per-category insights.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_EARTH_SCORE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:earth"

    def __init__(self, coordinator: EcoScoreDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_EARTH_SCORE)

    @property
    def native_value(self) -> int | None:
        """Return today's score."""
        result: ScoreResult | None = self.snapshot_value(const.SNAPSHOT_SCORE)
        return result.score if result else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the score audit values."""
        result: ScoreResult | None = self.snapshot_value(const.SNAPSHOT_SCORE)
        totals: DailyTotals | None = self.snapshot_value(const.SNAPSHOT_TODAY_TOTALS)
        insights: dict[str, MetricInsight] = self.snapshot_value(
            const.SNAPSHOT_INSIGHTS, {}
        )
        if result is None:
            return {}
        return {
            const.ATTR_COMPONENTS: {
                key: round_value(value) for key, value in result.components.items()
            },
            const.ATTR_BONUS: round_value(result.bonus),
            const.ATTR_BREAKDOWN: {
                key: round_value(value) for key, value in result.breakdown.items()
            },
            const.ATTR_TOTALS: totals.as_dict() if totals else {},
            const.ATTR_SCORE_HISTORY: self.snapshot_value(
                const.SNAPSHOT_SCORE_HISTORY, []
            ),
            const.ATTR_RECOMMENDATIONS: [
                tip.as_dict()
                for tip in self.snapshot_value(const.SNAPSHOT_RECOMMENDATIONS, [])
            ],
            const.ATTR_INSIGHTS: {
                category: _insight_attributes(insight)
                for category, insight in insights.items()
            },
        }


# ------------------------------------------------------------------------------------------
class StreakSensor(EcoScoreCoordinatorEntity, SensorEntity):
    """Consecutive days, ending today, with at least one record."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_STREAK
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = "days"
    _attr_icon = "mdi:fire"

    def __init__(self, coordinator: EcoScoreDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_STREAK)

    @property
    def native_value(self) -> int:
        """Return the current streak."""
        return self.snapshot_value(const.SNAPSHOT_STREAK, 0)


# ------------------------------------------------------------------------------------------
class LevelSensor(EcoScoreCoordinatorEntity, SensorEntity):
    """Level reached by the cumulative EarthScore."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_LEVEL
    _attr_icon = "mdi:trophy-outline"

    def __init__(self, coordinator: EcoScoreDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_LEVEL)

    @property
    def native_value(self) -> int | None:
        """Return the level number."""
        level: LevelInfo | None = self.snapshot_value(const.SNAPSHOT_LEVEL)
        return level.level if level else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose title, progress and the next threshold."""
        level: LevelInfo | None = self.snapshot_value(const.SNAPSHOT_LEVEL)
        if level is None:
            return {}
        return {
            const.ATTR_LEVEL_TITLE: level.title,
            const.ATTR_TOTAL_SCORE: level.total_score,
            const.ATTR_LEVEL_PROGRESS: round_value(level.progress),
            const.ATTR_NEXT_THRESHOLD: level.next_threshold,
        }


# ------------------------------------------------------------------------------------------
class BadgesSensor(EcoScoreCoordinatorEntity, SensorEntity):
    """Number of badges earned.

    Attributes list the earned badges with their earn time and the progress
    (percent) of every badge in the catalog.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_BADGES
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:medal-outline"

    def __init__(self, coordinator: EcoScoreDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_BADGES)

    @property
    def native_value(self) -> int:
        """Return the number of badges earned."""
        return len(self.snapshot_value(const.SNAPSHOT_BADGES_EARNED, []))

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose earned badges and progress toward the rest."""
        progress = self.snapshot_value(const.SNAPSHOT_BADGE_PROGRESS, {})
        names = {badge.badge_id: badge.name for badge in BADGE_CATALOG}
        earned = []
        for badge in self.snapshot_value(const.SNAPSHOT_BADGES_EARNED, []):
            badge_id = badge[const.BADGE_RECORD_ID]
            earned.append(
                {
                    const.BADGE_RECORD_ID: badge_id,
                    "name": names.get(badge_id, badge_id),
                    const.BADGE_RECORD_EARNED_AT: badge[const.BADGE_RECORD_EARNED_AT],
                }
            )
        return {
            const.ATTR_EARNED_BADGES: earned,
            const.ATTR_BADGE_PROGRESS: {
                badge_id: round_value(value * 100)
                for badge_id, value in progress.items()
            },
        }


# ------------------------------------------------------------------------------------------
class MissionProgressSensor(EcoScoreCoordinatorEntity, SensorEntity):
    """Weekly progress of one mission, between 0 and the mission target."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_MISSION
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(
        self,
        coordinator: EcoScoreDataCoordinator,
        entry: ConfigEntry,
        mission: Mission,
    ):
        """Initialize the sensor.

        Args:
            coordinator: EcoScoreDataCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            mission: Mission definition tracked by this sensor.
        """
        super().__init__(
            coordinator,
            entry,
            f"{const.SENSOR_UID_SUFFIX_MISSION}{mission.mission_id}",
        )
        self._mission = mission
        self._attr_translation_placeholders = {"mission": mission.title}
        self._attr_icon = mission.icon or "mdi:flag-checkered"

    @property
    def native_value(self) -> int:
        """Return the mission progress."""
        missions = self.snapshot_value(const.SNAPSHOT_MISSIONS, {})
        return missions.get(self._mission.mission_id, 0)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the mission definition."""
        return {
            const.ATTR_MISSION_TITLE: self._mission.title,
            const.ATTR_MISSION_DESCRIPTION: self._mission.description,
            const.ATTR_MISSION_TARGET: self._mission.target,
        }
