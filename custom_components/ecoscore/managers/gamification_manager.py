"""Gamification Manager - Serialized badge evaluation and issuance.

This manager handles the only mutation in the gamification flow:
- Reads the already-earned badge ids from the store
- Asks GamificationEngine which badges are newly satisfied
- Appends the new badge records (deduplicated by badge_id in the store)
- Emits the badge_earned signal and fires the public badge event

ARCHITECTURE:
- GamificationManager = STATEFUL orchestration (lock, persistence, events)
- GamificationEngine = Pure evaluation logic (STATELESS)

The read → evaluate → append sequence runs under an asyncio.Lock so two
evaluations triggered back to back can never issue the same badge twice.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.gamification_engine import GamificationEngine
from .base_manager import BaseManager

if TYPE_CHECKING:
    from datetime import datetime

    from homeassistant.core import HomeAssistant

    from ..coordinator import EcoScoreDataCoordinator
    from ..type_defs import BadgeRecordData


class GamificationManager(BaseManager):
    """Manager for badge evaluation.

    Responsibilities:
    - Re-evaluate badges whenever a record is logged or the coordinator
      refreshes on its schedule
    - Persist newly earned badges exactly once
    - Emit gamification events (badge_earned)

    NOT responsible for:
    - Score, streak or mission calculation (derived by the coordinator)
    - Record validation (handled by data_builders)
    """

    def __init__(
        self,
        hass: HomeAssistant,
        coordinator: EcoScoreDataCoordinator,
    ) -> None:
        """Initialize the GamificationManager."""
        super().__init__(hass, coordinator)
        self._lock = asyncio.Lock()

    async def async_setup(self) -> None:
        """Subscribe to record_logged so every new record triggers evaluation."""
        self.listen(const.SIGNAL_SUFFIX_RECORD_LOGGED, self._on_record_logged)
        const.LOGGER.debug("DEBUG: GamificationManager initialized")

    async def _on_record_logged(self, payload: dict[str, Any]) -> None:
        """Handle a newly logged record."""
        const.LOGGER.debug(
            "DEBUG: Record %s logged, evaluating badges",
            payload.get(const.RECORD_ID),
        )
        await self.async_evaluate_badges()

    async def async_evaluate_badges(
        self, now: datetime | None = None, refresh_snapshot: bool = True
    ) -> list[BadgeRecordData]:
        """Evaluate the catalog and persist newly earned badges.

        Args:
            now: Evaluation instant; defaults to the current time
            refresh_snapshot: Push a new snapshot when something was issued;
                False inside the coordinator's own update

        Returns:
            Badge records actually stored by this call (duplicates excluded).
        """
        async with self._lock:
            store = self.coordinator.store
            earned_ids = store.earned_badge_ids()
            candidates = GamificationEngine.evaluate_badges(
                self.coordinator.records, earned_ids, now
            )

            issued: list[BadgeRecordData] = []
            for badge_record in candidates:
                if await store.async_append_badge_record(badge_record):
                    issued.append(badge_record)

        for badge_record in issued:
            self._announce(badge_record)

        if issued and refresh_snapshot:
            self.coordinator.async_refresh_snapshot()
        return issued

    def _announce(self, badge_record: BadgeRecordData) -> None:
        """Emit the internal signal and fire the public event for one badge."""
        badge_id = badge_record[const.BADGE_RECORD_ID]
        badge = GamificationEngine.get_badge(badge_id)
        badge_name = badge.name if badge else badge_id

        const.LOGGER.info("INFO: Badge earned: %s", badge_name)
        self.emit(
            const.SIGNAL_SUFFIX_BADGE_EARNED,
            badge_id=badge_id,
            earned_at=badge_record[const.BADGE_RECORD_EARNED_AT],
        )
        self.hass.bus.async_fire(
            const.EVENT_BADGE_EARNED,
            {
                const.BADGE_RECORD_ID: badge_id,
                "name": badge_name,
                const.BADGE_RECORD_EARNED_AT: badge_record[const.BADGE_RECORD_EARNED_AT],
            },
        )
