"""Record builders shared by the engine, store and integration tests.

All fixtures are anchored on a fixed instant so calendar windows are
deterministic: NOW is Wednesday 2026-10-21 12:00 UTC, so the current week
started on Monday 2026-10-19.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any
import uuid

from custom_components.ecoscore import const
from custom_components.ecoscore.type_defs import (
    ElectricityRecord,
    RecycleRecord,
    TravelRecord,
    WasteRecord,
    WaterRecord,
)

NOW = datetime(2026, 10, 21, 12, 0, tzinfo=UTC)
TODAY = NOW.date()


def at(days_ago: int = 0, hour: int = 9, minute: int = 0) -> datetime:
    """Return an instant `days_ago` calendar days before NOW, at hour:minute UTC."""
    day = NOW - timedelta(days=days_ago)
    return day.replace(hour=hour, minute=minute, second=0, microsecond=0)


def _rid() -> str:
    return str(uuid.uuid4())


def water(amount: float, when: datetime | None = None) -> WaterRecord:
    return WaterRecord(_rid(), when or at(), amount, "L")


def electricity(amount: float, when: datetime | None = None) -> ElectricityRecord:
    return ElectricityRecord(_rid(), when or at(), amount, "kWh")


def travel(
    amount: float, mode: str | None = const.TRAVEL_MODE_WALK, when: datetime | None = None
) -> TravelRecord:
    return TravelRecord(_rid(), when or at(), amount, "km", mode=mode)


def waste(amount: float, when: datetime | None = None) -> WasteRecord:
    return WasteRecord(_rid(), when or at(), amount, "kg")


def recycle(amount: float, when: datetime | None = None) -> RecycleRecord:
    return RecycleRecord(_rid(), when or at(), amount, "kg")


def stored_record(
    category: str,
    value: Any,
    when: datetime | str | None = None,
    mode: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a record dict in the persisted JSON shape."""
    record: dict[str, Any] = {
        const.RECORD_ID: _rid(),
        const.RECORD_DATE: when if isinstance(when, str) else (when or at()).isoformat(),
        const.RECORD_TYPE: category,
        const.RECORD_VALUE: value,
        const.RECORD_UNIT: const.DEFAULT_UNITS.get(category, ""),
    }
    if mode is not None:
        record[const.RECORD_META] = {const.RECORD_META_MODE: mode}
    record.update(extra)
    return record


def stored_heavy_day(when: datetime) -> list[dict[str, Any]]:
    """Stored electricity and waste records that block the zero-usage badges.

    One day with 10 kWh and 1 kg inside the trailing windows keeps Energy
    Conscious and Waste Warrior locked, leaving water-based badges free.
    """
    return [
        stored_record(const.CATEGORY_ELECTRICITY, 10, when),
        stored_record(const.CATEGORY_WASTE, 1, when),
    ]
