"""Test helpers for EcoScore tests.

This module re-exports record builders and setup helpers for convenient imports:

    from tests.helpers import NOW, at, water, travel, setup_integration

See individual modules for full documentation:
- records.py: Typed and stored record builders anchored on NOW
- setup.py: Config entry setup and entity lookup
"""

from tests.helpers.records import (
    NOW,
    TODAY,
    at,
    electricity,
    recycle,
    stored_heavy_day,
    stored_record,
    travel,
    waste,
    water,
)
from tests.helpers.setup import get_coordinator, sensor_entity_id, setup_integration

__all__ = [
    "NOW",
    "TODAY",
    "at",
    "electricity",
    "get_coordinator",
    "recycle",
    "sensor_entity_id",
    "setup_integration",
    "stored_heavy_day",
    "stored_record",
    "travel",
    "waste",
    "water",
]
