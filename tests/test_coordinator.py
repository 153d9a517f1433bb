"""Integration tests for EcoScoreDataCoordinator.

The entry is set up through the config entry machinery with storage seeded
via hass_storage; records are dated relative to the real current time.
"""

# pylint: disable=redefined-outer-name  # Pytest fixtures redefine names

from datetime import timedelta

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.ecoscore import const
from custom_components.ecoscore.data_builders import RecordValidationError
from custom_components.ecoscore.utils.dt_utils import dt_now_utc
from tests.helpers import get_coordinator, setup_integration, stored_record


async def test_first_refresh_builds_empty_snapshot(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """A fresh install scores 100 with no streak and no badges issued yet.

    Seven quiet days already satisfy the water mission.
    """
    entry = await setup_integration(hass, mock_config_entry)
    data = get_coordinator(hass, entry).data

    assert data[const.SNAPSHOT_SCORE].score == 100
    assert data[const.SNAPSHOT_STREAK] == 0
    assert data[const.SNAPSHOT_LEVEL].level == 1
    assert data[const.SNAPSHOT_BADGES_EARNED] == []
    assert data[const.SNAPSHOT_MISSIONS] == {"m1": 0, "m2": 5, "m3": 0}
    assert len(data[const.SNAPSHOT_SCORE_HISTORY]) == const.SCORE_HISTORY_DAYS


async def test_log_record_updates_snapshot(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """Logging the reference day produces an EarthScore of 83."""
    entry = await setup_integration(hass, mock_config_entry)
    coordinator = get_coordinator(hass, entry)

    await coordinator.async_log_record({"type": "electricity", "value": 3})
    await coordinator.async_log_record({"type": "water", "value": 50})
    await coordinator.async_log_record({"type": "travel", "value": 5, "mode": "walk"})
    await coordinator.async_log_record({"type": "waste", "value": 0.25})
    await hass.async_block_till_done()

    data = coordinator.data
    assert data[const.SNAPSHOT_SCORE].score == 83
    assert data[const.SNAPSHOT_TODAY_TOTALS].water == 50
    assert data[const.SNAPSHOT_STREAK] == 1
    assert data[const.SNAPSHOT_MISSIONS]["m1"] == 1
    assert data[const.SNAPSHOT_SCORE_HISTORY][-1]["score"] == 83
    assert len(coordinator.store.list_records()) == 4


async def test_invalid_record_is_not_stored(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """Validation errors leave the log untouched."""
    entry = await setup_integration(hass, mock_config_entry)
    coordinator = get_coordinator(hass, entry)

    with pytest.raises(RecordValidationError):
        await coordinator.async_log_record({"type": "water", "value": -1})

    assert coordinator.store.list_records() == []


async def test_seeded_history_drives_streak_and_level(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,
    storage_payload,
) -> None:
    """Stored records from earlier days feed the streak and cumulative level."""
    now = dt_now_utc()
    storage_payload(
        {
            const.DATA_RECORDS: [
                stored_record("recycle", 1, now - timedelta(days=days))
                for days in range(6)
            ]
            + [stored_record("gas", 5, now)],
            const.DATA_BADGE_RECORDS: [],
            const.DATA_SETTINGS: {},
        }
    )
    entry = await setup_integration(hass, mock_config_entry)
    data = get_coordinator(hass, entry).data

    assert data[const.SNAPSHOT_STREAK] == 6
    # Six days scoring 100 each
    assert data[const.SNAPSHOT_LEVEL].total_score == 600
    assert data[const.SNAPSHOT_LEVEL].level == 2


async def test_log_preset_uses_preset_value_and_mode(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """Presets are looked up case-insensitively and logged as records."""
    entry = await setup_integration(hass, mock_config_entry)
    coordinator = get_coordinator(hass, entry)

    record = await coordinator.async_log_preset("travel", "bus commute")

    assert record[const.RECORD_VALUE] == 8
    assert record[const.RECORD_META] == {const.RECORD_META_MODE: "bus"}


async def test_log_preset_unknown_label(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """An unknown preset raises a validation error on the preset field."""
    entry = await setup_integration(hass, mock_config_entry)
    coordinator = get_coordinator(hass, entry)

    with pytest.raises(RecordValidationError) as err:
        await coordinator.async_log_preset("water", "Bath")

    assert err.value.field == const.FIELD_PRESET


async def test_set_settings_rescores(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """New baselines are persisted and applied to the snapshot."""
    entry = await setup_integration(hass, mock_config_entry)
    coordinator = get_coordinator(hass, entry)
    await coordinator.async_log_record({"type": "water", "value": 100})

    before = coordinator.data[const.SNAPSHOT_SCORE].components["water"]
    await coordinator.async_set_settings({const.CONF_BASELINE_WATER: 200})
    after = coordinator.data[const.SNAPSHOT_SCORE].components["water"]

    assert before == pytest.approx(50)
    assert after == pytest.approx(75)
    assert coordinator.settings.baselines.water_per_day == 200


async def test_reset_data_clears_everything(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """Reset drops records, badges and settings."""
    entry = await setup_integration(hass, mock_config_entry)
    coordinator = get_coordinator(hass, entry)
    await coordinator.async_log_record({"type": "water", "value": 10})
    await coordinator.async_set_settings({const.CONF_WEIGHT_WATER: 0.5})
    await hass.async_block_till_done()

    await coordinator.async_reset_data()

    assert coordinator.store.list_records() == []
    assert coordinator.settings.weights.water == 0.25
    assert coordinator.data[const.SNAPSHOT_STREAK] == 0
