"""Tests for EcoScore entry setup, unload and removal."""

from typing import Any

from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.ecoscore import const
from tests.helpers import setup_integration


async def test_setup_and_unload_entry(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """Unloading removes the entry data and the services."""
    entry = await setup_integration(hass, mock_config_entry)
    assert entry.state is ConfigEntryState.LOADED
    assert entry.entry_id in hass.data[const.DOMAIN]

    assert await hass.config_entries.async_unload(entry.entry_id)
    await hass.async_block_till_done()

    assert entry.state is ConfigEntryState.NOT_LOADED
    assert entry.entry_id not in hass.data[const.DOMAIN]
    assert not hass.services.has_service(const.DOMAIN, const.SERVICE_LOG_RECORD)


async def test_remove_entry_deletes_storage(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,
    hass_storage: dict[str, Any],
) -> None:
    """Removing the entry deletes the storage file."""
    entry = await setup_integration(hass, mock_config_entry)
    await hass.services.async_call(
        const.DOMAIN,
        const.SERVICE_LOG_RECORD,
        {"type": "water", "value": 10},
        blocking=True,
    )
    await hass.async_block_till_done()
    assert const.STORAGE_KEY in hass_storage

    await hass.config_entries.async_remove(entry.entry_id)
    await hass.async_block_till_done()

    assert const.STORAGE_KEY not in hass_storage
