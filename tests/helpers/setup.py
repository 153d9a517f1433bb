"""Integration setup helpers.

    entry = await setup_integration(hass, mock_config_entry)
    coordinator = get_coordinator(hass, entry)
    entity_id = sensor_entity_id(hass, entry, const.SENSOR_UID_SUFFIX_EARTH_SCORE)
"""

from __future__ import annotations

from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.ecoscore import const
from custom_components.ecoscore.coordinator import EcoScoreDataCoordinator


async def setup_integration(
    hass: HomeAssistant, entry: MockConfigEntry
) -> MockConfigEntry:
    """Add the entry to hass and set it up through the config entry machinery."""
    entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()
    return entry


def get_coordinator(
    hass: HomeAssistant, entry: MockConfigEntry
) -> EcoScoreDataCoordinator:
    """Return the coordinator of a loaded entry."""
    return hass.data[const.DOMAIN][entry.entry_id][const.COORDINATOR]


def sensor_entity_id(hass: HomeAssistant, entry: MockConfigEntry, uid_suffix: str) -> str:
    """Resolve a sensor entity id from its unique id suffix."""
    entity_id = er.async_get(hass).async_get_entity_id(
        "sensor", const.DOMAIN, f"{entry.entry_id}{uid_suffix}"
    )
    assert entity_id is not None, f"No sensor with unique id suffix {uid_suffix}"
    return entity_id
