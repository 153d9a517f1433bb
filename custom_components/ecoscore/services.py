# File: services.py
"""Defines custom services for the EcoScore integration.

These services allow logging records and managing settings from scripts,
automations and dashboards.
"""

from __future__ import annotations

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .coordinator import EcoScoreDataCoordinator
from .data_builders import RecordValidationError

# --- Service Schemas ---
LOG_RECORD_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TYPE): vol.In(const.CATEGORIES),
        vol.Required(const.FIELD_VALUE): vol.Coerce(float),
        vol.Optional(const.FIELD_UNIT): cv.string,
        vol.Optional(const.FIELD_MODE): vol.In(const.TRAVEL_MODES),
        vol.Optional(const.FIELD_DATE): cv.string,
    }
)

LOG_PRESET_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TYPE): vol.In(const.CATEGORIES),
        vol.Required(const.FIELD_PRESET): cv.string,
        vol.Optional(const.FIELD_DATE): cv.string,
    }
)

EVALUATE_BADGES_SCHEMA = vol.Schema({})

SET_SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.CONF_BASELINE_ELECTRICITY): vol.Coerce(float),
        vol.Optional(const.CONF_BASELINE_WATER): vol.Coerce(float),
        vol.Optional(const.CONF_BASELINE_TRAVEL): vol.Coerce(float),
        vol.Optional(const.CONF_BASELINE_WASTE): vol.Coerce(float),
        vol.Optional(const.CONF_WEIGHT_ELECTRICITY): vol.Coerce(float),
        vol.Optional(const.CONF_WEIGHT_TRAVEL): vol.Coerce(float),
        vol.Optional(const.CONF_WEIGHT_WATER): vol.Coerce(float),
        vol.Optional(const.CONF_WEIGHT_WASTE): vol.Coerce(float),
    }
)

RESET_DATA_SCHEMA = vol.Schema({})


def _get_coordinator(hass: HomeAssistant) -> EcoScoreDataCoordinator | None:
    """Return the coordinator of the (single) EcoScore entry."""
    domain_entries = hass.data.get(const.DOMAIN)
    if not domain_entries:
        return None
    entry_data = next(iter(domain_entries.values()), None)
    return entry_data[const.COORDINATOR] if entry_data else None


def async_setup_services(hass: HomeAssistant) -> None:
    """Register EcoScore services."""

    async def handle_log_record(call: ServiceCall) -> ServiceResponse:
        """Handle logging one consumption or activity record."""
        coordinator = _get_coordinator(hass)
        if coordinator is None:
            const.LOGGER.warning("WARNING: Log Record: %s", const.MSG_NO_ENTRY_FOUND)
            return None

        try:
            record = await coordinator.async_log_record(dict(call.data))
        except RecordValidationError as err:
            raise HomeAssistantError(f"Invalid record: {err}") from err
        return dict(record)

    async def handle_log_preset(call: ServiceCall) -> ServiceResponse:
        """Handle logging a record from the preset table."""
        coordinator = _get_coordinator(hass)
        if coordinator is None:
            const.LOGGER.warning("WARNING: Log Preset: %s", const.MSG_NO_ENTRY_FOUND)
            return None

        category = call.data[const.FIELD_TYPE]
        label = call.data[const.FIELD_PRESET]
        try:
            record = await coordinator.async_log_preset(
                category, label, call.data.get(const.FIELD_DATE)
            )
        except RecordValidationError as err:
            if err.field == const.FIELD_PRESET:
                raise HomeAssistantError(
                    const.ERROR_UNKNOWN_PRESET_FMT.format(label, category)
                ) from err
            raise HomeAssistantError(f"Invalid record: {err}") from err
        return dict(record)

    async def handle_evaluate_badges(call: ServiceCall) -> ServiceResponse:
        """Handle an explicit badge evaluation."""
        coordinator = _get_coordinator(hass)
        if coordinator is None:
            const.LOGGER.warning(
                "WARNING: Evaluate Badges: %s", const.MSG_NO_ENTRY_FOUND
            )
            return None

        new_badges = await coordinator.async_evaluate_badges()
        return {"new_badges": new_badges}

    async def handle_set_settings(call: ServiceCall) -> None:
        """Handle updating baselines and weights."""
        coordinator = _get_coordinator(hass)
        if coordinator is None:
            const.LOGGER.warning("WARNING: Set Settings: %s", const.MSG_NO_ENTRY_FOUND)
            return

        try:
            settings = await coordinator.async_set_settings(dict(call.data))
        except RecordValidationError as err:
            raise HomeAssistantError(f"Invalid settings: {err}") from err
        const.LOGGER.info("INFO: Settings updated: %s", settings.as_dict())

    async def handle_reset_data(call: ServiceCall) -> None:
        """Handle wiping all records, badges and settings."""
        coordinator = _get_coordinator(hass)
        if coordinator is None:
            const.LOGGER.warning("WARNING: Reset Data: %s", const.MSG_NO_ENTRY_FOUND)
            return

        await coordinator.async_reset_data()
        const.LOGGER.info("INFO: All EcoScore data has been reset")

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_LOG_RECORD,
        handle_log_record,
        schema=LOG_RECORD_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_LOG_PRESET,
        handle_log_preset,
        schema=LOG_PRESET_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_EVALUATE_BADGES,
        handle_evaluate_badges,
        schema=EVALUATE_BADGES_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SET_SETTINGS,
        handle_set_settings,
        schema=SET_SETTINGS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RESET_DATA,
        handle_reset_data,
        schema=RESET_DATA_SCHEMA,
    )

    const.LOGGER.info("INFO: EcoScore services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister EcoScore services when unloading the integration."""
    services = [
        const.SERVICE_LOG_RECORD,
        const.SERVICE_LOG_PRESET,
        const.SERVICE_EVALUATE_BADGES,
        const.SERVICE_SET_SETTINGS,
        const.SERVICE_RESET_DATA,
    ]

    for service in services:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: EcoScore services have been unregistered")
