# File: options_flow.py
"""Options Flow for the EcoScore integration.

Edits the scoring baselines and weights. Values are validated with
data_builders and written to storage through the coordinator, so the
options of the config entry itself stay empty.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries

from . import const
from .data_builders import settings_to_flat, validate_settings_input


class EcoScoreOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for editing scoring settings."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""

    def _get_coordinator(self):
        """Get the coordinator from hass.data."""
        return self.hass.data[const.DOMAIN][self.config_entry.entry_id][
            const.COORDINATOR
        ]

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        """Show and apply the baselines/weights form."""
        coordinator = self._get_coordinator()
        errors: dict[str, str] = {}

        if user_input is not None:
            errors = validate_settings_input(user_input)
            if not errors:
                await coordinator.async_set_settings(user_input)
                const.LOGGER.debug("DEBUG: Options flow saved settings: %s", user_input)
                return self.async_create_entry(title="", data={})
            defaults = {**settings_to_flat(coordinator.settings), **user_input}
        else:
            defaults = settings_to_flat(coordinator.settings)

        return self.async_show_form(
            step_id="init",
            data_schema=build_settings_schema(defaults),
            errors=errors,
        )


def build_settings_schema(defaults: dict[str, Any]) -> vol.Schema:
    """Build the settings form schema with the given defaults."""
    fields = {}
    for key in (
        const.CONF_BASELINE_ELECTRICITY,
        const.CONF_BASELINE_WATER,
        const.CONF_BASELINE_TRAVEL,
        const.CONF_BASELINE_WASTE,
        const.CONF_WEIGHT_ELECTRICITY,
        const.CONF_WEIGHT_TRAVEL,
        const.CONF_WEIGHT_WATER,
        const.CONF_WEIGHT_WASTE,
    ):
        fields[vol.Required(key, default=defaults[key])] = vol.Coerce(float)
    return vol.Schema(fields)
