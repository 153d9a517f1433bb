# File: config_flow.py
"""Config flow for the EcoScore integration.

A single instance is allowed; all user data lives in storage, and scoring
settings are edited through the options flow.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from .options_flow import EcoScoreOptionsFlowHandler


class EcoScoreConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for EcoScore."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Create the single EcoScore entry after a confirmation step."""
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        if user_input is not None:
            return self.async_create_entry(title=const.ECOSCORE_TITLE, data={})

        return self.async_show_form(step_id="user")

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return EcoScoreOptionsFlowHandler(config_entry)
