"""Shared fixtures for EcoScore tests."""

from typing import Any
from zoneinfo import ZoneInfo

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.ecoscore.const import DOMAIN, ECOSCORE_TITLE, STORAGE_KEY
from custom_components.ecoscore.utils.dt_utils import set_default_timezone
from tests.helpers import setup_integration

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture(autouse=True)
def utc_default_timezone() -> Any:
    """Run every test with UTC day boundaries unless it overrides them.

    Entry setup copies the Home Assistant time zone into dt_utils, which is
    module state and would otherwise leak between tests.
    """
    set_default_timezone(ZoneInfo("UTC"))
    yield
    set_default_timezone(ZoneInfo("UTC"))


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title=ECOSCORE_TITLE,
        data={},
        entry_id="test_entry_id",
    )


@pytest.fixture
def storage_payload(hass_storage: dict[str, Any]) -> Any:
    """Return a function that seeds the EcoScore storage file before setup."""

    def _seed(data: dict[str, Any]) -> None:
        hass_storage[STORAGE_KEY] = {
            "version": 1,
            "minor_version": 1,
            "key": STORAGE_KEY,
            "data": data,
        }

    return _seed


@pytest.fixture
async def init_integration(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
) -> MockConfigEntry:
    """Set up the integration with empty storage."""
    return await setup_integration(hass, mock_config_entry)
