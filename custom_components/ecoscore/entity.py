"""Base entity classes for EcoScore integration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import EcoScoreDataCoordinator

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry


def create_device_info(entry: ConfigEntry) -> DeviceInfo:
    """Return the single service device grouping all EcoScore entities."""
    return DeviceInfo(
        identifiers={(const.DOMAIN, entry.entry_id)},
        name=entry.title or const.ECOSCORE_TITLE,
        manufacturer=const.ECOSCORE_TITLE,
        entry_type=DeviceEntryType.SERVICE,
    )


class EcoScoreCoordinatorEntity(CoordinatorEntity[EcoScoreDataCoordinator]):
    """Base entity class for EcoScore sensors with typed coordinator access."""

    _attr_has_entity_name = True

    def __init__(
        self, coordinator: EcoScoreDataCoordinator, entry: ConfigEntry, uid_suffix: str
    ) -> None:
        """Initialize the entity with a unique id scoped to the config entry."""
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}{uid_suffix}"
        self._attr_device_info = create_device_info(entry)

    @property
    def coordinator(self) -> EcoScoreDataCoordinator:
        """Return typed coordinator."""
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: EcoScoreDataCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)

    def snapshot_value(self, key: str, default: Any = None) -> Any:
        """Return one value from the coordinator snapshot."""
        if not self.coordinator.data:
            return default
        return self.coordinator.data.get(key, default)
