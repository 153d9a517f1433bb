# File: store.py
"""Handles persistent data storage for the EcoScore integration.

Uses Home Assistant's Storage helper to save and load the record log, issued
badge records and scoring settings, ensuring the state is preserved across
restarts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.helpers.storage import Store

from . import const
from .data_builders import parse_settings
from .utils.dt_utils import dt_now_iso

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .type_defs import BadgeRecordData, EcoSettings, RecordData


class EcoScoreStore:
    """Handles persistent storage operations for EcoScore data.

    Thin wrapper around Home Assistant's Store API. Records are append-only;
    badge records are deduplicated by badge_id; settings are read through
    parse_settings so corrupted values fall back to defaults.
    """

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the store.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._data: dict[str, Any] = {}  # In-memory data cache for quick access.

    @staticmethod
    def get_default_structure() -> dict[str, Any]:
        """Return canonical empty data structure for fresh installations.

        This is the SINGLE SOURCE OF TRUTH for EcoScore storage schema.
        Settings start empty; get_settings() supplies the defaults.
        """
        return {
            const.DATA_META: {
                const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION_CURRENT,
                const.DATA_META_LAST_SAVED: None,
            },
            const.DATA_RECORDS: [],
            const.DATA_BADGE_RECORDS: [],
            const.DATA_SETTINGS: {},
        }

    async def async_initialize(self) -> None:
        """Load data from storage during startup.

        If no data exists, initializes with an empty structure. Missing or
        malformed buckets in existing data are reset individually.
        """
        const.LOGGER.debug("DEBUG: EcoScoreStore: Loading data from storage")
        existing_data = await self._store.async_load()

        if existing_data is None:
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = EcoScoreStore.get_default_structure()
            return

        if not isinstance(existing_data, dict):
            const.LOGGER.warning(
                "WARNING: Storage content is not a mapping (%s). Starting fresh",
                type(existing_data).__name__,
            )
            self._data = EcoScoreStore.get_default_structure()
            return

        self._data = existing_data
        defaults = EcoScoreStore.get_default_structure()
        for key, expected in (
            (const.DATA_META, dict),
            (const.DATA_RECORDS, list),
            (const.DATA_BADGE_RECORDS, list),
        ):
            if not isinstance(self._data.get(key), expected):
                const.LOGGER.warning(
                    "WARNING: Storage bucket '%s' missing or malformed. Resetting it",
                    key,
                )
                self._data[key] = defaults[key]
        # Settings are recovered lazily by get_settings()
        self._data.setdefault(const.DATA_SETTINGS, {})

        const.LOGGER.debug(
            "DEBUG: Loaded existing data from storage: %s",
            {
                "records": len(self._data[const.DATA_RECORDS]),
                "badge_records": len(self._data[const.DATA_BADGE_RECORDS]),
            },
        )

    @property
    def data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    def get_storage_path(self) -> str:
        """Get the storage file path."""
        return self._store.path

    # -------------------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------------------

    def list_records(self) -> list[RecordData]:
        """Return a snapshot of the stored record log."""
        return list(self._data.get(const.DATA_RECORDS, []))

    async def async_append_record(self, record: RecordData) -> None:
        """Append one validated record and persist."""
        self._data.setdefault(const.DATA_RECORDS, []).append(record)
        const.LOGGER.debug(
            "DEBUG: Appended %s record %s", record[const.RECORD_TYPE], record[const.RECORD_ID]
        )
        await self.async_save()

    # -------------------------------------------------------------------------------------
    # Badge records
    # -------------------------------------------------------------------------------------

    def list_badge_records(self) -> list[BadgeRecordData]:
        """Return a snapshot of the issued badge records."""
        return list(self._data.get(const.DATA_BADGE_RECORDS, []))

    def earned_badge_ids(self) -> set[str]:
        """Return the set of badge ids already issued."""
        return {
            badge[const.BADGE_RECORD_ID]
            for badge in self.list_badge_records()
            if isinstance(badge, dict) and const.BADGE_RECORD_ID in badge
        }

    async def async_append_badge_record(self, badge_record: BadgeRecordData) -> bool:
        """Append a badge record unless its badge_id was already issued.

        Returns:
            True when the record was stored, False when it was a duplicate.
        """
        badge_id = badge_record[const.BADGE_RECORD_ID]
        if badge_id in self.earned_badge_ids():
            const.LOGGER.debug(
                "DEBUG: Badge '%s' already issued, skipping duplicate", badge_id
            )
            return False

        self._data.setdefault(const.DATA_BADGE_RECORDS, []).append(badge_record)
        await self.async_save()
        return True

    # -------------------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------------------

    def get_settings(self) -> EcoSettings:
        """Return the typed settings, falling back to defaults where corrupted."""
        return parse_settings(self._data.get(const.DATA_SETTINGS))

    async def async_put_settings(self, settings: EcoSettings) -> None:
        """Replace the stored settings and persist."""
        self._data[const.DATA_SETTINGS] = settings.as_dict()
        const.LOGGER.debug("DEBUG: Settings updated: %s", self._data[const.DATA_SETTINGS])
        await self.async_save()

    # -------------------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------------------

    async def async_save(self) -> None:
        """Save the current data structure to storage asynchronously.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
            OSError: Logged when file system issues prevent saving.
            TypeError: Logged when data contains non-serializable types.
            ValueError: Logged when data is invalid for JSON serialization.
        """
        self._data.setdefault(const.DATA_META, {})[const.DATA_META_LAST_SAVED] = (
            dt_now_iso()
        )
        try:
            await self._store.async_save(self._data)
            const.LOGGER.debug("DEBUG: Data saved successfully to storage")
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s. "
                "Data contains types that cannot be converted to JSON",
                err,
            )
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s. "
                "Data structure may be corrupted",
                err,
            )

    async def async_clear_data(self) -> None:
        """Clear all stored data and reset to default structure."""
        const.LOGGER.warning("WARNING: Clearing all EcoScore data and resetting storage")
        self._data.clear()
        self._data = EcoScoreStore.get_default_structure()
        await self.async_save()

    async def async_delete_storage(self) -> None:
        """Delete the storage file completely from disk."""
        await self.async_clear_data()
        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s",
                self._store.path,
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
