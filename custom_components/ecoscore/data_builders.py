"""Record, badge record and settings builders.

This module is the SINGLE SOURCE OF TRUTH for:
- Record validation at ingestion (build_record)
- Conversion of persisted records into typed record variants (parse_record)
- Settings defaults and recovery from corrupted storage (default_settings,
  parse_settings)
- Logging presets

## Negative amount policy

New records with a negative amount are REJECTED at ingestion
(RecordValidationError). Records already in storage are never rewritten;
a negative stored value is treated as 0 when parsed, with a warning, so no
aggregation can ever produce a negative total.

## Unknown categories

A stored record whose `type` is not one of const.CATEGORIES parses to None
and is skipped by every engine. This keeps older builds forward compatible
with records written by newer ones.

Consumers:
- services.py (log_record, log_preset, set_settings)
- config_flow.py (options flow settings)
- store.py (settings recovery)
- coordinator.py (history parsing)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import math
from typing import Any
import uuid

from . import const
from .type_defs import (
    RECORD_TYPES,
    BadgeRecordData,
    Baselines,
    EcoSettings,
    Preset,
    Record,
    RecordData,
    TravelRecord,
    Weights,
)
from .utils.dt_utils import dt_now_utc, dt_parse, dt_to_utc

# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class RecordValidationError(ValueError):
    """Validation error with field-specific information.

    Attributes:
        field: The FIELD_* / CONF_* constant identifying the failing input
        translation_key: Machine-readable reason
        placeholders: Optional dict for message placeholders

    Example:
        raise RecordValidationError(
            field=const.FIELD_VALUE,
            translation_key="negative_amount",
            placeholders={"value": "-3"},
        )
    """

    def __init__(
        self,
        field: str,
        translation_key: str,
        placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize RecordValidationError."""
        self.field = field
        self.translation_key = translation_key
        self.placeholders = placeholders or {}
        super().__init__(
            f"{translation_key}: {field}"
            + (f" ({self.placeholders})" if self.placeholders else "")
        )


# ==============================================================================
# PRESETS
# ==============================================================================

PRESETS: dict[str, tuple[Preset, ...]] = {
    const.CATEGORY_WATER: (
        Preset("Quick shower (5 min)", 50),
        Preset("Normal shower (8 min)", 80),
        Preset("Long shower (12 min)", 120),
        Preset("Drink water (1 glass)", 0.25),
        Preset("Cooking meal", 10),
    ),
    const.CATEGORY_ELECTRICITY: (
        Preset("Phone charging (2 hours)", 0.05),
        Preset("Laptop use (4 hours)", 0.2),
        Preset("TV watching (3 hours)", 0.15),
        Preset("AC usage (1 hour)", 1.5),
        Preset("LED lights (6 hours)", 0.03),
    ),
    const.CATEGORY_TRAVEL: (
        Preset("Walk to nearby shop", 1, const.TRAVEL_MODE_WALK),
        Preset("Bike to college", 5, const.TRAVEL_MODE_BIKE),
        Preset("Bus commute", 8, const.TRAVEL_MODE_BUS),
        Preset("Auto/taxi ride", 6, const.TRAVEL_MODE_CAR),
        Preset("Metro journey", 12, const.TRAVEL_MODE_BUS),
    ),
    const.CATEGORY_WASTE: (
        Preset("Daily food waste", 0.2),
        Preset("Packaging waste", 0.1),
        Preset("General household waste", 0.5),
    ),
    const.CATEGORY_RECYCLE: (
        Preset("Plastic bottles", 0.5),
        Preset("Paper/cardboard", 1.0),
        Preset("Glass containers", 0.8),
        Preset("Electronic waste", 2.0),
    ),
}


def find_preset(category: str, label: str) -> Preset | None:
    """Return the preset with a matching label (case-insensitive)."""
    wanted = label.strip().casefold()
    for preset in PRESETS.get(category, ()):
        if preset.label.casefold() == wanted:
            return preset
    return None


# ==============================================================================
# RECORDS
# ==============================================================================


def build_record(user_input: Mapping[str, Any]) -> RecordData:
    """Validate user input and build a record ready for storage.

    Args:
        user_input: Mapping with FIELD_TYPE, FIELD_VALUE and optionally
            FIELD_UNIT, FIELD_MODE, FIELD_DATE (str/date/datetime).

    Returns:
        Complete RecordData with a fresh UUID and a UTC ISO timestamp.

    Raises:
        RecordValidationError: unknown category, non-numeric or negative
            value, mode on a non-travel record, unknown mode, bad date.

    Example:
        build_record({"type": "travel", "value": 5, "mode": "bike"})
        → {"id": "...", "date": "2026-10-19T08:00:00+00:00", "type": "travel",
           "value": 5.0, "unit": "km", "meta": {"mode": "bike"}}
    """
    category = str(user_input.get(const.FIELD_TYPE, "")).strip().lower()
    if category not in const.CATEGORIES:
        raise RecordValidationError(
            field=const.FIELD_TYPE,
            translation_key="invalid_category",
            placeholders={"type": category},
        )

    raw_value = user_input.get(const.FIELD_VALUE)
    try:
        value = float(raw_value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as err:
        raise RecordValidationError(
            field=const.FIELD_VALUE,
            translation_key="invalid_amount",
            placeholders={"value": str(raw_value)},
        ) from err
    if not math.isfinite(value) or value < 0:
        raise RecordValidationError(
            field=const.FIELD_VALUE,
            translation_key="negative_amount",
            placeholders={"value": str(raw_value)},
        )

    mode = user_input.get(const.FIELD_MODE)
    if mode is not None and category != const.CATEGORY_TRAVEL:
        raise RecordValidationError(
            field=const.FIELD_MODE,
            translation_key="mode_not_allowed",
            placeholders={"type": category},
        )
    if category == const.CATEGORY_TRAVEL:
        if mode is None:
            raise RecordValidationError(
                field=const.FIELD_MODE,
                translation_key="mode_required",
            )
        mode = str(mode).strip().lower()
        if mode not in const.TRAVEL_MODES:
            raise RecordValidationError(
                field=const.FIELD_MODE,
                translation_key="invalid_mode",
                placeholders={"mode": mode},
            )

    raw_date = user_input.get(const.FIELD_DATE)
    if raw_date is None:
        timestamp = dt_now_utc()
    else:
        parsed = dt_to_utc(raw_date)
        if parsed is None:
            raise RecordValidationError(
                field=const.FIELD_DATE,
                translation_key="invalid_date",
                placeholders={"date": str(raw_date)},
            )
        timestamp = parsed

    unit = str(user_input.get(const.FIELD_UNIT) or const.DEFAULT_UNITS[category])

    record = RecordData(
        id=str(uuid.uuid4()),
        date=timestamp.isoformat(),
        type=category,
        value=value,
        unit=unit,
    )
    if mode is not None:
        record[const.RECORD_META] = {const.RECORD_META_MODE: mode}
    return record


def parse_record(data: Mapping[str, Any]) -> Record | None:
    """Convert a persisted record into its typed variant.

    Returns None (and logs at debug level) when the record cannot take part
    in any aggregation: unknown type, missing or unparseable date, or a
    non-numeric value. Unknown keys in `meta` are ignored.
    """
    category = data.get(const.RECORD_TYPE)
    record_cls = RECORD_TYPES.get(category) if isinstance(category, str) else None
    if record_cls is None:
        const.LOGGER.debug(
            "DEBUG: Skipping record %s with unrecognized type '%s'",
            data.get(const.RECORD_ID),
            category,
        )
        return None

    timestamp = dt_parse(data.get(const.RECORD_DATE))
    if timestamp is None:
        const.LOGGER.warning(
            "WARNING: Skipping record %s with invalid date '%s'",
            data.get(const.RECORD_ID),
            data.get(const.RECORD_DATE),
        )
        return None

    try:
        amount = float(data.get(const.RECORD_VALUE, 0))
    except (TypeError, ValueError):
        const.LOGGER.warning(
            "WARNING: Skipping record %s with non-numeric value '%s'",
            data.get(const.RECORD_ID),
            data.get(const.RECORD_VALUE),
        )
        return None
    if not math.isfinite(amount) or amount < 0:
        const.LOGGER.warning(
            "WARNING: Record %s has invalid amount %s, treating as 0",
            data.get(const.RECORD_ID),
            amount,
        )
        amount = 0.0

    common = {
        "record_id": str(data.get(const.RECORD_ID, "")),
        "timestamp": timestamp,
        "amount": amount,
        "unit": str(data.get(const.RECORD_UNIT, const.DEFAULT_UNITS[category])),
    }

    if record_cls is TravelRecord:
        meta = data.get(const.RECORD_META)
        raw_mode = None
        if isinstance(meta, Mapping):
            raw_mode = meta.get(const.RECORD_META_MODE)
        mode = raw_mode if raw_mode in const.TRAVEL_MODES else None
        return TravelRecord(mode=mode, **common)

    return record_cls(**common)  # type: ignore[return-value]


def parse_records(items: Iterable[Mapping[str, Any]]) -> tuple[Record, ...]:
    """Parse a stored history into an immutable tuple of typed records."""
    records = []
    for item in items:
        if not isinstance(item, Mapping):
            const.LOGGER.warning("WARNING: Skipping malformed record entry: %r", item)
            continue
        record = parse_record(item)
        if record is not None:
            records.append(record)
    return tuple(records)


# ==============================================================================
# BADGE RECORDS
# ==============================================================================


def build_badge_record(badge_id: str, earned_at: Any = None) -> BadgeRecordData:
    """Build a badge record; earned_at defaults to now (UTC)."""
    when = dt_to_utc(earned_at) if earned_at is not None else None
    return BadgeRecordData(
        badge_id=badge_id,
        earned_at=(when or dt_now_utc()).isoformat(),
    )


# ==============================================================================
# SETTINGS
# ==============================================================================


def default_settings() -> EcoSettings:
    """Return the documented default settings.

    baselines = {electricityPerDay: 6, waterPerDay: 100,
                 travelKmPerDay: 10, wasteKgPerDay: 0.5}
    weights = {electricity: 0.35, travel: 0.30, water: 0.25, waste: 0.10}
    """
    return EcoSettings()


def _coerce_number(
    raw: Mapping[str, Any] | None,
    key: str,
    default: float,
    *,
    strictly_positive: bool,
) -> float:
    """Read one numeric setting, falling back to default when invalid."""
    if not isinstance(raw, Mapping) or key not in raw:
        return default
    try:
        value = float(raw[key])
    except (TypeError, ValueError):
        const.LOGGER.warning(
            "WARNING: Invalid setting %s=%r, using default %s", key, raw[key], default
        )
        return default
    invalid = not math.isfinite(value) or (
        value <= 0 if strictly_positive else value < 0
    )
    if invalid:
        const.LOGGER.warning(
            "WARNING: Out-of-range setting %s=%s, using default %s",
            key,
            value,
            default,
        )
        return default
    return value


def parse_settings(raw: Any) -> EcoSettings:
    """Build EcoSettings from stored data, recovering from corruption.

    Missing, non-numeric or out-of-range fields fall back individually to
    their defaults; a non-mapping payload falls back entirely. This is a
    recovery, never an error.
    """
    defaults = default_settings()
    if not isinstance(raw, Mapping):
        if raw is not None:
            const.LOGGER.warning(
                "WARNING: Stored settings are corrupted (%s), using defaults",
                type(raw).__name__,
            )
        return defaults

    raw_baselines = raw.get(const.SETTINGS_BASELINES)
    raw_weights = raw.get(const.SETTINGS_WEIGHTS)
    base = defaults.baselines
    weights = defaults.weights

    return EcoSettings(
        baselines=Baselines(
            electricity_per_day=_coerce_number(
                raw_baselines,
                const.BASELINE_ELECTRICITY_PER_DAY,
                base.electricity_per_day,
                strictly_positive=True,
            ),
            water_per_day=_coerce_number(
                raw_baselines,
                const.BASELINE_WATER_PER_DAY,
                base.water_per_day,
                strictly_positive=True,
            ),
            travel_km_per_day=_coerce_number(
                raw_baselines,
                const.BASELINE_TRAVEL_KM_PER_DAY,
                base.travel_km_per_day,
                strictly_positive=True,
            ),
            waste_kg_per_day=_coerce_number(
                raw_baselines,
                const.BASELINE_WASTE_KG_PER_DAY,
                base.waste_kg_per_day,
                strictly_positive=True,
            ),
        ),
        weights=Weights(
            electricity=_coerce_number(
                raw_weights,
                const.CATEGORY_ELECTRICITY,
                weights.electricity,
                strictly_positive=False,
            ),
            travel=_coerce_number(
                raw_weights,
                const.CATEGORY_TRAVEL,
                weights.travel,
                strictly_positive=False,
            ),
            water=_coerce_number(
                raw_weights,
                const.CATEGORY_WATER,
                weights.water,
                strictly_positive=False,
            ),
            waste=_coerce_number(
                raw_weights,
                const.CATEGORY_WASTE,
                weights.waste,
                strictly_positive=False,
            ),
        ),
        tuning=defaults.tuning,
    )


# Flat form/service keys → (section, persisted key)
SETTINGS_FIELD_MAP: dict[str, tuple[str, str]] = {
    const.CONF_BASELINE_ELECTRICITY: (
        const.SETTINGS_BASELINES,
        const.BASELINE_ELECTRICITY_PER_DAY,
    ),
    const.CONF_BASELINE_WATER: (
        const.SETTINGS_BASELINES,
        const.BASELINE_WATER_PER_DAY,
    ),
    const.CONF_BASELINE_TRAVEL: (
        const.SETTINGS_BASELINES,
        const.BASELINE_TRAVEL_KM_PER_DAY,
    ),
    const.CONF_BASELINE_WASTE: (
        const.SETTINGS_BASELINES,
        const.BASELINE_WASTE_KG_PER_DAY,
    ),
    const.CONF_WEIGHT_ELECTRICITY: (const.SETTINGS_WEIGHTS, const.CATEGORY_ELECTRICITY),
    const.CONF_WEIGHT_TRAVEL: (const.SETTINGS_WEIGHTS, const.CATEGORY_TRAVEL),
    const.CONF_WEIGHT_WATER: (const.SETTINGS_WEIGHTS, const.CATEGORY_WATER),
    const.CONF_WEIGHT_WASTE: (const.SETTINGS_WEIGHTS, const.CATEGORY_WASTE),
}


def validate_settings_input(user_input: Mapping[str, Any]) -> dict[str, str]:
    """Validate flat settings input.

    Returns:
        Dict of errors: {field: translation_key}. Empty means valid.
    """
    errors: dict[str, str] = {}
    for key, (section, _) in SETTINGS_FIELD_MAP.items():
        if key not in user_input:
            continue
        try:
            value = float(user_input[key])
        except (TypeError, ValueError):
            value = math.nan
        if section == const.SETTINGS_BASELINES:
            if not math.isfinite(value) or value <= 0:
                errors[key] = const.TRANS_KEY_ERROR_INVALID_BASELINE
        elif not math.isfinite(value) or value < 0:
            errors[key] = const.TRANS_KEY_ERROR_INVALID_WEIGHT
    return errors


def settings_from_flat(
    user_input: Mapping[str, Any], existing: EcoSettings | None = None
) -> EcoSettings:
    """Merge flat form/service input over existing settings.

    Raises:
        RecordValidationError: If any provided value is out of range.
    """
    errors = validate_settings_input(user_input)
    if errors:
        field, key = next(iter(errors.items()))
        raise RecordValidationError(
            field=field,
            translation_key=key,
            placeholders={"value": str(user_input[field])},
        )

    merged = (existing or default_settings()).as_dict()
    for key, (section, stored_key) in SETTINGS_FIELD_MAP.items():
        if key in user_input:
            merged[section][stored_key] = float(user_input[key])  # type: ignore[literal-required]
    return parse_settings(merged)


def settings_to_flat(settings: EcoSettings) -> dict[str, float]:
    """Flatten settings for form defaults."""
    stored = settings.as_dict()
    return {
        key: stored[section][stored_key]  # type: ignore[literal-required]
        for key, (section, stored_key) in SETTINGS_FIELD_MAP.items()
    }
