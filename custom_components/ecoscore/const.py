# File: const.py
"""Constants for the EcoScore integration.

This file centralizes configuration keys, defaults, storage keys, record
categories, badge and mission identifiers, service names and sensor
identifiers for consistency across the integration.
"""

import logging
from typing import Final

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
ECOSCORE_TITLE = "EcoScore"

# Integration Domain
DOMAIN = "ecoscore"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"
DATA_STORE = "store"

# Storage and Versioning
STORAGE_KEY = "ecoscore_data"
STORAGE_VERSION = 1
SCHEMA_VERSION_CURRENT = 1

# Update Interval (minutes) - day rollover must be picked up without new records
DEFAULT_UPDATE_INTERVAL = 15

# ------------------------------------------------------------------------------------------------
# Storage Buckets
# ------------------------------------------------------------------------------------------------
DATA_META = "meta"
DATA_META_SCHEMA_VERSION = "schema_version"
DATA_META_LAST_SAVED = "last_saved"
DATA_RECORDS = "records"
DATA_BADGE_RECORDS = "badge_records"
DATA_SETTINGS = "settings"

# Persisted record keys (JSON shape consumed as-is by the aggregator)
RECORD_ID = "id"
RECORD_DATE = "date"
RECORD_TYPE = "type"
RECORD_VALUE = "value"
RECORD_UNIT = "unit"
RECORD_META = "meta"
RECORD_META_MODE = "mode"

# Persisted badge record keys
BADGE_RECORD_ID = "badge_id"
BADGE_RECORD_EARNED_AT = "earned_at"

# Persisted settings keys
SETTINGS_BASELINES = "baselines"
SETTINGS_WEIGHTS = "weights"

BASELINE_ELECTRICITY_PER_DAY = "electricityPerDay"
BASELINE_WATER_PER_DAY = "waterPerDay"
BASELINE_TRAVEL_KM_PER_DAY = "travelKmPerDay"
BASELINE_WASTE_KG_PER_DAY = "wasteKgPerDay"

# ------------------------------------------------------------------------------------------------
# Record Categories and Travel Modes
# ------------------------------------------------------------------------------------------------
CATEGORY_WATER = "water"
CATEGORY_ELECTRICITY = "electricity"
CATEGORY_TRAVEL = "travel"
CATEGORY_WASTE = "waste"
CATEGORY_RECYCLE = "recycle"

CATEGORIES: Final = (
    CATEGORY_WATER,
    CATEGORY_ELECTRICITY,
    CATEGORY_TRAVEL,
    CATEGORY_WASTE,
    CATEGORY_RECYCLE,
)

# Categories that feed the weighted base score (recycle only feeds the bonus)
SCORED_CATEGORIES: Final = (
    CATEGORY_ELECTRICITY,
    CATEGORY_WATER,
    CATEGORY_TRAVEL,
    CATEGORY_WASTE,
)

TRAVEL_MODE_WALK = "walk"
TRAVEL_MODE_BIKE = "bike"
TRAVEL_MODE_BUS = "bus"
TRAVEL_MODE_CAR = "car"

TRAVEL_MODES: Final = (
    TRAVEL_MODE_WALK,
    TRAVEL_MODE_BIKE,
    TRAVEL_MODE_BUS,
    TRAVEL_MODE_CAR,
)
ECO_TRAVEL_MODES: Final = frozenset(
    {TRAVEL_MODE_WALK, TRAVEL_MODE_BIKE, TRAVEL_MODE_BUS}
)

DEFAULT_UNITS: Final = {
    CATEGORY_WATER: "L",
    CATEGORY_ELECTRICITY: "kWh",
    CATEGORY_TRAVEL: "km",
    CATEGORY_WASTE: "kg",
    CATEGORY_RECYCLE: "kg",
}

# ------------------------------------------------------------------------------------------------
# Default Settings
# ------------------------------------------------------------------------------------------------
DEFAULT_BASELINE_ELECTRICITY_PER_DAY = 6.0  # kWh
DEFAULT_BASELINE_WATER_PER_DAY = 100.0  # liters
DEFAULT_BASELINE_TRAVEL_KM_PER_DAY = 10.0  # km
DEFAULT_BASELINE_WASTE_KG_PER_DAY = 0.5  # kg

DEFAULT_WEIGHT_ELECTRICITY = 0.35
DEFAULT_WEIGHT_TRAVEL = 0.30
DEFAULT_WEIGHT_WATER = 0.25
DEFAULT_WEIGHT_WASTE = 0.10

# Scoring tuning parameters
DEFAULT_SATURATION_MULTIPLIER = 2.0
DEFAULT_ECO_TRAVEL_BONUS_MAX = 8.0
DEFAULT_RECYCLE_BONUS_PER_UNIT = 2.0
DEFAULT_RECYCLE_BONUS_MAX = 5.0
DEFAULT_BONUS_CAP = 10.0

SCORE_MIN = 0.0
SCORE_MAX = 100.0

# ------------------------------------------------------------------------------------------------
# Badges
# ------------------------------------------------------------------------------------------------
BADGE_ID_WATER_SAVER = "water_saver"
BADGE_ID_ECO_RIDER = "eco_rider"
BADGE_ID_RECYCLER = "recycler"
BADGE_ID_ENERGY_CONSCIOUS = "energy_conscious"
BADGE_ID_WASTE_WARRIOR = "waste_warrior"

BADGE_WATER_SAVER_DAYS = 3
BADGE_WATER_SAVER_MAX_LITERS = 50.0
BADGE_ECO_RIDER_DAYS = 7
BADGE_ECO_RIDER_MIN_TRIPS = 5
BADGE_RECYCLER_DAYS = 30
BADGE_RECYCLER_MIN_KG = 5.0
BADGE_ENERGY_CONSCIOUS_DAYS = 5
BADGE_ENERGY_CONSCIOUS_MIN_DAYS = 5
BADGE_ENERGY_CONSCIOUS_MAX_KWH = 3.0
BADGE_WASTE_WARRIOR_DAYS = 7
BADGE_WASTE_WARRIOR_MAX_KG = 0.3

# ------------------------------------------------------------------------------------------------
# Missions
# ------------------------------------------------------------------------------------------------
MISSION_CONDITION_TRAVEL_ECO = "travel_eco"
MISSION_CONDITION_WATER_LIMIT = "water_limit"
MISSION_CONDITION_WASTE_REDUCTION = "waste_reduction"

MISSION_WATER_LIMIT_DAYS = 7
MISSION_WATER_LIMIT_MAX_LITERS = 75.0
MISSION_WASTE_REDUCTION_MAX_KG = 0.3

# ------------------------------------------------------------------------------------------------
# Levels (cumulative EarthScore thresholds)
# ------------------------------------------------------------------------------------------------
LEVEL_THRESHOLDS: Final = (
    (1, 0, "Eco Newcomer"),
    (2, 500, "Green Explorer"),
    (3, 1500, "Sustainability Hero"),
    (4, 3000, "Earth Guardian"),
    (5, 5000, "Climate Champion"),
    (6, 8000, "Eco Legend"),
)

# Days shown in the score history attribute
SCORE_HISTORY_DAYS = 7

# ------------------------------------------------------------------------------------------------
# Recommendations and Insights
# ------------------------------------------------------------------------------------------------
RECOMMENDATION_DAYS = 7
INSIGHT_DAYS = 7

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"
PRIORITY_ORDER: Final = {PRIORITY_HIGH: 3, PRIORITY_MEDIUM: 2, PRIORITY_LOW: 1}

# Thresholds on the trailing daily averages
RECOMMEND_WATER_HIGH_LITERS = 150.0
RECOMMEND_WATER_EXCELLENT_LITERS = 100.0
RECOMMEND_ELECTRICITY_HIGH_KWH = 15.0
RECOMMEND_ECO_TRAVEL_MIN_SHARE = 0.6
RECOMMEND_WASTE_HIGH_KG = 2.0
RECOMMEND_LOW_SCORE = 50

# Local months with the summer energy tip
RECOMMEND_SUMMER_MONTHS: Final = frozenset({4, 5, 6})

RECOMMENDATION_CATEGORY_SEASONAL = "seasonal"
RECOMMENDATION_CATEGORY_GOAL = "goal"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_LOG_RECORD = "log_record"
SERVICE_LOG_PRESET = "log_preset"
SERVICE_EVALUATE_BADGES = "evaluate_badges"
SERVICE_SET_SETTINGS = "set_settings"
SERVICE_RESET_DATA = "reset_data"

FIELD_TYPE = "type"
FIELD_VALUE = "value"
FIELD_UNIT = "unit"
FIELD_MODE = "mode"
FIELD_DATE = "date"
FIELD_PRESET = "preset"

# Config/options flow keys for settings (flat, one per numeric field)
CONF_BASELINE_ELECTRICITY = "baseline_electricity_per_day"
CONF_BASELINE_WATER = "baseline_water_per_day"
CONF_BASELINE_TRAVEL = "baseline_travel_km_per_day"
CONF_BASELINE_WASTE = "baseline_waste_kg_per_day"
CONF_WEIGHT_ELECTRICITY = "weight_electricity"
CONF_WEIGHT_TRAVEL = "weight_travel"
CONF_WEIGHT_WATER = "weight_water"
CONF_WEIGHT_WASTE = "weight_waste"

# ------------------------------------------------------------------------------------------------
# Dispatcher Signals
# ------------------------------------------------------------------------------------------------
SIGNAL_SUFFIX_BADGE_EARNED = "badge_earned"
SIGNAL_SUFFIX_RECORD_LOGGED = "record_logged"

# Event fired on the HA bus when a badge is issued
EVENT_BADGE_EARNED = f"{DOMAIN}_badge_earned"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_EARTH_SCORE = "_earth_score"
SENSOR_UID_SUFFIX_STREAK = "_streak"
SENSOR_UID_SUFFIX_LEVEL = "_level"
SENSOR_UID_SUFFIX_BADGES = "_badges"
SENSOR_UID_SUFFIX_MISSION = "_mission_"

TRANS_KEY_SENSOR_EARTH_SCORE = "earth_score_sensor"
TRANS_KEY_SENSOR_STREAK = "streak_sensor"
TRANS_KEY_SENSOR_LEVEL = "level_sensor"
TRANS_KEY_SENSOR_BADGES = "badges_sensor"
TRANS_KEY_SENSOR_MISSION = "mission_sensor"

ATTR_COMPONENTS = "components"
ATTR_BONUS = "bonus"
ATTR_BREAKDOWN = "breakdown"
ATTR_TOTALS = "totals"
ATTR_SCORE_HISTORY = "score_history"
ATTR_LEVEL_TITLE = "title"
ATTR_LEVEL_PROGRESS = "progress"
ATTR_NEXT_THRESHOLD = "next_threshold"
ATTR_TOTAL_SCORE = "total_score"
ATTR_EARNED_BADGES = "earned_badges"
ATTR_BADGE_PROGRESS = "badge_progress"
ATTR_MISSION_TARGET = "target"
ATTR_MISSION_TITLE = "title"
ATTR_MISSION_DESCRIPTION = "description"
ATTR_RECOMMENDATIONS = "recommendations"
ATTR_INSIGHTS = "insights"

# Coordinator snapshot keys
SNAPSHOT_TODAY_TOTALS = "today_totals"
SNAPSHOT_SCORE = "score"
SNAPSHOT_STREAK = "streak"
SNAPSHOT_LEVEL = "level"
SNAPSHOT_MISSIONS = "missions"
SNAPSHOT_BADGES_EARNED = "badges_earned"
SNAPSHOT_BADGE_PROGRESS = "badge_progress"
SNAPSHOT_SCORE_HISTORY = "score_history"
SNAPSHOT_RECOMMENDATIONS = "recommendations"
SNAPSHOT_INSIGHTS = "insights"

# ------------------------------------------------------------------------------------------------
# Translation Keys / Messages
# ------------------------------------------------------------------------------------------------
TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ERROR_INVALID_BASELINE = "invalid_baseline"
TRANS_KEY_ERROR_INVALID_WEIGHT = "invalid_weight"

MSG_NO_ENTRY_FOUND = "No EcoScore entry found"
ERROR_UNKNOWN_PRESET_FMT = "Unknown preset '{}' for category '{}'"
