# File: utils/math_utils.py
"""Math and calculation utilities for EcoScore.

Pure Python math functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.

Functions:
    - clamp: Bound a value to a closed range
    - round_half_away: Integer rounding with halves away from zero
    - round_value: Consistent float rounding for display attributes
    - calculate_percentage: Progress percentage calculations
"""

from __future__ import annotations

import decimal
import logging
import math

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# Default float precision for attribute rounding
DATA_FLOAT_PRECISION = 2


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(150, 0, 100) → 100
        clamp(-10, 0, 100) → 0
        clamp(50, 0, 100) → 50
    """
    return max(min_val, min(value, max_val))


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in round() uses banker's rounding (round(82.5) == 82),
    which would disagree with the score rounding rule at exact halves.

    Examples:
        round_half_away(82.5) → 83
        round_half_away(82.49) → 82
        round_half_away(-2.5) → -3
    """
    if not math.isfinite(value):
        _LOGGER.error("Cannot round non-finite value: %s", value)
        return 0
    return int(
        decimal.Decimal(repr(value)).quantize(
            decimal.Decimal(1), rounding=decimal.ROUND_HALF_UP
        )
    )


def round_value(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a float to the configured precision.

    Examples:
        round_value(10.456) → 10.46
        round_value(10.0) → 10.0
    """
    return round(value, precision)


def calculate_percentage(
    current: float,
    target: float,
    precision: int = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate progress percentage with proper rounding.

    Examples:
        calculate_percentage(50, 100) → 50.0
        calculate_percentage(1, 3) → 33.33
        calculate_percentage(5, 0) → 0.0  # Division by zero protection
    """
    if target <= 0:
        return 0.0
    return round_value((current / target) * 100, precision)
