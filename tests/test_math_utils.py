"""Tests for utils/math_utils.py."""

import pytest

from custom_components.ecoscore.utils.math_utils import (
    calculate_percentage,
    clamp,
    round_half_away,
    round_value,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(150, 100), (-10, 0), (50, 50), (0, 0), (100, 100)],
)
def test_clamp(value: float, expected: float) -> None:
    """Values are bounded to [0, 100]."""
    assert clamp(value, 0, 100) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (82.5, 83),
        (82.49, 82),
        (83.5, 84),
        (0.5, 1),
        (99.5, 100),
        (-2.5, -3),
        (75.0, 75),
    ],
)
def test_round_half_away(value: float, expected: int) -> None:
    """Halves round away from zero, unlike the built-in round()."""
    assert round_half_away(value) == expected


def test_round_half_away_non_finite() -> None:
    """Non-finite input is reported and mapped to 0."""
    assert round_half_away(float("nan")) == 0
    assert round_half_away(float("inf")) == 0


def test_round_value() -> None:
    """Attribute rounding uses two decimals by default."""
    assert round_value(10.456) == 10.46
    assert round_value(10.0) == 10.0
    assert round_value(1 / 3, 4) == 0.3333


def test_calculate_percentage() -> None:
    """Percentages are rounded and protected against a zero target."""
    assert calculate_percentage(50, 100) == 50.0
    assert calculate_percentage(1, 3) == 33.33
    assert calculate_percentage(5, 0) == 0.0
