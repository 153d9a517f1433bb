"""Unit tests for ScoreEngine - EarthScore formula and level system.

Test Categories:
- Reference scenarios
- Component normalization (saturation, zero baseline)
- Bonus calculation and cap
- Bounds and monotonicity
- Levels and cumulative total
"""

from __future__ import annotations

import pytest

from custom_components.ecoscore import const
from custom_components.ecoscore.data_builders import default_settings
from custom_components.ecoscore.engines import ScoreEngine
from custom_components.ecoscore.type_defs import (
    Baselines,
    DailyTotals,
    EcoSettings,
    ScoreTuning,
    Weights,
)
from tests.helpers import at, electricity, recycle, travel, waste, water


def make_totals(
    *,
    electricity: float = 0.0,
    water: float = 0.0,
    waste: float = 0.0,
    recycle: float = 0.0,
    walk: float = 0.0,
    bike: float = 0.0,
    bus: float = 0.0,
    car: float = 0.0,
) -> DailyTotals:
    """Build DailyTotals whose travel total is the sum of its modes."""
    return DailyTotals(
        water=water,
        electricity=electricity,
        travel=walk + bike + bus + car,
        waste=waste,
        recycle=recycle,
        travel_modes={"walk": walk, "bike": bike, "bus": bus, "car": car},
    )


def score(totals: DailyTotals, settings: EcoSettings | None = None) -> int:
    return ScoreEngine.score_for_settings(totals, settings or default_settings()).score


class TestReferenceScenarios:
    """Worked examples of the EarthScore formula."""

    def test_quarter_of_saturation_everywhere_with_walking(self) -> None:
        totals = make_totals(electricity=3, water=50, walk=5, waste=0.25)
        result = ScoreEngine.score_for_settings(totals, default_settings())

        for category in const.SCORED_CATEGORIES:
            assert result.components[category] == pytest.approx(75)
        assert result.base_score == pytest.approx(75)
        assert ScoreEngine.travel_bonus(totals) == pytest.approx(8)
        assert ScoreEngine.recycle_bonus(totals) == 0
        assert result.bonus == pytest.approx(8)
        assert result.score == 83

    def test_zero_usage_scores_the_weight_sum(self) -> None:
        weights = Weights(electricity=0.3, travel=0.2, water=0.2, waste=0.1)
        assert score(DailyTotals(), EcoSettings(weights=weights)) == 80

    def test_all_zero_scores_100_without_bonus(self) -> None:
        result = ScoreEngine.score_for_settings(DailyTotals(), default_settings())

        assert result.score == 100
        assert result.bonus == 0

    def test_water_at_twice_baseline_zeroes_component(self) -> None:
        result = ScoreEngine.score_for_settings(
            make_totals(water=200), default_settings()
        )
        assert result.components[const.CATEGORY_WATER] == 0

    def test_breakdown_lists_weighted_components_and_bonus(self) -> None:
        result = ScoreEngine.score_for_settings(
            make_totals(electricity=3, recycle=1), default_settings()
        )

        assert set(result.breakdown) == {*const.SCORED_CATEGORIES, const.ATTR_BONUS}
        assert result.breakdown[const.CATEGORY_ELECTRICITY] == pytest.approx(75 * 0.35)
        assert result.breakdown[const.ATTR_BONUS] == pytest.approx(2)


class TestComponents:
    """Per-category normalization."""

    @pytest.mark.parametrize(
        ("usage", "expected"),
        [(0, 100), (50, 75), (100, 50), (200, 0), (500, 0)],
    )
    def test_component_curve(self, usage: float, expected: float) -> None:
        assert ScoreEngine.component_score(usage, 100) == pytest.approx(expected)

    def test_zero_baseline_scores_zero_instead_of_failing(self) -> None:
        assert ScoreEngine.component_score(10, 0, category="water") == 0
        assert ScoreEngine.component_score(0, 0, category="water") == 0

    def test_zero_baseline_in_settings_still_produces_a_score(self) -> None:
        settings = EcoSettings(baselines=Baselines(water_per_day=0))
        result = ScoreEngine.score_for_settings(make_totals(water=10), settings)

        assert result.components[const.CATEGORY_WATER] == 0
        assert 0 <= result.score <= 100

    def test_saturation_multiplier_is_tunable(self) -> None:
        tuning = ScoreTuning(saturation_multiplier=1.0)
        assert ScoreEngine.component_score(50, 100, tuning) == pytest.approx(50)


class TestBonus:
    """Eco-travel and recycling bonus."""

    def test_travel_bonus_is_proportional_to_eco_share(self) -> None:
        totals = make_totals(bike=5, car=5)
        assert ScoreEngine.travel_bonus(totals) == pytest.approx(4)

    def test_no_travel_means_no_travel_bonus(self) -> None:
        assert ScoreEngine.travel_bonus(make_totals()) == 0

    def test_car_only_has_no_travel_bonus(self) -> None:
        assert ScoreEngine.travel_bonus(make_totals(car=12)) == 0

    def test_recycle_bonus_is_capped_at_five(self) -> None:
        assert ScoreEngine.recycle_bonus(make_totals(recycle=1)) == pytest.approx(2)
        assert ScoreEngine.recycle_bonus(make_totals(recycle=10)) == pytest.approx(5)

    def test_combined_bonus_is_capped_at_ten(self) -> None:
        totals = make_totals(walk=5, recycle=10)
        assert ScoreEngine.bonus(totals) == pytest.approx(10)

    def test_bonus_cannot_push_score_above_100(self) -> None:
        assert score(make_totals(walk=0.1, recycle=3)) == 100


class TestBoundsAndMonotonicity:
    """The score stays in [0, 100] and never rises with more usage."""

    def test_extreme_usage_scores_zero(self) -> None:
        totals = make_totals(electricity=1000, water=1000, car=1000, waste=1000)
        assert score(totals) == 0

    @pytest.mark.parametrize("category", ["electricity", "water", "waste", "car"])
    def test_more_usage_never_raises_score(self, category: str) -> None:
        previous = 101
        for amount in (0, 0.2, 1, 3, 7, 15, 40, 200):
            current = score(make_totals(**{category: amount}))
            assert 0 <= current <= previous
            previous = current

    def test_weights_are_applied_as_given(self) -> None:
        weights = Weights(electricity=1.0, travel=0.0, water=0.0, waste=0.0)
        settings = EcoSettings(weights=weights)
        assert score(make_totals(electricity=6, water=1000), settings) == 50


class TestLevels:
    """Cumulative score thresholds."""

    @pytest.mark.parametrize(
        ("total", "level", "title", "next_threshold"),
        [
            (0, 1, "Eco Newcomer", 500),
            (499, 1, "Eco Newcomer", 500),
            (500, 2, "Green Explorer", 1500),
            (1500, 3, "Sustainability Hero", 3000),
            (3000, 4, "Earth Guardian", 5000),
            (5000, 5, "Climate Champion", 8000),
            (8000, 6, "Eco Legend", None),
            (20000, 6, "Eco Legend", None),
        ],
    )
    def test_level_thresholds(
        self, total: int, level: int, title: str, next_threshold: int | None
    ) -> None:
        info = ScoreEngine.level_for(total)

        assert info.level == level
        assert info.title == title
        assert info.next_threshold == next_threshold
        assert info.total_score == total

    def test_progress_toward_next_level(self) -> None:
        assert ScoreEngine.level_for(0).progress == 0
        assert ScoreEngine.level_for(1000).progress == pytest.approx(50)
        assert ScoreEngine.level_for(499).progress == pytest.approx(99.8)

    def test_top_level_progress_is_complete(self) -> None:
        assert ScoreEngine.level_for(9000).progress == 100


class TestTotalScore:
    """Sum of daily scores over days with at least one record."""

    def test_sums_active_days_only(self) -> None:
        records = [
            electricity(3, at(2)),
            water(50, at(2)),
            travel(5, when=at(2)),
            waste(0.25, at(2)),
            recycle(1, at(0)),
        ]
        assert ScoreEngine.total_score(records, default_settings()) == 183

    def test_empty_history_totals_zero(self) -> None:
        assert ScoreEngine.total_score([], default_settings()) == 0
