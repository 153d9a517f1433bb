"""Score Engine - EarthScore calculation and level system.

EarthScore for one day:

    per scored category c (electricity, water, travel, waste):
        ratio        = totals[c] / (saturation_multiplier × baseline[c])
        component[c] = clamp(0, 100, (1 - ratio) × 100)
        weighted[c]  = component[c] × weight[c]

    base  = Σ weighted[c]                         (recycle is not scored)
    eco   = walk + bike + bus distance
    travel_bonus  = clamp(0, 8, eco / travel × 8)  if travel > 0 else 0
    recycle_bonus = clamp(0, 5, recycle × 2)
    bonus = clamp(0, 10, travel_bonus + recycle_bonus)

    score = round_half_away(clamp(0, 100, base + bonus))

With the default multiplier of 2, zero usage scores 100 and twice the
baseline scores 0. The bonus constants live in ScoreTuning.

PURITY: No Home Assistant imports, no storage access, no side effects
beyond logging a non-positive baseline.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .. import const
from ..type_defs import (
    Baselines,
    DailyTotals,
    LevelInfo,
    ScoreResult,
    ScoreTuning,
    Weights,
)
from ..utils.math_utils import calculate_percentage, clamp, round_half_away
from .aggregation_engine import AggregationEngine

if TYPE_CHECKING:
    from ..type_defs import EcoSettings, Record


_DEFAULT_TUNING = ScoreTuning()


class ScoreEngine:
    """Pure logic engine for the EarthScore.

    All methods are static - no instance state.
    """

    # =========================================================================
    # COMPONENTS
    # =========================================================================

    @staticmethod
    def component_score(
        usage: float,
        baseline: float,
        tuning: ScoreTuning = _DEFAULT_TUNING,
        *,
        category: str = "",
    ) -> float:
        """Normalize one category's usage into [0, 100].

        A non-positive baseline is invalid configuration; the component is
        scored 0 (maximally unfavorable) instead of dividing by zero.
        """
        saturation = tuning.saturation_multiplier * baseline
        if baseline <= 0 or saturation <= 0:
            const.LOGGER.warning(
                "WARNING: Non-positive baseline %s for category '%s', scoring component as 0",
                baseline,
                category,
            )
            return const.SCORE_MIN
        ratio = max(usage, 0.0) / saturation
        return clamp((1 - ratio) * 100, const.SCORE_MIN, const.SCORE_MAX)

    # =========================================================================
    # BONUS
    # =========================================================================

    @staticmethod
    def travel_bonus(totals: DailyTotals, tuning: ScoreTuning = _DEFAULT_TUNING) -> float:
        """Bonus for the share of distance covered by walk, bike or bus."""
        if totals.travel <= 0:
            return 0.0
        share = totals.eco_travel / totals.travel
        return clamp(share * tuning.eco_travel_bonus_max, 0.0, tuning.eco_travel_bonus_max)

    @staticmethod
    def recycle_bonus(totals: DailyTotals, tuning: ScoreTuning = _DEFAULT_TUNING) -> float:
        """Bonus for material recycled today."""
        return clamp(
            totals.recycle * tuning.recycle_bonus_per_unit,
            0.0,
            tuning.recycle_bonus_max,
        )

    @classmethod
    def bonus(cls, totals: DailyTotals, tuning: ScoreTuning = _DEFAULT_TUNING) -> float:
        """Combined bonus, capped at tuning.bonus_cap."""
        return clamp(
            cls.travel_bonus(totals, tuning) + cls.recycle_bonus(totals, tuning),
            0.0,
            tuning.bonus_cap,
        )

    # =========================================================================
    # EARTHSCORE
    # =========================================================================

    @classmethod
    def earth_score(
        cls,
        totals: DailyTotals,
        baselines: Baselines,
        weights: Weights,
        tuning: ScoreTuning = _DEFAULT_TUNING,
    ) -> ScoreResult:
        """Compute the EarthScore for one day's totals.

        Args:
            totals: Output of AggregationEngine.daily_totals
            baselines: Expected daily usage per category (read-only)
            weights: Share of each category in the base score (read-only)
            tuning: Saturation and bonus constants

        Returns:
            ScoreResult with the rounded score and the unrounded audit values.

        Example:
            electricity=3, water=50, travel=5 (all walk), waste=0.25 with
            defaults → components 75 each, base 75, bonus 8, score 83.
        """
        components: dict[str, float] = {}
        breakdown: dict[str, float] = {}

        for category in const.SCORED_CATEGORIES:
            component = cls.component_score(
                totals.get(category),
                baselines.for_category(category),
                tuning,
                category=category,
            )
            components[category] = component
            breakdown[category] = component * weights.for_category(category)

        base_score = sum(breakdown.values())
        bonus = cls.bonus(totals, tuning)
        breakdown[const.ATTR_BONUS] = bonus

        final_score = clamp(base_score + bonus, const.SCORE_MIN, const.SCORE_MAX)

        return ScoreResult(
            score=round_half_away(final_score),
            components=components,
            bonus=bonus,
            breakdown=breakdown,
        )

    @classmethod
    def score_for_settings(
        cls, totals: DailyTotals, settings: EcoSettings
    ) -> ScoreResult:
        """Convenience wrapper taking a full EcoSettings object."""
        return cls.earth_score(
            totals, settings.baselines, settings.weights, settings.tuning
        )

    # =========================================================================
    # LEVELS
    # =========================================================================

    @classmethod
    def total_score(cls, records: Iterable[Record], settings: EcoSettings) -> int:
        """Sum of daily EarthScores over every local day that has a record."""
        history = tuple(records)
        return sum(
            cls.score_for_settings(
                AggregationEngine.daily_totals(history, day), settings
            ).score
            for day in AggregationEngine.active_dates(history)
        )

    @staticmethod
    def level_for(total_score: float) -> LevelInfo:
        """Map a cumulative EarthScore to a level.

        Levels (threshold → title): 0 Eco Newcomer, 500 Green Explorer,
        1500 Sustainability Hero, 3000 Earth Guardian, 5000 Climate Champion,
        8000 Eco Legend. Progress is the percentage of the way from the
        current threshold to the next; 100 once the top level is reached.
        """
        thresholds = const.LEVEL_THRESHOLDS
        index = 0
        for position, (_, threshold, _) in enumerate(thresholds):
            if total_score >= threshold:
                index = position

        level, threshold, title = thresholds[index]
        if index + 1 < len(thresholds):
            next_threshold = thresholds[index + 1][1]
            progress = clamp(
                calculate_percentage(
                    total_score - threshold, next_threshold - threshold
                ),
                0.0,
                100.0,
            )
        else:
            next_threshold = None
            progress = 100.0

        return LevelInfo(
            level=level,
            title=title,
            total_score=round_half_away(total_score),
            progress=progress,
            next_threshold=next_threshold,
        )
