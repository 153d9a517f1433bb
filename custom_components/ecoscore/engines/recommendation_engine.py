"""Recommendation Engine - Rule-based tips and trailing-window insights.

Recommendations are judged on the trailing 7-day daily averages (every
calendar day counts, days with nothing logged total zero):

    water > 150 L            -> water_high (high)
    water < 100 L            -> water_excellent (low)
    electricity > 15 kWh     -> electricity_high (high)
    eco trip share < 0.6     -> travel_eco (medium)
    waste > 2 kg             -> waste_reduce (medium)
    local month in Apr-Jun   -> summer_tips (low)
    today's EarthScore < 50  -> score_improve (high)

The eco trip share is walk/bike/bus travel records over all travel records
in the window, with at least one record in the denominator. Results are
ordered high, medium, low; ties keep rule order.

Insights summarize each category over the non-zero days of the window:
average, minimum, maximum and the percent change from the first to the last
non-zero day.

PURITY: No Home Assistant imports, no storage access.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from .. import const
from ..type_defs import MetricInsight, Recommendation, TravelRecord
from ..utils.dt_utils import (
    dt_now_utc,
    end_of_local_day,
    local_date,
    start_of_local_day,
)
from .aggregation_engine import AggregationEngine

if TYPE_CHECKING:
    from ..type_defs import Record


# =============================================================================
# RECOMMENDATION CATALOG
# =============================================================================

WATER_HIGH = Recommendation(
    recommendation_id="water_high",
    category=const.CATEGORY_WATER,
    priority=const.PRIORITY_HIGH,
    title="Reduce Water Consumption",
    description=(
        "Your daily water usage is above recommended levels. "
        "Try shorter showers and fix leaky faucets."
    ),
    impact="Save 30-50 L per day",
    actions=(
        "Take 5-minute showers instead of 10+ minutes",
        "Turn off the tap while brushing teeth",
        "Use a bucket instead of a hose for car washing",
        "Install water-efficient fixtures",
    ),
)

WATER_EXCELLENT = Recommendation(
    recommendation_id="water_excellent",
    category=const.CATEGORY_WATER,
    priority=const.PRIORITY_LOW,
    title="Excellent Water Conservation",
    description="You're doing great with water usage. Keep it up!",
    impact="Maintain current habits",
    actions=("Continue current practices", "Share tips with family and friends"),
)

ELECTRICITY_HIGH = Recommendation(
    recommendation_id="electricity_high",
    category=const.CATEGORY_ELECTRICITY,
    priority=const.PRIORITY_HIGH,
    title="Optimize Energy Usage",
    description=(
        "Your electricity consumption is high. "
        "Focus on energy-efficient practices."
    ),
    impact="Save 3-5 kWh daily",
    actions=(
        "Switch to LED bulbs",
        "Unplug electronics when not in use",
        "Use fans instead of AC when possible",
        "Set AC to 24°C instead of 18°C",
    ),
)

TRAVEL_ECO = Recommendation(
    recommendation_id="travel_eco",
    category=const.CATEGORY_TRAVEL,
    priority=const.PRIORITY_MEDIUM,
    title="Choose Greener Transportation",
    description="Consider eco-friendly transport options for your daily commute.",
    impact="Reduce 5-10 kg CO2 weekly",
    actions=(
        "Walk or bike for distances under 3 km",
        "Use public transport for longer trips",
        "Carpool with colleagues",
        "Work from home when possible",
    ),
)

WASTE_REDUCE = Recommendation(
    recommendation_id="waste_reduce",
    category=const.CATEGORY_WASTE,
    priority=const.PRIORITY_MEDIUM,
    title="Minimize Waste Generation",
    description=(
        "Your waste production is above average. "
        "Focus on reduction and recycling."
    ),
    impact="Reduce 0.5-1 kg daily waste",
    actions=(
        "Start composting organic waste",
        "Use reusable bags and containers",
        "Buy products with minimal packaging",
        "Repair items instead of throwing them away",
    ),
)

SUMMER_TIPS = Recommendation(
    recommendation_id="summer_tips",
    category=const.RECOMMENDATION_CATEGORY_SEASONAL,
    priority=const.PRIORITY_LOW,
    title="Summer Energy Savings",
    description="Beat the heat while saving energy during the summer months.",
    impact="Save 20-30% on cooling costs",
    actions=(
        "Use ceiling fans to feel cooler",
        "Close curtains during the day to block heat",
        "Set an AC timer to turn off at night",
        "Wear light, breathable clothing",
    ),
)

SCORE_IMPROVE = Recommendation(
    recommendation_id="score_improve",
    category=const.RECOMMENDATION_CATEGORY_GOAL,
    priority=const.PRIORITY_HIGH,
    title="Boost Your EarthScore",
    description=(
        "Focus on these key areas to significantly improve your "
        "environmental impact."
    ),
    impact="Increase EarthScore by 20-30 points",
    actions=(
        "Log activities consistently every day",
        "Focus on your highest consumption areas",
        "Set daily targets for each category",
        "Review progress weekly",
    ),
)


# =============================================================================
# RECOMMENDATION ENGINE
# =============================================================================


class RecommendationEngine:
    """Pure logic engine for tips and insights.

    All methods are static - no instance state.

    Example:
        tips = RecommendationEngine.recommendations(records, score=42, now=now)
        [tip.recommendation_id for tip in tips]
        # ['electricity_high', 'score_improve', 'travel_eco']
    """

    # =========================================================================
    # WINDOW STATISTICS
    # =========================================================================

    @staticmethod
    def recent_averages(
        records: Iterable[Record],
        today: date,
        days: int = const.RECOMMENDATION_DAYS,
    ) -> dict[str, float]:
        """Return the per-category daily average over the trailing window."""
        series = AggregationEngine.daily_series(records, days, end=today)
        if not series:
            return dict.fromkeys(const.CATEGORIES, 0.0)
        return {
            category: sum(totals.get(category) for _day, totals in series) / len(series)
            for category in const.CATEGORIES
        }

    @staticmethod
    def eco_trip_share(
        records: Iterable[Record],
        today: date,
        days: int = const.RECOMMENDATION_DAYS,
    ) -> float:
        """Return eco travel records over all travel records in the window.

        With no travel logged the share is 0.0.
        """
        first_day = today - timedelta(days=days - 1)
        trips = [
            record
            for record in AggregationEngine.records_between(
                records, start_of_local_day(first_day), end_of_local_day(today)
            )
            if isinstance(record, TravelRecord)
        ]
        eco_trips = sum(1 for trip in trips if trip.is_eco)
        return eco_trips / max(1, len(trips))

    # =========================================================================
    # RECOMMENDATIONS
    # =========================================================================

    @classmethod
    def recommendations(
        cls,
        records: Iterable[Record],
        score: int | None = None,
        now: datetime | None = None,
    ) -> list[Recommendation]:
        """Return the tips that apply, highest priority first.

        Args:
            records: Typed record history
            score: Today's EarthScore; None skips the score rule
            now: Evaluation instant; defaults to the current UTC time
        """
        when = now or dt_now_utc()
        today = local_date(when)
        history = tuple(records)
        averages = cls.recent_averages(history, today)

        tips: list[Recommendation] = []
        water = averages[const.CATEGORY_WATER]
        if water > const.RECOMMEND_WATER_HIGH_LITERS:
            tips.append(WATER_HIGH)
        elif water < const.RECOMMEND_WATER_EXCELLENT_LITERS:
            tips.append(WATER_EXCELLENT)

        if averages[const.CATEGORY_ELECTRICITY] > const.RECOMMEND_ELECTRICITY_HIGH_KWH:
            tips.append(ELECTRICITY_HIGH)

        if cls.eco_trip_share(history, today) < const.RECOMMEND_ECO_TRAVEL_MIN_SHARE:
            tips.append(TRAVEL_ECO)

        if averages[const.CATEGORY_WASTE] > const.RECOMMEND_WASTE_HIGH_KG:
            tips.append(WASTE_REDUCE)

        if today.month in const.RECOMMEND_SUMMER_MONTHS:
            tips.append(SUMMER_TIPS)

        if score is not None and score < const.RECOMMEND_LOW_SCORE:
            tips.append(SCORE_IMPROVE)

        # sorted() is stable, so equal priorities keep rule order
        return sorted(
            tips, key=lambda tip: const.PRIORITY_ORDER[tip.priority], reverse=True
        )

    # =========================================================================
    # INSIGHTS
    # =========================================================================

    @staticmethod
    def insights(
        records: Iterable[Record],
        now: datetime | None = None,
        days: int = const.INSIGHT_DAYS,
    ) -> dict[str, MetricInsight]:
        """Return per-category insights over the non-zero days of the window.

        Categories with no non-zero day are omitted.
        """
        today = local_date(now or dt_now_utc())
        series = AggregationEngine.daily_series(records, days, end=today)

        result: dict[str, MetricInsight] = {}
        for category in const.CATEGORIES:
            values = [
                totals.get(category)
                for _day, totals in series
                if totals.get(category) > 0
            ]
            if not values:
                continue
            trend = (
                (values[-1] - values[0]) / values[0] * 100 if len(values) > 1 else 0.0
            )
            result[category] = MetricInsight(
                average=sum(values) / len(values),
                minimum=min(values),
                maximum=max(values),
                trend=trend,
                days=len(values),
            )
        return result
