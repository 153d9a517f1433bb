"""Engine modules for EcoScore integration.

Contains pure computation engines:
- aggregation_engine: Per-day totals and trailing daily series
- score_engine: EarthScore and level calculation
- streak_engine: Consecutive active days
- gamification_engine: Badge catalog evaluation and mission progress
- recommendation_engine: Rule-based tips and trailing-window insights
"""

# Use relative imports within package to avoid mypy module resolution issues
from .aggregation_engine import AggregationEngine
from .gamification_engine import (
    BADGE_CATALOG,
    DEFAULT_MISSIONS,
    BadgeDefinition,
    GamificationEngine,
)
from .recommendation_engine import RecommendationEngine
from .score_engine import ScoreEngine
from .streak_engine import StreakEngine

__all__ = [
    "BADGE_CATALOG",
    "DEFAULT_MISSIONS",
    "AggregationEngine",
    "BadgeDefinition",
    "GamificationEngine",
    "RecommendationEngine",
    "ScoreEngine",
    "StreakEngine",
]
