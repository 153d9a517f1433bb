"""Manager modules for EcoScore integration.

Managers orchestrate workflows and coordinate between engines.
They are stateful, event-aware, and handle cross-cutting concerns.
"""

from .base_manager import BaseManager, get_event_signal
from .gamification_manager import GamificationManager

__all__ = [
    "BaseManager",
    "GamificationManager",
    "get_event_signal",
]
