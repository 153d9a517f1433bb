"""Streak Engine - Consecutive days with at least one logged record.

The streak is derived, never persisted: it is recomputed from the record
history on every refresh.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

from ..utils.dt_utils import dt_today_local, local_date
from .aggregation_engine import AggregationEngine

if TYPE_CHECKING:
    from ..type_defs import Record


class StreakEngine:
    """Stateless streak calculation."""

    @staticmethod
    def streak(records: Iterable[Record], as_of: date | datetime | None = None) -> int:
        """Count consecutive local days, ending at `as_of`, that have a record.

        Walks backward one calendar day at a time from `as_of` and stops on
        the first day without a record. Returns 0 when `as_of` itself has no
        record. The history is indexed by date once, so the walk never scans
        the calendar past the first gap.

        Args:
            records: Typed record history
            as_of: Reference day (date, or instant converted to local date).
                Defaults to today in the local timezone.

        Example:
            records on {today, today-1, today-2}, none on today-3 → 3
        """
        if as_of is None:
            day = dt_today_local()
        elif isinstance(as_of, datetime):
            day = local_date(as_of)
        else:
            day = as_of

        active = AggregationEngine.active_dates(records)
        count = 0
        while day in active:
            count += 1
            day -= timedelta(days=1)
        return count
