"""Aggregation Engine - Reduces a record history to per-day totals.

Design Principles:
    - Stateless: operates only on the records passed in
    - Local calendar: a day is the closed interval
      [start_of_local_day, end_of_local_day] in the configured timezone
    - Forgiving: records of unknown kinds never reach this engine
      (data_builders.parse_record drops them); travel records without a
      recognized mode count toward the travel total only
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import TYPE_CHECKING

from .. import const
from ..type_defs import DailyTotals, TravelRecord
from ..utils.dt_utils import (
    dt_today_local,
    end_of_local_day,
    local_date,
    start_of_local_day,
    trailing_dates,
)

if TYPE_CHECKING:
    from ..type_defs import Record


class AggregationEngine:
    """Per-calendar-day aggregation of consumption records.

    All methods are static - no instance state.

    Example:
        totals = AggregationEngine.daily_totals(records, date(2026, 10, 19))
        totals.water  # 42.0
        totals.travel_modes["bike"]  # 5.0
    """

    @staticmethod
    def records_between(
        records: Iterable[Record], start: datetime, end: datetime
    ) -> list[Record]:
        """Return records whose timestamp lies in the closed interval [start, end]."""
        return [record for record in records if start <= record.timestamp <= end]

    @staticmethod
    def records_on(records: Iterable[Record], day: date | datetime) -> list[Record]:
        """Return records that fall within one local calendar day."""
        return AggregationEngine.records_between(
            records, start_of_local_day(day), end_of_local_day(day)
        )

    @staticmethod
    def sum_records(records: Iterable[Record]) -> DailyTotals:
        """Sum amounts per category, with the travel-mode breakdown."""
        sums = dict.fromkeys(const.CATEGORIES, 0.0)
        modes = dict.fromkeys(const.TRAVEL_MODES, 0.0)

        for record in records:
            category = record.category
            if category not in sums:
                continue
            sums[category] += record.amount
            if isinstance(record, TravelRecord) and record.mode in modes:
                modes[record.mode] += record.amount

        return DailyTotals(travel_modes=modes, **sums)

    @classmethod
    def daily_totals(
        cls, records: Iterable[Record], day: date | datetime
    ) -> DailyTotals:
        """Return the per-category totals for one local calendar day.

        Args:
            records: Typed record history (any order)
            day: Calendar date, or an instant whose local date is used

        Returns:
            DailyTotals for that day; all zeros when nothing was logged.
        """
        return cls.sum_records(cls.records_on(records, day))

    @classmethod
    def daily_series(
        cls,
        records: Iterable[Record],
        days: int,
        end: date | None = None,
    ) -> list[tuple[date, DailyTotals]]:
        """Return (date, totals) for the `days` dates ending at `end`, oldest first.

        Records are bucketed in one pass so the cost is linear in the history
        plus the window length.
        """
        end_day = end or dt_today_local()
        window = trailing_dates(end_day, days)
        if not window:
            return []

        window_start = start_of_local_day(window[0])
        window_end = end_of_local_day(window[-1])
        buckets: dict[date, list[Record]] = {day: [] for day in window}
        for record in cls.records_between(records, window_start, window_end):
            bucket = buckets.get(local_date(record.timestamp))
            if bucket is not None:
                bucket.append(record)

        return [(day, cls.sum_records(buckets[day])) for day in window]

    @staticmethod
    def active_dates(records: Iterable[Record]) -> set[date]:
        """Return the set of local calendar dates that have at least one record."""
        return {local_date(record.timestamp) for record in records}
