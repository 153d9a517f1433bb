"""Unit tests for StreakEngine - consecutive logged days."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from custom_components.ecoscore.engines import StreakEngine
from custom_components.ecoscore.utils.dt_utils import set_default_timezone
from tests.helpers import NOW, TODAY, at, electricity, recycle, water


class TestStreak:
    """Streak counting backward from the reference day."""

    def test_today_and_yesterday_then_gap(self) -> None:
        records = [water(10, at(0)), electricity(1, at(1)), water(5, at(3))]
        assert StreakEngine.streak(records, TODAY) == 2

    def test_three_days_then_gap(self) -> None:
        records = [water(1, at(days)) for days in (0, 1, 2, 4)]
        assert StreakEngine.streak(records, TODAY) == 3

    def test_long_unbroken_run(self) -> None:
        records = [water(1, at(days)) for days in range(10)]
        assert StreakEngine.streak(records, TODAY) == 10

    def test_empty_history(self) -> None:
        assert StreakEngine.streak([], TODAY) == 0

    def test_no_record_today_is_zero(self) -> None:
        records = [water(10, at(1)), water(10, at(2))]
        assert StreakEngine.streak(records, TODAY) == 0

    def test_several_records_on_one_day_count_once(self) -> None:
        records = [water(1, at(0, 8)), recycle(1, at(0, 12)), water(1, at(0, 20))]
        assert StreakEngine.streak(records, TODAY) == 1

    def test_as_of_instant_uses_its_local_date(self) -> None:
        records = [water(10, at(0)), water(10, at(1))]
        assert StreakEngine.streak(records, NOW) == 2

    def test_as_of_in_the_past_ignores_later_records(self) -> None:
        records = [water(10, at(days)) for days in range(4)]
        assert StreakEngine.streak(records, TODAY - timedelta(days=2)) == 2

    def test_streak_follows_local_calendar(self) -> None:
        set_default_timezone(ZoneInfo("Asia/Tokyo"))
        # 2026-10-20 16:00 UTC is already 2026-10-21 01:00 in Tokyo
        records = [
            water(1, datetime(2026, 10, 20, 16, 0, tzinfo=UTC)),
            water(1, datetime(2026, 10, 20, 1, 0, tzinfo=UTC)),
        ]
        assert StreakEngine.streak(records, TODAY) == 2
