from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

REFERENCE_TIMEZONE = "Europe/Amsterdam"
LAUNCH_DATE = date(2026, 1, 17)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require_aware(instant: datetime) -> datetime:
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValueError("instant must be timezone-aware")
    return instant


def local_date_for(instant: datetime, tz: tzinfo) -> date:
    return _require_aware(instant).astimezone(tz).date()


def puzzle_number_for_date(local_date: date, launch_date: date = LAUNCH_DATE) -> int:
    return max(1, (local_date - launch_date).days + 1)


def next_local_midnight(instant: datetime, tz: tzinfo) -> datetime:
    """Return the UTC instant of the next midnight in ``tz`` after ``instant``.

    Tomorrow's UTC midnight is shifted back by the offset in effect at that
    moment, so CET/CEST changes are picked up from the tz database.
    """
    tomorrow = local_date_for(instant, tz) + timedelta(days=1)
    tomorrow_utc_midnight = datetime.combine(tomorrow, time.min, tzinfo=timezone.utc)
    offset = tomorrow_utc_midnight.astimezone(tz).utcoffset() or timedelta(0)
    return tomorrow_utc_midnight - offset


class DailySeedClock:
    """Maps wall-clock instants to daily puzzle numbers."""

    def __init__(
        self,
        *,
        launch_date: date = LAUNCH_DATE,
        timezone_name: str = REFERENCE_TIMEZONE,
        now_fn: Callable[[], datetime] | None = None,
    ) -> None:
        self.launch_date = launch_date
        self.tz = ZoneInfo(timezone_name)
        self._now_fn = now_fn or _utc_now

    def now(self) -> datetime:
        return _require_aware(self._now_fn())

    def local_date(self, now: datetime | None = None) -> date:
        return local_date_for(now or self.now(), self.tz)

    def current_puzzle_number(self, now: datetime | None = None) -> int:
        return puzzle_number_for_date(self.local_date(now), self.launch_date)

    def next_rollover_instant(self, now: datetime | None = None) -> datetime:
        return next_local_midnight(now or self.now(), self.tz)

    def date_for_puzzle(self, puzzle_number: int) -> date:
        if puzzle_number < 1:
            raise ValueError("puzzle_number must be >= 1")
        return self.launch_date + timedelta(days=puzzle_number - 1)

    def puzzle_number_for(self, local_date: date) -> int:
        return puzzle_number_for_date(local_date, self.launch_date)


__all__ = [
    "DailySeedClock",
    "LAUNCH_DATE",
    "REFERENCE_TIMEZONE",
    "local_date_for",
    "next_local_midnight",
    "puzzle_number_for_date",
]
