from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_millis() -> int:
    return int(now_local().timestamp() * 1000)


def today_iso() -> str:
    return format_iso_date(now_local().date())


def day_index(value: date) -> int:
    """Day of week with Sunday as 0."""
    return value.isoweekday() % 7


def start_of_week(value: date, week_starts_on: int = 0) -> date:
    offset = (day_index(value) - week_starts_on) % 7
    return value - timedelta(days=offset)


def end_of_week(value: date, week_starts_on: int = 0) -> date:
    return start_of_week(value, week_starts_on) + timedelta(days=6)


def start_of_month(value: date) -> date:
    return value.replace(day=1)


def end_of_month(value: date) -> date:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=last_day)


def days_between(start: date, end: date) -> list[date]:
    """Every calendar day from start to end, both inclusive (empty when end < start)."""
    if end < start:
        return []
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]
