"""Pure read-only statistics over employees and attendance records.

Every function takes the collections it needs and returns fresh values; nothing is
cached and nothing is written back. Dates are `yyyy-MM-dd` strings, so window
membership is a plain string comparison.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as date_type
from datetime import timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import (
    day_index,
    days_between,
    end_of_month,
    end_of_week,
    format_iso_date,
    parse_iso_date,
    start_of_month,
    start_of_week,
)
from ..core.constants import DEFAULT_TREND_DAYS, UNKNOWN_LABEL, WEEK_STARTS_ON
from ..core.enums import AttendanceStatus, ViewMode
from ..employees.model import Employee

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class StatusCounts:
    present: int = 0
    absent: int = 0
    late: int = 0
    leave: int = 0
    wfh: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.late + self.leave + self.wfh


@dataclass(frozen=True)
class DailyStats:
    date: str
    counts: StatusCounts
    total_employees: int
    attendance_rate: float


@dataclass(frozen=True)
class ReportWindow:
    start: str
    end: str
    view_mode: ViewMode


@dataclass(frozen=True)
class WindowSummary:
    employee_id: str
    name: str
    department: str
    position: str
    start: str
    end: str
    counts: StatusCounts
    total_days: int
    marked_days: int
    unmarked_days: int
    rate: float


@dataclass(frozen=True)
class ActivityItem:
    record: AttendanceRecord
    employee_name: str
    employee_position: str


@dataclass(frozen=True)
class CalendarDay:
    date: str
    day_index: int
    status: Optional[AttendanceStatus]
    notes: str = ""


@dataclass(frozen=True)
class TrendDay:
    date: str
    weekday: str
    counts: StatusCounts


@dataclass(frozen=True)
class DateCoverage:
    date: str
    marked: int
    total_employees: int
    marked_percentage: float
    unmarked: tuple[Employee, ...] = field(default_factory=tuple)


def count_statuses(records: Iterable[AttendanceRecord]) -> StatusCounts:
    tally = {s: 0 for s in AttendanceStatus}
    for r in records:
        tally[r.status] += 1
    return StatusCounts(
        present=tally[AttendanceStatus.PRESENT],
        absent=tally[AttendanceStatus.ABSENT],
        late=tally[AttendanceStatus.LATE],
        leave=tally[AttendanceStatus.LEAVE],
        wfh=tally[AttendanceStatus.WFH],
    )


def percentage(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100


def in_window(record: AttendanceRecord, start: str, end: str) -> bool:
    return start <= record.date <= end


def count_days(start: str, end: str) -> int:
    return len(days_between(parse_iso_date(start), parse_iso_date(end)))


def daily_stats(
    employees: Sequence[Employee],
    records: Iterable[AttendanceRecord],
    date: str,
) -> DailyStats:
    counts = count_statuses(r for r in records if r.date == date)
    total = len(employees)
    return DailyStats(
        date=date,
        counts=counts,
        total_employees=total,
        attendance_rate=percentage(counts.present, total),
    )


def windowed_summary(
    employee: Employee,
    records: Iterable[AttendanceRecord],
    start: str,
    end: str,
) -> WindowSummary:
    mine = [r for r in records if r.employee_id == employee.id and in_window(r, start, end)]
    counts = count_statuses(mine)
    total_days = count_days(start, end)
    marked = len(mine)
    return WindowSummary(
        employee_id=employee.id,
        name=employee.name,
        department=employee.department,
        position=employee.position,
        start=start,
        end=end,
        counts=counts,
        total_days=total_days,
        marked_days=marked,
        unmarked_days=total_days - marked,
        rate=percentage(counts.present, total_days),
    )


def organization_summary_table(
    employees: Sequence[Employee],
    records: Sequence[AttendanceRecord],
    start: str,
    end: str,
) -> list[WindowSummary]:
    window_records = [r for r in records if in_window(r, start, end)]
    return [windowed_summary(e, window_records, start, end) for e in employees]


def recent_activity(
    employees: Sequence[Employee],
    records: Iterable[AttendanceRecord],
    limit: int,
) -> list[ActivityItem]:
    if limit <= 0:
        return []
    by_id = {e.id: e for e in employees}
    newest = sorted(records, key=lambda r: r.timestamp, reverse=True)[:limit]

    items: list[ActivityItem] = []
    for r in newest:
        emp = by_id.get(r.employee_id)
        items.append(
            ActivityItem(
                record=r,
                employee_name=emp.name if emp else UNKNOWN_LABEL,
                employee_position=emp.position if emp else "",
            )
        )
    return items


def resolve_window(reference: date_type, view_mode: ViewMode) -> ReportWindow:
    """Map a reference day and view mode onto an inclusive date range."""

    if view_mode == ViewMode.DAILY:
        start = end = reference
    elif view_mode == ViewMode.WEEKLY:
        start = start_of_week(reference, WEEK_STARTS_ON)
        end = end_of_week(reference, WEEK_STARTS_ON)
    else:
        start = start_of_month(reference)
        end = end_of_month(reference)
    return ReportWindow(start=format_iso_date(start), end=format_iso_date(end), view_mode=view_mode)


def employee_calendar(
    employee_id: str,
    records: Iterable[AttendanceRecord],
    start: str,
    end: str,
) -> list[CalendarDay]:
    by_date = {r.date: r for r in records if r.employee_id == employee_id and in_window(r, start, end)}

    days: list[CalendarDay] = []
    for d in days_between(parse_iso_date(start), parse_iso_date(end)):
        key = format_iso_date(d)
        rec = by_date.get(key)
        days.append(
            CalendarDay(
                date=key,
                day_index=day_index(d),
                status=rec.status if rec else None,
                notes=(rec.notes or "") if rec else "",
            )
        )
    return days


def weekly_trend(
    records: Sequence[AttendanceRecord],
    end: date_type,
    days: int = DEFAULT_TREND_DAYS,
) -> list[TrendDay]:
    """Per-status counts for each of the `days` days ending at `end` (oldest first)."""

    trend: list[TrendDay] = []
    for offset in range(days - 1, -1, -1):
        d = end - timedelta(days=offset)
        key = format_iso_date(d)
        trend.append(
            TrendDay(
                date=key,
                weekday=WEEKDAY_NAMES[day_index(d)],
                counts=count_statuses(r for r in records if r.date == key),
            )
        )
    return trend


def date_coverage(
    employees: Sequence[Employee],
    records: Iterable[AttendanceRecord],
    date: str,
) -> DateCoverage:
    day_records = [r for r in records if r.date == date]
    marked_ids = {r.employee_id for r in day_records}
    marked = len(day_records)
    return DateCoverage(
        date=date,
        marked=marked,
        total_employees=len(employees),
        marked_percentage=percentage(marked, len(employees)),
        unmarked=tuple(e for e in employees if e.id not in marked_ids),
    )


def search_records(
    employees: Sequence[Employee],
    records: Iterable[AttendanceRecord],
    *,
    query: str = "",
    employee_id: Optional[str] = None,
    status: Optional[AttendanceStatus] = None,
) -> list[ActivityItem]:
    """Filter records the way the records screen does, newest date first.

    Records whose employee no longer exists are left out.
    """

    by_id = {e.id: e for e in employees}
    needle = (query or "").strip().lower()

    hits: list[ActivityItem] = []
    for r in records:
        emp = by_id.get(r.employee_id)
        if not emp:
            continue
        if employee_id and r.employee_id != employee_id:
            continue
        if status and r.status != status:
            continue
        if needle and not (
            needle in emp.name.lower()
            or needle in r.date
            or needle in r.status.value
            or (r.notes and needle in r.notes.lower())
        ):
            continue
        hits.append(ActivityItem(record=r, employee_name=emp.name, employee_position=emp.position))

    hits.sort(key=lambda item: item.record.date, reverse=True)
    return hits
