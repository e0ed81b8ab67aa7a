from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import now_local, parse_iso_date, today_iso
from ..common.validators import require_iso_date, require_status
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.enums import ViewMode
from ..core.exceptions import NotFoundError, ValidationError
from ..repository import EntityRepository
from . import aggregation
from .aggregation import (
    ActivityItem,
    CalendarDay,
    DailyStats,
    DateCoverage,
    ReportWindow,
    TrendDay,
    WindowSummary,
)


@dataclass(frozen=True)
class EmployeeReport:
    window: ReportWindow
    summary: WindowSummary
    calendar: list[CalendarDay]


def parse_view_mode(value: Optional[str]) -> ViewMode:
    if not value:
        return ViewMode.MONTHLY
    try:
        return ViewMode(value.strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in ViewMode)
        raise ValidationError(f"View must be one of: {allowed}") from None


class ReportService:
    """Use case: dashboard and report numbers, always computed from a fresh snapshot."""

    def __init__(self, repository: EntityRepository, *, recent_limit: int = DEFAULT_RECENT_LIMIT):
        self._repository = repository
        self._recent_limit = int(recent_limit)

    def daily_stats(self, date: Optional[str] = None) -> DailyStats:
        date = require_iso_date(date or today_iso(), "Date")
        snap = self._repository.snapshot()
        return aggregation.daily_stats(snap.employees, snap.attendance_records, date)

    def resolve_window(self, reference: Optional[str], view_mode: ViewMode) -> ReportWindow:
        ref = parse_iso_date(require_iso_date(reference, "Reference date")) if reference else now_local().date()
        return aggregation.resolve_window(ref, view_mode)

    def windowed_summary(self, employee_id: str, start: str, end: str) -> WindowSummary:
        require_iso_date(start, "Start date")
        require_iso_date(end, "End date")
        employee = self._repository.get_employee(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id!r} does not exist")
        return aggregation.windowed_summary(employee, self._repository.attendance_records, start, end)

    def organization_summary_table(self, start: str, end: str) -> list[WindowSummary]:
        require_iso_date(start, "Start date")
        require_iso_date(end, "End date")
        snap = self._repository.snapshot()
        return aggregation.organization_summary_table(snap.employees, snap.attendance_records, start, end)

    def employee_report(
        self,
        employee_id: str,
        *,
        reference: Optional[str] = None,
        view_mode: ViewMode = ViewMode.MONTHLY,
    ) -> EmployeeReport:
        window = self.resolve_window(reference, view_mode)
        summary = self.windowed_summary(employee_id, window.start, window.end)
        calendar = aggregation.employee_calendar(
            employee_id, self._repository.attendance_records, window.start, window.end
        )
        return EmployeeReport(window=window, summary=summary, calendar=calendar)

    def recent_activity(self, limit: Optional[int] = None) -> list[ActivityItem]:
        snap = self._repository.snapshot()
        n = self._recent_limit if limit is None else int(limit)
        return aggregation.recent_activity(snap.employees, snap.attendance_records, n)

    def weekly_trend(self, end: Optional[str] = None) -> list[TrendDay]:
        end_date = parse_iso_date(require_iso_date(end, "End date")) if end else now_local().date()
        return aggregation.weekly_trend(self._repository.attendance_records, end_date)

    def date_coverage(self, date: Optional[str] = None) -> DateCoverage:
        date = require_iso_date(date or today_iso(), "Date")
        snap = self._repository.snapshot()
        return aggregation.date_coverage(snap.employees, snap.attendance_records, date)

    def search_records(
        self,
        *,
        query: str = "",
        employee_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[ActivityItem]:
        snap = self._repository.snapshot()
        return aggregation.search_records(
            snap.employees,
            snap.attendance_records,
            query=query,
            employee_id=employee_id or None,
            status=require_status(status) if status else None,
        )
