from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance marks an employee can receive for one calendar day."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    LEAVE = "leave"
    WFH = "wfh"


class ViewMode(str, Enum):
    """Report window selector."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ExportKind(str, Enum):
    EMPLOYEES = "employees"
    ATTENDANCE = "attendance"


class UpsertOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
