"""Structural check for the portable export document.

The whole document is checked and converted before any of it reaches the repository,
so a rejected import never leaves the dataset half-replaced.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus
from ..employees.model import Employee
from ..organization.model import OrganizationSettings

EMPLOYEE_FIELDS = ("id", "name", "employeeId", "department", "position", "joinDate")
RECORD_FIELDS = ("id", "employeeId", "date", "status")
_STATUSES = {s.value for s in AttendanceStatus}


@dataclass(frozen=True)
class ParsedSnapshot:
    employees: tuple[Employee, ...]
    attendance_records: tuple[AttendanceRecord, ...]
    settings: Optional[OrganizationSettings]


@dataclass(frozen=True)
class SnapshotValidation:
    """Either `data` (document accepted) or `error` (why it was rejected)."""

    data: Optional[ParsedSnapshot] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def _reject(message: str) -> SnapshotValidation:
    return SnapshotValidation(error=message)


def _missing(item: Any, fields: tuple[str, ...]) -> Optional[str]:
    if not isinstance(item, Mapping):
        return "not an object"
    for f in fields:
        if f not in item or item[f] is None:
            return f"missing {f!r}"
    return None


def validate_snapshot(document: Union[str, bytes, Mapping[str, Any]]) -> SnapshotValidation:
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except (ValueError, UnicodeDecodeError):
            return _reject("Could not parse the imported data")

    if not isinstance(document, Mapping):
        return _reject("The data format is invalid: expected an object")

    employees = document.get("employees")
    records = document.get("attendanceRecords")
    if not isinstance(employees, list):
        return _reject("The data format is invalid: 'employees' must be a list")
    if not isinstance(records, list):
        return _reject("The data format is invalid: 'attendanceRecords' must be a list")

    for i, item in enumerate(employees):
        problem = _missing(item, EMPLOYEE_FIELDS)
        if problem:
            return _reject(f"employees[{i}]: {problem}")

    for i, item in enumerate(records):
        problem = _missing(item, RECORD_FIELDS)
        if problem:
            return _reject(f"attendanceRecords[{i}]: {problem}")
        if item["status"] not in _STATUSES:
            return _reject(f"attendanceRecords[{i}]: unknown status {item['status']!r}")
        timestamp = item.get("timestamp")
        if timestamp is not None and (isinstance(timestamp, bool) or not isinstance(timestamp, (int, float))):
            return _reject(f"attendanceRecords[{i}]: 'timestamp' must be a number")

    settings = None
    raw_settings = document.get("orgSettings")
    if raw_settings is not None:
        if not isinstance(raw_settings, Mapping):
            return _reject("'orgSettings' must be an object")
        for key in ("departments", "positions"):
            if key in raw_settings and not isinstance(raw_settings[key], list):
                return _reject(f"'orgSettings.{key}' must be a list")
        settings = OrganizationSettings.from_dict(raw_settings)

    return SnapshotValidation(
        data=ParsedSnapshot(
            employees=tuple(Employee.from_dict(e) for e in employees),
            attendance_records=tuple(AttendanceRecord.from_dict(r) for r in records),
            settings=settings,
        )
    )
