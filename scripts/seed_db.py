"""Seed demo employees and a week of attendance marks.

Note: Only seeds an empty dataset; run `POST /api/data/clear` first to reseed.
"""

from __future__ import annotations

import importlib
import sys
from datetime import date, timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "attendance_tracker"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from attendance_tracker.container import build_container_from_settings
from attendance_tracker.core.enums import AttendanceStatus

DEMO_EMPLOYEES = [
    ("Ada Lovelace", "E001", "Engineering", "Team Lead", "2023-01-09"),
    ("Grace Hopper", "E002", "Engineering", "Senior", "2023-04-03"),
    ("Alan Turing", "E003", "Finance", "Manager", "2022-11-14"),
    ("Joan Clarke", "E004", "Human Resources", "Junior", "2024-02-01"),
]

PATTERN = [
    AttendanceStatus.PRESENT,
    AttendanceStatus.PRESENT,
    AttendanceStatus.LATE,
    AttendanceStatus.WFH,
    AttendanceStatus.PRESENT,
    AttendanceStatus.LEAVE,
    AttendanceStatus.ABSENT,
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container_from_settings(settings)
    repo = container.repository

    if repo.employees:
        raise SystemExit(f"Dataset already has {len(repo.employees)} employees; not seeding.")

    employees = [
        repo.add_employee(name=n, employee_id=code, department=d, position=p, join_date=j)
        for n, code, d, p, j in DEMO_EMPLOYEES
    ]

    today = date.today()
    for offset in range(7):
        day = (today - timedelta(days=offset)).isoformat()
        for i, emp in enumerate(employees):
            status = PATTERN[(offset + i) % len(PATTERN)]
            repo.add_or_update_attendance(employee_id=emp.id, date=day, status=status)

    print(f"OK: Seeded {len(employees)} employees and {len(repo.attendance_records)} attendance records")


if __name__ == "__main__":
    main()
