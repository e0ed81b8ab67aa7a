from __future__ import annotations

import itertools

from attendance_tracker.attendance.upsert import AttendanceUpsertEngine
from attendance_tracker.core.enums import AttendanceStatus, UpsertOutcome


def _engine():
    ids = itertools.count(1)
    ticks = itertools.count(1000, 1000)
    return AttendanceUpsertEngine(id_factory=lambda: f"r{next(ids)}", clock=lambda: next(ticks))


def test_first_mark_creates_record():
    records = []
    result = _engine().upsert(records, employee_id="e1", date="2024-03-01", status=AttendanceStatus.PRESENT)

    assert result.outcome == UpsertOutcome.CREATED
    assert result.created
    assert records == [result.record]
    assert result.record.id == "r1"


def test_second_mark_same_day_replaces_in_place_and_keeps_id():
    engine = _engine()
    records = []
    first = engine.upsert(records, employee_id="e1", date="2024-03-01", status=AttendanceStatus.PRESENT)
    engine.upsert(records, employee_id="e2", date="2024-03-01", status=AttendanceStatus.ABSENT)

    second = engine.upsert(
        records, employee_id="e1", date="2024-03-01", status=AttendanceStatus.LATE, notes="traffic"
    )

    assert second.outcome == UpsertOutcome.UPDATED
    assert second.record.id == first.record.id
    assert second.record.timestamp > first.record.timestamp
    assert [r.employee_id for r in records] == ["e1", "e2"]
    assert records[0].status == AttendanceStatus.LATE
    assert records[0].notes == "traffic"


def test_repeated_marks_leave_exactly_one_record_with_last_values():
    engine = _engine()
    records = []
    for status in (AttendanceStatus.PRESENT, AttendanceStatus.WFH, AttendanceStatus.LEAVE, AttendanceStatus.ABSENT):
        engine.upsert(records, employee_id="e1", date="2024-03-01", status=status, notes=status.value)

    matching = [r for r in records if r.key == ("e1", "2024-03-01")]
    assert len(matching) == 1
    assert matching[0].status == AttendanceStatus.ABSENT
    assert matching[0].notes == "absent"


def test_other_days_are_separate_records():
    engine = _engine()
    records = []
    engine.upsert(records, employee_id="e1", date="2024-03-01", status=AttendanceStatus.PRESENT)
    engine.upsert(records, employee_id="e1", date="2024-03-02", status=AttendanceStatus.PRESENT)

    assert len(records) == 2
