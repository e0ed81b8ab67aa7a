from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, MutableSequence, Optional

from ..common.datetime_utils import now_millis
from ..common.identifiers import new_id
from ..core.enums import AttendanceStatus, UpsertOutcome
from .model import AttendanceRecord, UpsertResult


def find_index(records, *, employee_id: str, date: str) -> Optional[int]:
    for i, r in enumerate(records):
        if r.key == (employee_id, date):
            return i
    return None


@dataclass
class AttendanceUpsertEngine:
    """Keeps at most one record per (employee_id, date).

    A second mark for the same employee and day replaces the first in place: the
    record keeps its id and position, takes the new status/notes and a fresh
    timestamp. Last write wins; nothing is merged.
    """

    id_factory: Callable[[], str] = field(default=new_id)
    clock: Callable[[], int] = field(default=now_millis)

    def upsert(
        self,
        records: MutableSequence[AttendanceRecord],
        *,
        employee_id: str,
        date: str,
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> UpsertResult:
        index = find_index(records, employee_id=employee_id, date=date)
        if index is not None:
            record = replace(records[index], status=status, notes=notes, timestamp=self.clock())
            records[index] = record
            return UpsertResult(record=record, outcome=UpsertOutcome.UPDATED)

        record = AttendanceRecord(
            id=self.id_factory(),
            employee_id=employee_id,
            date=date,
            status=status,
            timestamp=self.clock(),
            notes=notes,
        )
        records.append(record)
        return UpsertResult(record=record, outcome=UpsertOutcome.CREATED)
