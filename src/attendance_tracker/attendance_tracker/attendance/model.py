from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import AttendanceStatus, UpsertOutcome


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark for one employee on one day."""

    id: str
    employee_id: str
    date: str
    status: AttendanceStatus
    timestamp: int
    notes: Optional[str] = None

    @property
    def key(self) -> tuple[str, str]:
        return self.employee_id, self.date

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": self.date,
            "status": self.status.value,
            "timestamp": self.timestamp,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceRecord":
        notes = data.get("notes")
        return cls(
            id=str(data["id"]),
            employee_id=str(data["employeeId"]),
            date=str(data["date"]),
            status=AttendanceStatus(data["status"]),
            timestamp=int(data.get("timestamp") or 0),
            notes=None if notes is None else str(notes),
        )


@dataclass(frozen=True)
class UpsertResult:
    record: AttendanceRecord
    outcome: UpsertOutcome

    @property
    def created(self) -> bool:
        return self.outcome == UpsertOutcome.CREATED
