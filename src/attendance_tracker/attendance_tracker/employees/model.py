from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee on the roster.

    `employee_id` is the organization-assigned code (not unique); `id` is the
    system identifier that attendance records point at.
    """

    id: str
    name: str
    employee_id: str
    department: str
    position: str
    join_date: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "employeeId": self.employee_id,
            "department": self.department,
            "position": self.position,
            "joinDate": self.join_date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Employee":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            employee_id=str(data.get("employeeId", "")),
            department=str(data.get("department", "")),
            position=str(data.get("position", "")),
            join_date=str(data.get("joinDate", "")),
        )
