from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Optional, Sequence

from .attendance.model import AttendanceRecord, UpsertResult
from .attendance.upsert import AttendanceUpsertEngine, find_index
from .common.datetime_utils import now_millis
from .common.identifiers import new_id
from .common.validators import (
    require_iso_date,
    require_min_length,
    require_non_empty,
    require_status,
)
from .core.constants import ATTENDANCE_KEY, EMPLOYEES_KEY, ORG_SETTINGS_KEY
from .core.exceptions import (
    DuplicateEntryError,
    NotFoundError,
    ReferentialConstraintError,
    ValidationError,
)
from .employees.model import Employee
from .organization.model import OrganizationSettings, default_settings
from .storage.gateway import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositorySnapshot:
    """Read-only view handed to the report and transfer services."""

    employees: tuple[Employee, ...]
    attendance_records: tuple[AttendanceRecord, ...]
    settings: OrganizationSettings

    def employee_by_id(self) -> dict[str, Employee]:
        return {e.id: e for e in self.employees}


class EntityRepository:
    """Authoritative in-memory collections of employees, attendance records and settings.

    The repository is built once per process (see container.py) and is the only owner of
    the three collections. Every successful mutation writes the affected collection(s)
    through the key/value store before returning.

    Update/delete by an unknown id raises NotFoundError.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        upsert_engine: Optional[AttendanceUpsertEngine] = None,
        id_factory: Callable[[], str] = new_id,
        clock: Callable[[], int] = now_millis,
    ):
        self._store = store
        self._id_factory = id_factory
        self._clock = clock
        self._upsert = upsert_engine or AttendanceUpsertEngine(id_factory=id_factory, clock=clock)

        self._employees: list[Employee] = []
        self._records: list[AttendanceRecord] = []
        self._settings: OrganizationSettings = default_settings()
        self.reload()

    # ------------------------------------------------------------------ loading

    def _load_json(self, key: str) -> Any:
        raw = self._store.load(key)
        if raw is None:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValidationError(f"Stored data under {key!r} is unreadable") from e

    def reload(self) -> None:
        """(Re)read all three collections from the store."""

        employees = self._load_json(EMPLOYEES_KEY) or []
        records = self._load_json(ATTENDANCE_KEY) or []
        settings = self._load_json(ORG_SETTINGS_KEY)

        self._employees = [Employee.from_dict(e) for e in employees]
        self._records = [AttendanceRecord.from_dict(r) for r in records]
        self._settings = OrganizationSettings.from_dict(settings) if settings else default_settings()
        logger.debug(
            "loaded %d employees, %d attendance records",
            len(self._employees),
            len(self._records),
        )

    # ------------------------------------------------------------------ persistence

    def _save_json(self, key: str, payload: Any) -> None:
        self._store.save(key, json.dumps(payload, ensure_ascii=False).encode("utf-8"))

    def _persist_employees(self) -> None:
        self._save_json(EMPLOYEES_KEY, [e.to_dict() for e in self._employees])

    def _persist_records(self) -> None:
        self._save_json(ATTENDANCE_KEY, [r.to_dict() for r in self._records])

    def _persist_settings(self) -> None:
        self._save_json(ORG_SETTINGS_KEY, self._settings.to_dict())

    # ------------------------------------------------------------------ reads

    @property
    def employees(self) -> tuple[Employee, ...]:
        return tuple(self._employees)

    @property
    def attendance_records(self) -> tuple[AttendanceRecord, ...]:
        return tuple(self._records)

    @property
    def settings(self) -> OrganizationSettings:
        return self._settings

    def snapshot(self) -> RepositorySnapshot:
        return RepositorySnapshot(
            employees=tuple(self._employees),
            attendance_records=tuple(self._records),
            settings=self._settings,
        )

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return next((e for e in self._employees if e.id == employee_id), None)

    def get_attendance(self, record_id: str) -> Optional[AttendanceRecord]:
        return next((r for r in self._records if r.id == record_id), None)

    def attendance_by_date(self, date: str) -> list[AttendanceRecord]:
        return [r for r in self._records if r.date == date]

    def attendance_by_employee(self, employee_id: str) -> list[AttendanceRecord]:
        return [r for r in self._records if r.employee_id == employee_id]

    def _employee_index(self, employee_id: str) -> int:
        for i, e in enumerate(self._employees):
            if e.id == employee_id:
                return i
        raise NotFoundError(f"Employee {employee_id!r} does not exist")

    def _record_index(self, record_id: str) -> int:
        for i, r in enumerate(self._records):
            if r.id == record_id:
                return i
        raise NotFoundError(f"Attendance record {record_id!r} does not exist")

    # ------------------------------------------------------------------ employees

    @staticmethod
    def _clean_employee_fields(
        *, name: str, employee_id: str, department: str, position: str, join_date: str
    ) -> dict[str, str]:
        return {
            "name": require_min_length(name or "", "Name", 2),
            "employee_id": require_non_empty(employee_id, "Employee ID"),
            "department": require_non_empty(department, "Department"),
            "position": require_non_empty(position, "Position"),
            "join_date": require_iso_date(join_date, "Join date"),
        }

    def add_employee(
        self,
        *,
        name: str,
        employee_id: str,
        department: str,
        position: str,
        join_date: str,
    ) -> Employee:
        fields = self._clean_employee_fields(
            name=name,
            employee_id=employee_id,
            department=department,
            position=position,
            join_date=join_date,
        )
        employee = Employee(id=self._id_factory(), **fields)
        self._employees.append(employee)
        self._persist_employees()
        logger.info("employee added: %s (%s)", employee.name, employee.id)
        return employee

    def update_employee(self, employee: Employee) -> Employee:
        index = self._employee_index(employee.id)
        fields = self._clean_employee_fields(
            name=employee.name,
            employee_id=employee.employee_id,
            department=employee.department,
            position=employee.position,
            join_date=employee.join_date,
        )
        updated = Employee(id=employee.id, **fields)
        self._employees[index] = updated
        self._persist_employees()
        logger.info("employee updated: %s", updated.id)
        return updated

    def delete_employee(self, employee_id: str) -> int:
        """Remove an employee and every attendance record pointing at it.

        Returns the number of attendance records removed.
        """

        index = self._employee_index(employee_id)
        removed = self._employees.pop(index)

        before = len(self._records)
        self._records = [r for r in self._records if r.employee_id != employee_id]
        cascaded = before - len(self._records)

        self._persist_employees()
        self._persist_records()
        logger.info("employee deleted: %s (%d attendance records removed)", removed.id, cascaded)
        return cascaded

    # ------------------------------------------------------------------ attendance

    def add_or_update_attendance(
        self,
        *,
        employee_id: str,
        date: str,
        status,
        notes: Optional[str] = None,
    ) -> UpsertResult:
        employee_id = require_non_empty(employee_id, "Employee")
        date = require_iso_date(date, "Date")
        result = self._upsert.upsert(
            self._records,
            employee_id=employee_id,
            date=date,
            status=require_status(status),
            notes=notes,
        )
        self._persist_records()
        logger.info(
            "attendance %s: employee=%s date=%s status=%s",
            result.outcome.value,
            employee_id,
            date,
            result.record.status.value,
        )
        return result

    def update_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        """Replace a record by id and refresh its timestamp.

        Changing employee/date onto a day that already has another record for that
        employee is rejected, so the one-record-per-day rule holds after updates too.
        """

        index = self._record_index(record.id)
        employee_id = require_non_empty(record.employee_id, "Employee")
        date = require_iso_date(record.date, "Date")

        clash = find_index(self._records, employee_id=employee_id, date=date)
        if clash is not None and clash != index:
            logger.warning("attendance update rejected: %s already marked on %s", employee_id, date)
            raise DuplicateEntryError(f"Employee {employee_id!r} already has a record on {date}")

        updated = replace(
            record,
            employee_id=employee_id,
            date=date,
            status=require_status(record.status),
            timestamp=self._clock(),
        )
        self._records[index] = updated
        self._persist_records()
        logger.info("attendance updated: %s", updated.id)
        return updated

    def delete_attendance(self, record_id: str) -> None:
        index = self._record_index(record_id)
        self._records.pop(index)
        self._persist_records()
        logger.info("attendance deleted: %s", record_id)

    # ------------------------------------------------------------------ settings

    def _referenced(self, attr: str) -> set[str]:
        return {getattr(e, attr) for e in self._employees}

    def update_settings(self, settings: OrganizationSettings) -> OrganizationSettings:
        settings = replace(settings, name=require_non_empty(settings.name, "Organization name"))
        for attr, values, label in (
            ("department", settings.departments, "Department"),
            ("position", settings.positions, "Position"),
        ):
            dropped = (set(getattr(self._settings, f"{attr}s")) - set(values)) & self._referenced(attr)
            if dropped:
                name = sorted(dropped)[0]
                raise ReferentialConstraintError(f"{label} {name!r} is assigned to employees")

        self._settings = settings
        self._persist_settings()
        logger.info("organization settings updated: %s", settings.name)
        return settings

    def _add_vocabulary(self, attr: str, label: str, value: str) -> OrganizationSettings:
        value = require_non_empty(value, label)
        current: Sequence[str] = getattr(self._settings, f"{attr}s")
        if value in current:
            logger.warning("%s %r already exists", label.lower(), value)
            raise DuplicateEntryError(f"{label} {value!r} already exists")

        self._settings = getattr(self._settings, f"with_{attr}s")((*current, value))
        self._persist_settings()
        logger.info("%s added: %s", label.lower(), value)
        return self._settings

    def _remove_vocabulary(self, attr: str, label: str, value: str) -> OrganizationSettings:
        current: Sequence[str] = getattr(self._settings, f"{attr}s")
        if value not in current:
            raise NotFoundError(f"{label} {value!r} does not exist")
        if value in self._referenced(attr):
            logger.warning("%s %r still in use, not removed", label.lower(), value)
            raise ReferentialConstraintError(f"{label} {value!r} is assigned to employees")

        self._settings = getattr(self._settings, f"with_{attr}s")(v for v in current if v != value)
        self._persist_settings()
        logger.info("%s removed: %s", label.lower(), value)
        return self._settings

    def add_department(self, name: str) -> OrganizationSettings:
        return self._add_vocabulary("department", "Department", name)

    def remove_department(self, name: str) -> OrganizationSettings:
        return self._remove_vocabulary("department", "Department", name)

    def add_position(self, name: str) -> OrganizationSettings:
        return self._add_vocabulary("position", "Position", name)

    def remove_position(self, name: str) -> OrganizationSettings:
        return self._remove_vocabulary("position", "Position", name)

    # ------------------------------------------------------------------ bulk

    def replace_all(
        self,
        *,
        employees: Iterable[Employee],
        attendance_records: Iterable[AttendanceRecord],
        settings: Optional[OrganizationSettings] = None,
    ) -> None:
        """Overwrite both collections (and settings, when given) in one step."""

        self._employees = list(employees)
        self._records = list(attendance_records)
        if settings is not None:
            self._settings = settings

        self._persist_employees()
        self._persist_records()
        self._persist_settings()
        logger.info(
            "dataset replaced: %d employees, %d attendance records",
            len(self._employees),
            len(self._records),
        )

    def clear_all(self) -> None:
        """Drop every employee and record and reset settings to defaults."""

        self._employees = []
        self._records = []
        self._settings = default_settings()
        self._store.delete(EMPLOYEES_KEY)
        self._store.delete(ATTENDANCE_KEY)
        self._store.delete(ORG_SETTINGS_KEY)
        logger.info("all data cleared")
