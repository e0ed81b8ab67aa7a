from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Union

import pandas as pd

from ..core.constants import UNKNOWN_LABEL
from ..core.enums import ExportKind
from ..core.exceptions import EmptyDatasetError, ValidationError
from ..repository import EntityRepository
from .schema import validate_snapshot

logger = logging.getLogger(__name__)

EMPLOYEE_COLUMNS = ["Name", "ID", "Department", "Position", "Join Date"]
ATTENDANCE_COLUMNS = ["Date", "Employee Name", "Employee ID", "Department", "Status", "Notes"]
ORGANIZATION_COLUMN = "Organization"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_instant(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ImportResult:
    employees: int
    attendance_records: int
    settings_replaced: bool


@dataclass(frozen=True)
class TabularExport:
    kind: ExportKind
    columns: list[str]
    rows: list[dict[str, str]]


class TransferService:
    """Use case: whole-dataset backup/restore and flattened exports for spreadsheets."""

    def __init__(self, repository: EntityRepository, *, clock: Callable[[], datetime] = _utc_now):
        self._repository = repository
        self._clock = clock

    # ---------------------------------------------------------------- JSON snapshot

    def export_snapshot(self) -> dict[str, Any]:
        snap = self._repository.snapshot()
        return {
            "employees": [e.to_dict() for e in snap.employees],
            "attendanceRecords": [r.to_dict() for r in snap.attendance_records],
            "orgSettings": snap.settings.to_dict(),
            "exportDate": format_instant(self._clock()),
        }

    def import_snapshot(self, document: Union[str, bytes, Mapping[str, Any]]) -> ImportResult:
        """Replace the whole dataset with the document's contents.

        The document is trusted as-is beyond its shape: duplicate (employee, date) pairs
        and records pointing at unknown employees are imported unchanged.
        """

        checked = validate_snapshot(document)
        if not checked.ok:
            logger.warning("import rejected: %s", checked.error)
            raise ValidationError(checked.error)

        data = checked.data
        self._repository.replace_all(
            employees=data.employees,
            attendance_records=data.attendance_records,
            settings=data.settings,
        )
        return ImportResult(
            employees=len(data.employees),
            attendance_records=len(data.attendance_records),
            settings_replaced=data.settings is not None,
        )

    def clear_all_data(self) -> None:
        self._repository.clear_all()

    # ---------------------------------------------------------------- tabular

    def export_tabular(self, kind: ExportKind, *, include_organization: bool = False) -> TabularExport:
        snap = self._repository.snapshot()
        org_name = snap.settings.name

        if kind == ExportKind.EMPLOYEES:
            if not snap.employees:
                raise EmptyDatasetError("No employees to export")
            columns = EMPLOYEE_COLUMNS + ([ORGANIZATION_COLUMN] if include_organization else [])
            rows = []
            for e in snap.employees:
                row = {
                    "Name": e.name,
                    "ID": e.employee_id,
                    "Department": e.department,
                    "Position": e.position,
                    "Join Date": e.join_date,
                }
                if include_organization:
                    row[ORGANIZATION_COLUMN] = org_name
                rows.append(row)
            return TabularExport(kind=kind, columns=columns, rows=rows)

        if not snap.attendance_records:
            raise EmptyDatasetError("No attendance records to export")
        columns = ([ORGANIZATION_COLUMN] if include_organization else []) + ATTENDANCE_COLUMNS
        by_id = snap.employee_by_id()
        rows = []
        for r in snap.attendance_records:
            emp = by_id.get(r.employee_id)
            row = {ORGANIZATION_COLUMN: org_name} if include_organization else {}
            row.update(
                {
                    "Date": r.date,
                    "Employee Name": emp.name if emp else UNKNOWN_LABEL,
                    "Employee ID": emp.employee_id if emp else UNKNOWN_LABEL,
                    "Department": emp.department if emp else UNKNOWN_LABEL,
                    "Status": r.status.value,
                    "Notes": r.notes or "",
                }
            )
            rows.append(row)
        return TabularExport(kind=kind, columns=columns, rows=rows)

    def render_csv(self, kind: ExportKind, *, include_organization: bool = False) -> str:
        table = self.export_tabular(kind, include_organization=include_organization)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=table.columns, lineterminator="\n")
        writer.writeheader()
        for row in table.rows:
            writer.writerow(row)
        return out.getvalue()

    def render_xlsx(self, kind: ExportKind, *, include_organization: bool = False) -> bytes:
        table = self.export_tabular(kind, include_organization=include_organization)
        df = pd.DataFrame(table.rows, columns=table.columns)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=kind.value.capitalize())
        return output.getvalue()
