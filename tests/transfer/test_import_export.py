from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone

import pytest

from attendance_tracker.core.enums import ExportKind
from attendance_tracker.core.exceptions import EmptyDatasetError, ValidationError
from attendance_tracker.transfer.schema import validate_snapshot
from attendance_tracker.transfer.service import TransferService


def _service(repo):
    return TransferService(repo, clock=lambda: datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc))


@pytest.fixture
def populated(repo, ada, grace):
    repo.add_or_update_attendance(employee_id=ada.id, date="2024-03-01", status="late", notes="traffic")
    repo.add_or_update_attendance(employee_id=grace.id, date="2024-03-01", status="present")
    repo.add_or_update_attendance(employee_id="ghost", date="2024-03-02", status="absent")
    return repo


def test_export_snapshot_shape(populated):
    doc = _service(populated).export_snapshot()

    assert set(doc) == {"employees", "attendanceRecords", "orgSettings", "exportDate"}
    assert doc["exportDate"] == "2024-03-01T12:30:00.000Z"
    assert doc["attendanceRecords"][0]["notes"] == "traffic"
    assert "notes" not in doc["attendanceRecords"][1]
    assert doc["orgSettings"]["name"] == populated.settings.name


def test_round_trip_restores_collections(populated):
    svc = _service(populated)
    employees_before = set(populated.employees)
    records_before = set(populated.attendance_records)
    document = json.dumps(svc.export_snapshot())

    svc.clear_all_data()
    assert populated.employees == ()

    result = svc.import_snapshot(document)

    assert (result.employees, result.attendance_records, result.settings_replaced) == (2, 3, True)
    assert set(populated.employees) == employees_before
    assert set(populated.attendance_records) == records_before


def test_import_missing_attendance_records_leaves_state_untouched(populated):
    svc = _service(populated)
    employees_before = populated.employees
    records_before = populated.attendance_records

    with pytest.raises(ValidationError):
        svc.import_snapshot({"employees": []})

    assert populated.employees == employees_before
    assert populated.attendance_records == records_before


@pytest.mark.parametrize(
    "document",
    [
        "not json",
        "[]",
        {"employees": {}, "attendanceRecords": []},
        {"employees": [], "attendanceRecords": "nope"},
        {"employees": [{"id": "x"}], "attendanceRecords": []},
        {"employees": [], "attendanceRecords": [{"id": "r", "employeeId": "e", "date": "2024-03-01", "status": "sick"}]},
        {"employees": [], "attendanceRecords": [], "orgSettings": ["x"]},
    ],
)
def test_validate_snapshot_rejects_malformed_documents(document):
    checked = validate_snapshot(document)
    assert not checked.ok
    assert checked.error


def test_import_without_settings_keeps_current_settings(repo):
    repo.add_department("Legal")
    settings_before = repo.settings

    result = _service(repo).import_snapshot({"employees": [], "attendanceRecords": []})

    assert result.settings_replaced is False
    assert repo.settings == settings_before


def test_import_trusts_duplicates_and_dangling_references(repo):
    rec = {"employeeId": "ghost", "date": "2024-03-01", "status": "present", "timestamp": 1}
    _service(repo).import_snapshot(
        {"employees": [], "attendanceRecords": [{**rec, "id": "r1"}, {**rec, "id": "r2"}]}
    )

    assert [r.id for r in repo.attendance_records] == ["r1", "r2"]


def test_tabular_employees_columns(populated):
    table = _service(populated).export_tabular(ExportKind.EMPLOYEES, include_organization=True)

    assert table.columns == ["Name", "ID", "Department", "Position", "Join Date", "Organization"]
    assert table.rows[0] == {
        "Name": "Ada",
        "ID": "E1",
        "Department": "Engineering",
        "Position": "Senior",
        "Join Date": "2024-01-01",
        "Organization": populated.settings.name,
    }


def test_tabular_attendance_labels_unknown_employee(populated):
    table = _service(populated).export_tabular(ExportKind.ATTENDANCE)

    assert table.columns == ["Date", "Employee Name", "Employee ID", "Department", "Status", "Notes"]
    ghost = table.rows[2]
    assert (ghost["Employee Name"], ghost["Employee ID"], ghost["Department"]) == ("Unknown",) * 3
    assert table.rows[1]["Notes"] == ""


def test_tabular_attendance_organization_column_leads(populated):
    table = _service(populated).export_tabular(ExportKind.ATTENDANCE, include_organization=True)
    assert table.columns[0] == "Organization"


@pytest.mark.parametrize("kind", list(ExportKind))
def test_tabular_export_of_empty_collection_fails(repo, kind):
    with pytest.raises(EmptyDatasetError):
        _service(repo).export_tabular(kind)


def test_csv_quotes_commas_and_quotes(repo):
    repo.add_employee(
        name='Ada "Countess" Lovelace', employee_id="E1", department="R&D, Labs", position="Eng", join_date="2024-01-01"
    )

    text = _service(repo).render_csv(ExportKind.EMPLOYEES)

    lines = text.splitlines()
    assert lines[0] == "Name,ID,Department,Position,Join Date"
    assert lines[1] == '"Ada ""Countess"" Lovelace",E1,"R&D, Labs",Eng,2024-01-01'
    assert list(csv.DictReader(io.StringIO(text)))[0]["Department"] == "R&D, Labs"


def test_xlsx_export_is_a_workbook(populated):
    body = _service(populated).render_xlsx(ExportKind.ATTENDANCE)
    assert body[:2] == b"PK"
