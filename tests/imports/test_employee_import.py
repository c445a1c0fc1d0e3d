from __future__ import annotations

import io

import pandas as pd
import pytest
from openpyxl import load_workbook

from digital_id.core.exceptions import ValidationError
from digital_id.employees.service import EmployeeService
from digital_id.imports.service import EmployeeImportService, read_table

CSV = (
    "First Name,Last Name,Email,Department,Position,Phone\n"
    "Ada,Lovelace,ada@example.com,IT,Engineer,+441234567890\n"
    "Bob,,bob@bad,Sales,Rep,\n"
    ",,,,,\n"
    "Cleo,Patra,cleo@example.com,Finance,Analyst,\n"
).encode("utf-8")


@pytest.fixture
def service(repos) -> EmployeeImportService:
    return EmployeeImportService(EmployeeService(repos.employees), batch_size=1)


def test_read_table_rejects_other_extensions():
    with pytest.raises(ValidationError, match="Please upload an XLSX or CSV file"):
        read_table("employees.txt", io.BytesIO(CSV))


def test_preview_keeps_invalid_rows_with_errors(service):
    rows = service.preview("employees.csv", io.BytesIO(CSV))

    assert [r.row_number for r in rows] == [2, 3, 5]
    assert rows[0].is_valid
    assert rows[0].data.phone_number == "+441234567890"
    assert rows[1].errors == ("Last name is required", "Invalid email format")


def test_preview_accepts_snake_case_headers(service):
    rows = service.preview_rows(
        [{"first_name": "Ada", "last_name": "L", "email": "a@example.com", "department": "IT", "position": "Dev"}]
    )

    assert rows[0].is_valid


def test_confirm_inserts_only_valid_rows(service, repos):
    rows = service.preview("employees.csv", io.BytesIO(CSV))

    summary = service.confirm(rows)

    assert (summary.total, summary.success, summary.failed, summary.skipped) == (3, 2, 0, 1)
    assert summary.departments == {"IT": 1, "Finance": 1}
    assert len(repos.employees.list_all()) == 2


def test_preview_reads_xlsx(service):
    buf = io.BytesIO()
    pd.DataFrame(
        [{"First Name": "Ada", "Last Name": "L", "Email": "a@example.com", "Department": "IT", "Position": "Dev"}]
    ).to_excel(buf, index=False, engine="openpyxl")
    buf.seek(0)

    rows = service.preview("staff.xlsx", buf)

    assert len(rows) == 1 and rows[0].is_valid


def test_template_has_department_dropdown():
    wb = load_workbook(io.BytesIO(EmployeeImportService.template_workbook()))
    ws = wb.active

    assert [c.value for c in ws[1]] == ["First Name", "Last Name", "Email", "Department", "Position", "Phone"]
    validations = ws.data_validations.dataValidation
    assert len(validations) == 1
    assert "D2:D1000" in str(validations[0].sqref)
    assert "Transport Section" in validations[0].formula1


def test_error_report_lists_invalid_rows(service):
    rows = service.preview("employees.csv", io.BytesIO(CSV))

    df = pd.read_excel(io.BytesIO(service.error_report(rows)), engine="openpyxl")

    assert list(df["Row"]) == [3]
    assert df["Errors"][0] == "Last name is required; Invalid email format"


def test_error_report_needs_invalid_rows(service):
    rows = service.preview_rows(
        [{"First Name": "Ada", "Last Name": "L", "Email": "a@example.com", "Department": "IT", "Position": "Dev"}]
    )

    with pytest.raises(ValidationError):
        service.error_report(rows)


def test_confirm_records_row_failure_and_keeps_going(service, repos, monkeypatch):
    create = repos.employees.create

    def flaky_create(*, employee_id, data):
        if data.email == "ada@example.com":
            raise RuntimeError("connection lost")
        return create(employee_id=employee_id, data=data)

    monkeypatch.setattr(repos.employees, "create", flaky_create)
    rows = service.preview("employees.csv", io.BytesIO(CSV))

    summary = service.confirm(rows)

    assert (summary.success, summary.failed, summary.skipped) == (1, 1, 1)
    assert summary.results[0].error == "connection lost"
    assert [e.email for e in repos.employees.list_all()] == ["cleo@example.com"]
    assert summary.departments == {"Finance": 1}


def test_read_table_reports_corrupt_workbook():
    with pytest.raises(ValidationError, match="Failed to process file"):
        read_table("staff.xlsx", io.BytesIO(b"not a zip at all"))
