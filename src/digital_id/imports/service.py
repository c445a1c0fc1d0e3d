"""Bulk employee upload from CSV / XLSX files.

The flow mirrors the upload screen: ``preview`` parses and validates every
row, the client reviews it, then ``confirm`` inserts the valid rows.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import BinaryIO, Iterable, Sequence

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.worksheet.datavalidation import DataValidation

from ..core.constants import DEPARTMENTS, IMPORT_BATCH_SIZE
from ..core.exceptions import DomainError, ValidationError
from ..employees.model import EmployeeData
from ..employees.service import EmployeeService, validate_employee_data
from .model import ImportResult, PreviewRow, UploadSummary

logger = logging.getLogger(__name__)

TEMPLATE_HEADERS = ["First Name", "Last Name", "Email", "Department", "Position", "Phone"]
SUPPORTED_EXTENSIONS = {".csv", ".xlsx"}


def read_table(filename: str, stream: BinaryIO) -> list[dict]:
    """Read the first sheet (or the CSV) into a list of header-keyed dicts."""

    ext = Path(filename or "").suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValidationError("Please upload an XLSX or CSV file")

    try:
        if ext == ".csv":
            df = pd.read_csv(stream, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(stream, sheet_name=0, dtype=str, engine="openpyxl")
    except (ValueError, pd.errors.ParserError, zipfile.BadZipFile, OSError) as e:
        raise ValidationError(f"Failed to process file: {e}") from e

    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]
    return df.to_dict(orient="records")


def _is_blank(row: dict) -> bool:
    return all(not str(v).strip() for v in row.values())


class EmployeeImportService:
    def __init__(self, employees: EmployeeService, *, batch_size: int = IMPORT_BATCH_SIZE):
        self._employees = employees
        self._batch_size = int(batch_size)

    def preview_rows(self, rows: Iterable[dict]) -> list[PreviewRow]:
        out: list[PreviewRow] = []
        # Row 1 is the header in the uploaded sheet.
        for idx, raw in enumerate(rows, start=2):
            if _is_blank(raw):
                continue
            data = EmployeeData.from_mapping(raw)
            out.append(PreviewRow(row_number=idx, data=data, errors=tuple(validate_employee_data(data))))
        return out

    def preview(self, filename: str, stream: BinaryIO) -> list[PreviewRow]:
        return self.preview_rows(read_table(filename, stream))

    def confirm(self, rows: Sequence[PreviewRow]) -> UploadSummary:
        summary = UploadSummary(total=len(rows))
        valid = [r for r in rows if r.is_valid]
        summary.skipped = len(rows) - len(valid)

        for start in range(0, len(valid), self._batch_size):
            for row in valid[start : start + self._batch_size]:
                try:
                    employee = self._employees.create(row.data)
                except DomainError as e:
                    summary.results.append(ImportResult(success=False, data=row.data, error=str(e)))
                    continue
                except Exception as e:
                    logger.exception("import of row %s failed", row.row_number)
                    summary.results.append(ImportResult(success=False, data=row.data, error=str(e)))
                    continue

                summary.results.append(ImportResult(success=True, data=row.data, employee_id=employee.employee_id))
                dept = row.data.department
                summary.departments[dept] = summary.departments.get(dept, 0) + 1

        summary.success = sum(1 for r in summary.results if r.success)
        summary.failed = sum(1 for r in summary.results if not r.success)
        logger.info("employee import: %s added, %s failed, %s skipped", summary.success, summary.failed, summary.skipped)
        return summary

    @staticmethod
    def template_workbook() -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = "Template"
        ws.append(TEMPLATE_HEADERS)
        ws.append(["", "", "", DEPARTMENTS[0], "", ""])

        header_fill = PatternFill(start_color="474747", end_color="474747", fill_type="solid")
        for cell in ws[1]:
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = header_fill

        dv = DataValidation(type="list", formula1='"' + ",".join(DEPARTMENTS) + '"', allow_blank=False)
        dv.error = "Pick a department from the list"
        ws.add_data_validation(dv)
        dv.add("D2:D1000")

        out = io.BytesIO()
        wb.save(out)
        return out.getvalue()

    @staticmethod
    def error_report(rows: Sequence[PreviewRow]) -> bytes:
        records = [
            {
                "Row": r.row_number,
                "First Name": r.data.first_name,
                "Last Name": r.data.last_name,
                "Email": r.data.email,
                "Department": r.data.department,
                "Position": r.data.position,
                "Errors": "; ".join(r.errors),
            }
            for r in rows
            if not r.is_valid
        ]
        if not records:
            raise ValidationError("There are no invalid rows to report")

        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            pd.DataFrame(records).to_excel(writer, index=False, sheet_name="Errors")
        return out.getvalue()
