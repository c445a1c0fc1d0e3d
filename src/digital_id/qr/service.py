from __future__ import annotations

import io
import json
import logging
import zipfile
from dataclasses import dataclass
from typing import BinaryIO, Optional, Sequence
from urllib.parse import urlparse

import qrcode
from PIL import Image, ImageDraw, ImageFont
from pyzbar.pyzbar import decode as pyzbar_decode

from ..common.validators import is_valid_employee_code
from ..core.constants import department_color
from ..core.exceptions import DomainError, ValidationError
from ..employees.model import Employee, EmployeeData
from ..employees.service import EmployeeService, validate_employee_data

logger = logging.getLogger(__name__)

MARK_ATTENDANCE_PATH = "/mark-attendance/"
RESULTS_ENTRY = "results.json"


def qr_image(data: str, *, box_size: int = 10, border: int = 2) -> Image.Image:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white").get_image().convert("RGB")


def qr_png(data: str, **kwargs) -> bytes:
    buf = io.BytesIO()
    qr_image(data, **kwargs).save(buf, format="PNG")
    return buf.getvalue()


def parse_payload(text: str) -> str:
    """Extract the employee code from any badge payload.

    Accepted forms: the bare code, a ``.../mark-attendance/<code>`` URL, or the
    digital ID JSON object with an ``employee_id`` key.
    """

    text = (text or "").strip()
    candidate = text

    if text.startswith("{"):
        try:
            candidate = str(json.loads(text).get("employee_id", "")).strip()
        except (ValueError, AttributeError):
            candidate = ""
    elif text.lower().startswith(("http://", "https://")):
        path = urlparse(text).path
        if MARK_ATTENDANCE_PATH in path:
            candidate = path.split(MARK_ATTENDANCE_PATH, 1)[1].strip("/")
        else:
            candidate = ""

    if not is_valid_employee_code(candidate):
        raise ValidationError("Invalid QR code format")
    return candidate


def decode_image(stream: BinaryIO) -> str:
    try:
        img = Image.open(stream).convert("RGB")
    except OSError as e:
        raise ValidationError("Uploaded file is not an image") from e

    decoded = pyzbar_decode(img)
    if not decoded:
        raise ValidationError("No QR code detected in the image")
    return decoded[0].data.decode("utf-8").strip()


@dataclass(frozen=True)
class BulkQRResult:
    success: bool
    employee_id: str
    message: str

    def to_dict(self) -> dict:
        return {"success": self.success, "employee_id": self.employee_id, "message": self.message}


class QRService:
    def __init__(self, employees: EmployeeService, *, base_url: str):
        self._employees = employees
        self._base_url = base_url.rstrip("/")

    def attendance_url(self, employee_id: str) -> str:
        return f"{self._base_url}{MARK_ATTENDANCE_PATH}{employee_id}"

    def id_card_payload(self, employee: Employee, lead: Optional[Employee] = None) -> str:
        data = {
            "employee_id": employee.employee_id.strip(),
            "first_name": employee.first_name.strip(),
            "last_name": employee.last_name.strip(),
            "department": employee.department.strip(),
            "position": employee.position.strip(),
            "scanUrl": f"{self._base_url}/scan",
        }
        if lead and lead.employee_id and lead.first_name and lead.last_name and lead.position:
            data["lead"] = {
                "employee_id": lead.employee_id.strip(),
                "first_name": lead.first_name.strip(),
                "last_name": lead.last_name.strip(),
                "position": lead.position.strip(),
            }
        return json.dumps(data)

    def employee_png(self, employee_id: str) -> bytes:
        employee = self._employees.get(employee_id)
        return qr_png(employee.employee_id)

    def universal_png(self, employee_id: str) -> bytes:
        employee = self._employees.get(employee_id)
        return qr_png(self.attendance_url(employee.employee_id))

    def _lead_for(self, employee: Employee) -> Optional[Employee]:
        if not employee.lead_id:
            return None
        return self._employees.find(employee.lead_id)

    def id_card_png(self, employee_id: str) -> bytes:
        employee = self._employees.get(employee_id)
        payload = self.id_card_payload(employee, self._lead_for(employee))

        card = Image.new("RGB", (640, 380), "white")
        draw = ImageDraw.Draw(card)
        font = ImageFont.load_default()

        draw.rectangle([0, 0, 640, 70], fill=department_color(employee.department))
        draw.text((24, 26), "DIGITAL ID CARD", fill="white", font=font)

        lines = [
            employee.full_name,
            f"ID: {employee.employee_id}",
            f"Department: {employee.department}",
            f"Position: {employee.position}",
        ]
        for i, line in enumerate(lines):
            draw.text((24, 110 + i * 36), line, fill="black", font=font)

        code = qr_image(payload, box_size=4, border=1).resize((230, 230))
        card.paste(code, (390, 110))

        buf = io.BytesIO()
        card.save(buf, format="PNG")
        return buf.getvalue()

    def bulk_generate(self, rows: Sequence[dict]) -> tuple[bytes, list[BulkQRResult]]:
        """Create an employee per row and zip one QR PNG per created employee.

        The archive also carries ``results.json`` with the outcome of every row.
        """

        results: list[BulkQRResult] = []
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
            for raw in rows:
                data = EmployeeData.from_mapping(raw)
                name = f"{data.first_name} {data.last_name}".strip()
                errors = validate_employee_data(data)
                if errors:
                    results.append(BulkQRResult(False, "", f"Skipped {name or 'row'}: {'; '.join(errors)}"))
                    continue
                try:
                    employee = self._employees.create(data)
                except DomainError as e:
                    results.append(BulkQRResult(False, "", f"Failed to generate QR code for {name}: {e}"))
                    continue

                zf.writestr(f"qr-codes/{employee.employee_id}.png", qr_png(employee.employee_id))
                results.append(
                    BulkQRResult(True, employee.employee_id, f"Successfully generated QR code for {name}")
                )

            zf.writestr(RESULTS_ENTRY, json.dumps([r.to_dict() for r in results], indent=2))

        logger.info("bulk QR: %s generated of %s rows", sum(r.success for r in results), len(rows))
        return buf.getvalue(), results
