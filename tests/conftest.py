from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from digital_id.attendance.model import AttendanceRecord, AttendanceReportRow
from digital_id.automation.model import AutomationLog
from digital_id.container import Repositories, wire_services
from digital_id.core.enums import (
    AutomationStatus,
    EmployeeStatus,
    MessageStatus,
    Role,
    ShiftType,
)
from digital_id.employees.model import Employee, EmployeeData
from digital_id.main import create_app
from digital_id.notifications.model import MessageLog
from digital_id.roster.model import RosterShift
from digital_id.settings.model import AdminNotificationSetting, CompanySetting
from digital_id.users.model import User


class InMemoryUsers:
    def __init__(self, users: Optional[list[User]] = None):
        self._users = {u.user_id: u for u in users or []}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def create_user(self, *, full_name: str, email: str, password_hash: str, role: Role) -> int:
        user_id = max(self._users, default=0) + 1
        self._users[user_id] = User(user_id, full_name, email, password_hash, role)
        return user_id


class InMemoryEmployees:
    def __init__(self):
        self.by_code: dict[str, Employee] = {}
        self._id = 0

    def add(self, employee_id: str, *, status: EmployeeStatus = EmployeeStatus.ACTIVE, **fields) -> Employee:
        data = dict(
            first_name="Jane",
            last_name="Doe",
            email=f"{employee_id.lower()}@example.com",
            department="IT",
            position="Engineer",
        )
        data.update(fields)
        employee = self.create(employee_id=employee_id, data=EmployeeData(**data))
        if status != EmployeeStatus.ACTIVE:
            employee = replace(employee, status=status)
            self.by_code[employee_id] = employee
        return employee

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        return self.by_code.get(employee_id)

    def list_all(self, *, active_only: bool = False):
        items = list(self.by_code.values())
        if active_only:
            items = [e for e in items if e.status == EmployeeStatus.ACTIVE]
        return items

    def create(self, *, employee_id: str, data: EmployeeData) -> Employee:
        self._id += 1
        employee = Employee(id=self._id, employee_id=employee_id, created_at=datetime(2026, 1, 1), **data.to_dict())
        self.by_code[employee_id] = employee
        return employee

    def update(self, *, employee_id: str, data: EmployeeData) -> bool:
        current = self.by_code.get(employee_id)
        if not current:
            return False
        self.by_code[employee_id] = replace(current, **data.to_dict())
        return True

    def delete_by_ids(self, ids) -> int:
        doomed = [code for code, e in self.by_code.items() if e.id in set(ids)]
        for code in doomed:
            del self.by_code[code]
        return len(doomed)


class InMemoryAttendance:
    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self.records: dict[tuple[str, date], AttendanceRecord] = {}
        self._employees = employees
        self._id = 0

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self.records.get((employee_id, work_date))

    def create_checkin(self, *, employee_id, work_date, check_in, is_late, status, note=None) -> int:
        self._id += 1
        self.records[(employee_id, work_date)] = AttendanceRecord(
            id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
            total_hours=None,
            is_late=is_late,
            status=status,
            note=note,
        )
        return self._id

    def update_checkout(self, *, record_id, check_out, total_hours, status, note=None) -> bool:
        for key, rec in self.records.items():
            if rec.id == record_id and rec.check_out is None:
                self.records[key] = replace(rec, check_out=check_out, total_hours=total_hours, status=status, note=note)
                return True
        return False

    def list_for_date(self, work_date: date):
        return sorted((r for r in self.records.values() if r.work_date == work_date), key=lambda r: r.check_in)

    def get_report_rows(self, *, start_date: date, end_date: date):
        rows = []
        for rec in sorted(self.records.values(), key=lambda r: (r.work_date, r.check_in)):
            if not start_date <= rec.work_date <= end_date:
                continue
            emp = self._employees.get_by_employee_id(rec.employee_id) if self._employees else None
            if emp is None:
                continue
            rows.append(
                AttendanceReportRow(
                    employee_id=rec.employee_id,
                    first_name=emp.first_name,
                    last_name=emp.last_name,
                    department=emp.department,
                    work_date=rec.work_date,
                    check_in=rec.check_in,
                    check_out=rec.check_out,
                    total_hours=rec.total_hours,
                    is_late=rec.is_late,
                    status=rec.status,
                )
            )
        return rows


class InMemoryScans:
    def __init__(self):
        self.scans: list[tuple[str, Optional[int], datetime]] = []

    def record_scan(self, *, employee_id: str, scanned_by: Optional[int], at: datetime) -> int:
        self.scans.append((employee_id, scanned_by, at))
        return len(self.scans)

    def count_scans_since(self, since: datetime) -> int:
        return sum(1 for _, _, at in self.scans if at >= since)


class InMemoryRoster:
    def __init__(self):
        self.shifts: dict[int, RosterShift] = {}

    def list_for_date(self, work_date: date):
        return sorted((s for s in self.shifts.values() if s.date == work_date), key=lambda s: s.start_time)

    def get_for_employee_and_date(self, *, employee_id: str, work_date: date) -> Optional[RosterShift]:
        return next((s for s in self.list_for_date(work_date) if s.employee_id == employee_id), None)

    def create(self, *, employee_id: str, work_date: date, start_time: time, end_time: time, shift_type: ShiftType) -> int:
        shift_id = len(self.shifts) + 1
        self.shifts[shift_id] = RosterShift(shift_id, employee_id, work_date, start_time, end_time, shift_type)
        return shift_id

    def delete(self, shift_id: int) -> bool:
        return self.shifts.pop(shift_id, None) is not None


class InMemorySettings:
    def __init__(self, values: Optional[dict[str, str]] = None):
        self.values = dict(values or {})

    def get(self, key: str) -> Optional[CompanySetting]:
        if key not in self.values:
            return None
        return CompanySetting(key=key, value=self.values[key])

    def put(self, key: str, value: Optional[str]) -> None:
        self.values[key] = value

    def list_all(self):
        return [CompanySetting(key=k, value=v) for k, v in sorted(self.values.items())]


class InMemoryAdminNotifications:
    def __init__(self):
        self.by_admin: dict[int, AdminNotificationSetting] = {}

    def get_for_admin(self, admin_id: int) -> Optional[AdminNotificationSetting]:
        return self.by_admin.get(admin_id)

    def upsert(self, *, admin_id: int, phone_number: str, notify_on_late: bool) -> None:
        self.by_admin[admin_id] = AdminNotificationSetting(len(self.by_admin) + 1, admin_id, phone_number, notify_on_late)

    def list_notify_on_late(self):
        return [s for s in self.by_admin.values() if s.notify_on_late]


class InMemoryMessageLogs:
    def __init__(self):
        self.rows: list[MessageLog] = []

    def add(self, *, phone_number, message, type, status, attempts=1, response=None, error=None) -> int:
        self.rows.append(
            MessageLog(len(self.rows) + 1, phone_number, message, type, status, attempts, response, error)
        )
        return len(self.rows)

    def list_recent(self, limit: int = 50):
        return list(reversed(self.rows))[:limit]

    def with_status(self, status: MessageStatus) -> list[MessageLog]:
        return [r for r in self.rows if r.status == status]


class InMemoryAutomationLogs:
    def __init__(self):
        self.rows: list[AutomationLog] = []
        self.now = datetime(2026, 3, 2, 18, 0)

    def add(self, *, type: str, status: AutomationStatus, details=None) -> int:
        self.rows.append(AutomationLog(len(self.rows) + 1, type, status, details, self.now))
        return len(self.rows)

    def has_status_since(self, *, type: str, status: AutomationStatus, since: datetime) -> bool:
        return any(r.type == type and r.status == status and r.created_at >= since for r in self.rows)

    def list_recent(self, *, type: str, limit: int = 20):
        return [r for r in reversed(self.rows) if r.type == type][:limit]


class FakeTwilio:
    def __init__(self, error: Optional[Exception] = None):
        self.sent: list[dict] = []
        self._error = error

    def send(self, *, to: str, body: str, from_: str) -> str:
        if self._error:
            raise self._error
        self.sent.append({"to": to, "body": body, "from_": from_})
        return f"SM{len(self.sent):04d}"


def make_settings(**overrides) -> SimpleNamespace:
    values = dict(
        SECRET_KEY="test-secret",
        DEBUG=False,
        TESTING=True,
        APP_BASE_URL="https://id.example.com",
        COMPANY_NAME="Acme Ltd",
        LATE_HOUR=9,
        LATE_GRACE_MINUTES=0,
        STANDARD_WORK_HOURS=8,
        REPORT_HOUR=18,
        REPORT_MINUTE=0,
        REPORT_MAX_RETRIES=3,
        REPORT_RETRY_DELAY=0,
        SMS_API_URL="https://sms.example.com/send",
        SMS_SENDER_ID="DigitalID",
        NOTIFY_DEV_MODE=True,
        MESSAGE_RATE_LIMIT=10,
        TWILIO_PHONE_NUMBER="",
        TWILIO_WHATSAPP_NUMBER="",
        MAX_UPLOAD_MB=5,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def repos() -> Repositories:
    employees = InMemoryEmployees()
    admin = User(1, "Admin", "admin@example.com", generate_password_hash("admin123"), Role.ADMIN)
    staff = User(2, "Scanner", "staff@example.com", generate_password_hash("staff123"), Role.STAFF)
    return Repositories(
        users=InMemoryUsers([admin, staff]),
        employees=employees,
        attendance=InMemoryAttendance(employees),
        scans=InMemoryScans(),
        roster=InMemoryRoster(),
        settings=InMemorySettings(),
        admin_notifications=InMemoryAdminNotifications(),
        message_logs=InMemoryMessageLogs(),
        automation_logs=InMemoryAutomationLogs(),
    )


@pytest.fixture
def settings() -> SimpleNamespace:
    return make_settings()


@pytest.fixture
def container(settings, repos):
    return wire_services(settings, repos)


@pytest.fixture
def app(settings, container):
    return create_app(settings, container)


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, user_id: int, role: Role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role.value
    return client


@pytest.fixture
def admin_client(app):
    return _login(app.test_client(), 1, Role.ADMIN)


@pytest.fixture
def staff_client(app):
    return _login(app.test_client(), 2, Role.STAFF)


@pytest.fixture
def build(repos):
    """Wire a container over the shared in-memory repos with custom settings."""

    def _build(*, twilio=None, **overrides):
        return wire_services(make_settings(**overrides), repos, twilio=twilio)

    return _build


@pytest.fixture
def fake_twilio_factory():
    return FakeTwilio
