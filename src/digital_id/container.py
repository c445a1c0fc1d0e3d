from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository, MySQLScanRepository
from .attendance.repository import AttendanceRepository, ScanRepository
from .attendance.service import AttendanceService
from .automation.mysql_automation_log_repository import MySQLAutomationLogRepository
from .automation.repository import AutomationLogRepository
from .automation.service import AutomationService
from .automation.worker import ReportWorker
from .core.constants import DEFAULT_LATE_HOUR, DEFAULT_STANDARD_WORK_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .imports.service import EmployeeImportService
from .notifications.mysql_message_log_repository import MySQLMessageLogRepository
from .notifications.rate_limit import RateLimiter
from .notifications.repository import MessageLogRepository
from .notifications.senders import SmsSender, TwilioGateway, WhatsAppSender, build_twilio_gateway
from .notifications.service import NotificationService
from .qr.service import QRService
from .reports.service import ReportService
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.repository import RosterRepository
from .roster.service import RosterService
from .settings.mysql_settings_repository import MySQLAdminNotificationRepository, MySQLSettingsRepository
from .settings.repository import AdminNotificationRepository, SettingsRepository
from .settings.service import SettingsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    employees: EmployeeRepository
    attendance: AttendanceRepository
    scans: ScanRepository
    roster: RosterRepository
    settings: SettingsRepository
    admin_notifications: AdminNotificationRepository
    message_logs: MessageLogRepository
    automation_logs: AutomationLogRepository


@dataclass(frozen=True)
class Container:
    repos: Repositories

    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    import_service: EmployeeImportService
    qr_service: QRService
    roster_service: RosterService
    settings_service: SettingsService
    notification_service: NotificationService
    attendance_service: AttendanceService
    report_service: ReportService
    automation_service: AutomationService
    report_worker: ReportWorker

    conn: Optional[DatabaseConnection] = None


def wire_services(settings, repos: Repositories, *, twilio: Optional[TwilioGateway] = None, **overrides) -> Container:
    """Build every service on top of ``repos``; keyword overrides replace a default collaborator."""

    employee_service = EmployeeService(repos.employees)
    settings_service = SettingsService(repos.settings, repos.admin_notifications)
    roster_service = RosterService(repos.roster, employee_service)

    notification_service = overrides.get("notification_service") or NotificationService(
        repos.message_logs,
        settings_service,
        whatsapp=WhatsAppSender(twilio, from_number=getattr(settings, "TWILIO_WHATSAPP_NUMBER", "")),
        sms=overrides.get("sms_sender") or SmsSender(
            api_url=getattr(settings, "SMS_API_URL", ""),
            sender_id=getattr(settings, "SMS_SENDER_ID", "DigitalID"),
            dev_mode=bool(getattr(settings, "NOTIFY_DEV_MODE", False)),
            gateway=twilio,
            from_number=getattr(settings, "TWILIO_PHONE_NUMBER", ""),
        ),
        rate_limiter=RateLimiter(int(getattr(settings, "MESSAGE_RATE_LIMIT", 10))),
        twilio=twilio,
        twilio_phone_number=getattr(settings, "TWILIO_PHONE_NUMBER", ""),
        twilio_whatsapp_number=getattr(settings, "TWILIO_WHATSAPP_NUMBER", ""),
    )

    attendance_service = AttendanceService(
        repos.attendance,
        repos.scans,
        employee_service,
        roster_service,
        notification_service,
        strategy_factory=AttendanceStrategyFactory(
            late_hour=int(getattr(settings, "LATE_HOUR", DEFAULT_LATE_HOUR)),
            grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", 0)),
        ),
        standard_work_hours=float(getattr(settings, "STANDARD_WORK_HOURS", DEFAULT_STANDARD_WORK_HOURS)),
    )

    automation_service = AutomationService(
        repos.attendance,
        employee_service,
        notification_service,
        settings_service,
        repos.automation_logs,
    )
    report_worker = ReportWorker(
        automation_service,
        repos.automation_logs,
        hour=int(getattr(settings, "REPORT_HOUR", 18)),
        minute=int(getattr(settings, "REPORT_MINUTE", 0)),
        max_retries=int(getattr(settings, "REPORT_MAX_RETRIES", 3)),
        retry_delay=float(getattr(settings, "REPORT_RETRY_DELAY", 300)),
    )

    return Container(
        repos=repos,
        auth_service=AuthService(repos.users),
        user_service=UserService(repos.users),
        employee_service=employee_service,
        import_service=EmployeeImportService(employee_service),
        qr_service=QRService(employee_service, base_url=getattr(settings, "APP_BASE_URL", "")),
        roster_service=roster_service,
        settings_service=settings_service,
        notification_service=notification_service,
        attendance_service=attendance_service,
        report_service=ReportService(repos.attendance, company_name=getattr(settings, "COMPANY_NAME", "Digital ID")),
        automation_service=automation_service,
        report_worker=report_worker,
        conn=overrides.get("conn"),
    )


def build_container(settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    repos = Repositories(
        users=MySQLUserRepository(conn),
        employees=MySQLEmployeeRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        scans=MySQLScanRepository(conn),
        roster=MySQLRosterRepository(conn),
        settings=MySQLSettingsRepository(conn),
        admin_notifications=MySQLAdminNotificationRepository(conn),
        message_logs=MySQLMessageLogRepository(conn),
        automation_logs=MySQLAutomationLogRepository(conn),
    )
    return wire_services(settings, repos, twilio=build_twilio_gateway(settings), conn=conn)
