from __future__ import annotations

import json
import logging
import time
from datetime import datetime
from typing import Callable, Iterable, Optional

from ..core.constants import BATCH_MESSAGE_DELAY_SECONDS
from ..core.enums import MessageStatus, MessageType
from ..core.exceptions import ConfigurationError
from ..employees.model import Employee
from ..settings.model import ADMIN_PHONE, ADMIN_WHATSAPP
from ..settings.service import SettingsService
from . import templates
from .model import BatchResult, SendResult
from .rate_limit import RateLimiter
from .repository import MessageLogRepository
from .senders import SmsSender, TwilioGateway, WhatsAppSender, require_valid_number, whatsapp_address
from .templates import NotificationParams

logger = logging.getLogger(__name__)


def _channel_label(message_type: MessageType) -> str:
    return "WhatsApp" if message_type == MessageType.WHATSAPP else "phone"


class NotificationService:
    """Render, rate limit, deliver and log outgoing messages."""

    def __init__(
        self,
        logs: MessageLogRepository,
        settings: SettingsService,
        *,
        whatsapp: WhatsAppSender,
        sms: SmsSender,
        rate_limiter: RateLimiter,
        twilio: Optional[TwilioGateway] = None,
        twilio_phone_number: str = "",
        twilio_whatsapp_number: str = "",
        sleep: Callable[[float], None] = time.sleep,
        batch_delay: float = BATCH_MESSAGE_DELAY_SECONDS,
    ):
        self._logs = logs
        self._settings = settings
        self._whatsapp = whatsapp
        self._sms = sms
        self._rate_limiter = rate_limiter
        self._twilio = twilio
        self._twilio_phone_number = twilio_phone_number
        self._twilio_whatsapp_number = twilio_whatsapp_number
        self._sleep = sleep
        self._batch_delay = batch_delay

    def resolve_recipient(self, phone_number: Optional[str], message_type: MessageType) -> str:
        if phone_number:
            return phone_number
        key = ADMIN_WHATSAPP if message_type == MessageType.WHATSAPP else ADMIN_PHONE
        recipient = self._settings.get_value(key)
        if not recipient:
            raise ConfigurationError(
                f"Please configure an admin {_channel_label(message_type)} number in settings"
            )
        return recipient

    def send_message(self, to: str, message: str, message_type: MessageType = MessageType.SMS) -> SendResult:
        """Deliver one message; every attempt leaves a ``message_logs`` row."""

        try:
            digits = require_valid_number(
                to, label="WhatsApp" if message_type == MessageType.WHATSAPP else "phone"
            )
            self._rate_limiter.hit()
            sender = self._whatsapp if message_type == MessageType.WHATSAPP else self._sms
            result = sender.send(digits, message)
        except Exception as e:
            logger.warning("Sending %s to %s failed: %s", message_type.value, to, e)
            self._logs.add(
                phone_number=to,
                message=message,
                type=message_type,
                status=MessageStatus.FAILED,
                error=str(e) or e.__class__.__name__,
            )
            raise

        self._logs.add(
            phone_number=to,
            message=message,
            type=message_type,
            status=MessageStatus.SENT,
            response=json.dumps(result.response) if result.response is not None else None,
        )
        return result

    def send_notification(self, params: NotificationParams, *, now: Optional[datetime] = None) -> SendResult:
        recipient = self.resolve_recipient(params.phone_number, params.message_type)
        message = templates.render(params, now=now)
        return self.send_message(recipient, message, params.message_type)

    def send_batch(self, notifications: Iterable[NotificationParams]) -> BatchResult:
        results = BatchResult()
        for params in notifications:
            try:
                self.send_notification(params)
            except Exception as e:
                results.failed += 1
                results.errors.append(f"Error sending notification to {params.employee_name}: {e}")
                continue
            results.success += 1
            self._sleep(self._batch_delay)
        return results

    def send_late_checkin_alerts(self, employee: Employee, scan_time: datetime, minutes_late: int) -> int:
        """SMS every admin subscribed to late arrivals; returns how many were reached."""

        message = templates.late_check_in_alert(
            employee_name=employee.full_name,
            employee_id=employee.employee_id,
            department=employee.department,
            minutes_late=minutes_late,
            scan_time=scan_time,
        )
        sent = 0
        for admin in self._settings.late_alert_recipients():
            try:
                self.send_message(admin.phone_number, message, MessageType.SMS)
            except Exception:
                logger.exception("Failed to send late check-in alert to admin %s", admin.admin_id)
                continue
            sent += 1
        return sent

    def relay(self, *, to: str, message: str, use_whatsapp: bool = False) -> str:
        """Send straight through Twilio and return the provider message id."""

        if self._twilio is None:
            raise ConfigurationError("Missing Twilio configuration. Please check your environment variables.")

        message_type = MessageType.WHATSAPP if use_whatsapp else MessageType.SMS
        from_number = self._twilio_whatsapp_number if use_whatsapp else self._twilio_phone_number
        if not from_number:
            raise ConfigurationError(f"Missing {_channel_label(message_type)} number configuration")

        if use_whatsapp:
            to, from_number = whatsapp_address(to), whatsapp_address(from_number)

        try:
            sid = self._twilio.send(to=to, body=message, from_=from_number)
        except Exception as e:
            self._logs.add(
                phone_number=to,
                message=message,
                type=message_type,
                status=MessageStatus.FAILED,
                error=str(e),
            )
            raise

        self._logs.add(
            phone_number=to,
            message=message,
            type=message_type,
            status=MessageStatus.SENT,
            response=json.dumps({"sid": sid}),
        )
        return sid
