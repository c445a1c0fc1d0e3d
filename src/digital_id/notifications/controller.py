from __future__ import annotations

import logging

from flask import Flask, jsonify
from twilio.base.exceptions import TwilioRestException

from ..common.web import admin_required, json_body, ok
from ..container import Container
from ..core.enums import MessageType
from ..core.exceptions import DomainError, ValidationError
from .templates import NotificationParams

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    @app.route("/api/send-message", methods=["POST"], endpoint="send_message")
    @admin_required
    def send_message():
        payload = json_body()
        to = (payload.get("to") or "").strip()
        message = payload.get("message") or ""
        if not to or not message:
            return jsonify(
                success=False,
                error="Missing required parameters: to and message are required",
            ), 400

        try:
            sid = service.relay(to=to, message=message, use_whatsapp=bool(payload.get("useWhatsApp")))
        except TwilioRestException as e:
            logger.warning("Twilio rejected message to %s: %s", to, e.msg)
            return jsonify(
                success=False,
                error=f"Twilio Error {e.code}: {e.msg}",
                details=e.details,
            ), 400
        except DomainError as e:
            logger.error("Error sending message: %s", e)
            return jsonify(success=False, error=str(e) or "Failed to send message"), 500

        return jsonify(success=True, messageId=sid), 200

    @app.route("/api/notifications", methods=["POST"], endpoint="notifications_send")
    @admin_required
    def notifications_send():
        payload = json_body()
        try:
            message_type = MessageType(payload.get("type") or MessageType.SMS.value)
        except ValueError:
            raise ValidationError("Message type must be sms or whatsapp") from None

        params = NotificationParams(
            employee_name=payload.get("employee_name") or "",
            department=payload.get("department"),
            phone_number=payload.get("phone_number"),
            custom_message=payload.get("message"),
            message_type=message_type,
        )
        result = service.send_notification(params)
        return ok(result.to_dict(), message="Message sent")
