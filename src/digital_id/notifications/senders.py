"""Delivery channels: Twilio, the hosted SMS HTTP API and WhatsApp click-to-chat links."""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional
from urllib.parse import quote

import requests
from twilio.rest import Client

from ..core.exceptions import ConfigurationError, NotificationError, ValidationError
from .model import SendResult

logger = logging.getLogger(__name__)

PHONE_RE = re.compile(r"^\+[1-9]\d{1,14}$")
SMS_TIMEOUT_SECONDS = 20


def clean_number(value: str) -> str:
    """Strip a ``whatsapp:`` prefix and any ``+`` so only digits remain."""

    return re.sub(r"^whatsapp:|\+", "", (value or "").strip()).strip()


def require_valid_number(value: str, *, label: str = "phone") -> str:
    digits = clean_number(value)
    if not PHONE_RE.match("+" + digits):
        raise ValidationError(
            f"Invalid {label} number format. Please include country code (e.g., +1234567890)"
        )
    return digits


def whatsapp_address(number: str) -> str:
    number = number.strip()
    if number.startswith("whatsapp:"):
        return number
    return "whatsapp:" + (number if number.startswith("+") else "+" + number)


def whatsapp_url(digits: str, message: str) -> str:
    return f"https://wa.me/{digits}?text={quote(message, safe='')}"


class TwilioGateway:
    def __init__(self, account_sid: str, auth_token: str, *, client=None):
        self._client = client or Client(account_sid, auth_token)

    def send(self, *, to: str, body: str, from_: str) -> str:
        message = self._client.messages.create(body=body, to=to, from_=from_)
        return message.sid


def build_twilio_gateway(settings) -> Optional[TwilioGateway]:
    sid = getattr(settings, "TWILIO_ACCOUNT_SID", "")
    token = getattr(settings, "TWILIO_AUTH_TOKEN", "")
    if not sid or not token:
        return None
    return TwilioGateway(sid, token)


class WhatsAppSender:
    """Send through Twilio when a WhatsApp sender number is configured, else hand back a wa.me link."""

    def __init__(self, gateway: Optional[TwilioGateway] = None, *, from_number: str = ""):
        self._gateway = gateway
        self._from_number = from_number

    @property
    def delivers(self) -> bool:
        return bool(self._gateway and self._from_number)

    def send(self, digits: str, message: str) -> SendResult:
        if self.delivers:
            sid = self._gateway.send(
                to=whatsapp_address(digits),
                body=message,
                from_=whatsapp_address(self._from_number),
            )
            return SendResult(message_id=sid, response={"provider": "twilio", "sid": sid})

        url = whatsapp_url(digits, message)
        return SendResult(url=url, response={"provider": "wa.me", "url": url})


class SmsSender:
    def __init__(
        self,
        *,
        api_url: str,
        sender_id: str = "DigitalID",
        dev_mode: bool = False,
        gateway: Optional[TwilioGateway] = None,
        from_number: str = "",
        http_get: Callable[..., requests.Response] = requests.get,
    ):
        self._api_url = api_url
        self._sender_id = sender_id
        self._dev_mode = dev_mode
        self._gateway = gateway
        self._from_number = from_number
        self._http_get = http_get

    def send(self, digits: str, message: str) -> SendResult:
        if self._dev_mode:
            logger.info("Development mode - SMS to %s not sent: %s", digits, message)
            return SendResult(response={"mode": "development", "status": "simulated success"})

        if self._gateway and self._from_number:
            sid = self._gateway.send(to="+" + digits, body=message, from_=self._from_number)
            return SendResult(message_id=sid, response={"provider": "twilio", "sid": sid})

        if not self._api_url:
            raise ConfigurationError("SMS API URL is not configured")

        resp = self._http_get(
            self._api_url,
            params={
                "number": digits,
                "message": message,
                "sender_id": self._sender_id,
                "type": "text",
            },
            headers={"Accept": "application/json", "Cache-Control": "no-cache"},
            timeout=SMS_TIMEOUT_SECONDS,
        )
        if not resp.ok:
            logger.error("SMS API error response: %s", resp.text)
            raise NotificationError(f"HTTP error! status: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise NotificationError("SMS API returned a non-JSON response") from e

        if data.get("status") != "success":
            raise NotificationError(data.get("message") or "Failed to send SMS")
        return SendResult(message_id=data.get("message_id"), response=data)
