from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip()[:5], "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_clock(value: datetime) -> str:
    """12-hour clock used in notifications, e.g. ``09:05 AM``."""
    return value.strftime("%I:%M %p")


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min)
