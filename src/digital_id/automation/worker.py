from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from ..common.datetime_utils import now_local, start_of_day
from ..core.constants import DAILY_REPORT_LOG_TYPE
from ..core.enums import AutomationStatus
from .repository import AutomationLogRepository
from .service import AutomationService

logger = logging.getLogger(__name__)

JOB_ID = "daily_attendance_report"


class ReportWorker:
    """Sends the daily report once per day at ``hour:minute`` local time."""

    def __init__(
        self,
        automation: AutomationService,
        logs: AutomationLogRepository,
        *,
        hour: int = 18,
        minute: int = 0,
        max_retries: int = 3,
        retry_delay: float = 300,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = now_local,
    ):
        self._automation = automation
        self._logs = logs
        self.hour = int(hour)
        self.minute = int(minute)
        self._max_retries = int(max_retries)
        self._retry_delay = float(retry_delay)
        self._sleep = sleep
        self._clock = clock
        self._scheduler: Optional[BackgroundScheduler] = None

    def is_time_to_send(self, now: datetime) -> bool:
        return now.hour == self.hour and now.minute == self.minute

    def has_report_been_sent_today(self, now: Optional[datetime] = None) -> bool:
        now = now or self._clock()
        try:
            return self._logs.has_status_since(
                type=DAILY_REPORT_LOG_TYPE,
                status=AutomationStatus.SUCCESS,
                since=start_of_day(now),
            )
        except Exception:
            logger.exception("Could not read automation logs; assuming report not sent")
            return False

    def send_with_retry(self, now: Optional[datetime] = None, retries: Optional[int] = None) -> bool:
        now = now or self._clock()
        retries = self._max_retries if retries is None else retries
        while True:
            try:
                self._automation.send_daily_report(now.date())
                return True
            except Exception as e:
                logger.error("Error sending report (attempts left: %s): %s", retries, e)
                if retries <= 0:
                    return False
                retries -= 1
                logger.info("Retrying in %.0f seconds...", self._retry_delay)
                self._sleep(self._retry_delay)

    def send_if_due(self, now: Optional[datetime] = None) -> bool:
        now = now or self._clock()
        if self.has_report_been_sent_today(now):
            logger.info("Daily attendance report already sent today")
            return False
        logger.info("Initiating daily attendance report...")
        return self.send_with_retry(now)

    def run_once(self, now: Optional[datetime] = None) -> bool:
        now = now or self._clock()
        if not self.is_time_to_send(now):
            return False
        return self.send_if_due(now)

    def start(self, scheduler: Optional[BackgroundScheduler] = None) -> BackgroundScheduler:
        self._scheduler = scheduler or BackgroundScheduler(
            job_defaults={
                "coalesce": True,
                "misfire_grace_time": 3600,
            }
        )
        self._scheduler.add_job(
            self.send_if_due,
            "cron",
            hour=self.hour,
            minute=self.minute,
            id=JOB_ID,
            replace_existing=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        logger.info("Attendance report worker scheduled for %02d:%02d", self.hour, self.minute)
        return self._scheduler

    def stop(self) -> None:
        if self._scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
