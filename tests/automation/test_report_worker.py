from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler

from digital_id.automation.worker import JOB_ID, ReportWorker
from digital_id.core.constants import DAILY_REPORT_LOG_TYPE
from digital_id.core.enums import AutomationStatus
from digital_id.settings.model import ADMIN_WHATSAPP


class FlakyAutomation:
    def __init__(self, failures: int):
        self.failures = failures
        self.calls = 0

    def send_daily_report(self, day):
        self.calls += 1
        if self.calls <= self.failures:
            raise RuntimeError("gateway down")


class BrokenLogs:
    def has_status_since(self, **kwargs):
        raise RuntimeError("database unavailable")


def _worker(container, repos, **kwargs):
    return ReportWorker(container.automation_service, repos.automation_logs, **kwargs)


def test_run_once_only_fires_at_report_time(container, repos):
    repos.employees.add("EMP000001")
    repos.settings.put(ADMIN_WHATSAPP, "+15550000001")
    worker = _worker(container, repos, hour=18, minute=0)

    assert worker.run_once(datetime(2026, 3, 2, 17, 59)) is False
    assert repos.automation_logs.rows == []

    assert worker.run_once(datetime(2026, 3, 2, 18, 0)) is True
    assert repos.automation_logs.rows[0].status == AutomationStatus.SUCCESS


def test_report_is_sent_once_per_day(container, repos):
    repos.automation_logs.add(type=DAILY_REPORT_LOG_TYPE, status=AutomationStatus.SUCCESS, details={})
    automation = FlakyAutomation(failures=0)
    worker = ReportWorker(automation, repos.automation_logs)

    assert worker.has_report_been_sent_today(datetime(2026, 3, 2, 18, 0))
    assert worker.send_if_due(datetime(2026, 3, 2, 18, 0)) is False
    assert automation.calls == 0
    assert not worker.has_report_been_sent_today(datetime(2026, 3, 3, 18, 0))


def test_log_read_failure_counts_as_not_sent():
    worker = ReportWorker(FlakyAutomation(failures=0), BrokenLogs())

    assert worker.has_report_been_sent_today(datetime(2026, 3, 2, 18, 0)) is False


def test_send_with_retry_recovers(repos):
    slept = []
    automation = FlakyAutomation(failures=2)
    worker = ReportWorker(automation, repos.automation_logs, max_retries=3, retry_delay=300, sleep=slept.append)

    assert worker.send_with_retry(datetime(2026, 3, 2, 18, 0)) is True
    assert automation.calls == 3
    assert slept == [300, 300]


def test_send_with_retry_gives_up(repos):
    slept = []
    automation = FlakyAutomation(failures=10)
    worker = ReportWorker(automation, repos.automation_logs, max_retries=3, retry_delay=5, sleep=slept.append)

    assert worker.send_with_retry(datetime(2026, 3, 2, 18, 0)) is False
    assert automation.calls == 4
    assert len(slept) == 3


def test_start_schedules_daily_job(repos):
    worker = ReportWorker(FlakyAutomation(failures=0), repos.automation_logs, hour=17, minute=30)
    scheduler = BackgroundScheduler()
    try:
        worker.start(scheduler)
        job = scheduler.get_job(JOB_ID)
        assert job is not None
        fields = {f.name: str(f) for f in job.trigger.fields}
        assert (fields["hour"], fields["minute"]) == ("17", "30")
    finally:
        worker.stop()
    assert not scheduler.running
