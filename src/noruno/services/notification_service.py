"""Due-date reminder delivery.

``NotificationService.run_check`` re-reads the mail settings and the tasks
from storage (other processes may have changed them), latches ``notified``
on every task whose reminder fires, upserts each latched task, then sends
one mail per latched task. The latch is set before sending and never
reverted, so each reminder is attempted at most once.

``NotificationScheduler`` runs the check periodically until stopped.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime

from noruno.models import MailSettings, Task
from noruno.models.exceptions import (
    ConfigurationError,
    ReminderParseError,
    TransportError,
)
from noruno.services.collection import EntityCollection
from noruno.services.mail_service import MailSender
from noruno.services.settings_service import MailSettingsService
from noruno.utils.logger import get_logger
from noruno.utils.reminders import evaluate_task

logger = get_logger(__name__)

SUBJECT_TEMPLATE = "[Todo App] Task Due: {description}"
BODY_TEMPLATE = (
    "Your task '{description}' is due on {due_date}.\n\n"
    "Details: {details}\nGroup: {group}"
)


def reminder_message(task: Task) -> tuple[str, str]:
    """Subject and body of the reminder mail for task."""
    subject = SUBJECT_TEMPLATE.format(description=task.description)
    body = BODY_TEMPLATE.format(
        description=task.description,
        due_date=task.due_date,
        details=task.details,
        group=task.group,
    )
    return subject, body


@dataclass
class NotificationReport:
    """Outcome and diagnostic trace of one notification check."""

    now: datetime
    threshold: int
    total: int = 0
    lines: list[str] = field(default_factory=list)
    queued: list[int] = field(default_factory=list)
    sent: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    def render(self) -> str:
        header = [
            f"Current time: {self.now:%Y-%m-%d %H:%M:%S}",
            f"Global notification threshold: {self.threshold} minutes",
            f"Total tasks: {self.total}",
        ]
        debug = "\n".join(header + self.lines)
        return (
            "Notification check complete.\n\n"
            f"Sent {len(self.sent)} email(s).\n\n"
            f"--- Debug Info ---\n{debug}"
        )


class NotificationService:
    """Evaluates reminders and sends due-date mails."""

    def __init__(
        self,
        tasks: EntityCollection[Task],
        settings: MailSettingsService,
        mail_sender: MailSender,
    ):
        self.tasks = tasks
        self.settings = settings
        self.mail_sender = mail_sender

    async def run_check(self, now: datetime | None = None) -> NotificationReport:
        """Run one notification pass.

        Args:
            now: Evaluation instant (defaults to local now)

        Raises:
            ConfigurationError: If the mail account is not configured
            PersistenceError: If latched tasks cannot be saved
        """
        await self.settings.load()
        settings = await self.settings.get_settings()
        if not settings.is_configured:
            raise ConfigurationError("Email settings not configured")

        now = now or datetime.now()
        report = NotificationReport(now=now, threshold=settings.notification_minutes)
        to_notify = await self._latch_due_tasks(settings, now, report)

        sender = self.mail_sender.for_account(settings)
        for task in to_notify:
            subject, body = reminder_message(task)
            try:
                await sender.send(settings.email, settings.email, subject, body)
            except TransportError as e:
                logger.warning("Reminder for task %s failed: %s", task.id, e)
                report.failed.append(task.id)
                report.lines.append(
                    f"✗ Failed to send email for task '{task.description}': {e}"
                )
            else:
                report.sent.append(task.id)
                report.lines.append(f"✓ Email sent for task '{task.description}'")

        if to_notify:
            logger.info(
                "Notification check: %d sent, %d failed",
                len(report.sent),
                len(report.failed),
            )
        return report

    async def _latch_due_tasks(
        self, settings: MailSettings, now: datetime, report: NotificationReport
    ) -> list[Task]:
        to_notify: list[Task] = []
        async with self.tasks.lock:
            await self.tasks.reload()
            tasks = self.tasks.snapshot()
            report.total = len(tasks)
            for task in tasks:
                if task.completed:
                    report.lines.append(f"Task '{task.description}': SKIPPED (completed)")
                    continue
                if task.notified:
                    report.lines.append(
                        f"Task '{task.description}': SKIPPED (already notified)"
                    )
                    continue
                try:
                    decision = evaluate_task(task, settings, now)
                except ReminderParseError:
                    report.lines.append(
                        f"Task '{task.description}': ERROR parsing date "
                        f"'{task.due_date}': invalid format"
                    )
                    continue
                report.lines.append(
                    f"Task '{task.description}': due_date={task.due_date}, "
                    f"minutes_until_due={decision.minutes_until_due}, "
                    f"threshold={decision.threshold}, will_notify={decision.notify}"
                )
                if decision.notify:
                    task.notified = True
                    report.queued.append(task.id)
                    to_notify.append(task)

            for task in to_notify:
                self.tasks.put(task.model_copy(deep=True))
                await self.tasks.persist(task)
            if to_notify:
                report.lines.append("Tasks updated")
        return to_notify


class NotificationScheduler:
    """Runs NotificationService.run_check every interval until stopped.

    The first check runs immediately on start.
    """

    def __init__(self, service: NotificationService, interval_seconds: float = 60):
        self.service = service
        self.interval_seconds = interval_seconds
        self._stop = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._task = asyncio.create_task(self._run(), name="noruno-notifications")
        logger.info("Notification scheduler started (every %ss)", self.interval_seconds)

    async def stop(self) -> None:
        """Signal the loop to stop and wait for the current tick to finish."""
        self._stop.set()
        if self._task is not None:
            await self._task
            self._task = None
        logger.info("Notification scheduler stopped")

    async def tick(self) -> NotificationReport | None:
        """Run one check, logging failures instead of raising."""
        try:
            return await self.service.run_check()
        except ConfigurationError as e:
            logger.debug("Notification check skipped: %s", e)
        except Exception:
            logger.exception("Notification check failed")
        return None

    async def _run(self) -> None:
        while not self._stop.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.interval_seconds)
            except TimeoutError:
                continue
