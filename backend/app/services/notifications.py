"""Notification sink used by the auth flows.

Services only ever call `notify(recipient_email, kind, token)`. Delivery is
handed to FastAPI's background tasks so the HTTP response never waits on
the mail provider.
"""

from typing import Protocol

from fastapi import BackgroundTasks

from app.services.email_service import EmailService


class NotificationSink(Protocol):
    def notify(self, recipient_email: str, kind: str, token: str | None = None) -> None: ...


class BackgroundEmailNotifier:
    """Queues emails to run after the response has been sent."""

    def __init__(self, background_tasks: BackgroundTasks) -> None:
        self._background_tasks = background_tasks

    def notify(self, recipient_email: str, kind: str, token: str | None = None) -> None:
        self._background_tasks.add_task(EmailService.send_notification, recipient_email, kind, token)
