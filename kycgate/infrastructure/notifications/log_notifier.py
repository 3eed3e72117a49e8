"""Notifier that writes events to the structured log."""

from kycgate.config import get_logger
from kycgate.core.entities.notification import Notification
from kycgate.core.interfaces.notifier import INotifier

logger = get_logger(__name__)


class LoggingNotifier(INotifier):
    """Default notifier; an email worker can tail these log lines."""

    async def notify(self, notification: Notification) -> None:
        logger.info(
            "notification_emitted",
            company_id=notification.company_id,
            notification_event=notification.event.value,
            payload=notification.payload,
            occurred_at=notification.occurred_at.isoformat(),
        )
