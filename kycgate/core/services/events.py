"""Best-effort publishing to the notification collaborator."""

from typing import Any

from kycgate.config import get_logger
from kycgate.core.entities.notification import Notification, NotificationEvent
from kycgate.core.interfaces.notifier import INotifier

logger = get_logger(__name__)


async def publish(
    notifier: INotifier | None,
    company_id: int,
    event: NotificationEvent,
    payload: dict[str, Any] | None = None,
) -> bool:
    """
    Hand an event to the notifier.

    Delivery problems are logged and reported through the return value; they
    never undo the state change that produced the event.
    """
    if notifier is None:
        return False

    notification = Notification(company_id=company_id, event=event, payload=payload or {})
    try:
        await notifier.notify(notification)
    except Exception as e:
        logger.warning(
            "notification_failed",
            company_id=company_id,
            notification_event=event.value,
            error=str(e),
        )
        return False
    return True
