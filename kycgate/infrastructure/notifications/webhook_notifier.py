"""Notifier that POSTs events to an HTTP webhook."""

import httpx

from kycgate.config import get_logger
from kycgate.core.entities.notification import Notification
from kycgate.core.interfaces.notifier import INotifier

logger = get_logger(__name__)


class WebhookNotifier(INotifier):
    """
    Deliver each notification as a JSON POST.

    Raises httpx errors on failure; callers treat delivery as best effort.
    """

    def __init__(self, url: str, timeout: float = 5.0):
        self.url = url
        self.timeout = timeout

    async def notify(self, notification: Notification) -> None:
        body = notification.model_dump(mode="json")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.url, json=body)
            response.raise_for_status()

        logger.debug(
            "webhook_delivered",
            company_id=notification.company_id,
            notification_event=notification.event.value,
            status=response.status_code,
        )
