"""Tests for best-effort notification publishing."""

from unittest.mock import AsyncMock

from kycgate.core.entities import NotificationEvent
from kycgate.core.services import publish


class TestPublish:
    async def test_delivers_notification(self):
        notifier = AsyncMock()

        sent = await publish(notifier, 3, NotificationEvent.DOCUMENT_APPROVED, {"document_id": 9})

        assert sent
        notification = notifier.notify.call_args.args[0]
        assert notification.company_id == 3
        assert notification.event == NotificationEvent.DOCUMENT_APPROVED
        assert notification.payload == {"document_id": 9}

    async def test_no_notifier(self):
        assert not await publish(None, 3, NotificationEvent.STAGE_CHANGED)

    async def test_failure_is_reported_not_raised(self):
        notifier = AsyncMock()
        notifier.notify.side_effect = ConnectionError("refused")

        assert not await publish(notifier, 3, NotificationEvent.STAGE_CHANGED)
