"""Outbound notifiers."""

from kycgate.config import get_logger, get_settings
from kycgate.config.settings import Settings
from kycgate.core.interfaces.notifier import INotifier
from kycgate.infrastructure.notifications.log_notifier import LoggingNotifier
from kycgate.infrastructure.notifications.webhook_notifier import WebhookNotifier

logger = get_logger(__name__)

_notifier: INotifier | None = None


def create_notifier(settings: Settings | None = None) -> INotifier:
    """
    Build the notifier selected by NOTIFY_BACKEND.

    Raises:
        ValueError: webhook backend without NOTIFY_WEBHOOK_URL.
    """
    s = settings or get_settings()
    backend = s.notifications.backend

    if backend == "webhook":
        if not s.notifications.webhook_url:
            raise ValueError("NOTIFY_WEBHOOK_URL required for webhook backend")
        logger.info("notifier_selected", backend=backend)
        return WebhookNotifier(s.notifications.webhook_url, timeout=s.notifications.timeout)

    logger.info("notifier_selected", backend="log")
    return LoggingNotifier()


def get_notifier() -> INotifier:
    """Get singleton notifier instance."""
    global _notifier
    if _notifier is None:
        _notifier = create_notifier()
    return _notifier


__all__ = [
    "LoggingNotifier",
    "WebhookNotifier",
    "create_notifier",
    "get_notifier",
]
