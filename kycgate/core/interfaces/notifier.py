"""Abstract interface for the outbound notification collaborator."""

from abc import ABC, abstractmethod

from kycgate.core.entities.notification import Notification


class INotifier(ABC):
    """
    Receives engine events. Delivery is the implementation's concern; the
    engine only needs to know the event was handed over.
    """

    @abstractmethod
    async def notify(self, notification: Notification) -> None:
        """Hand over a notification for delivery."""
        pass
