"""Abstract interface for the direct-upload storage collaborator."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class UploadDestination:
    """Time-limited destination the client uploads file bytes to."""

    upload_url: str
    file_key: str
    expires_in: int
    method: str = "PUT"


class IUploadSlotProvider(ABC):
    """Issues direct-upload destinations. Never sees file bytes."""

    @abstractmethod
    async def create_upload_destination(
        self,
        file_key: str,
        content_type: str,
        expires_in: int,
    ) -> UploadDestination:
        """Return a presigned destination for file_key."""
        pass
