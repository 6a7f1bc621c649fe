"""Media storage service for user uploaded images."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import PurePosixPath
from typing import Protocol
from uuid import UUID

from virtual_fridge.errors import ValidationFailedError

_logger = logging.getLogger(__name__)

_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
}


class MediaStorage(Protocol):
    """Interface for a blob store holding images."""

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store content at path and return its public URL."""

    def list_names(self, prefix: str) -> list[str]:
        """Return object names starting with prefix."""

    def remove(self, paths: list[str]) -> None:
        """Delete the given objects."""


@dataclass
class MediaService:
    """Saves and deletes user images."""

    storage: MediaStorage
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))

    def save_image(self, user_id: UUID, filename: str, content: bytes) -> str:
        """Store an uploaded image as <user_id>-<timestamp><ext>."""
        _reject_crlf(filename)
        extension = PurePosixPath(filename).suffix.lower()
        timestamp = int(self.clock().timestamp() * 1000)
        path = f"{user_id}-{timestamp}{extension}"
        content_type = _CONTENT_TYPES.get(extension, "application/octet-stream")
        return self.storage.upload(path, content, content_type)

    def delete_all_user_images(self, user_id: UUID) -> None:
        """Remove every image belonging to a user; failures are only logged."""
        try:
            names = self.storage.list_names(f"{user_id}-")
            if names:
                self.storage.remove(names)
        except Exception:
            _logger.exception("Failed to delete user images: user_id=%s", user_id)


def _reject_crlf(value: str) -> None:
    if "\r" in value or "\n" in value:
        raise ValidationFailedError("CRLF injection attempt detected")
