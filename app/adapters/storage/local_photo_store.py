"""Local filesystem photo store."""

from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path

from app.application.ports.photo_store_port import PhotoStorePort
from app.config import settings
from app.domain.entities.complaint import PhotoUpload

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}
DEFAULT_EXTENSION = ".bin"


class LocalPhotoStore(PhotoStorePort):
    """Writes each photo to its own uniquely named file under base_dir.

    The returned reference is the file name relative to base_dir.
    """

    def __init__(self, base_dir: str | Path | None = None):
        self._base_dir = Path(base_dir or settings.photo_storage_path)

    async def save(self, photo: PhotoUpload) -> str:
        name = uuid.uuid4().hex + EXTENSIONS.get(photo.mime_type.lower(), DEFAULT_EXTENSION)
        await asyncio.to_thread(self._write, self._base_dir / name, photo.content)
        logger.info("Stored photo %s (%d bytes)", name, len(photo.content))
        return name

    @staticmethod
    def _write(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
