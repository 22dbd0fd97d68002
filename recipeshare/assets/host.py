from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from pathlib import Path

from ..config import DEFAULT_SETTINGS
from ..errors import BadRequestError

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class AssetHost(ABC):
    @abstractmethod
    def upload(self, filename: str, content: bytes, content_type: str) -> str:
        """Store an image and return a durable URL for it."""


class LocalAssetHost(AssetHost):
    """Writes uploads under ``directory``; the app serves them at ``base_url``."""

    def __init__(self, directory: Path, base_url: str) -> None:
        self.directory = Path(directory)
        self.base_url = base_url.rstrip("/")
        self.directory.mkdir(parents=True, exist_ok=True)

    def upload(self, filename: str, content: bytes, content_type: str) -> str:
        ext = _EXTENSIONS.get(content_type)
        if ext is None:
            raise BadRequestError("Only JPEG, PNG, GIF or WebP images can be uploaded")
        if not content:
            raise BadRequestError("Uploaded file is empty")
        if len(content) > MAX_UPLOAD_BYTES:
            raise BadRequestError("Uploaded file is larger than 5 MB")

        name = f"{uuid.uuid4().hex}{ext}"
        (self.directory / name).write_bytes(content)
        logger.info("Stored upload %r as %s", filename, name)
        return f"{self.base_url}/{name}"


_host: AssetHost | None = None


def get_asset_host() -> AssetHost:
    """Return the process-wide asset host, creating it on first call."""
    global _host
    if _host is None:
        _host = LocalAssetHost(DEFAULT_SETTINGS.upload_dir, DEFAULT_SETTINGS.upload_base_url)
    return _host
