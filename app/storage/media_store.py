"""Durable storage for generated artifacts, with inline data-URL fallback."""

import asyncio
import base64
import logging
import mimetypes
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from app.errors import StorageError

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "video/mp4": ".mp4",
    "audio/mpeg": ".mp3",
    "audio/wav": ".wav",
    "application/octet-stream": ".bin",
}


def to_data_url(data: bytes, content_type: str) -> str:
    """Self-contained data: URL for an artifact."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type or 'application/octet-stream'};base64,{encoded}"


def extension_for(content_type: str) -> str:
    return _EXTENSIONS.get(content_type) or mimetypes.guess_extension(content_type) or ".bin"


class MediaStore(ABC):
    """Uploads a binary artifact and returns a durable HTTPS URL."""

    @abstractmethod
    async def upload(self, data: bytes, content_type: str, folder: str, name: str) -> str:
        """Raise StorageError on any failure."""
        ...


class SupabaseMediaStore(MediaStore):
    """Uploads into a public Supabase Storage bucket.

    The supabase client is synchronous, so uploads run in the default
    thread executor to keep the event loop free.
    """

    def __init__(
        self,
        bucket: str,
        max_bytes: int = 100 * 1024 * 1024,
        client_factory: Optional[Callable[[], Any]] = None,
    ):
        if client_factory is None:
            from app.storage.supabase_client import get_supabase
            client_factory = get_supabase
        self._bucket = bucket
        self._max_bytes = max_bytes
        self._client_factory = client_factory

    async def upload(self, data: bytes, content_type: str, folder: str, name: str) -> str:
        if len(data) > self._max_bytes:
            raise StorageError(
                f"Artifact too large ({len(data) / 1024 / 1024:.1f}MB). "
                f"Maximum allowed size is {self._max_bytes / 1024 / 1024:.0f}MB."
            )

        path = f"{folder}/{name}{extension_for(content_type)}"
        logger.info("Uploading %s (%.1fMB) to bucket %s", path, len(data) / 1024 / 1024, self._bucket)

        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._upload_sync, path, data, content_type)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(f"Storage upload failed: {exc}") from exc

    def _upload_sync(self, path: str, data: bytes, content_type: str) -> str:
        bucket = self._client_factory().storage.from_(self._bucket)
        bucket.upload(path, data, {"content-type": content_type, "upsert": "true"})
        url = bucket.get_public_url(path)
        if not url:
            raise StorageError(f"Storage returned no public URL for {path}")
        # some client versions append an empty query string
        return url.rstrip("?")
