"""Upload store: stream incoming files to disk under generated keys."""

import logging
import os
import re
import uuid
from pathlib import Path
from typing import Protocol

from fastapi.concurrency import run_in_threadpool

from app.core.errors import StreamError, ValidationError
from app.schemas.upload import StoredFile

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MB
MAX_EXTENSION_LENGTH = 10
_EXTENSION_RE = re.compile(r"^\.[a-z0-9]+$")


class AsyncReadable(Protocol):
    async def read(self, size: int = -1) -> bytes: ...


def original_name(filename: str | None) -> str:
    """Base name of a client-supplied file name, with any directory part dropped."""
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1].strip()
    return name if name not in ("", ".", "..") else ""


def storage_key(filename: str) -> str:
    """Random storage key keeping a sanitized extension of the original name."""
    ext = os.path.splitext(filename)[1].lower()
    if len(ext) > MAX_EXTENSION_LENGTH or not _EXTENSION_RE.match(ext):
        ext = ""
    return f"{uuid.uuid4().hex}{ext}"


class UploadStore:
    """
    Writes uploaded streams into one directory and builds their public URLs.

    Client file names are never used as paths; each upload gets a fresh key,
    so uploads with the same name do not overwrite each other.
    """

    def __init__(
        self,
        directory: str | Path,
        base_url: str,
        url_prefix: str = "/uploads",
        max_bytes: int = 100 * 1024 * 1024,
    ) -> None:
        self._directory = Path(directory)
        self._base_url = base_url.rstrip("/")
        self._url_prefix = "/" + url_prefix.strip("/")
        self._max_bytes = max_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    def url_for(self, key: str) -> str:
        return f"{self._base_url}{self._url_prefix}/{key}"

    def _path_for(self, key: str) -> Path:
        root = self._directory.resolve()
        path = (root / key).resolve()
        if path.parent != root:
            raise ValidationError("Invalid storage key")
        return path

    async def store(self, stream: AsyncReadable, filename: str | None) -> StoredFile:
        """
        Copy the stream to disk chunk by chunk and return where it is served.

        Raises StreamError when the file exceeds the size limit or cannot be
        written; the partial file is removed. Returns only after the file is
        closed.
        """
        name = original_name(filename)
        if not name:
            raise ValidationError("A file name is required")
        key = storage_key(name)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StreamError(f"Upload directory unavailable: {e.strerror or e}") from e
        path = self._path_for(key)

        written = 0
        try:
            with path.open("wb") as f:
                while True:
                    chunk = await stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self._max_bytes:
                        raise StreamError(
                            f"File too large. Max {self._max_bytes} bytes."
                        )
                    await run_in_threadpool(f.write, chunk)
        except StreamError:
            path.unlink(missing_ok=True)
            raise
        except OSError as e:
            path.unlink(missing_ok=True)
            logger.error("Upload write failed for %s: %s", key, e)
            raise StreamError(f"Could not store file: {e.strerror or e}") from e

        logger.info(
            "Stored upload",
            extra={"key": key, "original_name": name, "size_bytes": written},
        )
        return StoredFile(key=key, filename=name, url=self.url_for(key), size=written)
