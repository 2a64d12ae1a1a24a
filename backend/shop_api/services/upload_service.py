"""
Shop API Backend: Upload Storage Service
=========================================

What:  Persists uploaded files into the upload directory under generated names.
How:   `{token}{extension}` where token is a strictly increasing integer
       derived from the wall clock (nanoseconds), and extension is the
       original file's suffix when it looks like one.
Who:   Called by ProductService (product images) and the /upload route.

Naming rules:
    - The original filename never becomes part of the path, only its suffix,
      and only if it matches `.[A-Za-z0-9]{1,10}`. This rules out path
      traversal (`../../etc/passwd`) and odd characters in stored names.
    - Two stores within the same clock tick still get distinct tokens:
      the token is bumped past the last one issued by this process.
    - Files are opened with mode "xb" (exclusive create), so an existing file
      is never overwritten even across processes; a clash moves to the next token.

Files are never deleted by this service. A file orphaned by a failed
procedure call stays on disk and is reported in the logs by the caller.
"""

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles
from fastapi import UploadFile

from shop_api.config import settings
from shop_api.exceptions import FileStorageError, NotFoundError

logger = logging.getLogger(__name__)

# Public URL prefix the upload directory is served under
UPLOADS_URL_PREFIX = "/uploads"

_SAFE_EXTENSION = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


@dataclass(frozen=True)
class StoredFile:
    """A file written by UploadService."""

    filename: str
    extension: str
    storage_path: str

    @property
    def url_path(self) -> str:
        return f"{UPLOADS_URL_PREFIX}/{self.filename}"


def safe_extension(original_filename: Optional[str]) -> str:
    """Returns the original suffix if it is a plain short extension, else ''."""
    if not original_filename:
        return ""
    suffix = Path(original_filename).suffix
    return suffix if _SAFE_EXTENSION.match(suffix) else ""


class UploadService:
    """
    Writes uploads into a single flat directory.

    Directory Structure:
        uploads/
        ├── 1718031234567891234.png
        └── 1718031234567891235.jpg
    """

    def __init__(self, upload_dir: Optional[str] = None):
        """
        Args:
            upload_dir: Override the directory (used in tests).
                        If None, uses settings.upload_dir.
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir).resolve()
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self._last_token = 0
        logger.info("UploadService initialized with upload_dir=%s", self.upload_dir)

    def _next_token(self) -> int:
        # No await between read and write: atomic on the event loop
        token = max(time.time_ns(), self._last_token + 1)
        self._last_token = token
        return token

    async def store(self, content: bytes, original_filename: Optional[str]) -> StoredFile:
        """
        Write `content` under a freshly generated name.

        Returns:
            StoredFile with the generated filename and its absolute path.

        Raises:
            FileStorageError if the directory is not writable, disk is full, etc.
        """
        extension = safe_extension(original_filename)

        while True:
            filename = f"{self._next_token()}{extension}"
            path = self.upload_dir / filename
            try:
                async with aiofiles.open(path, "xb") as f:
                    await f.write(content)
            except FileExistsError:
                logger.debug("Upload name %s already taken, trying the next token", filename)
                continue
            except OSError as e:
                logger.error("Failed to store upload at %s: %s", path, str(e))
                raise FileStorageError(
                    message=f"Failed to save uploaded file: {e.strerror or e}",
                    context={"path": str(path), "os_error": str(e)},
                ) from e
            break

        logger.info("File stored: %s (%d bytes)", filename, len(content))
        return StoredFile(filename=filename, extension=extension, storage_path=str(path))

    async def save_upload(self, upload: Optional[UploadFile]) -> Optional[StoredFile]:
        """
        Store a multipart file field, if one was attached.

        The upload stream is always closed, whether the write succeeds or not.
        Returns None when no file was sent.
        """
        if upload is None:
            return None
        try:
            content = await upload.read()
            return await self.store(content, upload.filename)
        finally:
            await upload.close()

    def resolve(self, filename: str) -> Path:
        """
        Map a served filename to its path inside the upload directory.

        Raises:
            NotFoundError if the name escapes the directory or no such file exists.
        """
        path = (self.upload_dir / filename).resolve()
        if path.parent != self.upload_dir or not path.is_file():
            raise NotFoundError(resource="file", resource_id=filename)
        return path


upload_service = UploadService()
