"""Temporary storage for uploaded resume files.

Uploads are written to UPLOAD_DIR under a unique name and removed as soon as
the request that received them is done with them, whether it succeeded or not.
"""
import asyncio
import logging
import random
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Collection, Optional

from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import UnsupportedFileType, UploadTooLarge

logger = logging.getLogger(__name__)

PDF_ONLY = frozenset({"application/pdf"})
PDF_OR_IMAGE = frozenset({"application/pdf", "image/png", "image/jpeg", "image/jpg"})


@dataclass
class StoredUpload:
    path: Path
    content_type: str
    filename: str

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


def unique_filename(original_name: Optional[str]) -> str:
    """<epoch-ms>-<random>-<original name>, so concurrent uploads never collide."""
    base = Path(original_name or "resume").name or "resume"
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}-{base}"


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


@asynccontextmanager
async def scoped_upload(
    upload: UploadFile,
    allowed_types: Collection[str],
    rejection_message: Optional[str] = None,
    max_bytes: Optional[int] = None,
    upload_dir: Optional[str] = None,
) -> AsyncIterator[StoredUpload]:
    """Validate, store and finally delete an uploaded file.

    Raises UnsupportedFileType or UploadTooLarge before anything touches disk.
    """
    if upload.content_type not in allowed_types:
        raise UnsupportedFileType(rejection_message)

    limit = max_bytes or settings.MAX_UPLOAD_BYTES
    data = await upload.read(limit + 1)
    if len(data) > limit:
        raise UploadTooLarge()

    path = Path(upload_dir or settings.UPLOAD_DIR) / unique_filename(upload.filename)
    await asyncio.to_thread(_write, path, data)
    try:
        yield StoredUpload(path=path, content_type=upload.content_type, filename=upload.filename or "")
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove upload %s: %s", path, e)
