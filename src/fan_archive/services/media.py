"""Storage for files attached to uploaded fanworks.

Uploads are written to the local upload directory and served back by the
application under ``/uploads``.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from fastapi import UploadFile

from fan_archive.core.errors import ValidationFailedError
from fan_archive.core.settings import settings

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"
CHUNK_SIZE = 64 * 1024

# Extension -> content types accepted for it.
ALLOWED_TYPES: dict[str, frozenset[str]] = {
    ".jpg": frozenset({"image/jpeg", "image/pjpeg"}),
    ".jpeg": frozenset({"image/jpeg", "image/pjpeg"}),
    ".png": frozenset({"image/png"}),
    ".gif": frozenset({"image/gif"}),
    ".pdf": frozenset({"application/pdf"}),
    ".txt": frozenset({"text/plain"}),
    ".doc": frozenset({"application/msword"}),
    ".docx": frozenset(
        {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
    ),
}

UNSUPPORTED_FILE_MESSAGE = "Only images and documents are allowed"


@dataclass(frozen=True)
class StoredMedia:
    """Result of a successful upload."""

    url: str
    path: Path
    size: int
    original_filename: str
    content_type: str


def _format_size(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size // (1024 * 1024)} MB"
    return f"{max(1, size // 1024)} KB"


def _file_error(message: str) -> ValidationFailedError:
    return ValidationFailedError([{"field": "file", "message": message}], message=message)


class LocalMediaStore:
    """Validate uploads and persist them under a local directory."""

    def __init__(self, root: str | Path, max_bytes: int) -> None:
        self.root = Path(root)
        self.max_bytes = max_bytes
        self.root.mkdir(parents=True, exist_ok=True)

    def validate(self, filename: str | None, content_type: str | None) -> str:
        """Check the extension and content type; return the normalized extension."""
        extension = Path(filename or "").suffix.lower()
        allowed = ALLOWED_TYPES.get(extension)
        mime = (content_type or "").split(";", 1)[0].strip().lower()
        if allowed is None or mime not in allowed:
            raise _file_error(UNSUPPORTED_FILE_MESSAGE)
        return extension

    def save(self, upload: UploadFile) -> StoredMedia:
        """Validate and write an upload, returning where it can be fetched."""
        extension = self.validate(upload.filename, upload.content_type)
        return self.save_stream(
            upload.file,
            extension=extension,
            original_filename=upload.filename or "",
            content_type=(upload.content_type or "").split(";", 1)[0].strip().lower(),
        )

    def save_stream(
        self,
        stream: BinaryIO,
        *,
        extension: str,
        original_filename: str,
        content_type: str,
    ) -> StoredMedia:
        """Copy `stream` to a fresh file, enforcing the size limit while copying."""
        name = f"{uuid.uuid4().hex}{extension}"
        path = self.root / name
        size = 0
        try:
            with path.open("wb") as out:
                while chunk := stream.read(CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise _file_error(f"File too large (max {_format_size(self.max_bytes)})")
                    out.write(chunk)
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        logger.info("Stored upload %s (%d bytes) as %s", original_filename, size, name)
        return StoredMedia(
            url=f"{PUBLIC_PREFIX}/{name}",
            path=path,
            size=size,
            original_filename=original_filename,
            content_type=content_type,
        )

    def delete(self, url: str | None) -> bool:
        """Remove a previously stored file; URLs not owned by this store are ignored."""
        if not url or not url.startswith(f"{PUBLIC_PREFIX}/"):
            return False
        path = self.root / Path(url).name
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.warning("Failed to remove stored upload %s: %s", path, exc)
            return False
        return True


class _MediaStoreSingleton:
    """Singleton wrapper for LocalMediaStore."""

    _instance: LocalMediaStore | None = None

    @classmethod
    def get_instance(cls) -> LocalMediaStore:
        if cls._instance is None:
            cls._instance = LocalMediaStore(settings.upload_dir, settings.max_upload_bytes)
        return cls._instance


def get_media_store() -> LocalMediaStore:
    """Return the shared media store."""
    return _MediaStoreSingleton.get_instance()
