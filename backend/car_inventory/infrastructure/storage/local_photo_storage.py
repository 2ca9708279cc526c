"""Local filesystem storage for car photos.

Storage layout:
    <upload_dir>/<stem>-<YYYYMMDD_HHmmss>-<hex>.<ext>

Identifiers handed out are the bare filenames; nothing that contains a path
component is ever resolved.
"""

import asyncio
import logging
import re
import secrets
from datetime import datetime, timezone
from pathlib import Path

from car_inventory.application.interfaces import PhotoStorage
from car_inventory.domain.exceptions import (
    AssetCleanupError,
    InvalidAssetPathError,
    InvalidPhotoError,
)

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})
ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".webp"})


def _datetime_stamp() -> str:
    """Return a UTC datetime stamp suitable for filenames: YYYYMMDD_HHmmss."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _sanitise(name: str, max_len: int = 60) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "photo"


class LocalPhotoStorage(PhotoStorage):
    """Infrastructure adapter for photo files on the local disk."""

    def __init__(self, upload_dir: str | Path, url_prefix: str, max_size: int):
        self._root = Path(upload_dir).resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._url_prefix = url_prefix.rstrip("/")
        self._max_size = max_size

    @property
    def root(self) -> Path:
        return self._root

    async def store(
        self, content: bytes, filename: str, content_type: str | None = None
    ) -> str:
        suffix = Path(filename or "").suffix.lower()
        if suffix not in ALLOWED_EXTENSIONS:
            raise InvalidPhotoError("only jpeg, jpg, png and webp images are allowed")
        if content_type is not None and content_type.lower() not in ALLOWED_CONTENT_TYPES:
            raise InvalidPhotoError("only jpeg, jpg, png and webp images are allowed")
        if not content:
            raise InvalidPhotoError("photo is empty")
        if len(content) > self._max_size:
            raise InvalidPhotoError(f"photo exceeds the maximum size of {self._max_size} bytes")

        identifier = f"{_sanitise(Path(filename).stem)}-{_datetime_stamp()}-{secrets.token_hex(6)}{suffix}"
        dest_path = self.resolve_path(identifier)
        await asyncio.to_thread(dest_path.write_bytes, content)

        logger.info("Stored photo: %s (%d bytes)", identifier, len(content))
        return identifier

    async def delete(self, identifier: str) -> bool:
        try:
            path = self.resolve_path(identifier)
        except InvalidAssetPathError as exc:
            raise AssetCleanupError(identifier, str(exc)) from exc

        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise AssetCleanupError(identifier, exc.strerror or str(exc)) from exc
        return True

    def resolve_path(self, identifier: str) -> Path:
        if (
            not identifier
            or identifier in {".", ".."}
            or "\\" in identifier
            or "\x00" in identifier
            or Path(identifier).name != identifier
        ):
            raise InvalidAssetPathError(identifier)

        path = (self._root / identifier).resolve()
        if path.parent != self._root:
            raise InvalidAssetPathError(identifier)
        return path

    def resolve_url(self, identifier: str) -> str:
        return f"{self._url_prefix}/{identifier}"
