"""Local filesystem image storage.

Files live under ``<root>/meals/<owner_id>/`` and are served back by the
static ``/uploads`` mount. The deletion key is the path relative to the root.
"""

import logging
import mimetypes
import pathlib
import secrets
import time

from app.exceptions import StorageError
from domain.models.attachment import StoredImage

logger = logging.getLogger("gutcheck.storage.local")

KNOWN_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif", ".bmp", ".heic", ".heif", ".tif", ".tiff"}


def _safe_join(root: pathlib.Path, key: str) -> pathlib.Path:
    # Prevent path traversal: resolve and ensure it is within root.
    candidate = (root / key).resolve()
    if root not in candidate.parents:
        raise StorageError("Invalid storage key")
    return candidate


def stored_name(original_name: str, content_type: str = "") -> str:
    """Collision-resistant file name: millisecond timestamp plus random suffix."""
    ext = pathlib.Path(original_name or "").suffix.lower()
    if ext not in KNOWN_EXTENSIONS:
        ext = mimetypes.guess_extension(content_type or "") or ".bin"
    return f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{ext}"


class LocalStorageBackend:
    """Stores images on local disk."""

    def __init__(self, root: str, url_prefix: str = "/uploads"):
        self.root = pathlib.Path(root).resolve()
        self.url_prefix = url_prefix.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def store(self, owner_id: str, data: bytes, original_name: str, content_type: str) -> StoredImage:
        key = f"meals/{owner_id}/{stored_name(original_name, content_type)}"
        target = _safe_join(self.root, key)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as f:
                f.write(data)
        except OSError as exc:
            raise StorageError(f"Could not write image: {exc}") from exc
        logger.debug("Stored %d bytes at %s", len(data), key)
        return StoredImage(url=f"{self.url_prefix}/{key}", key=key)

    def delete(self, key: str) -> None:
        path = _safe_join(self.root, key)
        try:
            path.unlink()
        except OSError as exc:
            raise StorageError(f"Could not delete image {key}: {exc}") from exc
        logger.debug("Deleted %s", key)
