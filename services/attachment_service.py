from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Protocol
import logging

from adapters.image_service import ImageServiceBackend
from adapters.local_storage import LocalStorageBackend
from app.config import Settings, StorageBackendType
from app.exceptions import StorageError
from domain.models import DeletionReport, StoredImage, UploadedImage

logger = logging.getLogger("gutcheck.attachments")


class StorageBackend(Protocol):
    """Contract shared by the local and remote image stores."""

    def store(self, owner_id: str, data: bytes, original_name: str, content_type: str) -> StoredImage:
        ...

    def delete(self, key: str) -> None:
        ...


def build_backend(config: Settings) -> StorageBackend:
    """Instantiate the storage backend selected by STORAGE_BACKEND."""
    if config.storage_backend == StorageBackendType.IMAGEKIT:
        return ImageServiceBackend(
            config.image_service_private_key or "",
            upload_url=config.image_service_upload_url,
            api_url=config.image_service_api_url,
            folder=config.image_service_folder,
            timeout=config.image_service_timeout,
        )
    url_prefix = config.public_base_url.rstrip("/") + config.uploads_url_path
    return LocalStorageBackend(config.uploads_dir, url_prefix=url_prefix)


class AttachmentManager:
    """
    Stores and removes meal photos through a pluggable backend.

    Batches fan out over a small thread pool. Storing is all-or-nothing from
    the caller's point of view; deleting is best-effort and never raises.
    """

    def __init__(self, backend: StorageBackend, max_workers: int = 4):
        self.backend = backend
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="attachments"
        )

    @classmethod
    def from_settings(cls, config: Settings) -> "AttachmentManager":
        return cls(build_backend(config), max_workers=config.attachment_workers)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def store(self, owner_id: str, upload: UploadedImage) -> StoredImage:
        return self.backend.store(owner_id, upload.data, upload.filename, upload.content_type)

    def store_many(self, owner_id: str, uploads: List[UploadedImage]) -> List[StoredImage]:
        """
        Store a batch of images, preserving order.

        If any image fails, the ones that made it are removed again
        (best-effort) and StorageError is raised.
        """
        futures = [self._executor.submit(self.store, owner_id, u) for u in uploads]
        stored: List[StoredImage] = []
        first_error: Optional[Exception] = None
        for future in futures:
            try:
                stored.append(future.result())
            except Exception as exc:
                if first_error is None:
                    first_error = exc

        if first_error is not None:
            logger.error("Storing %d image(s) for %s failed: %s", len(uploads), owner_id, first_error)
            if stored:
                self.delete_many([s.key for s in stored])
            if isinstance(first_error, StorageError):
                raise first_error
            raise StorageError(f"Image storage failed: {first_error}") from first_error

        logger.info("Stored %d image(s) for %s", len(stored), owner_id)
        return stored

    def _delete_one(self, key: str) -> Optional[str]:
        try:
            self.backend.delete(key)
            return None
        except Exception as exc:
            return str(exc) or exc.__class__.__name__

    def delete_many(self, keys: Iterable[str]) -> DeletionReport:
        """Delete every key independently; failures are logged and reported."""
        report = DeletionReport()
        keys = [k for k in dict.fromkeys(keys) if k]
        if not keys:
            return report

        for key, error in zip(keys, self._executor.map(self._delete_one, keys)):
            if error is None:
                report.deleted.append(key)
            else:
                report.failed[key] = error
                logger.error("Failed to delete image %s: %s", key, error)

        logger.info("Image cleanup finished: %s", report)
        return report

    def discard(self, keys: Iterable[str], tasks=None) -> None:
        """
        Schedule best-effort deletion of ``keys``.

        ``tasks`` is a FastAPI/Starlette ``BackgroundTasks``; without one the
        deletion runs inline.
        """
        keys = list(keys)
        if not keys:
            return
        if tasks is not None:
            tasks.add_task(self.delete_many, keys)
        else:
            self.delete_many(keys)
