"""Upload gate: checks multipart image files before they reach storage."""

from typing import List, Optional
import logging

from fastapi import UploadFile

from app.config import Settings
from app.exceptions import ServiceValidationError
from domain.models import UploadedImage

logger = logging.getLogger("gutcheck.api.uploads")


def read_image_uploads(files: Optional[List[UploadFile]], settings: Settings) -> List[UploadedImage]:
    """
    Read and validate the ``images`` parts of a request.

    Only ``image/*`` media types are accepted, at most ``upload_max_files``
    per request and ``upload_max_file_size`` bytes each.

    Raises:
        ServiceValidationError: on any violated limit
    """
    files = [f for f in (files or []) if f is not None and f.filename]
    if len(files) > settings.upload_max_files:
        raise ServiceValidationError(f"Too many files (max {settings.upload_max_files})")

    limit = settings.upload_max_file_size
    uploads: List[UploadedImage] = []
    for f in files:
        content_type = (f.content_type or "").lower()
        if not content_type.startswith("image/"):
            logger.info("Rejected upload %r with content type %r", f.filename, content_type)
            raise ServiceValidationError("Only image uploads are allowed")
        data = f.file.read(limit + 1)
        if len(data) > limit:
            raise ServiceValidationError(
                f"File too large (max {settings.upload_max_file_size_mb}MB)"
            )
        uploads.append(UploadedImage(filename=f.filename, content_type=content_type, data=data))
    return uploads
