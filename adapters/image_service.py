"""
Client for the remote image-hosting service (ImageKit-compatible REST API).

Uploads go to a per-user folder; the service's ``fileId`` is kept as the
deletion key.
"""

import logging
from typing import Any, Dict, Optional

import requests

from app.exceptions import StorageError
from adapters.local_storage import stored_name
from domain.models.attachment import StoredImage

logger = logging.getLogger("gutcheck.storage.remote")


class ImageServiceBackend:
    """Stores images with a third-party image CDN over HTTP."""

    def __init__(
        self,
        private_key: str,
        *,
        upload_url: str,
        api_url: str,
        folder: str = "/gutcheck",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        if not private_key:
            raise StorageError("Image service private key is not configured.")
        self.upload_url = upload_url
        self.api_url = api_url.rstrip("/")
        self.folder = "/" + folder.strip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        # private key as basic-auth username, empty password
        self.session.auth = (private_key, "")

    def folder_for(self, owner_id: str) -> str:
        return f"{self.folder}/{owner_id}".replace("//", "/")

    def store(self, owner_id: str, data: bytes, original_name: str, content_type: str) -> StoredImage:
        """
        Upload one image.

        Parameters
        ----------
        owner_id:
            User the image belongs to; selects the remote folder.
        data:
            Raw image bytes.
        original_name:
            Client-supplied file name, only used for its extension.
        content_type:
            Media type forwarded with the multipart part.
        """
        file_name = stored_name(original_name, content_type)
        files = {"file": (file_name, data, content_type or "application/octet-stream")}
        form = {
            "fileName": file_name,
            "folder": self.folder_for(owner_id),
            "useUniqueFileName": "true",
        }
        try:
            response = self.session.post(self.upload_url, files=files, data=form, timeout=self.timeout)
        except requests.RequestException as exc:
            raise StorageError(f"Image upload request failed: {exc}") from exc

        if not response.ok:
            raise StorageError(
                f"Image service responded with {response.status_code}: {response.text}"
            )

        try:
            body: Dict[str, Any] = response.json()
        except ValueError as exc:
            raise StorageError("Image service did not return JSON.") from exc

        file_id = body.get("fileId")
        url = body.get("url")
        if not file_id or not url:
            raise StorageError("Image service response is missing fileId or url.")
        logger.debug("Uploaded %s as %s", file_name, file_id)
        return StoredImage(url=url, key=file_id)

    def delete(self, key: str) -> None:
        try:
            response = self.session.delete(f"{self.api_url}/files/{key}", timeout=self.timeout)
        except requests.RequestException as exc:
            raise StorageError(f"Image delete request failed: {exc}") from exc
        if not response.ok:
            raise StorageError(
                f"Image service responded with {response.status_code} deleting {key}"
            )
        logger.debug("Deleted remote image %s", key)
