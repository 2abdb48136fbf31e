"""Attachment value objects shared by the storage backends and the services."""

from typing import Dict, List, Optional


class StoredImage:
    """A stored image: public URL plus the opaque key used to delete it."""

    def __init__(self, url: str, key: str):
        self.url = url
        self.key = key

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["StoredImage"]:
        if not data or not data.get("url"):
            return None
        return cls(url=data["url"], key=data.get("key") or "")

    def to_dict(self) -> dict:
        return {"url": self.url, "key": self.key}

    def __eq__(self, other) -> bool:
        return isinstance(other, StoredImage) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"StoredImage(url={self.url!r}, key={self.key!r})"


class UploadedImage:
    """An image received from the client that passed the upload gate."""

    def __init__(self, filename: str, content_type: str, data: bytes):
        self.filename = filename
        self.content_type = content_type
        self.data = data

    @property
    def size(self) -> int:
        return len(self.data)


class DeletionReport:
    """Outcome of a best-effort batch deletion."""

    def __init__(self):
        self.deleted: List[str] = []
        self.failed: Dict[str, str] = {}

    @property
    def ok(self) -> bool:
        return not self.failed

    def __repr__(self) -> str:
        return f"DeletionReport(deleted={len(self.deleted)}, failed={len(self.failed)})"
