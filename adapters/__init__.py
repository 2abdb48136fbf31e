"""
Adapters package - External service connections.
MongoDB connection handling and the image storage backends.
"""

from adapters import mongo_adapter
from adapters.local_storage import LocalStorageBackend
from adapters.image_service import ImageServiceBackend

__all__ = [
    "mongo_adapter",
    "LocalStorageBackend",
    "ImageServiceBackend",
]
