"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Any, Callable, Generic, TypeVar, Optional, List
from abc import ABC

from pymongo import DESCENDING
from pymongo.database import Database

from domain.models import to_object_id

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository over one MongoDB collection.
    Models provide ``to_document()``, ``from_document()`` and ``validate()``.
    """

    collection_name: str = ""

    def __init__(self, db: Database, from_document: Callable[[dict], ModelType]):
        self.db = db
        self.collection = db[self.collection_name]
        self.from_document = from_document

    def get_by_id(self, entity_id: Any) -> Optional[ModelType]:
        """Get entity by ID; unparseable ids behave like missing ones"""
        oid = to_object_id(entity_id)
        if oid is None:
            return None
        doc = self.collection.find_one({"_id": oid})
        return self.from_document(doc) if doc else None

    def create(self, entity: ModelType) -> ModelType:
        """Validate and insert a new entity, assigning its id"""
        entity.validate()
        result = self.collection.insert_one(entity.to_document())
        entity.id = result.inserted_id
        return entity

    def exists(self, entity_id: Any) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None


class OwnedRepository(BaseRepository[ModelType]):
    """
    Repository for records that belong to a single user through ``user_id``.

    Every read and write filters on both the record id and the owner id, so a
    record owned by someone else is indistinguishable from a missing one.
    """

    def _owned_filter(self, owner_id: Any, entity_id: Any) -> Optional[dict]:
        oid = to_object_id(entity_id)
        owner = to_object_id(owner_id)
        if oid is None or owner is None:
            return None
        return {"_id": oid, "user_id": owner}

    def get_owned(self, owner_id: Any, entity_id: Any) -> Optional[ModelType]:
        """Get a record if it exists and belongs to owner_id"""
        query = self._owned_filter(owner_id, entity_id)
        if query is None:
            return None
        doc = self.collection.find_one(query)
        return self.from_document(doc) if doc else None

    def list_owned(self, owner_id: Any) -> List[ModelType]:
        """All records of owner_id, newest first"""
        owner = to_object_id(owner_id)
        if owner is None:
            return []
        cursor = self.collection.find({"user_id": owner}).sort(
            [("created_at", DESCENDING), ("_id", DESCENDING)]
        )
        return [self.from_document(doc) for doc in cursor]

    def save(self, entity: ModelType) -> Optional[ModelType]:
        """
        Write back a modified record.

        Returns None when the record disappeared (or changed owner) in the meantime.
        """
        entity.validate()
        query = self._owned_filter(entity.user_id, entity.id)
        if query is None:
            return None
        result = self.collection.replace_one(query, entity.to_document())
        return entity if result.matched_count else None

    def delete_owned(self, owner_id: Any, entity_id: Any) -> bool:
        """Delete a record of owner_id; False if there was nothing to delete"""
        query = self._owned_filter(owner_id, entity_id)
        if query is None:
            return False
        return self.collection.delete_one(query).deleted_count > 0
