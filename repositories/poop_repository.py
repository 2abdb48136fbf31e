"""
Poop Repository - Data access layer for poop entries
"""

from pymongo.database import Database

from adapters.mongo_adapter import POOPS
from domain.models import Poop
from repositories.base import OwnedRepository


class PoopRepository(OwnedRepository[Poop]):
    """Repository for poop entry data access"""

    collection_name = POOPS

    def __init__(self, db: Database):
        super().__init__(db, Poop.from_document)
