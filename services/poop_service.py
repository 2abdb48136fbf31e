from typing import List, Optional
import logging

from pymongo.database import Database

from app.exceptions import NotFoundError
from domain.models import Poop, clean_text, to_object_id
from repositories import PoopRepository

logger = logging.getLogger("gutcheck.poops")

POOP_NOT_FOUND = "Poop entry not found"


class PoopService:
    @staticmethod
    def create_poop(db: Database, owner_id: str, description: Optional[str]) -> Poop:
        # Poop.validate rejects a blank description
        poop = PoopRepository(db).create(
            Poop(user_id=to_object_id(owner_id), description=description)
        )
        logger.info("Created poop entry %s", poop.id)
        return poop

    @staticmethod
    def list_poops(db: Database, owner_id: str) -> List[Poop]:
        return PoopRepository(db).list_owned(owner_id)

    @staticmethod
    def get_poop(db: Database, owner_id: str, poop_id: str) -> Poop:
        poop = PoopRepository(db).get_owned(owner_id, poop_id)
        if poop is None:
            raise NotFoundError(POOP_NOT_FOUND)
        return poop

    @staticmethod
    def update_poop(
        db: Database, owner_id: str, poop_id: str, description: Optional[str] = None
    ) -> Poop:
        """Replace the description when a non-blank one is given."""
        repo = PoopRepository(db)
        poop = repo.get_owned(owner_id, poop_id)
        if poop is None:
            raise NotFoundError(POOP_NOT_FOUND)

        if clean_text(description):
            poop.description = clean_text(description)
            poop = repo.save(poop)
            if poop is None:
                raise NotFoundError(POOP_NOT_FOUND)
        return poop

    @staticmethod
    def delete_poop(db: Database, owner_id: str, poop_id: str) -> None:
        if not PoopRepository(db).delete_owned(owner_id, poop_id):
            raise NotFoundError(POOP_NOT_FOUND)
        logger.info("Deleted poop entry %s", poop_id)
