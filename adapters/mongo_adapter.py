"""MongoDB adapter: connection lifecycle and collection indexes.
"""

from typing import Tuple
import logging
import time

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger("gutcheck.mongo")

USERS = "users"
MEALS = "meals"
POOPS = "poops"


# ------------------ Connection ------------------
def connect(
        uri: str,
        db_name: str = "gutcheck",
        attempts: int = 1,
        delay_sec: float = 0.0,
) -> Tuple[MongoClient, Database]:
    """Open a client and verify the server answers a ping.

    Args:
        uri: MongoDB connection string
        db_name: Database to use
        attempts: How many times to try the ping before giving up
        delay_sec: Pause between attempts

    Returns:
        (client, database)

    Raises:
        PyMongoError: if the server is still unreachable after the last attempt
    """
    client = MongoClient(uri)
    for attempt in range(1, attempts + 1):
        try:
            client.admin.command("ping")
            logger.info("Connected to MongoDB (database: %s)", db_name)
            return client, client[db_name]
        except PyMongoError as exc:
            logger.warning(
                "MongoDB connection attempt %d/%d failed: %s", attempt, attempts, exc
            )
            if attempt == attempts:
                client.close()
                raise
            time.sleep(delay_sec)
    raise RuntimeError("unreachable")


def close(client: MongoClient) -> None:
    """Close MongoDB connection."""
    try:
        client.close()
        logger.info("MongoDB client closed")
    except Exception:
        logger.exception("Error closing MongoDB client")


def ping(db: Database) -> bool:
    """Return True when the server behind ``db`` answers."""
    try:
        db.command("ping")
        return True
    except Exception:
        logger.exception("MongoDB ping failed")
        return False


def ensure_indexes(db: Database) -> None:
    """Create the indexes the application relies on (idempotent)."""
    db[USERS].create_index("email", unique=True)
    for name in (MEALS, POOPS):
        db[name].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    logger.info("MongoDB indexes ensured")
