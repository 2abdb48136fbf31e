#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the MongoDB indexes GutCheck relies on (unique user email,
per-user journal ordering). Safe to run repeatedly.
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("init_db")


def main() -> int:
    from adapters import mongo_adapter
    from app.config import settings

    logger.info("Initializing MongoDB database %r...", settings.mongo_db_name)
    try:
        client, db = mongo_adapter.connect(
            settings.mongodb_uri,
            settings.mongo_db_name,
            attempts=settings.db_init_attempts,
            delay_sec=settings.db_init_delay_sec,
        )
    except Exception as e:
        logger.error("✗ Could not connect to MongoDB: %s", e)
        return 1

    try:
        mongo_adapter.ensure_indexes(db)
        for name in (mongo_adapter.USERS, mongo_adapter.MEALS, mongo_adapter.POOPS):
            indexes = sorted(db[name].index_information())
            logger.info("✓ %s indexes: %s", name, ", ".join(indexes))
        return 0
    except Exception as e:
        logger.error("✗ Failed to create indexes: %s", e)
        return 1
    finally:
        mongo_adapter.close(client)


if __name__ == "__main__":
    sys.exit(main())
