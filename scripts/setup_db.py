# scripts/setup_db.py
"""
Create the resume tables and indexes on DATABASE_URL.

Usage:
    python scripts/setup_db.py

Production databases should be migrated with `alembic upgrade head` instead.
"""
import asyncio

from resume_core.core.config import settings
from resume_core.core.logging import configure_logging, get_logger
from resume_core.db.base import Base
from resume_core.db.session import Database

logger = get_logger("setup_db")


async def setup() -> None:
    db = Database(settings.DATABASE_URL).connect()
    try:
        await db.health_check()
        await db.create_all()
        logger.info("schema_created", tables=sorted(Base.metadata.tables))
    finally:
        await db.dispose()


def main():
    configure_logging()
    asyncio.run(setup())


if __name__ == "__main__":
    main()
