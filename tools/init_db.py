import asyncio
import importlib
import os
import pkgutil
from sqlalchemy import text
import mentorhub.entity
from mentorhub.common.base import Base
from mentorhub.common.database import Database
from mentorhub.common.environment_constants import DATABASE_URL
from mentorhub.common.logger import get_logger

logger = get_logger()


def load_all_entities():
    """
    Import every module under mentorhub.entity so that each model is
    registered into Base.metadata before create_all() runs.
    """
    package = mentorhub.entity
    prefix = package.__name__ + "."

    for _, name, _ in pkgutil.iter_modules(package.__path__, prefix):
        logger.info("Auto importing model: %s", name)
        importlib.import_module(name)


async def reset_database():
    """
    Recreate the mentorship schema from the entity metadata.

    The public schema is dropped and recreated instead of using drop_all(),
    so enum types and leftover objects disappear as well.
    """
    load_all_entities()

    db = Database(os.getenv(DATABASE_URL), echo=False)
    engine = db.get_engine()

    async with engine.begin() as conn:
        logger.info("Dropping and recreating public schema...")
        await conn.execute(text("DROP SCHEMA public CASCADE;"))
        await conn.execute(text("CREATE SCHEMA public;"))

        logger.info("Creating all tables from Base.metadata...")
        await conn.run_sync(Base.metadata.create_all)

    await db.close()
    logger.info("Database reset complete.")


def main():
    logger.info("Resetting database tables...")
    asyncio.run(reset_database())


if __name__ == "__main__":
    main()
