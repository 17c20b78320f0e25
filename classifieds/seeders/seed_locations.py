import asyncio
import logging

from sqlmodel import select

from classifieds.core.logging import setup_logging
from classifieds.db.database import async_session, init_db
from classifieds.models.location_model import Location

logger = logging.getLogger(__name__)

# (id, name, parent_id, type)
LOCATIONS_TO_SEED = [
    (1, "Slovakia", None, "country"),
    (2, "Bratislava Region", 1, "region"),
    (3, "Kosice Region", 1, "region"),
    (4, "Bratislava", 2, "city"),
    (5, "Pezinok", 2, "city"),
    (6, "Kosice", 3, "city"),
    (7, "Presov", 3, "city"),
]


async def seed_locations():
    async with async_session() as session:
        for location_id, name, parent_id, location_type in LOCATIONS_TO_SEED:
            result = await session.execute(
                select(Location).where(Location.id == location_id)
            )
            if result.scalar_one_or_none():
                logger.info("Location with ID %s already exists", location_id)
                continue

            session.add(
                Location(id=location_id, name=name, parent_id=parent_id, type=location_type)
            )
            await session.flush()
            logger.info("Added location: %s", name)

        await session.commit()
        logger.info("Location seeding complete.")


async def main():
    setup_logging()
    await init_db()
    await seed_locations()


if __name__ == "__main__":
    asyncio.run(main())
