import asyncio
import logging

from sqlmodel import select

from classifieds.core.logging import setup_logging
from classifieds.db.database import async_session, init_db
from classifieds.models.category_model import Category

logger = logging.getLogger(__name__)

# (id, name, parent_id); the third level exists for navigation only
CATEGORIES_TO_SEED = [
    (1, "Real Estate", None),
    (2, "Vehicles", None),
    (3, "Electronics", None),
    (4, "Home & Garden", None),
    (5, "Fashion", None),
    (6, "Sports & Outdoors", None),
    (11, "Apartments", 1),
    (12, "Houses", 1),
    (13, "Land", 1),
    (21, "Cars", 2),
    (22, "Motorcycles", 2),
    (211, "Electric Cars", 21),
    (31, "Phones", 3),
    (32, "Computers", 3),
    (321, "Laptops", 32),
    (41, "Furniture", 4),
    (51, "Shoes", 5),
    (61, "Bicycles", 6),
]


async def seed_categories():
    async with async_session() as session:
        for category_id, name, parent_id in CATEGORIES_TO_SEED:
            result = await session.execute(
                select(Category).where(Category.id == category_id)
            )
            existing = result.scalar_one_or_none()

            if existing:
                logger.info(
                    "Category with ID %s already exists: %s", category_id, existing.name
                )
                continue

            session.add(Category(id=category_id, name=name, parent_id=parent_id))
            # parents have to exist before their children reference them
            await session.flush()
            logger.info("Added category: %s", name)

        await session.commit()
        logger.info("Category seeding complete.")


async def main():
    setup_logging()
    await init_db()
    await seed_categories()


if __name__ == "__main__":
    asyncio.run(main())
