import asyncio
import logging
import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from faker import Faker
from sqlmodel import select

from classifieds.core.logging import setup_logging
from classifieds.db.database import async_session, init_db
from classifieds.models.category_model import Category
from classifieds.models.enums.listing_status import ListingStatus
from classifieds.models.listing_image import ListingImage
from classifieds.models.listing_model import Listing
from classifieds.models.location_model import Location
from classifieds.models.user_model import User

logger = logging.getLogger(__name__)
fake = Faker()

LISTINGS_TO_SEED = 200
# share of "contact for price" listings
UNPRICED_RATIO = 0.2
MAX_AGE_DAYS = 60


async def seed_listings(count: int = LISTINGS_TO_SEED):
    async with async_session() as session:
        category_ids = (await session.execute(select(Category.id))).scalars().all()
        location_ids = (await session.execute(select(Location.id))).scalars().all()
        user_ids = (await session.execute(select(User.id))).scalars().all()

        if not category_ids or not user_ids:
            logger.warning("Seed users and categories before listings, skipping.")
            return

        now = datetime.now(timezone.utc)
        for _ in range(count):
            price = (
                None
                if random.random() < UNPRICED_RATIO
                else Decimal(random.randint(5, 250_000))
            )
            listing = Listing(
                title=fake.sentence(nb_words=4).rstrip("."),
                description=fake.paragraph(nb_sentences=3) if random.random() > 0.1 else "",
                price=price,
                currency="EUR",
                status=random.choice(
                    [ListingStatus.ACTIVE.value] * 8 + [ListingStatus.PENDING.value]
                ),
                category_id=random.choice(category_ids),
                location_id=random.choice(location_ids) if location_ids else None,
                user_id=random.choice(user_ids),
                created_at=now
                - timedelta(minutes=random.randint(0, MAX_AGE_DAYS * 24 * 60)),
            )
            for ordinal in range(random.randint(0, 3)):
                listing.images.append(
                    ListingImage(
                        image_url=f"https://picsum.photos/seed/{fake.uuid4()}/800/600",
                        ordinal=ordinal,
                    )
                )
            session.add(listing)

        await session.commit()
        logger.info("Added %d listings", count)


async def main():
    setup_logging()
    await init_db()
    await seed_listings()


if __name__ == "__main__":
    asyncio.run(main())
