import asyncio
import logging
import random

from faker import Faker
from sqlmodel import select

from classifieds.core.logging import setup_logging
from classifieds.db.database import async_session, init_db
from classifieds.models.user_model import User

logger = logging.getLogger(__name__)
fake = Faker()

USERS_TO_SEED = 20
ROLES = ["seller", "buyer", "admin", None]


async def seed_users(count: int = USERS_TO_SEED):
    async with async_session() as session:
        result = await session.execute(select(User.email))
        existing_emails = set(result.scalars().all())

        added = 0
        while added < count:
            email = fake.unique.email()
            if email in existing_emails:
                continue
            # some profiles are left incomplete on purpose, cards fall back to defaults
            session.add(
                User(
                    name=fake.name() if random.random() > 0.15 else None,
                    email=email,
                    phone=fake.phone_number() if random.random() > 0.5 else None,
                    role=random.choice(ROLES),
                    profile_picture=(
                        f"https://i.pravatar.cc/150?u={email}"
                        if random.random() > 0.3
                        else None
                    ),
                )
            )
            added += 1

        await session.commit()
        logger.info("Added %d users", added)


async def main():
    setup_logging()
    await init_db()
    await seed_users()


if __name__ == "__main__":
    asyncio.run(main())
