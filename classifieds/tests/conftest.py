import os

os.environ["TESTING"] = "1"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from classifieds.api.dependencies import get_async_session
from classifieds.api.main import app
from classifieds.models.category_model import Category
from classifieds.models.listing_image import ListingImage
from classifieds.models.listing_model import Listing
from classifieds.models.location_model import Location
from classifieds.models.user_model import User

DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# fixed reference time for everything date related
NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture()
async def session_factory():
    engine = create_async_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        # ensure that we are connecting to the same
        # in memory database
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture()
async def session(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def async_client(session_factory) -> AsyncClient:
    async def override_get_async_session() -> AsyncSession:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
    app.dependency_overrides.clear()


def make_listing(
    listing_id: int,
    price: Decimal | int | None = None,
    *,
    category_id: int | None = 1,
    location_id: int | None = None,
    user_id: int | None = None,
    hours_ago: float = 1,
    images: tuple[str, ...] = (),
    **kwargs,
) -> Listing:
    listing = Listing(
        id=listing_id,
        title=kwargs.pop("title", f"Listing {listing_id}"),
        description=kwargs.pop("description", "Test listing"),
        price=Decimal(price) if price is not None else None,
        currency=kwargs.pop("currency", "EUR"),
        category_id=category_id,
        location_id=location_id,
        user_id=user_id,
        created_at=NOW - timedelta(hours=hours_ago),
        **kwargs,
    )
    for ordinal, url in enumerate(images):
        listing.images.append(ListingImage(image_url=url, ordinal=ordinal))
    return listing


async def add_all(session: AsyncSession, *objects):
    # flush one by one, self referencing rows need their parents first
    for obj in objects:
        session.add(obj)
        await session.flush()
    await session.commit()


async def seed_category_tree(session: AsyncSession):
    """
    1 Vehicles
      2 Cars
        4 Electric Cars
      3 Motorcycles
    5 Electronics (no children)
    """
    await add_all(
        session,
        Category(id=1, name="Vehicles"),
        Category(id=2, name="Cars", parent_id=1),
        Category(id=3, name="Motorcycles", parent_id=1),
        Category(id=4, name="Electric Cars", parent_id=2),
        Category(id=5, name="Electronics"),
    )


async def seed_locations_and_users(session: AsyncSession):
    await add_all(
        session,
        Location(id=1, name="Bratislava"),
        Location(id=2, name="Kosice"),
        User(
            id=1,
            name="Jana Novak",
            email="jana@example.com",
            role="seller",
            profile_picture="https://example.com/jana.png",
        ),
        User(id=2, email="nameless@example.com"),
    )
