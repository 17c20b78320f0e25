import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from classifieds.core import config
from classifieds.schemas.listing_schema import SearchRequest
from classifieds.services.listing.exceptions import (
    CategoryNotFound,
    ListingNotFound,
    StoreUnavailable,
    UserNotFound,
)
from classifieds.services.listing.listing_service import (
    ListingService,
    with_request_timeout,
)
from classifieds.tests.conftest import (
    NOW,
    add_all,
    make_listing,
    seed_category_tree,
    seed_locations_and_users,
)


@pytest.mark.asyncio
async def test_unknown_category_is_not_found(session):
    await seed_category_tree(session)
    service = ListingService(session)

    with pytest.raises(CategoryNotFound):
        await service.search_listings(SearchRequest(category_id=999), now=NOW)


@pytest.mark.asyncio
async def test_existing_empty_category_returns_empty_result(session):
    await seed_category_tree(session)
    await add_all(session, make_listing(1, 10, category_id=1))
    service = ListingService(session)

    result = await service.search_listings(SearchRequest(category_id=5), now=NOW)

    assert result.items == []
    assert result.total_count == 0


@pytest.mark.asyncio
async def test_category_search_covers_direct_children(session):
    await seed_category_tree(session)
    await add_all(
        session,
        make_listing(1, 10, category_id=1, hours_ago=1),
        make_listing(2, 10, category_id=2, hours_ago=2),
        make_listing(3, 10, category_id=3, hours_ago=3),
        # grandchild, not part of a Vehicles search
        make_listing(4, 10, category_id=4, hours_ago=4),
        make_listing(5, 10, category_id=5, hours_ago=5),
    )
    service = ListingService(session)

    vehicles = await service.search_listings(SearchRequest(category_id=1), now=NOW)
    cars = await service.search_listings(SearchRequest(category_id=2), now=NOW)
    everything = await service.search_listings(SearchRequest(), now=NOW)

    assert [item.id for item in vehicles.items] == [1, 2, 3]
    assert [item.id for item in cars.items] == [2, 4]
    assert everything.total_count == 5


@pytest.mark.asyncio
async def test_store_errors_become_store_unavailable():
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
    service = ListingService(session)

    with pytest.raises(StoreUnavailable) as exc_info:
        await service.search_listings(SearchRequest(), now=NOW)

    assert isinstance(exc_info.value.__cause__, OperationalError)


@pytest.mark.asyncio
async def test_slow_store_calls_time_out():
    async def never_answers():
        await asyncio.sleep(10)

    with pytest.raises(StoreUnavailable):
        await with_request_timeout(never_answers(), timeout=0.01)


@pytest.mark.asyncio
async def test_featured_categories(session, monkeypatch):
    monkeypatch.setattr(config.config, "featured_listings_per_category", 2)
    await seed_category_tree(session)
    await add_all(
        session,
        make_listing(1, 10, category_id=2, hours_ago=1),
        make_listing(2, None, category_id=1, hours_ago=2),
        make_listing(3, 10, category_id=3, hours_ago=3),
        make_listing(4, 10, category_id=4, hours_ago=0.5),
    )
    service = ListingService(session)

    sections = await service.get_featured_categories()

    # main categories only, by name
    assert [section.name for section in sections] == ["Electronics", "Vehicles"]
    electronics, vehicles = sections
    assert electronics.listings == []
    assert [item.id for item in vehicles.listings] == [1, 2]


@pytest.mark.asyncio
async def test_featured_section_degrades_to_empty(session, monkeypatch):
    await seed_category_tree(session)
    await add_all(session, make_listing(1, 10, category_id=1))
    service = ListingService(session)
    monkeypatch.setattr(
        service.store,
        "fetch_listings",
        AsyncMock(side_effect=StoreUnavailable("down")),
    )

    sections = await service.get_featured_categories()

    assert [section.listings for section in sections] == [[], []]


@pytest.mark.asyncio
async def test_user_listings(session, monkeypatch):
    monkeypatch.setattr(config.config, "profile_page_size", 2)
    await seed_locations_and_users(session)
    await add_all(
        session,
        make_listing(1, 10, user_id=1, hours_ago=3),
        make_listing(2, None, user_id=1, hours_ago=1),
        make_listing(3, 10, user_id=2, hours_ago=2),
        make_listing(4, 10, user_id=1, hours_ago=2),
    )
    service = ListingService(session)

    first_page = await service.get_user_listings(1)
    second_page = await service.get_user_listings(1, page=2)

    assert [item.id for item in first_page.items] == [2, 4]
    assert [item.id for item in second_page.items] == [1]
    assert first_page.total_count == 3
    assert first_page.items[0].author.name == "Jana Novak"

    with pytest.raises(UserNotFound):
        await service.get_user_listings(42)


@pytest.mark.asyncio
async def test_latest_listings_are_sitewide(session, monkeypatch):
    monkeypatch.setattr(config.config, "latest_page_size", 2)
    await seed_category_tree(session)
    await add_all(
        session,
        make_listing(1, 10, category_id=1, hours_ago=3),
        make_listing(2, 10, category_id=5, hours_ago=1),
        make_listing(3, None, category_id=4, hours_ago=2),
    )
    service = ListingService(session)

    result = await service.get_latest_listings()

    assert [item.id for item in result.items] == [2, 3]
    assert result.total_count == 3


@pytest.mark.asyncio
async def test_category_detail(session):
    await seed_category_tree(session)
    service = ListingService(session)

    cars = await service.get_category_detail(2)
    vehicles = await service.get_category_detail(1)

    assert cars.parent_name == "Vehicles"
    assert [sub.name for sub in cars.subcategories] == ["Electric Cars"]
    assert vehicles.parent_name is None
    assert [sub.name for sub in vehicles.subcategories] == ["Cars", "Motorcycles"]

    with pytest.raises(CategoryNotFound):
        await service.get_category_detail(999)


@pytest.mark.asyncio
async def test_missing_listing(session):
    service = ListingService(session)

    with pytest.raises(ListingNotFound):
        await service.get_listing(1)
