import math

import pytest

from classifieds.models.enums.sort_key import SortKey
from classifieds.schemas.listing_schema import FilterSet, PageRequest, SearchRequest
from classifieds.services.listing import sort_planner
from classifieds.services.listing.listing_service import ListingService
from classifieds.services.listing.sort_planner import PricePlan, SimplePlan
from classifieds.tests.conftest import NOW, add_all, make_listing


async def seed_price_mix(session):
    """A(30) B(-) C(10) D(-) E(20), oldest first."""
    await add_all(
        session,
        make_listing(1, 30, title="A", hours_ago=5),
        make_listing(2, None, title="B", hours_ago=4),
        make_listing(3, 10, title="C", hours_ago=3),
        make_listing(4, None, title="D", hours_ago=2),
        make_listing(5, 20, title="E", hours_ago=1),
    )


async def titles(service, sort_key, page, page_size):
    result = await service.search_listings(
        SearchRequest(sort_key=sort_key, page=page, page_size=page_size), now=NOW
    )
    return [item.title for item in result.items], result.total_count


def test_plan_shape_follows_sort_key():
    page = PageRequest(page_number=3, page_size=10)

    newest = sort_planner.plan(SortKey.NEWEST, {1}, FilterSet(), page, now=NOW)
    oldest = sort_planner.plan(SortKey.OLDEST, None, FilterSet(), page, now=NOW)
    default = sort_planner.plan(None, None, FilterSet(), page, now=NOW)
    low = sort_planner.plan(SortKey.PRICE_LOW, {1, 2}, FilterSet(), page, now=NOW)
    high = sort_planner.plan(SortKey.PRICE_HIGH, None, FilterSet(), page, now=NOW)

    assert isinstance(newest, SimplePlan) and isinstance(oldest, SimplePlan)
    assert default.order_by is sort_planner.NEWEST_ORDER
    assert oldest.order_by is sort_planner.OLDEST_ORDER
    assert isinstance(low, PricePlan) and not low.descending
    assert isinstance(high, PricePlan) and high.descending
    assert (low.offset, low.limit) == (20, 10)
    # category scope only when a category set is given
    assert len(newest.predicate) == 1
    assert len(oldest.predicate) == 0


@pytest.mark.asyncio
async def test_price_low_puts_unpriced_listings_last(session):
    await seed_price_mix(session)
    service = ListingService(session)

    assert await titles(service, "price_low", 1, 3) == (["C", "E", "A"], 5)
    # unpriced ones newest first
    assert await titles(service, "price_low", 2, 3) == (["D", "B"], 5)


@pytest.mark.asyncio
async def test_price_high_puts_unpriced_listings_last(session):
    await seed_price_mix(session)
    service = ListingService(session)

    assert await titles(service, "price_high", 1, 3) == (["A", "E", "C"], 5)
    assert await titles(service, "price_high", 2, 3) == (["D", "B"], 5)


@pytest.mark.asyncio
async def test_price_boundary_inside_a_page(session):
    await seed_price_mix(session)
    service = ListingService(session)

    assert await titles(service, "price_low", 1, 2) == (["C", "E"], 5)
    assert await titles(service, "price_low", 2, 2) == (["A", "D"], 5)
    # one unpriced listing was already shown on page 2
    assert await titles(service, "price_low", 3, 2) == (["B"], 5)
    assert await titles(service, "price_low", 4, 2) == ([], 5)


@pytest.mark.asyncio
async def test_price_sort_aliases(session):
    await seed_price_mix(session)
    service = ListingService(session)

    assert await titles(service, "price_asc", 1, 5) == (["C", "E", "A", "D", "B"], 5)
    assert await titles(service, "price_desc", 1, 5) == (["A", "E", "C", "D", "B"], 5)


@pytest.mark.asyncio
async def test_equal_prices_fall_back_to_newest_first(session):
    await add_all(
        session,
        make_listing(1, 10, hours_ago=3),
        make_listing(2, 10, hours_ago=1),
        make_listing(3, 10, hours_ago=2),
    )
    service = ListingService(session)

    for sort_key in ("price_low", "price_high"):
        result = await service.search_listings(
            SearchRequest(sort_key=sort_key), now=NOW
        )
        assert [item.id for item in result.items] == [2, 3, 1]


@pytest.mark.asyncio
async def test_newest_and_oldest(session):
    await seed_price_mix(session)
    service = ListingService(session)

    assert await titles(service, "newest", 1, 10) == (["E", "D", "C", "B", "A"], 5)
    assert await titles(service, "oldest", 1, 10) == (["A", "B", "C", "D", "E"], 5)
    # unknown sort keys fall back to newest
    assert await titles(service, "cheapest", 1, 2) == (["E", "D"], 5)


@pytest.mark.asyncio
@pytest.mark.parametrize("sort_key", ["newest", "oldest", "price_low", "price_high"])
@pytest.mark.parametrize("page_size", [1, 2, 3, 4, 7])
async def test_pages_cover_the_filtered_set_exactly_once(session, sort_key, page_size):
    listings = []
    for listing_id in range(1, 12):
        # every third listing without a price, some identical timestamps
        price = None if listing_id % 3 == 0 else (listing_id * 7) % 5 * 10
        listings.append(make_listing(listing_id, price, hours_ago=listing_id // 2))
    await add_all(session, *listings)
    service = ListingService(session)

    first = await service.search_listings(
        SearchRequest(sort_key=sort_key, page_size=page_size), now=NOW
    )
    total_pages = math.ceil(first.total_count / page_size)

    seen = []
    for page in range(1, total_pages + 1):
        result = await service.search_listings(
            SearchRequest(sort_key=sort_key, page=page, page_size=page_size), now=NOW
        )
        assert result.total_count == 11
        seen.extend(item.id for item in result.items)

        if sort_key.startswith("price"):
            prices = [item.price for item in result.items]
            # once an unpriced listing shows up, no priced one follows
            if None in prices:
                assert all(price is None for price in prices[prices.index(None):])

    assert len(seen) == len(set(seen)) == 11
