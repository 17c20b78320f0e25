from typing import AsyncGenerator

from fastapi import Query
from sqlalchemy.ext.asyncio.session import AsyncSession

from classifieds.core import config
from classifieds.schemas.listing_schema import SearchRequest

from ..db.database import async_session


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session


# query string names used by the listing pages (?location=&date=&minPrice=...)
# kept as plain strings, SearchRequest parses them leniently
async def get_search_params(
    page: str | None = Query(default=None),
    page_size: str | None = Query(default=None),
    location: str | None = Query(default=None),
    date: str | None = Query(default=None),
    min_price: str | None = Query(default=None, alias="minPrice"),
    max_price: str | None = Query(default=None, alias="maxPrice"),
    sort: str | None = Query(default=None),
) -> SearchRequest:
    return SearchRequest(
        page=page,
        page_size=page_size or config.config.category_page_size,
        location_id=location,
        date_filter=date,
        min_price=min_price,
        max_price=max_price,
        sort_key=sort,
    )
