import logging

from classifieds.schemas.listing_schema import SearchResponse
from classifieds.services.listing.exceptions import StoreUnavailable
from classifieds.services.listing.listing_service import with_request_timeout

logger = logging.getLogger(__name__)


async def search_page(awaitable, page: int, page_size: int) -> SearchResponse:
    """
    Runs a listing search for a page that should still render when the store
    is down: the error is logged and an empty result is returned instead.
    """
    try:
        result = await with_request_timeout(awaitable)
    except StoreUnavailable:
        logger.exception("Error fetching listings")
        return SearchResponse(items=[], total_count=0, page=page, page_size=page_size)

    return SearchResponse(
        items=result.items,
        total_count=result.total_count,
        page=page,
        page_size=page_size,
    )
