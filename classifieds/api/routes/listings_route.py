from typing import Annotated

from fastapi import APIRouter, Depends, Query

from classifieds.api.dependencies import get_search_params
from classifieds.api.routes.fail_soft import search_page
from classifieds.core import config
from classifieds.schemas.listing_schema import (
    ListingDetail,
    SearchRequest,
    SearchResponse,
)
from classifieds.services.listing.filter_parsing import max_page_number
from classifieds.services.listing.listing_service import (
    ListingService,
    with_request_timeout,
)

router = APIRouter(prefix="/listings", tags=["Listings"])


@router.get(
    "/",
    response_model=SearchResponse,
    summary="Search listings",
    description="Sitewide listing search filtered by location, date and price, sorted by date or price.",
)
async def search_listings(
    *,
    params: Annotated[SearchRequest, Depends(get_search_params)],
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return await search_page(
        listing_service.search_listings(params), params.page, params.page_size
    )


@router.get(
    "/latest",
    response_model=SearchResponse,
    summary="Latest listings",
    description="Newest listings across all categories.",
)
async def get_latest_listings(
    *,
    page: int = Query(
        default=1, ge=1, le=max_page_number(config.config.latest_page_size)
    ),
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return await search_page(
        listing_service.get_latest_listings(page),
        page,
        config.config.latest_page_size,
    )


@router.get(
    "/{listing_id}",
    response_model=ListingDetail,
    summary="Get a listing by ID",
)
async def get_listing(
    *,
    listing_id: int,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return await with_request_timeout(listing_service.get_listing(listing_id))
