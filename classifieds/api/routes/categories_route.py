from typing import Annotated

from fastapi import APIRouter, Depends

from classifieds.api.dependencies import get_search_params
from classifieds.api.routes.fail_soft import search_page
from classifieds.schemas.category_schema import CategoryDetail, CategoryGet
from classifieds.schemas.listing_schema import (
    CategoryWithListings,
    SearchRequest,
    SearchResponse,
)
from classifieds.services.listing.listing_service import (
    ListingService,
    with_request_timeout,
)

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("/", response_model=list[CategoryGet])
async def get_categories(
    *,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return await with_request_timeout(listing_service.get_categories())


@router.get("/main", response_model=list[CategoryGet])
async def get_main_categories(
    *,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return await with_request_timeout(listing_service.get_categories(main_only=True))


@router.get(
    "/featured",
    response_model=list[CategoryWithListings],
    summary="Homepage category sections",
    description="Main categories ordered by name, each with its newest listings including sub categories.",
)
async def get_featured_categories(
    *,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return await with_request_timeout(listing_service.get_featured_categories())


@router.get("/{category_id}", response_model=CategoryDetail)
async def get_category(
    *,
    category_id: int,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return await with_request_timeout(listing_service.get_category_detail(category_id))


@router.get(
    "/{category_id}/listings",
    response_model=SearchResponse,
    summary="Listings of a category",
    description="Listings of the category and its direct sub categories. 404 if the category does not exist.",
)
async def get_category_listings(
    *,
    category_id: int,
    params: Annotated[SearchRequest, Depends(get_search_params)],
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    params = params.model_copy(update={"category_id": category_id})
    return await search_page(
        listing_service.search_listings(params), params.page, params.page_size
    )
