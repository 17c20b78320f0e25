from fastapi import APIRouter, Depends, Query

from classifieds.api.routes.fail_soft import search_page
from classifieds.core import config
from classifieds.schemas.listing_schema import SearchResponse
from classifieds.services.listing.filter_parsing import max_page_number
from classifieds.services.listing.listing_service import ListingService

router = APIRouter(prefix="/users", tags=["Users"])


# profile page: listings posted by one user
@router.get("/{user_id}/listings", response_model=SearchResponse)
async def get_user_listings(
    *,
    user_id: int,
    page: int = Query(
        default=1, ge=1, le=max_page_number(config.config.profile_page_size)
    ),
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return await search_page(
        listing_service.get_user_listings(user_id, page),
        page,
        config.config.profile_page_size,
    )
