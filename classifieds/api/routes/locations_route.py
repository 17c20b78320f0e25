from fastapi import APIRouter, Depends

from classifieds.schemas.location_schema import LocationGet
from classifieds.services.listing.listing_service import (
    ListingService,
    with_request_timeout,
)

router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get("/", response_model=list[LocationGet])
async def get_locations(
    *,
    listing_service: ListingService = Depends(ListingService.get_dependency),
):
    return await with_request_timeout(listing_service.get_locations())
