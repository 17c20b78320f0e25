import asyncio
import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from classifieds.api.dependencies import get_async_session
from classifieds.core import config
from classifieds.models.enums.sort_key import SortKey
from classifieds.schemas.category_schema import (
    CategoryDetail,
    CategoryGet,
    SubcategoryRef,
)
from classifieds.schemas.listing_schema import (
    CategoryWithListings,
    FilterSet,
    ListingDetail,
    PageRequest,
    QueryResult,
    SearchRequest,
)
from classifieds.schemas.location_schema import LocationGet
from classifieds.services.listing import result_assembler, sort_planner
from classifieds.services.listing.category_expander import CategoryExpander
from classifieds.services.listing.exceptions import (
    CategoryNotFound,
    ListingNotFound,
    StoreUnavailable,
    UserNotFound,
)
from classifieds.services.listing.listing_store import ListingStore

logger = logging.getLogger(__name__)


class ListingService:
    """
    The one place listing searches are built and run.

    Every page that shows listings (category page, sitewide search, homepage
    sections, profile) goes through `search_listings` or `_run`, the call
    sites only differ in the parameters they pass.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.store = ListingStore(session)
        self.expander = CategoryExpander(self.store)

    async def _run(
        self,
        sort_key: Optional[SortKey],
        category_ids: Optional[set[int]],
        filters: FilterSet,
        page: PageRequest,
        *,
        user_id: Optional[int] = None,
        now: Optional[datetime] = None,
        with_count: bool = True,
    ) -> QueryResult:
        execution_plan = sort_planner.plan(
            sort_key,
            category_ids,
            filters,
            page,
            user_id=user_id,
            now=now,
            with_count=with_count,
        )
        result = await execution_plan.execute(self.store)
        return QueryResult(
            items=result_assembler.assemble(result.rows),
            total_count=result.total_count,
        )

    async def search_listings(
        self, request: SearchRequest, now: Optional[datetime] = None
    ) -> QueryResult:
        """
        Returns one page of listings matching the request plus the total count.

        :param request: Category scope, filters, sort key and page.
        :param now: Reference time for the date filter, defaults to the current time.
        :raises CategoryNotFound: If a category is given that does not exist.
        :raises StoreUnavailable: If a store call fails.
        """
        category_ids = None
        if request.category_id is not None:
            category = await self.store.get_category(request.category_id)
            if category is None:
                raise CategoryNotFound(request.category_id)
            category_ids = await self.expander.expand(request.category_id)

        filters = request.filters
        logger.info(
            "Searching listings category=%s page=%s size=%s sort=%s",
            request.category_id,
            request.page,
            request.page_size,
            filters.effective_sort_key.value,
        )
        return await self._run(
            filters.sort_key,
            category_ids,
            filters,
            request.page_request,
            now=now,
        )

    async def get_latest_listings(self, page: int = 1) -> QueryResult:
        """Sitewide feed, newest first."""
        return await self._run(
            SortKey.NEWEST,
            None,
            FilterSet(),
            PageRequest(
                page_number=max(page, 1), page_size=config.config.latest_page_size
            ),
        )

    async def get_featured_categories(self) -> list[CategoryWithListings]:
        """
        Homepage sections: the first main categories by name, each with its
        newest listings from the category and its sub categories.

        A section whose listings can not be loaded is shown empty.
        """
        categories = await self.store.get_main_categories(
            limit=config.config.featured_categories
        )
        sections: list[CategoryWithListings] = []
        for category in categories:
            try:
                category_ids = await self.expander.expand(category.id)
                result = await self._run(
                    SortKey.NEWEST,
                    category_ids,
                    FilterSet(),
                    PageRequest(
                        page_number=1,
                        page_size=config.config.featured_listings_per_category,
                    ),
                    with_count=False,
                )
                listings = result.items
            except StoreUnavailable:
                logger.exception(
                    "Error fetching listings for category %s", category.id
                )
                listings = []

            sections.append(
                CategoryWithListings(
                    id=category.id,
                    name=category.name,
                    description=category.description,
                    parent_id=category.parent_id,
                    listings=listings,
                )
            )
        return sections

    async def get_user_listings(self, user_id: int, page: int = 1) -> QueryResult:
        """
        Returns the listings posted by a user, newest first.

        :raises UserNotFound: If there is no user with the given ID.
        """
        user = await self.store.get_user(user_id)
        if user is None:
            raise UserNotFound(user_id)

        return await self._run(
            SortKey.NEWEST,
            None,
            FilterSet(),
            PageRequest(
                page_number=max(page, 1), page_size=config.config.profile_page_size
            ),
            user_id=user_id,
        )

    async def get_listing(self, listing_id: int) -> ListingDetail:
        row = await self.store.get_listing(listing_id)
        if row is None:
            raise ListingNotFound(listing_id)
        return result_assembler.assemble_detail(row)

    async def get_category_detail(self, category_id: int) -> CategoryDetail:
        category = await self.store.get_category(category_id)
        if category is None:
            raise CategoryNotFound(category_id)

        parent = (
            await self.store.get_category(category.parent_id)
            if category.parent_id is not None
            else None
        )
        children = await self.store.get_child_categories(category_id)
        return CategoryDetail(
            id=category.id,
            name=category.name,
            description=category.description,
            parent_id=category.parent_id,
            parent_name=parent.name if parent else None,
            subcategories=[
                SubcategoryRef(
                    id=child.id, name=child.name, description=child.description
                )
                for child in children
            ],
        )

    async def get_categories(self, main_only: bool = False) -> list[CategoryGet]:
        categories = (
            await self.store.get_main_categories()
            if main_only
            else await self.store.get_categories()
        )
        return [CategoryGet.model_validate(category) for category in categories]

    async def get_locations(self) -> list[LocationGet]:
        locations = await self.store.get_locations()
        return [LocationGet.model_validate(location) for location in locations]

    @classmethod
    async def get_dependency(
        cls,
        session: AsyncSession = Depends(get_async_session),
    ) -> "ListingService":
        return cls(session)


async def with_request_timeout(awaitable, timeout: Optional[float] = None):
    """Bounds one request's store work; running out of time counts as the store being unavailable."""
    try:
        async with asyncio.timeout(timeout or config.config.request_timeout_seconds):
            return await awaitable
    except TimeoutError as exc:
        raise StoreUnavailable("The listing store did not answer in time.") from exc
