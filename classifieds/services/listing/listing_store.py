"""
Read-only access to the listing tables.

Every call goes through `_execute`, which turns driver and SQLAlchemy errors
into StoreUnavailable. Listings leave this module as `ListingRow` records with
their joined relations already flattened, so nothing above it has to care how
the relationships were loaded.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Literal, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import select

from classifieds.models.category_model import Category
from classifieds.models.listing_model import Listing
from classifieds.models.location_model import Location
from classifieds.models.user_model import User
from classifieds.services.listing.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)

AllowedListingDependencies = Literal["category", "location", "author", "images"]
LISTING_CARD_DEPENDENCIES: list[AllowedListingDependencies] = [
    "category",
    "location",
    "author",
    "images",
]


@dataclass(frozen=True)
class AuthorRow:
    name: Optional[str] = None
    role: Optional[str] = None
    profile_picture: Optional[str] = None


@dataclass(frozen=True)
class ListingRow:
    id: int
    title: str
    description: Optional[str]
    price: Optional[Decimal]
    currency: Optional[str]
    created_at: datetime
    status: Optional[str] = None
    views_count: int = 0
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    location_name: Optional[str] = None
    # ordered, the first one is the cover image
    image_urls: tuple[str, ...] = ()
    author: Optional[AuthorRow] = None

    @classmethod
    def from_listing(cls, listing: Listing) -> "ListingRow":
        category = listing.category
        location = listing.location
        author = listing.author
        return cls(
            id=listing.id,
            title=listing.title,
            description=listing.description,
            price=listing.price,
            currency=listing.currency,
            created_at=listing.created_at,
            status=listing.status,
            views_count=listing.views_count or 0,
            category_id=category.id if category else listing.category_id,
            category_name=category.name if category else None,
            location_name=location.name if location else None,
            image_urls=tuple(image.image_url for image in listing.images or []),
            author=(
                AuthorRow(
                    name=author.name,
                    role=author.role,
                    profile_picture=author.profile_picture,
                )
                if author
                else None
            ),
        )


class ListingStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _execute(self, query):
        try:
            return await self.session.execute(query)
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Store call failed: %s", exc)
            raise StoreUnavailable("The listing store is unavailable.") from exc

    # categories

    async def get_category(self, category_id: int) -> Category | None:
        result = await self._execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalars().one_or_none()

    async def get_child_categories(self, parent_id: int) -> list[Category]:
        result = await self._execute(
            select(Category)
            .where(Category.parent_id == parent_id)
            .order_by(Category.name)
        )
        return list(result.scalars().all())

    async def get_child_category_ids(self, parent_ids: Iterable[int]) -> list[int]:
        parent_ids = list(parent_ids)
        if not parent_ids:
            return []
        result = await self._execute(
            select(Category.id).where(Category.parent_id.in_(parent_ids))
        )
        return list(result.scalars().all())

    async def get_categories(self) -> list[Category]:
        result = await self._execute(select(Category).order_by(Category.id))
        return list(result.scalars().all())

    async def get_main_categories(self, limit: int | None = None) -> list[Category]:
        query = select(Category).where(Category.parent_id.is_(None)).order_by(
            Category.name
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self._execute(query)
        return list(result.scalars().all())

    # locations and users

    async def get_locations(self) -> list[Location]:
        result = await self._execute(select(Location).order_by(Location.name))
        return list(result.scalars().all())

    async def get_user(self, user_id: int) -> User | None:
        result = await self._execute(select(User).where(User.id == user_id))
        return result.scalars().one_or_none()

    # listings

    async def count_listings(self, predicates: Sequence[ColumnElement[bool]]) -> int:
        result = await self._execute(
            select(func.count()).select_from(Listing).where(*predicates)
        )
        return result.scalar_one()

    async def fetch_listings(
        self,
        predicates: Sequence[ColumnElement[bool]],
        order_by: Sequence,
        offset: int,
        limit: int,
    ) -> list[ListingRow]:
        if limit <= 0:
            return []

        query = (
            select(Listing)
            .where(*predicates)
            .order_by(*order_by)
            .offset(offset)
            .limit(limit)
            .options(
                *[selectinload(getattr(Listing, dep)) for dep in LISTING_CARD_DEPENDENCIES]
            )
        )
        result = await self._execute(query)
        return [ListingRow.from_listing(listing) for listing in result.scalars().all()]

    async def get_listing(self, listing_id: int) -> ListingRow | None:
        result = await self._execute(
            select(Listing)
            .where(Listing.id == listing_id)
            .options(
                *[selectinload(getattr(Listing, dep)) for dep in LISTING_CARD_DEPENDENCIES]
            )
        )
        listing = result.scalars().one_or_none()
        return ListingRow.from_listing(listing) if listing else None
