import math
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    computed_field,
    field_validator,
    model_validator,
)
from sqlmodel import Field, SQLModel

from classifieds.core import config
from classifieds.models.enums.date_filter import DateFilter
from classifieds.models.enums.listing_status import ListingStatus
from classifieds.models.enums.sort_key import SortKey
from classifieds.schemas.category_schema import CategoryGet
from classifieds.services.listing.filter_parsing import (
    lenient,
    max_page_number,
    parse_date_filter,
    parse_id,
    parse_price,
    parse_sort_key,
)


# Basic schema for listing data
class ListingBase(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(default="", max_length=5000)
    # no price means "contact for price", which is not the same as 0
    price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    currency: str = Field(default="EUR", max_length=10)
    # free text in the store, see ListingStatus for the known values
    status: str = Field(default=ListingStatus.ACTIVE.value, max_length=50)


# Display data joined onto listing cards
class CategoryRef(SQLModel):
    id: int | None = None
    name: str


class LocationRef(SQLModel):
    name: str


class AuthorSummary(SQLModel):
    name: str
    role: str
    profile_picture_url: str


# Schema for displaying listing data in listing cards
class ListingViewModel(SQLModel):
    model_config = ConfigDict(extra="forbid")
    id: int
    title: str
    description: str
    price: Decimal | None = None
    currency: str
    created_at: datetime
    category: CategoryRef
    location: LocationRef
    cover_image_url: str
    author: AuthorSummary


# Schema for the listing detail page
class ListingDetail(ListingViewModel):
    status: str
    views_count: int = 0
    image_urls: list[str] = []


class FilterSet(BaseModel):
    """
    User supplied filters. Every field is optional, absence means no constraint.

    Raw query string values are parsed leniently: a value that can not be
    parsed is dropped (logged) unless `strict_filters` is enabled.
    """

    location_id: int | None = None
    date_filter: DateFilter | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    sort_key: SortKey | None = None

    @field_validator("location_id", mode="before")
    @classmethod
    def _parse_location_id(cls, value: Any) -> int | None:
        return lenient(parse_id, "location_id", value)

    @field_validator("date_filter", mode="before")
    @classmethod
    def _parse_date_filter(cls, value: Any) -> DateFilter | None:
        return lenient(parse_date_filter, "date_filter", value)

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def _parse_price(cls, value: Any, info) -> Decimal | None:
        return lenient(parse_price, info.field_name, value)

    @field_validator("sort_key", mode="before")
    @classmethod
    def _parse_sort_key(cls, value: Any) -> SortKey | None:
        return lenient(parse_sort_key, "sort_key", value)

    @property
    def effective_sort_key(self) -> SortKey:
        return self.sort_key or SortKey.NEWEST


class PageRequest(BaseModel):
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, gt=0)

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


class SearchRequest(FilterSet):
    """Everything one search call needs: category scope, filters and the page."""

    category_id: int | None = None
    page: int = 1
    page_size: int = 12

    @field_validator("category_id", mode="before")
    @classmethod
    def _parse_category_id(cls, value: Any) -> int | None:
        return lenient(parse_id, "category_id", value)

    @field_validator("page", mode="before")
    @classmethod
    def _parse_page(cls, value: Any) -> int:
        page = lenient(parse_id, "page", value)
        return page if page is not None and page >= 1 else 1

    @field_validator("page_size", mode="before")
    @classmethod
    def _parse_page_size(cls, value: Any) -> int:
        page_size = lenient(parse_id, "page_size", value)
        if page_size is None or page_size < 1:
            return config.config.category_page_size
        return min(page_size, config.config.max_page_size)

    @model_validator(mode="after")
    def _cap_page(self):
        self.page = min(self.page, max_page_number(self.page_size))
        return self

    @property
    def filters(self) -> FilterSet:
        return FilterSet.model_validate(
            self.model_dump(include=set(FilterSet.model_fields))
        )

    @property
    def page_request(self) -> PageRequest:
        return PageRequest(page_number=self.page, page_size=self.page_size)


class QueryResult(BaseModel):
    items: list[ListingViewModel] = []
    total_count: int = Field(default=0, ge=0)


class SearchResponse(QueryResult):
    page: int
    page_size: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)


# homepage section: main category with its newest listings
class CategoryWithListings(CategoryGet):
    listings: list[ListingViewModel] = []
