"""
Sorting and pagination of listing searches.

`plan` turns a sort key, a category scope, the filters and a page request
into one of two execution plans:

SimplePlan -- newest/oldest. One count and one page fetch ordered by
              created_at.
PricePlan  -- price_low/price_high. Listings without a price must come after
              every priced listing in both directions, which a single ORDER BY
              on a nullable column does not give us on every backend. So the
              plan counts priced and unpriced listings, fetches the priced
              slice of the page and only then, if the page is not full yet,
              tops it up with unpriced listings (newest first).
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Union

from sqlalchemy.sql.elements import ColumnElement

from classifieds.models.enums.sort_key import SortKey
from classifieds.models.listing_model import Listing
from classifieds.schemas.listing_schema import FilterSet, PageRequest
from classifieds.services.listing.filter_compiler import Predicate, compile_filters
from classifieds.services.listing.listing_store import ListingRow, ListingStore

logger = logging.getLogger(__name__)

NEWEST_ORDER = (Listing.created_at.desc(), Listing.id.desc())
OLDEST_ORDER = (Listing.created_at.asc(), Listing.id.asc())


@dataclass(frozen=True)
class PlanResult:
    rows: list[ListingRow]
    total_count: int


@dataclass(frozen=True, eq=False)
class SimplePlan:
    predicate: Predicate
    order_by: tuple
    offset: int
    limit: int
    # homepage sections only need the first rows, not the total
    with_count: bool = True

    async def execute(self, store: ListingStore) -> PlanResult:
        total_count = (
            await store.count_listings(self.predicate) if self.with_count else 0
        )
        rows = await store.fetch_listings(
            self.predicate, self.order_by, self.offset, self.limit
        )
        if not self.with_count:
            total_count = len(rows)
        return PlanResult(rows=rows, total_count=total_count)


@dataclass(frozen=True, eq=False)
class PricePlan:
    predicate: Predicate
    descending: bool
    offset: int
    limit: int

    @property
    def priced_predicate(self) -> Predicate:
        return self.predicate + (Listing.price.is_not(None),)

    @property
    def unpriced_predicate(self) -> Predicate:
        return self.predicate + (Listing.price.is_(None),)

    @property
    def priced_order(self) -> tuple:
        price_order = Listing.price.desc() if self.descending else Listing.price.asc()
        return (price_order,) + NEWEST_ORDER

    async def execute(self, store: ListingStore) -> PlanResult:
        priced_count = await store.count_listings(self.priced_predicate)
        unpriced_count = await store.count_listings(self.unpriced_predicate)

        priced_rows: list[ListingRow] = []
        if self.offset < priced_count:
            priced_rows = await store.fetch_listings(
                self.priced_predicate, self.priced_order, self.offset, self.limit
            )

        unpriced_rows: list[ListingRow] = []
        if len(priced_rows) < self.limit:
            # unpriced rows already shown on earlier pages
            unpriced_offset = max(0, self.offset - priced_count)
            unpriced_rows = await store.fetch_listings(
                self.unpriced_predicate,
                NEWEST_ORDER,
                unpriced_offset,
                self.limit - len(priced_rows),
            )

        logger.debug(
            "Price plan offset=%s: %s priced + %s unpriced rows (totals %s/%s)",
            self.offset,
            len(priced_rows),
            len(unpriced_rows),
            priced_count,
            unpriced_count,
        )
        return PlanResult(
            rows=priced_rows + unpriced_rows,
            total_count=priced_count + unpriced_count,
        )


ExecutionPlan = Union[SimplePlan, PricePlan]


def scope_predicate(
    category_ids: Optional[Iterable[int]] = None,
    user_id: Optional[int] = None,
) -> Predicate:
    clauses: list[ColumnElement[bool]] = []
    if category_ids is not None:
        clauses.append(Listing.category_id.in_(sorted(set(category_ids))))
    if user_id is not None:
        clauses.append(Listing.user_id == user_id)
    return tuple(clauses)


def plan(
    sort_key: Optional[SortKey],
    category_ids: Optional[Iterable[int]],
    filters: FilterSet,
    page: PageRequest,
    *,
    user_id: Optional[int] = None,
    now: Optional[datetime] = None,
    with_count: bool = True,
) -> ExecutionPlan:
    """
    Builds the execution plan for one search.

    `category_ids` of None means a sitewide search. `user_id` narrows the
    search to one author's listings (profile page).
    """
    predicate = scope_predicate(category_ids, user_id) + compile_filters(filters, now)
    sort_key = sort_key or SortKey.NEWEST

    if sort_key.is_price:
        return PricePlan(
            predicate=predicate,
            descending=sort_key == SortKey.PRICE_HIGH,
            offset=page.offset,
            limit=page.page_size,
        )

    return SimplePlan(
        predicate=predicate,
        order_by=OLDEST_ORDER if sort_key == SortKey.OLDEST else NEWEST_ORDER,
        offset=page.offset,
        limit=page.page_size,
        with_count=with_count,
    )
