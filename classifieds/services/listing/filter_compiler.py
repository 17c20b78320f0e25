import calendar
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from sqlalchemy.sql.elements import ColumnElement

from classifieds.core import config
from classifieds.models.enums.date_filter import DateFilter
from classifieds.models.listing_model import Listing
from classifieds.schemas.listing_schema import FilterSet

# conjunction of boolean clauses, applied with .where(*predicate)
Predicate = tuple[ColumnElement[bool], ...]


def subtract_month(moment: datetime) -> datetime:
    """One calendar month back, clamping the day to the shorter month (Mar 31 -> Feb 28)."""
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (
        moment.year - 1,
        12,
    )
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def date_lower_bound(
    date_filter: DateFilter | None,
    now: datetime,
    tz_name: str | None = None,
) -> datetime | None:
    """
    Returns the earliest created_at a listing may have under `date_filter`,
    in UTC, or None when there is no lower bound.

    today -- midnight of the current day in the configured timezone
    week  -- rolling window, now minus 7 days
    month -- now minus one calendar month
    """
    if date_filter is None or date_filter == DateFilter.NONE:
        return None

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if date_filter == DateFilter.TODAY:
        local_now = now.astimezone(ZoneInfo(tz_name or config.config.timezone))
        bound = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    elif date_filter == DateFilter.WEEK:
        bound = now - timedelta(days=7)
    elif date_filter == DateFilter.MONTH:
        bound = subtract_month(now)
    else:
        return None

    return bound.astimezone(timezone.utc)


def compile_filters(filters: FilterSet, now: datetime | None = None) -> Predicate:
    """Translates a filter set into clauses on the listings table. Never raises."""
    now = now or datetime.now(timezone.utc)
    clauses: list[ColumnElement[bool]] = []

    if filters.location_id is not None:
        clauses.append(Listing.location_id == filters.location_id)

    lower_bound = date_lower_bound(filters.date_filter, now)
    if lower_bound is not None:
        clauses.append(Listing.created_at >= lower_bound)

    # a NULL price fails both comparisons, so unpriced listings drop out
    # as soon as either bound is set
    if filters.min_price is not None:
        clauses.append(Listing.price >= filters.min_price)
    if filters.max_price is not None:
        clauses.append(Listing.price <= filters.max_price)

    return tuple(clauses)
