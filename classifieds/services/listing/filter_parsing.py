"""
Lenient parsing of raw filter values coming from query strings.

Every parser raises InvalidFilter for values it can not make sense of.
`lenient` turns that into "filter absent" unless strict filtering is on.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from classifieds.core import config
from classifieds.models.enums.date_filter import DateFilter
from classifieds.models.enums.sort_key import SORT_KEY_ALIASES, SortKey
from classifieds.services.listing.exceptions import InvalidFilter

logger = logging.getLogger(__name__)

# ids, offsets and limits are bound as signed 64-bit integers
BIGINT_MAX = 2**63 - 1


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_price(field: str, value: Any) -> Decimal | None:
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        raise InvalidFilter(field, value)
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise InvalidFilter(field, value) from exc
    if not price.is_finite() or price < 0:
        raise InvalidFilter(field, value)
    return price


def parse_id(field: str, value: Any) -> int | None:
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        raise InvalidFilter(field, value)
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError as exc:
            raise InvalidFilter(field, value) from exc
    if not -BIGINT_MAX - 1 <= number <= BIGINT_MAX:
        raise InvalidFilter(field, value)
    return number


def max_page_number(page_size: int) -> int:
    """Last page whose offset, (page - 1) * page_size, still fits the store."""
    return BIGINT_MAX // page_size + 1


def parse_date_filter(field: str, value: Any) -> DateFilter | None:
    if _is_blank(value):
        return None
    if isinstance(value, DateFilter):
        return value
    normalized = str(value).strip().lower()
    # "any" is what the filter sidebar uses for no date constraint
    if normalized == "any":
        return DateFilter.NONE
    try:
        return DateFilter(normalized)
    except ValueError as exc:
        raise InvalidFilter(field, value) from exc


def parse_sort_key(field: str, value: Any) -> SortKey | None:
    if _is_blank(value):
        return None
    if isinstance(value, SortKey):
        return value
    normalized = str(value).strip().lower()
    if normalized in SORT_KEY_ALIASES:
        return SORT_KEY_ALIASES[normalized]
    try:
        return SortKey(normalized)
    except ValueError as exc:
        raise InvalidFilter(field, value) from exc


def lenient(parser: Callable[[str, Any], Any], field: str, value: Any) -> Any:
    """Run a parser, dropping the filter on bad input unless strict_filters is set."""
    try:
        return parser(field, value)
    except InvalidFilter as exc:
        if config.config.strict_filters:
            raise
        logger.warning("Ignoring filter: %s", exc)
        return None
