from enum import Enum


class SortKey(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"

    @property
    def is_price(self) -> bool:
        return self in (SortKey.PRICE_LOW, SortKey.PRICE_HIGH)


# the sort dropdown in the browser sends these spellings
SORT_KEY_ALIASES = {
    "price_asc": SortKey.PRICE_LOW,
    "price_desc": SortKey.PRICE_HIGH,
}
