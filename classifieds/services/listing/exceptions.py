# exceptions.py


class ListingEngineError(Exception):
    """Base class for errors raised by the listing query engine."""

    pass


class CategoryNotFound(ListingEngineError):
    """Raised when a category-scoped search names a category that does not exist."""

    def __init__(self, category_id: int) -> None:
        super().__init__(f"Category with ID {category_id} not found.")
        self.category_id = category_id


class ListingNotFound(ListingEngineError):
    """Raised when a single listing is requested by an unknown ID."""

    def __init__(self, listing_id: int) -> None:
        super().__init__(f"Listing with ID {listing_id} not found.")
        self.listing_id = listing_id


class UserNotFound(ListingEngineError):
    """Raised when the profile listings of an unknown user are requested."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User with ID {user_id} not found.")
        self.user_id = user_id


class StoreUnavailable(ListingEngineError):
    """Raised when a call to the backing store fails. Never retried."""

    pass


class InvalidFilter(ListingEngineError):
    """Raised when a filter value can not be parsed."""

    def __init__(self, field: str, value) -> None:
        super().__init__(f"Invalid value for filter '{field}': {value!r}")
        self.field = field
        self.value = value
