from enum import Enum


# status is free text in the store, these are the values the site writes
class ListingStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    EXPIRED = "expired"
    DELETED = "deleted"
