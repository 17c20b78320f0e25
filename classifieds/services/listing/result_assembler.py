from typing import Iterable, Optional

from classifieds.core import config
from classifieds.schemas.listing_schema import (
    AuthorSummary,
    CategoryRef,
    ListingDetail,
    ListingViewModel,
    LocationRef,
)
from classifieds.services.listing.listing_store import AuthorRow, ListingRow

UNCATEGORIZED = "Uncategorized"
LOCATION_NOT_SPECIFIED = "Location not specified"
ANONYMOUS_AUTHOR = "Anonymous"
DEFAULT_ROLE = "Member"


def _or_default(value: Optional[str], default: str) -> str:
    # empty strings count as missing too
    return value if value else default


def transform_unsplash_url(url: str) -> str:
    # unsplash page links (unsplash.com/photos/<slug>-<id>) are not images,
    # point them at the CDN instead
    if "unsplash.com/photos/" in url:
        photo_id = url.rstrip("/").split("/")[-1].split("-")[-1]
        return f"https://images.unsplash.com/photo-{photo_id}?auto=format&fit=crop&w=800&q=80"
    return url


def image_urls(row: ListingRow) -> list[str]:
    return [transform_unsplash_url(url) for url in row.image_urls if url]


def cover_image_url(row: ListingRow) -> str:
    urls = image_urls(row)
    return urls[0] if urls else config.config.placeholder_image_url


def author_summary(author: Optional[AuthorRow]) -> AuthorSummary:
    author = author or AuthorRow()
    return AuthorSummary(
        name=_or_default(author.name, ANONYMOUS_AUTHOR),
        role=_or_default(author.role, DEFAULT_ROLE),
        profile_picture_url=_or_default(
            author.profile_picture, config.config.default_avatar_url
        ),
    )


def _card_fields(row: ListingRow) -> dict:
    return dict(
        id=row.id,
        title=row.title,
        description=row.description or "",
        price=row.price,
        currency=row.currency or "",
        created_at=row.created_at,
        category=CategoryRef(
            id=row.category_id,
            name=_or_default(row.category_name, UNCATEGORIZED),
        ),
        location=LocationRef(
            name=_or_default(row.location_name, LOCATION_NOT_SPECIFIED)
        ),
        cover_image_url=cover_image_url(row),
        author=author_summary(row.author),
    )


def assemble_one(row: ListingRow) -> ListingViewModel:
    return ListingViewModel(**_card_fields(row))


def assemble(rows: Iterable[ListingRow]) -> list[ListingViewModel]:
    """
    Turns store rows into listing cards.

    Missing relations never raise, they are replaced by fallback values so
    every field of the output is populated (price aside, which stays None
    for "contact for price" listings).
    """
    return [assemble_one(row) for row in rows]


def assemble_detail(row: ListingRow) -> ListingDetail:
    return ListingDetail(
        **_card_fields(row),
        status=row.status or "",
        views_count=row.views_count,
        image_urls=image_urls(row),
    )
