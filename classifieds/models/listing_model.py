from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import TIMESTAMP, Column, func
from sqlmodel import Field, Relationship

from classifieds.schemas.listing_schema import ListingBase

if TYPE_CHECKING:
    from .category_model import Category
    from .listing_image import ListingImage
    from .location_model import Location
    from .user_model import User


class Listing(ListingBase, table=True):
    __tablename__ = "listings"

    id: int = Field(default=None, primary_key=True)
    category_id: int | None = Field(
        default=None, foreign_key="categories.id", index=True
    )
    location_id: int | None = Field(default=None, foreign_key="locations.id")
    user_id: int | None = Field(default=None, foreign_key="users.id", index=True)
    views_count: int = Field(default=0, ge=0)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False, index=True),
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(
            TIMESTAMP(timezone=True),
            nullable=True,
            server_default=func.now(),
            onupdate=func.now(),
        ),
    )

    # Relationships
    category: Optional["Category"] = Relationship(back_populates="listings")
    location: Optional["Location"] = Relationship(back_populates="listings")
    author: Optional["User"] = Relationship(back_populates="posted_listings")
    images: List["ListingImage"] = Relationship(
        back_populates="listing",
        sa_relationship_kwargs={
            "order_by": "[ListingImage.ordinal, ListingImage.id]",
        },
    )
