from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import TIMESTAMP, Column
from sqlmodel import Field, Relationship

from classifieds.schemas.user_schema import UserBase

if TYPE_CHECKING:
    from .listing_model import Listing


class User(UserBase, table=True):
    __tablename__ = "users"

    id: int = Field(default=None, primary_key=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
    )

    # Relationships
    posted_listings: List["Listing"] = Relationship(back_populates="author")
