from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from classifieds.schemas.location_schema import LocationBase

if TYPE_CHECKING:
    from .listing_model import Listing


class Location(LocationBase, table=True):
    __tablename__ = "locations"

    id: int = Field(default=None, primary_key=True)
    parent_id: int | None = Field(default=None, foreign_key="locations.id")

    listings: list["Listing"] = Relationship(back_populates="location")
