from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from .listing_model import Listing


class ListingImageBase(SQLModel):
    image_url: str = Field(max_length=2048)
    # lowest ordinal is the cover image
    ordinal: int = Field(default=0)
    caption: str | None = Field(default=None, max_length=255)


class ListingImage(ListingImageBase, table=True):
    __tablename__ = "listing_images"

    id: int = Field(default=None, primary_key=True)
    listing_id: int = Field(foreign_key="listings.id", index=True)

    listing: "Listing" = Relationship(back_populates="images")
