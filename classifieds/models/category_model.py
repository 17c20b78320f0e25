from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from classifieds.schemas.category_schema import CategoryBase

if TYPE_CHECKING:
    from .listing_model import Listing


class Category(CategoryBase, table=True):
    __tablename__ = "categories"

    id: int = Field(default=None, primary_key=True)
    # null means top-level category
    parent_id: int | None = Field(default=None, foreign_key="categories.id", index=True)

    listings: list["Listing"] = Relationship(back_populates="category")
