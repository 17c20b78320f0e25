from pydantic import ConfigDict
from sqlmodel import Field, SQLModel


class CategoryBase(SQLModel):
    name: str = Field(max_length=255)
    description: str | None = Field(default=None, max_length=1000)


class CategoryGet(CategoryBase):
    id: int
    parent_id: int | None = None


class SubcategoryRef(SQLModel):
    model_config = ConfigDict(extra="forbid")
    id: int
    name: str
    description: str | None = None


# category page header: breadcrumb parent + sub-category links
class CategoryDetail(CategoryGet):
    parent_name: str | None = None
    subcategories: list[SubcategoryRef] = []
