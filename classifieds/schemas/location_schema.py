from sqlmodel import Field, SQLModel


class LocationBase(SQLModel):
    name: str = Field(max_length=255)
    # country, region, city or other
    type: str = Field(default="city", max_length=50)


class LocationGet(SQLModel):
    id: int
    name: str
