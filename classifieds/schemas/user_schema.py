from pydantic import ConfigDict, EmailStr
from sqlmodel import Field, SQLModel


class UserBase(SQLModel):
    model_config = ConfigDict(extra="forbid")
    name: str | None = Field(default=None, max_length=255)
    email: EmailStr = Field(unique=True, max_length=255)
    phone: str | None = Field(default=None, max_length=255)
    # admin, seller or buyer
    role: str | None = Field(default=None, max_length=50)
    profile_picture: str | None = Field(default=None, max_length=1024)

