import os
from enum import StrEnum

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"
    STAGING = "staging"


ENVIRONMENT = os.getenv("RENDER_ENV", Environment.DEVELOPMENT)


class Settings(BaseSettings):
    app_name: str = "Classifieds - Listing Engine"
    api_prefix: str = ""

    # either a full url (tests, sqlite) or the postgres parts below
    database_url: str | None = None
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "classifieds"
    db_host: str = "localhost"
    db_port: int = 5432
    echo_sql: bool = False

    testing: str | None = None
    render_env: str = ENVIRONMENT
    log_level: str = "INFO"

    # page sizes per call site
    category_page_size: int = 12
    latest_page_size: int = 24
    profile_page_size: int = 8
    featured_categories: int = 5
    featured_listings_per_category: int = 10
    max_page_size: int = 100

    # "today" is midnight in this timezone
    timezone: str = "UTC"
    strict_filters: bool = False
    request_timeout_seconds: float = 10.0

    placeholder_image_url: str = (
        "https://images.unsplash.com/photo-1555041469-a586c61ea9bc"
        "?auto=format&fit=crop&w=800&q=80"
    )
    default_avatar_url: str = (
        "https://www.gravatar.com/avatar/00000000000000000000000000000000?d=mp&f=y"
    )

    model_config = SettingsConfigDict(
        env_file=".env" if ENVIRONMENT != Environment.PRODUCTION else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def sqlalchemy_url(self) -> URL | str:
        if self.database_url:
            return self.database_url
        return URL.create(
            drivername="postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


config = Settings()
