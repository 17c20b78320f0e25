import logging
import ssl

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.ext.asyncio.session import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from classifieds.core import config

logger = logging.getLogger(__name__)

# upgrade connection to use SSL
connect_args = {}
if config.config.render_env == config.Environment.PRODUCTION:
    connect_args["ssl"] = ssl.create_default_context()

engine = create_async_engine(
    config.config.sqlalchemy_url,
    echo=config.config.echo_sql,
    connect_args=connect_args,
)

# factory for creating asynchronous sessions (AsyncSession)
async_session = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    # objects remain available after committing a transaction
    expire_on_commit=False,
)


async def init_db():
    # table classes have to be imported so they register on the metadata
    from classifieds.models import (  # noqa: F401
        category_model,
        listing_image,
        listing_model,
        location_model,
        user_model,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ensured (%d tables)", len(SQLModel.metadata.tables))
