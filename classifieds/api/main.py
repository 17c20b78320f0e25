import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from classifieds.api.routes import (
    category_router,
    listings_router,
    locations_router,
    users_router,
)
from classifieds.core import config
from classifieds.core.logging import setup_logging
from classifieds.services.listing.exceptions import (
    CategoryNotFound,
    InvalidFilter,
    ListingNotFound,
    StoreUnavailable,
    UserNotFound,
)

logger = logging.getLogger(__name__)


async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Starting %s (%s)", config.config.app_name, config.config.render_env)
    yield


app = FastAPI(title=config.config.app_name, lifespan=lifespan)

app.include_router(listings_router, prefix=config.config.api_prefix)
app.include_router(category_router, prefix=config.config.api_prefix)
app.include_router(locations_router, prefix=config.config.api_prefix)
app.include_router(users_router, prefix=config.config.api_prefix)


@app.exception_handler(CategoryNotFound)
@app.exception_handler(ListingNotFound)
@app.exception_handler(UserNotFound)
async def not_found_handler(request: Request, exc: Exception):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


@app.exception_handler(InvalidFilter)
async def invalid_filter_handler(request: Request, exc: InvalidFilter):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={"detail": str(exc), "field": exc.field},
    )


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.error("Store unavailable while serving %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)},
    )
