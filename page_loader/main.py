import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from page_loader import __version__
from page_loader.logging_config import configure_logging
from page_loader.routers.load import limiter, router as load_router
from page_loader.services.errors import (
    ConnectivityError,
    PageLoaderError,
    TransferStatusError,
)

configure_logging(logging.INFO)

logger = logging.getLogger(__name__)

_TIMEOUT_CODES = {"ConnectTimeout", "ReadTimeout", "WriteTimeout", "PoolTimeout"}

app = FastAPI(
    title="page-loader",
    description="Downloads a web page together with its same-host resources for offline viewing.",
    version=__version__,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.include_router(load_router)


def error_status(exc: PageLoaderError) -> int:
    """HTTP status reported to API clients for a pipeline failure."""
    if isinstance(exc, TransferStatusError):
        return 502
    if isinstance(exc, ConnectivityError):
        return 504 if exc.code in _TIMEOUT_CODES else 502
    return 500


@app.exception_handler(PageLoaderError)
async def page_loader_error_handler(request: Request, exc: PageLoaderError) -> JSONResponse:
    status = error_status(exc)
    logger.error("Loading failed on %s (%s): %s", exc.resource, type(exc).__name__, exc)
    return JSONResponse(
        status_code=status,
        content={"detail": str(exc), "kind": type(exc).__name__, "resource": exc.resource},
    )


@app.get("/", summary="Health check")
async def health() -> dict:
    return {"status": "ok", "version": __version__}
