import asyncio
import logging
import os
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from page_loader.models.request import LoadRequest
from page_loader.models.response import LoadResponse
from page_loader.services.fetcher import build_client, validate_public_url
from page_loader.services.loader import load

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


def output_base_dir() -> str:
    """Directory every saved page must live under (``PAGE_LOADER_OUTPUT_DIR`` or the cwd)."""
    return os.path.realpath(os.environ.get("PAGE_LOADER_OUTPUT_DIR") or os.getcwd())


def resolve_output_dir(requested: Optional[str]) -> str:
    """Map the requested directory onto the output base directory.

    Raises:
        ValueError: if the resolved directory lies outside the base directory.
    """
    base = output_base_dir()
    target = os.path.realpath(os.path.join(base, requested or ""))
    if os.path.commonpath([base, target]) != base:
        raise ValueError(f"output_dir must be inside {base}.")
    return target


@router.post("/load", response_model=LoadResponse, summary="Save a page and its resources")
@limiter.limit("10/minute")
async def load_page(request: Request, body: LoadRequest) -> LoadResponse:
    """Download *url* and its same-host images, scripts, stylesheets and
    canonical links into *output_dir*, a directory below the server's output
    base directory.

    Redirects are followed only to public addresses.  Fetch and storage
    failures are turned into error responses by the application's
    ``PageLoaderError`` handler.
    """
    url = str(body.url)

    try:
        output_dir = resolve_output_dir(body.output_dir)
        await asyncio.to_thread(validate_public_url, url)
    except ValueError as exc:
        logger.warning("Rejected load request for %s – %s", url, exc)
        raise HTTPException(status_code=400, detail=str(exc))

    logger.info("Load request received", extra={"url": url, "output_dir": output_dir})

    async with build_client(public_only=True) as client:
        try:
            filepath = await load(url, output_dir, client=client)
        except ValueError as exc:
            logger.warning("Blocked redirect while loading %s – %s", url, exc)
            raise HTTPException(status_code=400, detail=str(exc))

    return LoadResponse(url=url, filepath=filepath)
