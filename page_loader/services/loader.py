"""Pipeline driver: fetch one page, save its local resources, rewrite and save it."""

import asyncio
import logging
import os
from typing import Optional

import httpx

from page_loader.models.request import PageRequest
from page_loader.services.downloader import download_resources
from page_loader.services.errors import PageLoaderError
from page_loader.services.extractor import collect_resources, parse_html
from page_loader.services.fetcher import build_client, fetch_page, write_file
from page_loader.services.naming import naming_for
from page_loader.services.runner import JobObserver, RichProgressObserver

logger = logging.getLogger(__name__)


async def load(
    url: str,
    output_dir: Optional[str] = None,
    *,
    progress: bool = False,
    client: Optional[httpx.AsyncClient] = None,
    max_concurrency: Optional[int] = None,
) -> str:
    """Save the page at *url* and its same-host resources into *output_dir*.

    *output_dir* must exist and defaults to the current working directory.
    When *client* is given it is used for every request and left open.

    Returns:
        The absolute path of the saved page.

    Raises:
        ValueError: if *url* is not an absolute http(s) URL.
        PageLoaderError: on the first fetch or storage failure.
    """
    request = PageRequest(url=url, output_dir=output_dir or os.getcwd(), progress=progress)

    if client is None:
        async with build_client() as owned_client:
            return await _load(request, owned_client, max_concurrency)
    return await _load(request, client, max_concurrency)


async def _load(
    request: PageRequest,
    client: httpx.AsyncClient,
    max_concurrency: Optional[int],
) -> str:
    page_url = str(request.url)
    naming = naming_for(page_url)
    page_path = os.path.join(request.output_dir, naming.page_filename)
    files_dir_path = os.path.join(request.output_dir, naming.resources_dir_name)

    logger.info("Loading page", extra={"url": page_url, "output_dir": request.output_dir})
    logger.debug("Paths resolved", extra={"page": page_path, "files_dir": files_dir_path})

    try:
        response = await fetch_page(client, page_url)
        html = response.text
        soup = parse_html(html)
        resources = collect_resources(soup, page_url)
        logger.info("Found %d local resources on %s", len(resources), page_url)

        if not resources:
            write_file(page_path, response.content)
        else:
            observer = RichProgressObserver() if request.progress else JobObserver()
            rewritten = await download_resources(
                client,
                soup,
                page_url,
                resources,
                files_dir_path,
                observer=observer,
                max_concurrency=max_concurrency,
            )
            write_file(page_path, rewritten)
    except PageLoaderError as exc:
        logger.debug("Loading %s failed: %r", page_url, exc)
        raise

    return os.path.abspath(page_path)


def load_sync(url: str, output_dir: Optional[str] = None, **kwargs) -> str:
    """Blocking wrapper around :func:`load`."""
    return asyncio.run(load(url, output_dir, **kwargs))
