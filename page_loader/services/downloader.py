import logging
import os
import posixpath
from typing import List, Optional

import httpx
from bs4 import BeautifulSoup

from page_loader.models.resource import ResourceJob, ResourceReference
from page_loader.services.fetcher import fetch_bytes, make_dir, write_file
from page_loader.services.naming import resolve_ref, resource_filename, resources_dir_name
from page_loader.services.runner import JobObserver, run_jobs

logger = logging.getLogger(__name__)


async def download_resources(
    client: httpx.AsyncClient,
    soup: BeautifulSoup,
    page_url: str,
    resources: List[ResourceReference],
    files_dir_path: str,
    *,
    observer: Optional[JobObserver] = None,
    max_concurrency: Optional[int] = None,
) -> str:
    """Download *resources* into *files_dir_path* and return the rewritten page.

    Every reference in *soup* is rewritten to ``<files dir>/<filename>``
    before any download starts.  If a single download fails the whole
    operation fails and nothing is serialized.

    Raises:
        StorageError: if the resources directory or a resource file cannot be written.
        TransferStatusError, ConnectivityError: if a resource cannot be fetched.
    """
    make_dir(files_dir_path)
    dir_name = resources_dir_name(page_url)

    jobs: List[ResourceJob] = []
    for resource in resources:
        url = resolve_ref(page_url, resource.ref)
        filename = resource_filename(page_url, resource.ref)
        resource.node[resource.attr] = posixpath.join(dir_name, filename)
        path = os.path.abspath(os.path.join(files_dir_path, filename))
        jobs.append(ResourceJob(url, filename, path))

    async def _download(job: ResourceJob) -> None:
        data = await fetch_bytes(client, job.url)
        write_file(job.path, data)
        logger.debug("Resource saved", extra={"url": job.url, "path": job.path})

    logger.info("Downloading %d resources for %s", len(jobs), page_url)
    await run_jobs(jobs, _download, observer=observer, max_concurrency=max_concurrency)

    return str(soup)
