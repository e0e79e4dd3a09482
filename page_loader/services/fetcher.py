import asyncio
import ipaddress
import logging
import os
import socket
from typing import Union
from urllib.parse import urljoin, urlparse

import httpx

from page_loader.services.errors import ConnectivityError, StorageError, TransferStatusError

logger = logging.getLogger(__name__)

TIMEOUT = 10  # seconds
USER_AGENT = "page-loader/1.0"
ALLOWED_SCHEMES = {"http", "https"}


def build_client(public_only: bool = False) -> httpx.AsyncClient:
    """Return the HTTP client shared by all fetches of one invocation.

    With *public_only* every redirect target is checked with
    :func:`validate_public_url` before it is followed.
    """
    event_hooks = {"response": [reject_private_redirects]} if public_only else {}
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=TIMEOUT,
        headers={"User-Agent": USER_AGENT},
        event_hooks=event_hooks,
    )


def _resolves_to_internal(hostname: str) -> bool:
    """Return True if any address of *hostname* is outside the public internet."""
    try:
        infos = socket.getaddrinfo(hostname, None)
    except socket.gaierror:
        return False

    # Zone IDs ("fe80::1%eth0") are not accepted by ipaddress
    raw_ips = {info[4][0].split("%")[0] for info in infos}
    for raw_ip in raw_ips:
        try:
            addr = ipaddress.ip_address(raw_ip)
        except ValueError:
            continue
        if not addr.is_global or addr.is_reserved:
            return True
    return False


def validate_url(url: str) -> None:
    """Raise ValueError unless *url* is an http(s) URL with a hostname."""
    parsed = urlparse(url)

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")

    if not parsed.hostname:
        raise ValueError("URL must have a valid hostname.")


def validate_public_url(url: str) -> None:
    """Like :func:`validate_url`, but also reject private/internal hosts.

    Resolves the hostname, so it blocks; call it through a thread from async code.
    """
    validate_url(url)
    if _resolves_to_internal(urlparse(url).hostname):
        raise ValueError("Requests to private/internal addresses are not allowed.")


async def reject_private_redirects(response: httpx.Response) -> None:
    """httpx response hook: refuse to follow a redirect to an internal address."""
    if not response.has_redirect_location:
        return
    target = urljoin(str(response.request.url), response.headers["location"])
    await asyncio.to_thread(validate_public_url, target)


async def _get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    """GET *url*, translating transport and status failures.

    Raises:
        ConnectivityError: when no request could be made or no response was obtained.
        TransferStatusError: when the response status is not 2xx.
    """
    try:
        response = await client.get(url)
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise ConnectivityError(url, code=type(exc).__name__, cause=exc) from exc

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise TransferStatusError(url, exc.response.status_code, cause=exc) from exc

    logger.debug(
        "Fetched %s",
        url,
        extra={"url": url, "status": response.status_code, "bytes": len(response.content)},
    )
    return response


async def fetch_page(client: httpx.AsyncClient, url: str) -> httpx.Response:
    """Fetch the page at *url*.

    Callers parse ``response.text`` and keep ``response.content`` for saving
    the page unchanged.
    """
    return await _get(client, url)


async def fetch_bytes(client: httpx.AsyncClient, url: str) -> bytes:
    """Fetch *url* and return the raw body without any charset decoding."""
    response = await _get(client, url)
    return response.content


def write_file(path: str, data: Union[str, bytes]) -> None:
    """Write *data* to *path*; text is encoded as UTF-8.

    Raises:
        StorageError: if the file cannot be written.
    """
    try:
        if isinstance(data, str):
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(data)
        else:
            with open(path, "wb") as f:
                f.write(data)
    except OSError as exc:
        raise StorageError(f"Cannot write file {path}", path, exc.errno, cause=exc) from exc


def make_dir(path: str) -> None:
    """Create the directory *path*; its parent must already exist.

    Raises:
        StorageError: if the directory cannot be created.
    """
    try:
        os.mkdir(path)
    except FileExistsError as exc:
        if not os.path.isdir(path):
            raise StorageError(f"Cannot create directory {path}", path, exc.errno, cause=exc) from exc
    except OSError as exc:
        raise StorageError(f"Cannot create directory {path}", path, exc.errno, cause=exc) from exc
