import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from page_loader.services.naming import normalize_ref, resolve_ref, url_host

logger = logging.getLogger(__name__)

_DATA_SCHEME = "data"


def is_local(page_url: str, ref: Optional[str]) -> bool:
    """Return True when *ref* points to a resource on the same host as *page_url*.

    Hosts are compared exactly; subdomains are not considered local.  Empty
    references and ``data:`` URIs are never local.  A reference that cannot
    be parsed, or that the HTTP client would refuse to request, is logged and
    treated as not local.
    """
    if not ref or not normalize_ref(ref):
        return False

    try:
        resolved = resolve_ref(page_url, ref)
        if urlsplit(resolved).scheme == _DATA_SCHEME:
            return False
        if url_host(resolved) != url_host(page_url):
            return False
        httpx.URL(resolved)
    except (ValueError, httpx.InvalidURL) as exc:
        logger.warning("Ignoring unparsable reference %r on %s – %s", ref, page_url, exc)
        return False
    return True
