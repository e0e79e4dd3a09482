"""Deterministic filesystem names for a saved page and its resources."""

import posixpath
import re
from typing import NamedTuple
from urllib.parse import urljoin, urlsplit

SEPARATOR = "-"
PAGE_EXTENSION = ".html"
DEFAULT_EXTENSION = ".html"
FILES_DIR_SUFFIX = "_files"

# Anything that is not an ASCII letter or digit
_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9]")
# Browsers drop these anywhere inside a URL
_TAB_NEWLINE_RE = re.compile(r"[\t\n\r]")
# C0 controls and space, trimmed from both ends of a reference
_C0_AND_SPACE = "".join(chr(i) for i in range(0x21))
_DEFAULT_PORTS = {"http": 80, "https": 443}


class NamingResult(NamedTuple):
    page_filename: str
    resources_dir_name: str


def sanitize(value: str) -> str:
    """Replace every character that is not an ASCII letter or digit with ``-``."""
    return _UNSAFE_RE.sub(SEPARATOR, value)


def normalize_ref(ref: str) -> str:
    """Clean a raw attribute value the way browsers do before resolving it."""
    return _TAB_NEWLINE_RE.sub("", ref.strip(_C0_AND_SPACE))


def resolve_ref(page_url: str, ref: str) -> str:
    """Return the absolute URL of the reference *ref* found on *page_url*."""
    return urljoin(page_url, normalize_ref(ref))


def url_host(url: str) -> str:
    """Return the lower-cased host of *url*, including a non-default port.

    Raises:
        ValueError: if *url* cannot be parsed (e.g. a malformed port or IPv6 literal).
    """
    parts = urlsplit(url)
    host = parts.hostname or ""
    # Accessing .port validates it and raises ValueError on garbage
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS.get(parts.scheme):
        host = f"{host}:{port}"
    return host


def _path_of(url: str) -> str:
    return urlsplit(url).path or "/"


def page_filename(url: str) -> str:
    """Return the output filename for the page at *url*.

    ``https://example.com/a/b`` becomes ``example-com-a-b.html``.
    """
    return sanitize(url_host(url) + _path_of(url)) + PAGE_EXTENSION


def resources_dir_name(url: str) -> str:
    """Return the name of the directory holding the resources of *url*.

    The directory is a sibling of the page file: ``example-com-a-b_files``.
    """
    filename = page_filename(url)
    return filename[: -len(PAGE_EXTENSION)] + FILES_DIR_SUFFIX


def naming_for(url: str) -> NamingResult:
    return NamingResult(page_filename(url), resources_dir_name(url))


def resource_filename(page_url: str, ref: str) -> str:
    """Return the local filename for the resource *ref* found on *page_url*.

    Only the path of the resolved URL contributes; query string and fragment
    are ignored.  A path without an extension is saved as ``.html``.
    """
    resolved = resolve_ref(page_url, ref)
    path = _path_of(resolved)
    base, ext = posixpath.splitext(path)
    if not ext:
        ext = DEFAULT_EXTENSION
    return sanitize(url_host(resolved) + base) + ext
