from typing import List

from bs4 import BeautifulSoup

from page_loader.models.resource import ResourceReference
from page_loader.services.locality import is_local

# <link rel="..."> values whose href is downloaded
_LINK_RELS = {"stylesheet", "canonical"}


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def _link_rel(tag) -> str:
    # bs4 splits multi-valued attributes such as rel into a list
    rel = tag.get("rel") or ""
    if isinstance(rel, list):
        rel = " ".join(rel)
    return rel.strip().lower()


def collect_resources(soup: BeautifulSoup, page_url: str) -> List[ResourceReference]:
    """Return the local resources referenced by *soup*, in download order.

    Images come first, then scripts, then stylesheet and canonical links;
    each group keeps document order.  References to other hosts and
    ``data:`` URIs are left out.
    """
    candidates: List[ResourceReference] = []

    for img in soup.find_all("img", src=True):
        candidates.append(ResourceReference(img, "src", str(img["src"])))

    for script in soup.find_all("script", src=True):
        candidates.append(ResourceReference(script, "src", str(script["src"])))

    for link in soup.find_all("link", href=True):
        if _link_rel(link) in _LINK_RELS:
            candidates.append(ResourceReference(link, "href", str(link["href"])))

    return [c for c in candidates if is_local(page_url, c.ref)]
