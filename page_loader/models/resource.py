from typing import NamedTuple

from bs4 import Tag


class ResourceReference(NamedTuple):
    """One embedded resource found in the document."""

    node: Tag
    attr: str  # "src" or "href"
    ref: str  # raw value as it appears in the markup


class ResourceJob(NamedTuple):
    """A resolved download: where to fetch from and where to write to."""

    url: str
    filename: str
    path: str

    @property
    def title(self) -> str:
        return self.url
