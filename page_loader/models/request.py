from typing import Optional

from pydantic import BaseModel, ConfigDict, HttpUrl


class PageRequest(BaseModel):
    """Input of one page-load invocation."""

    model_config = ConfigDict(frozen=True)

    url: HttpUrl
    output_dir: str
    progress: bool = False


class LoadRequest(BaseModel):
    url: HttpUrl
    output_dir: Optional[str] = None
    """Directory the page is saved into.

    Must already exist.  Defaults to ``PAGE_LOADER_OUTPUT_DIR`` when set,
    otherwise the server's working directory.
    """
