from pydantic import BaseModel


class LoadResponse(BaseModel):
    url: str
    filepath: str
    """Absolute path of the saved page on the server."""
