import logging

from page_loader.services.errors import (
    ConnectivityError,
    PageLoaderError,
    StorageError,
    TransferStatusError,
)
from page_loader.services.loader import load, load_sync

__version__ = "1.0.0"

# Library code logs under "page_loader"; stay silent unless the caller configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConnectivityError",
    "PageLoaderError",
    "StorageError",
    "TransferStatusError",
    "load",
    "load_sync",
]
