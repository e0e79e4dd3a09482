"""Failure kinds raised by the page-loading pipeline.

Every low-level failure is classified into exactly one of the three
subclasses of :class:`PageLoaderError` at the point where it is detected.
"""

from typing import Optional


class PageLoaderError(Exception):
    """Base class for all pipeline failures.

    Attributes:
        resource: The URL or filesystem path the failure relates to.
        cause: The underlying exception, when there is one.
    """

    def __init__(self, message: str, resource: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.resource = resource
        self.cause = cause


class TransferStatusError(PageLoaderError):
    """A fetch returned a response with a non-success status code."""

    def __init__(self, url: str, status: int, cause: Optional[BaseException] = None):
        super().__init__(f"HTTP {status} when fetching {url}", url, cause)
        self.status = status


class ConnectivityError(PageLoaderError):
    """A fetch could not obtain any response (DNS, refused connection, timeout)."""

    def __init__(self, url: str, code: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(f"Network error when fetching {url}", url, cause)
        self.code = code


class StorageError(PageLoaderError):
    """A local directory-create or file-write could not complete."""

    def __init__(
        self,
        message: str,
        path: str,
        errno: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, path, cause)
        self.errno = errno


def describe_error(exc: Exception) -> str:
    """Render *exc* as the single-line message shown to command-line users."""
    if isinstance(exc, TransferStatusError):
        return f"Error: HTTP {exc.status} while fetching {exc.resource}"
    if isinstance(exc, ConnectivityError):
        code = f" ({exc.code})" if exc.code else ""
        return f"Error: Network problem while fetching {exc.resource}{code}"
    if isinstance(exc, StorageError):
        code = f" (errno {exc.errno})" if exc.errno is not None else ""
        return f"Error: File system problem: {exc}{code}"
    return f"Error: {exc}"
