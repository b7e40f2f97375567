"""
Origin-Related Exceptions

Errors raised while fetching a vendor list from the origin endpoint. These
are the only errors the resolver lets through to its callers.
"""

from typing import Any

from vendorlist_cache.core.exceptions.base import VendorListCacheError


class OriginError(VendorListCacheError):
    """Base exception for origin fetch errors."""
    pass


class OriginFetchError(OriginError):
    """
    Raised when the origin answers with a non-2xx status other than 204.

    Attributes:
        status_code: HTTP status returned by the origin
        body: Response body text
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details=details)
        self.status_code = status_code
        self.body = body
        self.details.setdefault("status_code", status_code)


class OriginUnavailableError(OriginError):
    """
    Raised when the origin cannot be reached at all.

    Common causes:
    - DNS or connection failure
    - Request timeout
    """
    pass


class InvalidPayloadError(OriginError):
    """
    Raised when a 2xx response is not a usable vendor list.

    Common causes:
    - Body is not JSON
    - Truncated document missing mandatory fields
    """
    pass
