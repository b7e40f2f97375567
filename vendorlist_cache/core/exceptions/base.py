"""
Base Exception Class

This module contains the base exception class that all other exceptions
inherit from, plus ConfigurationError. Specialized exceptions live in their
themed modules.

Date: 2026-03-02
"""

from typing import Any


class VendorListCacheError(Exception):
    """
    Base exception for all cache engine errors.

    All custom exceptions inherit from this class to enable:
    - Consistent error handling
    - Structured error logging
    - Rich context for debugging

    Attributes:
        message: Error message
        details: Additional error details (dict)

    Example:
        raise OriginFetchError(
            "Failed to fetch GVL: 503",
            details={"status_code": 503, "variant": "de"},
        )
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = (details or {}).copy()
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging.

        Returns:
            Dict with error_type, message and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

    def with_context(self, **context) -> "VendorListCacheError":
        """
        Add additional context to the error details.

        Returns:
            Self (for method chaining)
        """
        self.details.update(context)
        return self

    def __repr__(self) -> str:
        details_str = f", details={self.details}" if self.details else ""
        return f"{self.__class__.__name__}(message='{self.message}'{details_str})"

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        message: str | None = None,
        **details,
    ) -> "VendorListCacheError":
        """
        Create an error of this class from another exception.

        Useful for wrapping third-party exceptions (httpx, redis) with
        additional context.

        Args:
            exc: Original exception to wrap
            message: Custom message (defaults to original exception message)
            **details: Additional context to include

        Example:
            >>> try:
            ...     await client.post(url, json=command)
            ... except httpx.TransportError as e:
            ...     raise CacheConnectionError.from_exception(e, command="GET")
        """
        error_message = message or str(exc)
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details,
        }
        return cls(error_message, details=error_details)


class ConfigurationError(VendorListCacheError):
    """
    Raised when configuration is invalid or missing.

    Adapters raise this from their constructors so misconfiguration fails
    before the first resolution.
    """
    pass
