"""
Exception hierarchy for Store Finder.

Exception Hierarchy:
    StoreFinderError (base)
    ├── ValidationError
    ├── ConfigurationError
    ├── RateLimitError
    └── RemoteServiceError

Every exception carries a suggested HTTP status code so the API layer can
translate it without knowing the concrete type.
"""
from typing import Optional, Dict, Any


class StoreFinderError(Exception):
    """
    Base exception for all Store Finder errors.

    Attributes:
        message: Human-readable error message
        detail: Optional dict with additional error context
        status_code: Suggested HTTP status code (for API errors)
    """

    def __init__(
        self,
        message: str,
        *,
        detail: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for JSON serialization."""
        result = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.detail:
            result["detail"] = self.detail
        return result


class ValidationError(StoreFinderError):
    """
    Raised when search keywords fail validation.

    Examples:
        raise ValidationError("At least 2 keywords are required")
    """

    def __init__(self, message: str, *, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message, detail=detail, status_code=400)


class ConfigurationError(StoreFinderError):
    """Raised when remote API credentials are missing. Fatal, nothing is fetched."""

    def __init__(self, message: str, *, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message, detail=detail, status_code=500)


class RateLimitError(StoreFinderError):
    """
    Raised when a client exceeds its request window.

    Examples:
        raise RateLimitError("Too many requests", retry_after=30)
    """

    def __init__(
        self,
        message: str,
        *,
        detail: Optional[Dict[str, Any]] = None,
        retry_after: Optional[int] = None,
    ):
        if retry_after and detail is None:
            detail = {"retry_after": retry_after}
        elif retry_after and detail:
            detail["retry_after"] = retry_after

        super().__init__(message, detail=detail, status_code=429)
        self.retry_after = retry_after


class RemoteServiceError(StoreFinderError):
    """
    Raised when the shopping API answers with a non-success status or the
    request fails in transport. Aborts the in-flight search; never retried.

    Attributes:
        upstream_status: HTTP status returned by the remote API (None for
            transport failures)
    """

    def __init__(
        self,
        message: str,
        *,
        upstream_status: Optional[int] = None,
        detail: Optional[Dict[str, Any]] = None,
    ):
        if upstream_status is not None and detail is None:
            detail = {"upstream_status": upstream_status}
        elif upstream_status is not None and detail:
            detail["upstream_status"] = upstream_status

        super().__init__(message, detail=detail, status_code=502)
        self.upstream_status = upstream_status
