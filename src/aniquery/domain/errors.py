"""Error taxonomy for catalog API calls.

Every failure observed while talking to the catalog service is reduced to one
``CatalogError`` subclass. The subclass fixes the ``ErrorKind``; the kind
decides whether the retry coordinator may try the call again.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Closed classification of a failed attempt."""

    NETWORK = "network"
    SERVER_ERROR = "server_error"
    RATE_LIMITED = "rate_limited"
    BAD_REQUEST = "bad_request"
    AUTH_ERROR = "auth_error"
    NOT_FOUND = "not_found"
    PARSE_ERROR = "parse_error"
    PROVIDER_ERROR = "provider_error"
    UNKNOWN = "unknown"

    @property
    def retryable(self) -> bool:
        """Default retry eligibility for the kind."""
        return self in _RETRYABLE_KINDS


_RETRYABLE_KINDS = frozenset({ErrorKind.NETWORK, ErrorKind.SERVER_ERROR, ErrorKind.RATE_LIMITED})


class CatalogError(Exception):
    """Base error for everything the client surfaces to callers.

    Attributes:
        kind: Classification of the failure
        message: Human readable diagnostic (server text, exception message)
        status_code: HTTP or GraphQL status code, if one was observed
        retry_after: Provider supplied wait hint in seconds, if any
        details: Extra diagnostic context
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.retry_after = retry_after
        self.details: Dict[str, Any] = details or {}

    @property
    def retryable(self) -> bool:
        return self.kind.retryable

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.kind.value} ({self.status_code}): {self.message}"
        return f"{self.kind.value}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"status_code={self.status_code!r}, retry_after={self.retry_after!r})"
        )


class NetworkError(CatalogError):
    """Transport-level failure: timeout, connection reset, DNS."""

    kind = ErrorKind.NETWORK


class ServerError(CatalogError):
    """The service reported an internal failure (5xx)."""

    kind = ErrorKind.SERVER_ERROR


class RateLimitError(CatalogError):
    """The provider throttled the request.

    ``limit``, ``remaining`` and ``reset_at`` mirror the provider's
    ``X-RateLimit-*`` headers when they were sent.
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None,
        limit: Optional[int] = None,
        remaining: Optional[int] = None,
        reset_at: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status_code=status_code, retry_after=retry_after, details=details)
        self.limit = limit
        self.remaining = remaining
        self.reset_at = reset_at


class BadRequestError(CatalogError):
    """Malformed or invalid request content."""

    kind = ErrorKind.BAD_REQUEST


class AuthError(CatalogError):
    """Missing, invalid or expired credential, or access denied."""

    kind = ErrorKind.AUTH_ERROR


class NotFoundError(CatalogError):
    kind = ErrorKind.NOT_FOUND


class ParseError(CatalogError):
    """The response arrived but does not have the expected shape."""

    kind = ErrorKind.PARSE_ERROR


class ProviderError(CatalogError):
    """Application-level error returned in a GraphQL ``errors`` array.

    Not retried unless the classifier recognised the message as transient.
    """

    kind = ErrorKind.PROVIDER_ERROR

    def __init__(self, message: str, *, transient: bool = False, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.transient = transient

    @property
    def retryable(self) -> bool:
        return self.transient


class UnknownError(CatalogError):
    kind = ErrorKind.UNKNOWN


class OperationCancelled(Exception):
    """A run was aborted by its caller while waiting between attempts.

    Attributes:
        reason: ``"cancelled"`` or ``"deadline"``
        attempts: Number of attempts issued before the abort
        last_error: Error of the last attempt
    """

    def __init__(self, reason: str, *, attempts: int, last_error: Optional[CatalogError] = None):
        message = f"Operation {reason} after {attempts} attempt(s)"
        if last_error is not None:
            message += f"; last error: {last_error}"
        super().__init__(message)
        self.reason = reason
        self.attempts = attempts
        self.last_error = last_error
