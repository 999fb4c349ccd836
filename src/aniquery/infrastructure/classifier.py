"""Classification of raw failures into ``CatalogError`` kinds.

The classifier is total: any exception maps to exactly one error, with
``UnknownError`` as the non-retryable catch-all.
"""

from __future__ import annotations

import json
import math
import logging
import socket
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Iterable, Mapping, Optional

import requests
from pydantic import ValidationError

from aniquery.domain.errors import (
    AuthError,
    BadRequestError,
    CatalogError,
    NetworkError,
    NotFoundError,
    ParseError,
    ProviderError,
    RateLimitError,
    ServerError,
    UnknownError,
)
from aniquery.infrastructure.http_client import GraphQLResponseError, MalformedResponseError

logger = logging.getLogger(__name__)

RetryAfterExtractor = Callable[[Mapping[str, str]], Optional[float]]

RATE_LIMIT_MARKERS = ("rate limit", "too many requests")

TRANSIENT_MARKERS = (
    "timeout",
    "timed out",
    "temporarily unavailable",
    "try again",
    "internal server error",
    "service unavailable",
)

_BODY_EXCERPT = 500

_NETWORK_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
    ConnectionError,
    TimeoutError,
    socket.gaierror,
)

_PARSE_ERRORS = (
    requests.exceptions.JSONDecodeError,
    json.JSONDecodeError,
    MalformedResponseError,
    ValidationError,
)

_REQUEST_BUILD_ERRORS = (
    requests.exceptions.URLRequired,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidHeader,
)


def _lower_keys(headers: Mapping[str, str]) -> dict:
    return {str(k).lower(): v for k, v in headers.items()}


def parse_retry_after(headers: Mapping[str, str]) -> Optional[float]:
    """Read a ``Retry-After`` header as seconds.

    Accepts delta-seconds or an HTTP-date. Returns None when the header is
    missing, unparsable, not finite or not positive.
    """
    value = _lower_keys(headers).get("retry-after")
    if value is None:
        return None
    value = str(value).strip()
    try:
        seconds = float(value)
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError, IndexError):
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        seconds = (when - datetime.now(timezone.utc)).total_seconds()
    if not math.isfinite(seconds) or seconds <= 0:
        return None
    return seconds


def _int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _body_excerpt(response: Optional[requests.Response]) -> str:
    if response is None:
        return ""
    try:
        text = response.text or ""
    except Exception:
        return ""
    return text[:_BODY_EXCERPT]


class ErrorClassifier:
    """Maps raw failures to ``CatalogError`` instances.

    Args:
        retry_after_extractor: Reads a wait hint (seconds) from response
            headers; defaults to ``parse_retry_after``
        transient_markers: Lower-case substrings that mark a GraphQL error
            message as transient (retryable)
    """

    def __init__(
        self,
        retry_after_extractor: Optional[RetryAfterExtractor] = None,
        transient_markers: Iterable[str] = TRANSIENT_MARKERS,
    ):
        self.retry_after_extractor = retry_after_extractor or parse_retry_after
        self.transient_markers = tuple(m.lower() for m in transient_markers)

    def classify(self, raw: BaseException) -> CatalogError:
        """Classify a raw failure.

        Args:
            raw: Exception raised by one attempt of an operation

        Returns:
            A ``CatalogError`` whose ``__cause__`` is ``raw`` (unless ``raw``
            already is a ``CatalogError``)
        """
        if isinstance(raw, CatalogError):
            return raw
        try:
            error = self._classify(raw)
        except Exception as e:
            # Malformed raw failures still have to yield a kind.
            logger.debug(f"Classification of {type(raw).__name__} failed: {e}")
            error = UnknownError(f"{type(raw).__name__}: {raw}")
        error.__cause__ = raw
        return error

    def _classify(self, raw: BaseException) -> CatalogError:
        if isinstance(raw, GraphQLResponseError):
            return self._from_graphql(raw)

        if isinstance(raw, requests.exceptions.HTTPError):
            response = raw.response
            if response is None:
                return UnknownError(str(raw))
            return self.from_status(
                response.status_code,
                _body_excerpt(response) or str(raw),
                headers=response.headers,
            )

        # requests' JSONDecodeError is also a RequestException; check it first.
        if isinstance(raw, _PARSE_ERRORS):
            return ParseError(f"Malformed response: {raw}")

        if isinstance(raw, _REQUEST_BUILD_ERRORS):
            return BadRequestError(f"Invalid request: {raw}")
        if isinstance(raw, _NETWORK_ERRORS):
            return NetworkError(f"{type(raw).__name__}: {raw}")

        return UnknownError(f"{type(raw).__name__}: {raw}")

    def from_status(
        self,
        status_code: int,
        message: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> CatalogError:
        """Classify a non-success HTTP (or embedded GraphQL) status code."""
        if status_code == 429:
            return self._rate_limited(message, status_code=status_code, headers=headers or {})
        if status_code in (401, 403):
            return AuthError(message, status_code=status_code)
        if status_code == 404:
            return NotFoundError(message, status_code=status_code)
        if status_code == 408:
            return NetworkError(message, status_code=status_code)
        if 400 <= status_code < 500:
            return BadRequestError(message, status_code=status_code)
        if 500 <= status_code < 600:
            return ServerError(message, status_code=status_code)
        return UnknownError(message, status_code=status_code)

    def _rate_limited(
        self, message: str, *, status_code: Optional[int], headers: Mapping[str, str]
    ) -> RateLimitError:
        lowered = _lower_keys(headers)
        retry_after = self.retry_after_extractor(headers) if headers else None
        return RateLimitError(
            message or "Rate limit exceeded",
            status_code=status_code,
            retry_after=retry_after,
            limit=_int_header(lowered, "x-ratelimit-limit"),
            remaining=_int_header(lowered, "x-ratelimit-remaining"),
            reset_at=_int_header(lowered, "x-ratelimit-reset"),
        )

    def _from_graphql(self, raw: GraphQLResponseError) -> CatalogError:
        message = raw.message
        details = {"errors": raw.errors}
        for status in raw.statuses:
            if status >= 400:
                error = self.from_status(status, message)
                error.details.update(details)
                return error

        lowered = message.lower()
        if any(marker in lowered for marker in RATE_LIMIT_MARKERS):
            # Burst limit: no hint in the body, computed backoff applies.
            return RateLimitError(message, status_code=raw.status_code, details=details)

        transient = any(marker in lowered for marker in self.transient_markers)
        return ProviderError(message, transient=transient, status_code=raw.status_code, details=details)


_default_classifier = ErrorClassifier()


def classify(raw: BaseException) -> CatalogError:
    """Classify with the default classifier."""
    return _default_classifier.classify(raw)
