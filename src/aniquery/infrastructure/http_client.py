"""GraphQL-over-HTTP transport (requests).

One call here is one attempt: no retries happen at this level. Failures are
raised raw (``requests`` exceptions, ``GraphQLResponseError``) and classified
by the caller's retry layer.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class MalformedResponseError(ValueError):
    """The body is JSON but not a GraphQL response object."""


class GraphQLResponseError(Exception):
    """The service answered 2xx but the body carries an ``errors`` array."""

    def __init__(self, errors: List[Dict[str, Any]], *, status_code: Optional[int] = None):
        self.errors = errors
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def messages(self) -> List[str]:
        return [str(e.get("message", "Unknown error")) if isinstance(e, dict) else str(e) for e in self.errors]

    @property
    def message(self) -> str:
        return ", ".join(self.messages) or "Unknown error"

    @property
    def statuses(self) -> List[int]:
        """Numeric ``status`` fields embedded in the error entries."""
        result = []
        for e in self.errors:
            status = e.get("status") if isinstance(e, dict) else None
            if isinstance(status, int):
                result.append(status)
        return result


def build_headers(token: Optional[str] = None) -> Dict[str, str]:
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def post_graphql(
    url: str,
    *,
    query: str,
    variables: Optional[Dict[str, Any]] = None,
    headers: Dict[str, str],
    timeout: float,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """POST a GraphQL document and return its ``data`` object.

    Args:
        url: GraphQL endpoint
        query: GraphQL document
        variables: Query variables
        headers: Request headers (authorization already attached)
        timeout: Request timeout in seconds
        session: Optional requests session to reuse connections

    Returns:
        The ``data`` member of the response body

    Raises:
        requests.exceptions.RequestException: Transport failure or non-2xx status
        ValueError: Body is not JSON or not a GraphQL response object
        GraphQLResponseError: Body contains GraphQL errors
    """
    payload: Dict[str, Any] = {"query": query}
    if variables:
        payload["variables"] = variables

    logger.debug(f"HTTP POST {url}")
    poster = session.post if session is not None else requests.post
    resp = poster(url, json=payload, headers=headers, timeout=timeout)
    resp.raise_for_status()

    body = resp.json()
    if not isinstance(body, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(body).__name__}")

    errors = body.get("errors")
    if errors:
        if not isinstance(errors, list):
            errors = [{"message": str(errors)}]
        raise GraphQLResponseError(errors, status_code=resp.status_code)

    data = body.get("data")
    if not isinstance(data, dict):
        raise MalformedResponseError("Response has no 'data' object")
    return data
