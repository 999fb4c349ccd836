"""Catalog client: authentication, query execution and accessors."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

import requests

from aniquery.application.endpoints import (
    AiringEndpoint,
    AnimeEndpoint,
    CharacterEndpoint,
    MangaEndpoint,
    RecommendationEndpoint,
    ReviewEndpoint,
    StaffEndpoint,
    StudioEndpoint,
    UserEndpoint,
)
from aniquery.domain.config import ANILIST_API_URL, DEFAULT_RETRY_CONFIG, AppConfig, RetryConfig
from aniquery.infrastructure.http_client import build_headers, post_graphql
from aniquery.infrastructure.retry import RetryCoordinator

logger = logging.getLogger(__name__)


class CatalogClient:
    """Entry point for catalog API operations.

    Every query goes through the retry coordinator; failures reach the caller
    as the classified ``CatalogError`` of the last attempt.

    Args:
        token: Optional bearer token for authenticated calls
        api_url: GraphQL endpoint
        timeout: Per-request timeout in seconds
        retry_config: Retry policy shared by all queries of this client
        session: Optional requests session
        coordinator: Optional retry coordinator (custom classifier, sleep)
        cancel_event: Setting it aborts any query waiting between attempts
    """

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        api_url: str = ANILIST_API_URL,
        timeout: float = 30.0,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
        session: Optional[requests.Session] = None,
        coordinator: Optional[RetryCoordinator] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self._token = token
        self.api_url = api_url
        self.timeout = timeout
        self.retry_config = retry_config
        self.session = session
        self.coordinator = coordinator or RetryCoordinator()
        self.cancel_event = cancel_event

    @classmethod
    def with_token(cls, token: str, **kwargs: Any) -> "CatalogClient":
        return cls(token, **kwargs)

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs: Any) -> "CatalogClient":
        """Build a client from a validated ``AppConfig``."""
        return cls(
            config.api.token,
            api_url=config.api.url,
            timeout=config.api.timeout,
            retry_config=config.retry,
            **kwargs,
        )

    def set_token(self, token: str) -> None:
        self._token = token

    def clear_token(self) -> None:
        self._token = None

    @property
    def has_token(self) -> bool:
        return self._token is not None

    def query(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        *,
        deadline: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Execute a GraphQL document with retries.

        Args:
            document: GraphQL query or mutation
            variables: Query variables
            deadline: Overall time budget in seconds for all attempts

        Returns:
            The ``data`` object of the response

        Raises:
            CatalogError: Classified error of the last attempt
            OperationCancelled: Cancellation or deadline hit between attempts
        """
        headers = build_headers(self._token)

        def _operation() -> Dict[str, Any]:
            return post_graphql(
                self.api_url,
                query=document,
                variables=variables,
                headers=headers,
                timeout=self.timeout,
                session=self.session,
            )

        result = self.coordinator.run(
            _operation,
            self.retry_config,
            cancel_event=self.cancel_event,
            timeout=deadline,
        )
        if not result.ok:
            logger.debug(f"Query failed in state {result.state.value} after {len(result.attempts)} attempt(s)")
        return result.unwrap()

    @property
    def anime(self) -> AnimeEndpoint:
        return AnimeEndpoint(self)

    @property
    def manga(self) -> MangaEndpoint:
        return MangaEndpoint(self)

    @property
    def character(self) -> CharacterEndpoint:
        return CharacterEndpoint(self)

    @property
    def staff(self) -> StaffEndpoint:
        return StaffEndpoint(self)

    @property
    def user(self) -> UserEndpoint:
        return UserEndpoint(self)

    @property
    def studio(self) -> StudioEndpoint:
        return StudioEndpoint(self)

    @property
    def airing(self) -> AiringEndpoint:
        return AiringEndpoint(self)

    @property
    def review(self) -> ReviewEndpoint:
        return ReviewEndpoint(self)

    @property
    def recommendation(self) -> RecommendationEndpoint:
        return RecommendationEndpoint(self)
