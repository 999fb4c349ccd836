"""User accessors."""

from __future__ import annotations

from typing import List

from aniquery.application.endpoints.base import Endpoint, page_variables
from aniquery.domain.errors import AuthError
from aniquery.domain.models.user import User
from aniquery.domain.queries import user as queries


class UserEndpoint(Endpoint):
    def get_by_id(self, user_id: int) -> User:
        return self._fetch_one(queries.USER_BY_ID, {"id": user_id}, ("User",), User)

    def get_by_name(self, name: str) -> User:
        return self._fetch_one(queries.USER_BY_NAME, {"name": name}, ("User",), User)

    def get_current_user(self) -> User:
        """Return the user owning the client's token.

        Raises:
            AuthError: The client has no token, or the service rejected it
        """
        if not self.client.has_token:
            raise AuthError("Authentication required. Please provide a valid access token.")
        return self._fetch_one(queries.VIEWER, None, ("Viewer",), User)

    def search(self, text: str, page: int = 1, per_page: int = 10) -> List[User]:
        return self._fetch_page(
            queries.USER_SEARCH, page_variables(page, per_page, search=text), ("Page", "users"), User
        )

    def _by_sort(self, sort: str, page: int, per_page: int) -> List[User]:
        variables = page_variables(page, per_page, sort=[sort])
        return self._fetch_page(queries.USER_PAGE_BY_SORT, variables, ("Page", "users"), User)

    def get_most_anime_watched(self, page: int = 1, per_page: int = 10) -> List[User]:
        """Users ranked by total anime watch time."""
        return self._by_sort("WATCHED_TIME_DESC", page, per_page)

    def get_most_manga_read(self, page: int = 1, per_page: int = 10) -> List[User]:
        return self._by_sort("CHAPTERS_READ_DESC", page, per_page)
