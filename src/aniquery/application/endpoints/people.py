"""Character and staff accessors."""

from __future__ import annotations

from typing import List

from aniquery.application.endpoints.base import Endpoint, page_variables
from aniquery.domain.models.people import Character, Staff
from aniquery.domain.queries import people as queries


class CharacterEndpoint(Endpoint):
    def get_popular(self, page: int = 1, per_page: int = 10) -> List[Character]:
        return self._fetch_page(
            queries.CHARACTER_POPULAR, page_variables(page, per_page), ("Page", "characters"), Character
        )

    # Popularity of a character is its favourite count.
    get_most_favorited = get_popular

    def get_today_birthday(self, page: int = 1, per_page: int = 10) -> List[Character]:
        """Characters whose birthday is today, per the service's calendar."""
        return self._fetch_page(
            queries.CHARACTER_BIRTHDAY, page_variables(page, per_page), ("Page", "characters"), Character
        )

    def get_by_id(self, character_id: int) -> Character:
        return self._fetch_one(queries.CHARACTER_BY_ID, {"id": character_id}, ("Character",), Character)

    def search(self, text: str, page: int = 1, per_page: int = 10) -> List[Character]:
        return self._fetch_page(
            queries.CHARACTER_SEARCH,
            page_variables(page, per_page, search=text),
            ("Page", "characters"),
            Character,
        )


class StaffEndpoint(Endpoint):
    def get_popular(self, page: int = 1, per_page: int = 10) -> List[Staff]:
        return self._fetch_page(queries.STAFF_POPULAR, page_variables(page, per_page), ("Page", "staff"), Staff)

    get_most_favorited = get_popular

    def get_today_birthday(self, page: int = 1, per_page: int = 10) -> List[Staff]:
        return self._fetch_page(queries.STAFF_BIRTHDAY, page_variables(page, per_page), ("Page", "staff"), Staff)

    def get_by_id(self, staff_id: int) -> Staff:
        return self._fetch_one(queries.STAFF_BY_ID, {"id": staff_id}, ("Staff",), Staff)

    def search(self, text: str, page: int = 1, per_page: int = 10) -> List[Staff]:
        return self._fetch_page(
            queries.STAFF_SEARCH, page_variables(page, per_page, search=text), ("Page", "staff"), Staff
        )
