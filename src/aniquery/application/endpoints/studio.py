"""Studio accessors."""

from __future__ import annotations

from typing import List

from aniquery.application.endpoints.base import Endpoint, page_variables
from aniquery.domain.models.social import Studio
from aniquery.domain.queries import studio as queries


class StudioEndpoint(Endpoint):
    def get_popular(self, page: int = 1, per_page: int = 10) -> List[Studio]:
        return self._fetch_page(queries.STUDIO_POPULAR, page_variables(page, per_page), ("Page", "studios"), Studio)

    get_most_favorited = get_popular

    def get_by_id(self, studio_id: int) -> Studio:
        return self._fetch_one(queries.STUDIO_BY_ID, {"id": studio_id}, ("Studio",), Studio)

    def search(self, text: str, page: int = 1, per_page: int = 10) -> List[Studio]:
        return self._fetch_page(
            queries.STUDIO_SEARCH, page_variables(page, per_page, search=text), ("Page", "studios"), Studio
        )
