"""Recommendation accessors."""

from __future__ import annotations

from typing import List

from aniquery.application.endpoints.base import Endpoint, page_variables
from aniquery.domain.models.social import Recommendation
from aniquery.domain.queries import recommendation as queries


class RecommendationEndpoint(Endpoint):
    def _recommendations(self, page: int, per_page: int, sort: str, **filters) -> List[Recommendation]:
        variables = page_variables(page, per_page, sort=[sort], **filters)
        return self._fetch_page(
            queries.RECOMMENDATION_PAGE, variables, ("Page", "recommendations"), Recommendation
        )

    def get_recent_recommendations(self, page: int = 1, per_page: int = 10) -> List[Recommendation]:
        return self._recommendations(page, per_page, "ID_DESC")

    def get_top_rated_recommendations(self, page: int = 1, per_page: int = 10) -> List[Recommendation]:
        return self._recommendations(page, per_page, "RATING_DESC")

    def get_recommendations_for_media(
        self, media_id: int, page: int = 1, per_page: int = 10
    ) -> List[Recommendation]:
        """Titles users recommend alongside ``media_id``, best rated first."""
        return self._recommendations(page, per_page, "RATING_DESC", mediaId=media_id)

    def get_recommendation_by_id(self, recommendation_id: int) -> Recommendation:
        return self._fetch_one(
            queries.RECOMMENDATION_BY_ID, {"id": recommendation_id}, ("Recommendation",), Recommendation
        )
