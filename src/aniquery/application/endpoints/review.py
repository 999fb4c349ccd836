"""Review accessors."""

from __future__ import annotations

from typing import List

from aniquery.application.endpoints.base import Endpoint, page_variables
from aniquery.domain.models.social import Review
from aniquery.domain.queries import review as queries


class ReviewEndpoint(Endpoint):
    def _reviews(self, page: int, per_page: int, sort: str, **filters) -> List[Review]:
        variables = page_variables(page, per_page, sort=[sort], **filters)
        return self._fetch_page(queries.REVIEW_PAGE, variables, ("Page", "reviews"), Review)

    def get_recent_reviews(self, page: int = 1, per_page: int = 10) -> List[Review]:
        return self._reviews(page, per_page, "CREATED_AT_DESC")

    def get_top_rated_reviews(self, page: int = 1, per_page: int = 10) -> List[Review]:
        return self._reviews(page, per_page, "RATING_DESC")

    def get_reviews_for_media(self, media_id: int, page: int = 1, per_page: int = 10) -> List[Review]:
        return self._reviews(page, per_page, "RATING_DESC", mediaId=media_id)

    def get_reviews_by_user(self, user_id: int, page: int = 1, per_page: int = 10) -> List[Review]:
        return self._reviews(page, per_page, "CREATED_AT_DESC", userId=user_id)

    def get_review_by_id(self, review_id: int) -> Review:
        return self._fetch_one(queries.REVIEW_BY_ID, {"id": review_id}, ("Review",), Review)
