"""Studio, airing schedule, review and recommendation models."""

from __future__ import annotations

from typing import Optional

from aniquery.domain.models.media import AiringEpisode, CatalogModel, Media, MediaType
from aniquery.domain.models.user import User


class Studio(CatalogModel):
    id: int
    name: str
    is_animation_studio: Optional[bool] = None
    site_url: Optional[str] = None
    favourites: Optional[int] = None
    is_favourite: Optional[bool] = None

    @property
    def display_name(self) -> str:
        return self.name


class AiringSchedule(AiringEpisode):
    """Scheduled episode with a summary of the media it belongs to."""

    media: Optional[Media] = None


class Review(CatalogModel):
    """User review of a media entry.

    ``rating`` counts the users who found the review helpful out of
    ``rating_amount``; ``score`` is the reviewer's own 0-100 score.
    """

    id: int
    user_id: Optional[int] = None
    media_id: Optional[int] = None
    media_type: Optional[MediaType] = None
    summary: Optional[str] = None
    body: Optional[str] = None
    rating: Optional[int] = None
    rating_amount: Optional[int] = None
    user_rating: Optional[str] = None
    score: Optional[int] = None
    site_url: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    user: Optional[User] = None
    media: Optional[Media] = None


class Recommendation(CatalogModel):
    """A user suggesting ``media_recommendation`` to fans of ``media``."""

    id: int
    rating: Optional[int] = None
    user_rating: Optional[str] = None
    media: Optional[Media] = None
    media_recommendation: Optional[Media] = None
    user: Optional[User] = None
