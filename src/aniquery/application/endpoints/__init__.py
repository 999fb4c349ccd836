"""Endpoint accessors"""

from aniquery.application.endpoints.airing import AiringEndpoint
from aniquery.application.endpoints.media import AnimeEndpoint, MangaEndpoint, MediaEndpoint
from aniquery.application.endpoints.people import CharacterEndpoint, StaffEndpoint
from aniquery.application.endpoints.recommendation import RecommendationEndpoint
from aniquery.application.endpoints.review import ReviewEndpoint
from aniquery.application.endpoints.studio import StudioEndpoint
from aniquery.application.endpoints.user import UserEndpoint

__all__ = [
    "AiringEndpoint",
    "AnimeEndpoint",
    "CharacterEndpoint",
    "MangaEndpoint",
    "MediaEndpoint",
    "RecommendationEndpoint",
    "ReviewEndpoint",
    "StaffEndpoint",
    "StudioEndpoint",
    "UserEndpoint",
]
