"""Response models"""

from aniquery.domain.models.media import (
    AiringEpisode,
    CoverImage,
    FuzzyDate,
    Media,
    MediaSeason,
    MediaTitle,
    MediaType,
)
from aniquery.domain.models.people import Character, PersonImage, PersonName, Staff
from aniquery.domain.models.social import AiringSchedule, Recommendation, Review, Studio
from aniquery.domain.models.user import User, UserAvatar

__all__ = [
    "AiringEpisode",
    "AiringSchedule",
    "Character",
    "CoverImage",
    "FuzzyDate",
    "Media",
    "MediaSeason",
    "MediaTitle",
    "MediaType",
    "PersonImage",
    "PersonName",
    "Recommendation",
    "Review",
    "Staff",
    "Studio",
    "User",
    "UserAvatar",
]
