"""Media (anime and manga) models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base for response records: camelCase aliases, unknown fields ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class MediaType(str, Enum):
    ANIME = "ANIME"
    MANGA = "MANGA"


class MediaSeason(str, Enum):
    WINTER = "WINTER"
    SPRING = "SPRING"
    SUMMER = "SUMMER"
    FALL = "FALL"


class FuzzyDate(CatalogModel):
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None

    def __str__(self) -> str:
        parts = [str(p) for p in (self.year, self.month, self.day) if p is not None]
        return "-".join(parts) or "?"


class MediaTitle(CatalogModel):
    romaji: Optional[str] = None
    english: Optional[str] = None
    native: Optional[str] = None
    user_preferred: Optional[str] = None

    @property
    def display(self) -> str:
        return self.english or self.romaji or self.user_preferred or self.native or "Unknown Title"


class CoverImage(CatalogModel):
    extra_large: Optional[str] = None
    large: Optional[str] = None
    medium: Optional[str] = None
    color: Optional[str] = None


class AiringEpisode(CatalogModel):
    """One scheduled episode; ``airing_at`` is a unix timestamp."""

    id: int
    airing_at: Optional[int] = None
    time_until_airing: Optional[int] = None
    episode: Optional[int] = None
    media_id: Optional[int] = None


class Media(CatalogModel):
    """Anime or manga entry.

    Episode fields are only filled for anime, chapter/volume fields for manga.
    Enum-like fields (format, status, season) are kept as the raw strings the
    service sends.
    """

    id: int
    type: Optional[MediaType] = None
    title: Optional[MediaTitle] = None
    description: Optional[str] = None
    format: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[FuzzyDate] = None
    end_date: Optional[FuzzyDate] = None
    season: Optional[str] = None
    season_year: Optional[int] = None
    episodes: Optional[int] = None
    duration: Optional[int] = None
    chapters: Optional[int] = None
    volumes: Optional[int] = None
    genres: Optional[List[str]] = None
    average_score: Optional[int] = None
    mean_score: Optional[int] = None
    popularity: Optional[int] = None
    favourites: Optional[int] = None
    is_adult: Optional[bool] = None
    next_airing_episode: Optional[AiringEpisode] = None
    cover_image: Optional[CoverImage] = None
    banner_image: Optional[str] = None
    site_url: Optional[str] = None

    @property
    def display_title(self) -> str:
        return self.title.display if self.title else "Unknown Title"
