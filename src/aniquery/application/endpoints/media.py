"""Anime and manga accessors."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Union

from aniquery.application.endpoints.base import Endpoint, page_variables
from aniquery.domain.models.media import Media, MediaSeason, MediaType
from aniquery.domain.queries import media as queries

RELEASING = "RELEASING"
FINISHED = "FINISHED"

if TYPE_CHECKING:
    from aniquery.application.client import CatalogClient


class MediaEndpoint(Endpoint):
    """Accessor for one media type (anime or manga)."""

    def __init__(self, client: "CatalogClient", media_type: MediaType):
        super().__init__(client)
        self.media_type = media_type

    def _by_sort(self, sort: str, page: int, per_page: int, status: Optional[str] = None) -> List[Media]:
        variables = page_variables(page, per_page, type=self.media_type.value, sort=[sort], status=status)
        return self._fetch_page(queries.MEDIA_PAGE_BY_SORT, variables, ("Page", "media"), Media)

    def get_popular(self, page: int = 1, per_page: int = 10) -> List[Media]:
        return self._by_sort("POPULARITY_DESC", page, per_page)

    def get_trending(self, page: int = 1, per_page: int = 10) -> List[Media]:
        return self._by_sort("TRENDING_DESC", page, per_page)

    def get_top_rated(self, page: int = 1, per_page: int = 10) -> List[Media]:
        return self._by_sort("SCORE_DESC", page, per_page)

    def get_by_id(self, media_id: int) -> Media:
        variables = {"id": media_id, "type": self.media_type.value}
        return self._fetch_one(queries.MEDIA_BY_ID, variables, ("Media",), Media)

    def search(self, text: str, page: int = 1, per_page: int = 10) -> List[Media]:
        variables = page_variables(page, per_page, search=text, type=self.media_type.value)
        return self._fetch_page(queries.MEDIA_SEARCH, variables, ("Page", "media"), Media)


class AnimeEndpoint(MediaEndpoint):
    def __init__(self, client: "CatalogClient"):
        super().__init__(client, MediaType.ANIME)

    def get_by_season(
        self,
        season: Union[MediaSeason, str],
        year: int,
        page: int = 1,
        per_page: int = 10,
    ) -> List[Media]:
        """Most popular anime of a season, e.g. ``get_by_season("FALL", 2024)``."""
        season_value = MediaSeason(season.upper() if isinstance(season, str) else season).value
        variables = page_variables(page, per_page, season=season_value, seasonYear=year)
        return self._fetch_page(queries.MEDIA_BY_SEASON, variables, ("Page", "media"), Media)

    def get_airing(self, page: int = 1, per_page: int = 10) -> List[Media]:
        """Currently airing anime, most popular first."""
        return self._by_sort("POPULARITY_DESC", page, per_page, status=RELEASING)


class MangaEndpoint(MediaEndpoint):
    def __init__(self, client: "CatalogClient"):
        super().__init__(client, MediaType.MANGA)

    def get_releasing(self, page: int = 1, per_page: int = 10) -> List[Media]:
        return self._by_sort("POPULARITY_DESC", page, per_page, status=RELEASING)

    def get_completed(self, page: int = 1, per_page: int = 10) -> List[Media]:
        return self._by_sort("POPULARITY_DESC", page, per_page, status=FINISHED)
