"""Airing schedule accessors.

Time windows are unix timestamps in seconds. "Today" is the current UTC day.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable, List, Optional

from aniquery.application.endpoints.base import Endpoint, page_variables
from aniquery.domain.models.social import AiringSchedule
from aniquery.domain.queries import airing as queries

if TYPE_CHECKING:
    from aniquery.application.client import CatalogClient

SECONDS_PER_DAY = 86400


class AiringEndpoint(Endpoint):
    """Accessor for episode airing schedules.

    Args:
        client: Owning client
        clock: Returns the current unix time; injectable for tests
    """

    def __init__(self, client: "CatalogClient", clock: Callable[[], float] = time.time):
        super().__init__(client)
        self.clock = clock

    def _now(self) -> int:
        return int(self.clock())

    def _schedules(self, page: int, per_page: int, **filters) -> List[AiringSchedule]:
        variables = page_variables(page, per_page, **filters)
        return self._fetch_page(queries.AIRING_PAGE, variables, ("Page", "airingSchedules"), AiringSchedule)

    def get_upcoming_episodes(self, page: int = 1, per_page: int = 10) -> List[AiringSchedule]:
        """Episodes airing after now, soonest first."""
        return self._schedules(page, per_page, airingAtGreater=self._now(), sort=["TIME"])

    def get_recently_aired(self, page: int = 1, per_page: int = 10) -> List[AiringSchedule]:
        """Episodes that aired before now, latest first."""
        return self._schedules(page, per_page, airingAtLesser=self._now(), sort=["TIME_DESC"])

    def get_today_episodes(self, page: int = 1, per_page: int = 10) -> List[AiringSchedule]:
        now = self._now()
        start = now - now % SECONDS_PER_DAY
        return self.get_episodes_in_range(start, start + SECONDS_PER_DAY, page, per_page)

    def get_episodes_in_range(
        self, start: int, end: int, page: int = 1, per_page: int = 10
    ) -> List[AiringSchedule]:
        """Episodes airing strictly between ``start`` and ``end``."""
        if end <= start:
            raise ValueError("end must be after start")
        return self._schedules(page, per_page, airingAtGreater=start, airingAtLesser=end, sort=["TIME"])

    def get_schedule_for_media(self, media_id: int, page: int = 1, per_page: int = 10) -> List[AiringSchedule]:
        return self._schedules(page, per_page, mediaId=media_id, sort=["TIME"])

    def get_next_episode(self, media_id: int) -> Optional[AiringSchedule]:
        """Next unaired episode of a media, or None when nothing is scheduled."""
        upcoming = self._schedules(1, 1, mediaId=media_id, airingAtGreater=self._now(), sort=["TIME"])
        return upcoming[0] if upcoming else None

    def get_schedule_by_id(self, schedule_id: int) -> AiringSchedule:
        return self._fetch_one(queries.AIRING_BY_ID, {"id": schedule_id}, ("AiringSchedule",), AiringSchedule)
