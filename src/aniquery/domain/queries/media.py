"""GraphQL documents for anime and manga."""

MEDIA_FIELDS = """
    id
    type
    title { romaji english native userPreferred }
    description
    format
    status
    startDate { year month day }
    endDate { year month day }
    season
    seasonYear
    episodes
    duration
    chapters
    volumes
    genres
    averageScore
    meanScore
    popularity
    favourites
    isAdult
    nextAiringEpisode { id airingAt timeUntilAiring episode mediaId }
    coverImage { extraLarge large medium color }
    bannerImage
    siteUrl
"""

# Nested media inside schedules, reviews and recommendations.
MEDIA_SUMMARY_FIELDS = """
      id
      type
      title { romaji english native userPreferred }
      format
      episodes
      averageScore
      coverImage { large medium }
      siteUrl
"""

_PAGE_BY_SORT = """
query ($page: Int, $perPage: Int, $type: MediaType, $sort: [MediaSort], $status: MediaStatus) {
  Page(page: $page, perPage: $perPage) {
    media(type: $type, sort: $sort, status: $status) {%s}
  }
}
"""

MEDIA_PAGE_BY_SORT = _PAGE_BY_SORT % MEDIA_FIELDS

MEDIA_BY_ID = """
query ($id: Int, $type: MediaType) {
  Media(id: $id, type: $type) {%s}
}
""" % MEDIA_FIELDS

MEDIA_SEARCH = """
query ($search: String, $page: Int, $perPage: Int, $type: MediaType) {
  Page(page: $page, perPage: $perPage) {
    media(search: $search, type: $type, sort: SEARCH_MATCH) {%s}
  }
}
""" % MEDIA_FIELDS

MEDIA_BY_SEASON = """
query ($season: MediaSeason, $seasonYear: Int, $page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    media(season: $season, seasonYear: $seasonYear, type: ANIME, sort: POPULARITY_DESC) {%s}
  }
}
""" % MEDIA_FIELDS
