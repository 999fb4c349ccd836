"""GraphQL documents for airing schedules.

Filters left out of the variables are sent as null, which the service
treats as "not filtered".
"""

from aniquery.domain.queries.media import MEDIA_SUMMARY_FIELDS

AIRING_FIELDS = """
    id
    airingAt
    timeUntilAiring
    episode
    mediaId
    media {%s    }
""" % MEDIA_SUMMARY_FIELDS

AIRING_PAGE = """
query (
  $page: Int
  $perPage: Int
  $mediaId: Int
  $airingAtGreater: Int
  $airingAtLesser: Int
  $sort: [AiringSort]
) {
  Page(page: $page, perPage: $perPage) {
    airingSchedules(
      mediaId: $mediaId
      airingAt_greater: $airingAtGreater
      airingAt_lesser: $airingAtLesser
      sort: $sort
    ) {%s}
  }
}
""" % AIRING_FIELDS

AIRING_BY_ID = """
query ($id: Int) {
  AiringSchedule(id: $id) {%s}
}
""" % AIRING_FIELDS
