"""GraphQL documents for recommendations."""

from aniquery.domain.queries.media import MEDIA_SUMMARY_FIELDS
from aniquery.domain.queries.user import USER_SUMMARY_FIELDS

RECOMMENDATION_FIELDS = """
    id
    rating
    userRating
    media {%s    }
    mediaRecommendation {%s    }
    user {%s    }
""" % (MEDIA_SUMMARY_FIELDS, MEDIA_SUMMARY_FIELDS, USER_SUMMARY_FIELDS)

RECOMMENDATION_PAGE = """
query ($page: Int, $perPage: Int, $mediaId: Int, $sort: [RecommendationSort]) {
  Page(page: $page, perPage: $perPage) {
    recommendations(mediaId: $mediaId, sort: $sort) {%s}
  }
}
""" % RECOMMENDATION_FIELDS

RECOMMENDATION_BY_ID = """
query ($id: Int) {
  Recommendation(id: $id) {%s}
}
""" % RECOMMENDATION_FIELDS
