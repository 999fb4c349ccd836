"""GraphQL documents for reviews."""

from aniquery.domain.queries.media import MEDIA_SUMMARY_FIELDS
from aniquery.domain.queries.user import USER_SUMMARY_FIELDS

REVIEW_FIELDS = """
    id
    userId
    mediaId
    mediaType
    summary
    body
    rating
    ratingAmount
    userRating
    score
    siteUrl
    createdAt
    updatedAt
    user {%s    }
    media {%s    }
""" % (USER_SUMMARY_FIELDS, MEDIA_SUMMARY_FIELDS)

REVIEW_PAGE = """
query ($page: Int, $perPage: Int, $mediaId: Int, $userId: Int, $sort: [ReviewSort]) {
  Page(page: $page, perPage: $perPage) {
    reviews(mediaId: $mediaId, userId: $userId, sort: $sort) {%s}
  }
}
""" % REVIEW_FIELDS

REVIEW_BY_ID = """
query ($id: Int) {
  Review(id: $id) {%s}
}
""" % REVIEW_FIELDS
