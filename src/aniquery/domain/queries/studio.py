"""GraphQL documents for studios."""

STUDIO_FIELDS = """
    id
    name
    isAnimationStudio
    siteUrl
    favourites
    isFavourite
"""

STUDIO_POPULAR = """
query ($page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    studios(sort: FAVOURITES_DESC) {%s}
  }
}
""" % STUDIO_FIELDS

STUDIO_BY_ID = """
query ($id: Int) {
  Studio(id: $id) {%s}
}
""" % STUDIO_FIELDS

STUDIO_SEARCH = """
query ($search: String, $page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    studios(search: $search, sort: SEARCH_MATCH) {%s}
  }
}
""" % STUDIO_FIELDS
