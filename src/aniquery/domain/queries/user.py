"""GraphQL documents for users."""

USER_FIELDS = """
    id
    name
    about
    avatar { large medium }
    bannerImage
    siteUrl
    createdAt
    updatedAt
"""

USER_BY_ID = """
query ($id: Int) {
  User(id: $id) {%s}
}
""" % USER_FIELDS

USER_BY_NAME = """
query ($name: String) {
  User(name: $name) {%s}
}
""" % USER_FIELDS

VIEWER = """
query {
  Viewer {%s    unreadNotificationCount
  }
}
""" % USER_FIELDS

USER_SEARCH = """
query ($search: String, $page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    users(search: $search, sort: SEARCH_MATCH) {%s}
  }
}
""" % USER_FIELDS

USER_PAGE_BY_SORT = """
query ($page: Int, $perPage: Int, $sort: [UserSort]) {
  Page(page: $page, perPage: $perPage) {
    users(sort: $sort) {%s}
  }
}
""" % USER_FIELDS

USER_SUMMARY_FIELDS = """
      id
      name
      avatar { large medium }
"""
