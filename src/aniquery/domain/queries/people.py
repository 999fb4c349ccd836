"""GraphQL documents for characters and staff."""

CHARACTER_FIELDS = """
    id
    name { first middle last full native userPreferred }
    image { large medium }
    description
    gender
    dateOfBirth { year month day }
    age
    bloodType
    favourites
    siteUrl
"""

STAFF_FIELDS = """
    id
    name { first middle last full native userPreferred }
    image { large medium }
    description
    primaryOccupations
    gender
    dateOfBirth { year month day }
    homeTown
    languageV2
    favourites
    siteUrl
"""

CHARACTER_POPULAR = """
query ($page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    characters(sort: FAVOURITES_DESC) {%s}
  }
}
""" % CHARACTER_FIELDS

CHARACTER_BY_ID = """
query ($id: Int) {
  Character(id: $id) {%s}
}
""" % CHARACTER_FIELDS

CHARACTER_SEARCH = """
query ($search: String, $page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    characters(search: $search, sort: SEARCH_MATCH) {%s}
  }
}
""" % CHARACTER_FIELDS

STAFF_POPULAR = """
query ($page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    staff(sort: FAVOURITES_DESC) {%s}
  }
}
""" % STAFF_FIELDS

STAFF_BY_ID = """
query ($id: Int) {
  Staff(id: $id) {%s}
}
""" % STAFF_FIELDS

STAFF_SEARCH = """
query ($search: String, $page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    staff(search: $search, sort: SEARCH_MATCH) {%s}
  }
}
""" % STAFF_FIELDS

CHARACTER_BIRTHDAY = """
query ($page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    characters(isBirthday: true, sort: FAVOURITES_DESC) {%s}
  }
}
""" % CHARACTER_FIELDS

STAFF_BIRTHDAY = """
query ($page: Int, $perPage: Int) {
  Page(page: $page, perPage: $perPage) {
    staff(isBirthday: true, sort: FAVOURITES_DESC) {%s}
  }
}
""" % STAFF_FIELDS
