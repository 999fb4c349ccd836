"""Character and staff models."""

from __future__ import annotations

from typing import List, Optional

from aniquery.domain.models.media import CatalogModel, FuzzyDate


class PersonName(CatalogModel):
    first: Optional[str] = None
    middle: Optional[str] = None
    last: Optional[str] = None
    full: Optional[str] = None
    native: Optional[str] = None
    user_preferred: Optional[str] = None

    @property
    def display(self) -> str:
        return self.full or self.user_preferred or self.native or "Unknown Name"


class PersonImage(CatalogModel):
    large: Optional[str] = None
    medium: Optional[str] = None


class Character(CatalogModel):
    id: int
    name: Optional[PersonName] = None
    image: Optional[PersonImage] = None
    description: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[FuzzyDate] = None
    age: Optional[str] = None
    blood_type: Optional[str] = None
    favourites: Optional[int] = None
    site_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name.display if self.name else "Unknown Name"


class Staff(CatalogModel):
    id: int
    name: Optional[PersonName] = None
    image: Optional[PersonImage] = None
    description: Optional[str] = None
    primary_occupations: Optional[List[str]] = None
    gender: Optional[str] = None
    date_of_birth: Optional[FuzzyDate] = None
    home_town: Optional[str] = None
    language_v2: Optional[str] = None
    favourites: Optional[int] = None
    site_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name.display if self.name else "Unknown Name"
