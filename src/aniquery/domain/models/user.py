"""User models."""

from __future__ import annotations

from typing import Optional

from aniquery.domain.models.media import CatalogModel


class UserAvatar(CatalogModel):
    large: Optional[str] = None
    medium: Optional[str] = None


class User(CatalogModel):
    id: int
    name: str
    about: Optional[str] = None
    avatar: Optional[UserAvatar] = None
    banner_image: Optional[str] = None
    unread_notification_count: Optional[int] = None
    site_url: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
