"""Catalog API configuration model."""

from typing import Optional

from pydantic import BaseModel, Field

ANILIST_API_URL = "https://graphql.anilist.co"


class ApiConfig(BaseModel):
    """Configuration for the catalog GraphQL endpoint.

    Attributes:
        url: GraphQL endpoint URL
        timeout: Per-request timeout in seconds
        token: Bearer token (None = from ANIQUERY_TOKEN / ANILIST_TOKEN env)
    """

    url: str = ANILIST_API_URL
    timeout: float = Field(30.0, gt=0.0)
    token: Optional[str] = None
