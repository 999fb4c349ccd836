"""Shared plumbing for endpoint accessors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from aniquery.domain.errors import NotFoundError, ParseError

if TYPE_CHECKING:
    from aniquery.application.client import CatalogClient


M = TypeVar("M", bound=BaseModel)


def _dig(data: Dict[str, Any], path: Sequence[str]) -> Any:
    node: Any = data
    for key in path:
        if not isinstance(node, dict) or key not in node:
            raise ParseError(f"Response is missing '{'.'.join(path)}'")
        node = node[key]
    return node


class Endpoint:
    """Base class for accessors: run a query, map the JSON into models."""

    def __init__(self, client: "CatalogClient"):
        self.client = client

    def _fetch_one(
        self,
        document: str,
        variables: Optional[Dict[str, Any]],
        path: Sequence[str],
        model: Type[M],
    ) -> M:
        data = self.client.query(document, variables)
        node = _dig(data, path)
        if node is None:
            raise NotFoundError(f"{path[-1]} not found", details={"variables": variables or {}})
        try:
            return model.model_validate(node)
        except ValidationError as e:
            raise ParseError(f"Unexpected {model.__name__} shape: {e}") from e

    def _fetch_page(
        self,
        document: str,
        variables: Optional[Dict[str, Any]],
        path: Sequence[str],
        model: Type[M],
    ) -> List[M]:
        data = self.client.query(document, variables)
        items = _dig(data, path)
        if items is None:
            return []
        if not isinstance(items, list):
            raise ParseError(f"Expected a list at '{'.'.join(path)}'")
        try:
            return [model.model_validate(item) for item in items]
        except ValidationError as e:
            raise ParseError(f"Unexpected {model.__name__} shape: {e}") from e


def page_variables(page: int, per_page: int, **extra: Any) -> Dict[str, Any]:
    if page < 1:
        raise ValueError("page must be >= 1")
    if not 1 <= per_page <= 50:
        raise ValueError("per_page must be between 1 and 50")
    variables: Dict[str, Any] = {"page": page, "perPage": per_page}
    variables.update({k: v for k, v in extra.items() if v is not None})
    return variables
