"""Pydantic models for the search payload and the per-query result."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict

from .errors import QueryError


class Product(BaseModel):
    """Single product, e.g. ``{"id": 11, "title": "perfume Oil", "category": "fragrances", ...}``."""

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    id: int
    title: str
    category: str


class SearchResponse(BaseModel):
    """Search payload, e.g. ``{"products": [...], "total": 5, "skip": 0, "limit": 5}``."""

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    total: int
    skip: int
    limit: int
    products: List[Product]


def decode_response(body: bytes) -> SearchResponse:
    return SearchResponse.model_validate_json(body)


@dataclass(frozen=True)
class QueryResult:
    """A query string paired with what the API returned for it.

    ``index`` is the position of ``query`` in the submitted batch. Exactly one
    of ``response`` and ``error`` is set.
    """

    index: int
    query: str
    response: SearchResponse | None = None
    error: QueryError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status_code(self) -> int | None:
        return self.error.status_code if self.error is not None else None

    def product_ids(self) -> List[int]:
        if self.response is None:
            return []
        return [product.id for product in self.response.products]

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"index": self.index, "query": self.query, "ok": self.ok}
        if self.response is not None:
            payload["response"] = self.response.model_dump()
        if self.error is not None:
            payload["error"] = self.error.to_dict()
        return payload

    def __str__(self) -> str:
        prefix = f"[{self.query:^10}] => "
        if self.error is not None:
            return f"{prefix}Error: {self.status_code}"
        return f"{prefix}{self.product_ids()}"
