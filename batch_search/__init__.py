"""Bounded concurrent product search over many queries."""
from __future__ import annotations

from .errors import DecodeError, HttpStatusError, QueryError, TransportError
from .executor import execute
from .models import Product, QueryResult, SearchResponse
from .runner import MAX_CONCURRENCY, QueryStream, run_queries

__all__ = [
    "MAX_CONCURRENCY",
    "DecodeError",
    "HttpStatusError",
    "Product",
    "QueryError",
    "QueryResult",
    "QueryStream",
    "SearchResponse",
    "TransportError",
    "execute",
    "run_queries",
]
