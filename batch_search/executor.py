"""Single query execution against the product search endpoint."""
from __future__ import annotations

import logging
from time import perf_counter

import httpx
from pydantic import ValidationError

from .config import settings
from .errors import DecodeError, HttpStatusError, TransportError
from .models import QueryResult, decode_response

logger = logging.getLogger(__name__)


async def execute(
    client: httpx.AsyncClient,
    query: str,
    *,
    index: int = 0,
    url: str | None = None,
) -> QueryResult:
    """Run one search request, e.g. ``GET https://dummyjson.com/products/search?q=laptop``.

    Transport, status and decode failures are returned inside the result
    instead of being raised.
    """
    endpoint = url or settings.search_url
    started = perf_counter()
    try:
        response = await client.get(endpoint, params={"q": query})
    except httpx.HTTPError as exc:
        logger.warning("query failed q=%r transport error: %s", query, exc)
        error = TransportError(str(exc) or type(exc).__name__)
        error.__cause__ = exc
        return QueryResult(index=index, query=query, error=error)

    if not response.is_success:
        logger.warning("query failed q=%r status=%s", query, response.status_code)
        return QueryResult(
            index=index,
            query=query,
            error=HttpStatusError(response.status_code, response.reason_phrase),
        )

    try:
        payload = decode_response(response.content)
    except ValidationError as exc:
        logger.warning("query failed q=%r undecodable body: %s", query, exc.error_count())
        error = DecodeError(f"invalid search payload: {exc.error_count()} error(s)", response.status_code)
        error.__cause__ = exc
        return QueryResult(index=index, query=query, error=error)

    logger.debug(
        "query done q=%r status=%s products=%s total=%s took=%.2fms",
        query,
        response.status_code,
        len(payload.products),
        payload.total,
        (perf_counter() - started) * 1000,
    )
    return QueryResult(index=index, query=query, response=payload)
