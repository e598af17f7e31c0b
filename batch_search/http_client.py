"""HTTP client factory.

All queries of a batch share one ``httpx.AsyncClient``; its connection pool
is safe to use from many in-flight requests on the same event loop.
"""
from __future__ import annotations

import logging
from functools import lru_cache

import httpx

from .config import settings

logger = logging.getLogger(__name__)


def create_client(timeout: float | None = None) -> httpx.AsyncClient:
    timeout = settings.http_timeout_seconds if timeout is None else timeout
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True)


@lru_cache(maxsize=1)
def get_client() -> httpx.AsyncClient:
    logger.info("Creating shared HTTP client for %s", settings.search_url)
    return create_client()


async def close_client() -> None:
    if get_client.cache_info().currsize == 0:
        return
    await get_client().aclose()
    get_client.cache_clear()
