"""Shared fixtures: a fake search API behind ``httpx.MockTransport``."""
from __future__ import annotations

import asyncio
import json
from typing import Callable, Dict, List

import httpx
import pytest

SEARCH_URL = "https://search.test/products/search"

PERFUME_BODY = {
    "total": 1,
    "skip": 0,
    "limit": 1,
    "products": [{"id": 11, "title": "perfume Oil", "category": "fragrances"}],
}


def search_body(query: str, ids: List[int]) -> Dict:
    return {
        "total": len(ids),
        "skip": 0,
        "limit": len(ids),
        "products": [{"id": pid, "title": f"{query} {pid}", "category": "misc"} for pid in ids],
    }


class FakeSearchApi:
    """Answers ``?q=<term>`` from a table; unknown terms get an empty page.

    ``delays`` maps a term to seconds to wait before answering and ``errors``
    maps a term to a status code or an exception to raise.
    """

    def __init__(self) -> None:
        self.bodies: Dict[str, Dict] = {}
        self.delays: Dict[str, float] = {}
        self.errors: Dict[str, object] = {}
        self.seen: List[str] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        query = request.url.params.get("q", "")
        self.seen.append(query)
        delay = self.delays.get(query)
        if delay:
            await asyncio.sleep(delay)
        error = self.errors.get(query)
        if isinstance(error, Exception):
            raise error
        if isinstance(error, int):
            return httpx.Response(error, json={"message": "failure"})
        body = self.bodies.get(query, search_body(query, []))
        return httpx.Response(200, content=json.dumps(body).encode("utf-8"))


@pytest.fixture
def fake_api() -> FakeSearchApi:
    return FakeSearchApi()


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    def factory(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
