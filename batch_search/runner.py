"""Bounded, order-preserving fan-out of search queries."""
from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Generator, Sized
from time import perf_counter
from typing import AsyncIterator, Awaitable, Deque, Iterable, List, Protocol, Tuple

import httpx

from .executor import execute
from .models import QueryResult

logger = logging.getLogger(__name__)

MAX_CONCURRENCY = 10


class Executor(Protocol):
    def __call__(
        self,
        client: httpx.AsyncClient,
        query: str,
        *,
        index: int = 0,
        url: str | None = None,
    ) -> Awaitable[QueryResult]: ...


class QueryStream:
    """Async iterator over batch results.

    Hides the generator that drives the batch; iteration, ordering and
    laziness are exactly those of :func:`run_queries`.
    """

    def __init__(self, source: AsyncIterator[QueryResult], total: int | None = None) -> None:
        self._source = source
        self._total = total
        self._emitted = 0
        self._closed = False

    def __aiter__(self) -> "QueryStream":
        return self

    async def __anext__(self) -> QueryResult:
        result = await self._source.__anext__()
        self._emitted += 1
        return result

    def __length_hint__(self) -> int:
        if self._total is None or self._closed:
            return 0
        return self._total - self._emitted

    async def aclose(self) -> None:
        self._closed = True
        await self._source.aclose()

    async def __aenter__(self) -> "QueryStream":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def collect(self) -> List[QueryResult]:
        return [result async for result in self]


async def _buffered(
    client: httpx.AsyncClient,
    queries: Iterable[str],
    url: str | None,
    executor: Executor,
) -> AsyncIterator[QueryResult]:
    # Slots are kept in submission order. Only the head is awaited, so later
    # slots may finish first and wait in the deque until their turn.
    slots: Deque[Tuple[int, asyncio.Task]] = deque()
    source = enumerate(queries)
    exhausted = False
    emitted = 0
    failures = 0
    started = perf_counter()

    def fill() -> None:
        nonlocal exhausted
        while not exhausted and len(slots) < MAX_CONCURRENCY:
            try:
                index, query = next(source)
            except StopIteration:
                exhausted = True
                return
            task = asyncio.ensure_future(executor(client, query, index=index, url=url))
            slots.append((index, task))

    try:
        fill()
        while slots:
            index, task = slots[0]
            result = await task
            slots.popleft()
            logger.debug("emit index=%s q=%r ok=%s in_flight=%s", index, result.query, result.ok, len(slots))
            emitted += 1
            if not result.ok:
                failures += 1
            # The consumed slot is only refilled once the consumer asks for more.
            yield result
            fill()
    finally:
        if slots:
            logger.info("batch abandoned after %s results, cancelling %s in-flight queries", emitted, len(slots))
            for _, task in slots:
                task.cancel()
            await asyncio.gather(*(task for _, task in slots), return_exceptions=True)
        else:
            logger.info(
                "batch done results=%s failures=%s took=%.2fms",
                emitted,
                failures,
                (perf_counter() - started) * 1000,
            )
        if not exhausted:
            # Let a caller-supplied generator run its own cleanup.
            if isinstance(queries, Generator):
                queries.close()


def run_queries(
    client: httpx.AsyncClient,
    queries: Iterable[str],
    *,
    url: str | None = None,
    execute: Executor = execute,
) -> QueryStream:
    """Run each query that ``queries`` yields.

    At most ``MAX_CONCURRENCY`` queries are in flight at once, and results are
    emitted in the order the queries were given. Nothing is sent until the
    first result is requested.
    """
    total = len(queries) if isinstance(queries, Sized) else None
    return QueryStream(_buffered(client, queries, url, execute), total)
