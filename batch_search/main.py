"""FastAPI application exposing the batch search runner."""
from __future__ import annotations

import json
import logging
from typing import AsyncIterator, List

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import StreamingResponse

from .config import settings
from .http_client import close_client, get_client
from .runner import MAX_CONCURRENCY, run_queries

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

# ``force=True`` replaces uvicorn's default handlers so module loggers share
# one format.
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)
logger.info("Logging configured at %s", settings.log_level.upper())

app = FastAPI(title="Batch Product Search Service")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    await close_client()


@app.get("/health")
async def health() -> dict:
    return {
        "status": "ok",
        "search_url": settings.search_url,
        "max_concurrency": MAX_CONCURRENCY,
    }


async def _ndjson(queries: List[str]) -> AsyncIterator[bytes]:
    async with run_queries(get_client(), queries) as results:
        async for result in results:
            yield (json.dumps(result.to_dict()) + "\n").encode("utf-8")


@app.get("/search/batch")
async def search_batch(q: List[str] = Query(..., description="Search queries")) -> StreamingResponse:
    if any(not item.strip() for item in q):
        raise HTTPException(status_code=400, detail="Queries must not be empty")
    logger.info("batch request queries=%s", len(q))
    return StreamingResponse(_ndjson(q), media_type="application/x-ndjson")
