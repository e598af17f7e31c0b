"""Terminal client that runs a batch of product searches concurrently."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Iterable, List

from batch_search.config import settings
from batch_search.http_client import create_client
from batch_search.models import QueryResult
from batch_search.runner import run_queries

DEFAULT_QUERIES = ["laptop", "food", "hd", "perfume"]
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


def read_queries(file_path: Path) -> List[str]:
    with file_path.open("r", encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip()]


def pretty_print_result(result: QueryResult, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps(result.to_dict()))
        return
    color = GREEN if result.ok else RED
    print(f"{color}{result}{RESET}")


async def run_batch(queries: List[str], url: str | None = None, as_json: bool = False) -> int:
    failures = 0
    async with create_client() as client:
        async with run_queries(client, queries, url=url) as results:
            async for result in results:
                if not result.ok:
                    failures += 1
                pretty_print_result(result, as_json=as_json)
    return failures


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run product searches, up to 10 at a time")
    parser.add_argument("queries", nargs="*", help="Query strings. Defaults to a small demo set.")
    parser.add_argument("--batch", type=Path, help="File with one query per line")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per result")
    parser.add_argument("--url", default=None, help=f"Search endpoint (default {settings.search_url})")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(level=logging.getLevelName(settings.log_level.upper()), format=LOG_FORMAT)

    queries = list(args.queries)
    if args.batch:
        queries.extend(read_queries(args.batch))
    if not queries:
        queries = list(DEFAULT_QUERIES)

    failures = asyncio.run(run_batch(queries, url=args.url, as_json=args.json))
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
