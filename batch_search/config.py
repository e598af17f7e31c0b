"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    search_url: str = _get_env("SEARCH_URL", "https://dummyjson.com/products/search")
    http_timeout_seconds: float = float(_get_env("HTTP_TIMEOUT_SECONDS", "10"))
    log_level: str = _get_env("LOG_LEVEL", "INFO")


settings = Settings()
