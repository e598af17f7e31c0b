"""Per-query failure types captured inside ``QueryResult``."""
from __future__ import annotations


class QueryError(Exception):
    """Base class for a failed query; carries the HTTP status when one exists."""

    kind = "error"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"kind": self.kind, "status_code": self.status_code, "message": str(self)}


class TransportError(QueryError):
    """No response was obtained (connection, DNS, timeout, redirects)."""

    kind = "transport"


class HttpStatusError(QueryError):
    kind = "http_status"

    def __init__(self, status_code: int, reason: str = "") -> None:
        message = f"HTTP {status_code}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message, status_code)


class DecodeError(QueryError):
    """Response body did not match the expected search payload."""

    kind = "decode"
