"""
Failure taxonomy for the fetch stage.
"""
from __future__ import annotations

from typing import Optional

import requests

from crawler.schemas.models import ErrorResponse
from technews.timeutil import utc_now_iso

DEFAULT_ERROR_STATUS = 500
# Upstream 4xx answers surface as a bad gateway; the upstream code stays in the detail text.
UPSTREAM_CLIENT_ERROR_STATUS = 502


class FetchError(Exception):
    """Fetching or parsing the feed failed after every allowed attempt."""

    def __init__(self, message: str, detail: str = "", status: Optional[int] = None, attempts: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or message
        self.status = status
        self.attempts = attempts

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.message,
            detail=self.detail,
            fetched_at=utc_now_iso(),
            status=self.status or DEFAULT_ERROR_STATUS,
        )


def status_of(exc: BaseException) -> Optional[int]:
    """Best-effort HTTP status carried by an underlying error."""
    status = getattr(exc, "status", None)
    if isinstance(status, int):
        return status
    if isinstance(exc, requests.RequestException) and exc.response is not None:
        status = exc.response.status_code
        if 400 <= status < 500:
            return UPSTREAM_CLIENT_ERROR_STATUS
        return status
    return None
