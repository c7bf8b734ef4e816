"""
Public API for the feed service.
"""
from __future__ import annotations

from typing import Any, Optional

from crawler.schemas.models import FeedResponse
from technews.fetcher import FeedFetcher
from technews.params import parse_limit, parse_since
from technews.settings import FeedSettings, load_settings

SETTINGS: FeedSettings = load_settings()
_fetcher = FeedFetcher(SETTINGS)


def get_latest(limit: Any = None, since: Any = None, url: Optional[str] = None) -> FeedResponse:
    """
    Fetch the feed and return the normalized envelope.

    ``limit`` and ``since`` accept raw query-string values; invalid ones fall
    back to defaults. Raises technews.errors.FetchError when the feed cannot
    be fetched or parsed after the retry.
    """
    return _fetcher.fetch(source_url=url, limit=parse_limit(limit), since=parse_since(since))
