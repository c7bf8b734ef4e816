"""
Fetch stage: resolve the source, download + parse with one retry, normalize.
"""
from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import requests

from crawler.infra.http import HttpFetcher
from crawler.ingesters.rss_base import FeedParseError, parse_feed_items
from crawler.schemas.models import FeedResponse
from technews.errors import FetchError, status_of
from technews.normalizer import normalize_items
from technews.params import DEFAULT_LIMIT
from technews.security import redact_secrets
from technews.settings import FeedSettings
from technews.sources import resolve_source
from technews.timeutil import utc_now_iso

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2
RETRYABLE_ERRORS = (requests.RequestException, FeedParseError)


class FeedFetcher:
    """
    One instance per process is fine: it holds no per-request state, only the
    settings snapshot and an HTTP session.
    """

    def __init__(
        self,
        settings: FeedSettings,
        http: Optional[HttpFetcher] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings
        self.http = http or HttpFetcher(user_agent=settings.user_agent, timeout=settings.http_timeout)
        self._sleep = sleep

    def resolve(self, candidate: Optional[str]) -> str:
        return resolve_source(candidate, self.settings.allowed_urls, self.settings.feed_url)

    def fetch(
        self,
        source_url: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
        since: Optional[datetime] = None,
    ) -> FeedResponse:
        url = self.resolve(source_url)
        logger.info("Fetching feed %s (limit=%s, since=%s)", redact_secrets(url), limit, since)
        items = self._fetch_items(url)
        articles = normalize_items(items, limit, since, source=self.settings.source_label)
        logger.info("Feed %s: %d raw items, %d returned", redact_secrets(url), len(items), len(articles))
        return FeedResponse(
            source=self.settings.source_label,
            fetched_at=utc_now_iso(),
            articles=articles,
        )

    def _fetch_items(self, url: str) -> List[Dict[str, Any]]:
        remaining = MAX_ATTEMPTS
        while True:
            remaining -= 1
            try:
                response = self.http.fetch(url)
                return parse_feed_items(response.content)
            except RETRYABLE_ERRORS as exc:
                if remaining > 0:
                    backoff = self.settings.retry_backoff_ms / 1000.0
                    logger.warning(
                        "Feed fetch failed for %s: %s; retrying in %.1fs",
                        redact_secrets(url),
                        redact_secrets(str(exc)),
                        backoff,
                    )
                    self._sleep(backoff)
                    continue
                logger.error("Feed fetch failed for %s after %d attempts: %s", redact_secrets(url), MAX_ATTEMPTS, redact_secrets(str(exc)))
                raise FetchError(
                    f"Failed to fetch or parse {self.settings.source_label} RSS",
                    detail=redact_secrets(str(exc)),
                    status=status_of(exc),
                    attempts=MAX_ATTEMPTS,
                ) from exc
