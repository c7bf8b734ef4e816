"""
Centralised settings for the feed service (env-first, code-light).
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Tuple

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://www.theverge.com/rss/index.xml"
DEFAULT_SOURCE_LABEL = "The Verge"


@dataclass(frozen=True)
class FeedSettings:
    feed_url: str
    allowed_urls: Tuple[str, ...]
    source_label: str
    http_timeout: int
    retry_backoff_ms: int
    user_agent: str


def _int_from_env(key: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(raw)
        return value if value >= minimum else default
    except Exception:
        logger.warning("Invalid int value for %s=%s; using default %s", key, raw, default)
        return default


def _parse_allowed(raw: str | None, feed_url: str) -> Tuple[str, ...]:
    allowed = [feed_url]
    if raw:
        for token in raw.split(","):
            token = token.strip()
            if token and token not in allowed:
                allowed.append(token)
    return tuple(allowed)


def load_settings() -> FeedSettings:
    feed_url = (os.getenv("FEED_URL") or "").strip() or DEFAULT_FEED_URL
    return FeedSettings(
        feed_url=feed_url,
        allowed_urls=_parse_allowed(os.getenv("FEED_ALLOWED_URLS"), feed_url),
        source_label=os.getenv("FEED_SOURCE_LABEL") or DEFAULT_SOURCE_LABEL,
        http_timeout=_int_from_env("FEED_HTTP_TIMEOUT", 15),
        retry_backoff_ms=_int_from_env("FEED_RETRY_BACKOFF_MS", 400, minimum=0),
        user_agent=os.getenv("FEED_USER_AGENT") or "TechNewsApi/1.0",
    )
