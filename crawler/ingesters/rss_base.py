"""
Shared helpers for RSS/Atom ingestion.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

import feedparser

logger = logging.getLogger(__name__)


class FeedParseError(Exception):
    """The payload could not be read as a feed."""


def parse_feed_items(feed_content: bytes) -> List[Dict[str, Any]]:
    """
    Parse raw feed bytes into loosely-typed item mappings, in document order.

    feedparser tolerates a lot (``bozo`` is set for recoverable problems);
    the payload is rejected only when it is malformed and yielded nothing.
    """
    feed = feedparser.parse(feed_content)
    entries = list(getattr(feed, "entries", []) or [])
    if not entries and not getattr(feed, "version", ""):
        raise FeedParseError(f"Not a recognised feed: {getattr(feed, 'bozo_exception', 'no entries')}")
    if getattr(feed, "bozo", False):
        reason = getattr(feed, "bozo_exception", None)
        if not entries:
            raise FeedParseError(f"Malformed feed: {reason}")
        logger.debug("Feed parsed with recoverable issues: %s", reason)
    return [_entry_to_item(entry) for entry in entries]


def _entry_to_item(entry: Any) -> Dict[str, Any]:
    item = dict(entry)
    # FeedParserDict derives ``enclosures`` from links on access; it is not a stored key.
    enclosures = entry.get("enclosures") if hasattr(entry, "get") else None
    if enclosures:
        item["enclosures"] = [dict(enc) for enc in enclosures]
    return item
