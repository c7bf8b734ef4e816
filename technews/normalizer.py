"""
Turns raw feed items into the sorted, filtered, paginated Article list.

Every step tolerates missing or odd item data: a degraded item still becomes
an Article with empty fields. Only the ``since`` bound ever drops items.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from bs4 import BeautifulSoup

from crawler.schemas.models import Article
from technews.settings import DEFAULT_SOURCE_LABEL
from technews.timeutil import from_struct_time, parse_timestamp, to_iso

logger = logging.getLogger(__name__)

# Probed in order; the first present field wins even if it fails to parse.
DATE_FIELDS = ("published", "updated", "created")
SNIPPET_FIELD = "summary"
BODY_FIELD = "content"

SUMMARY_MAX_CHARS = 280

_TAG_RUN_RE = re.compile(r"(?:<[^>]*>)+")
_ANGLE_RE = re.compile(r"[<>]")
_WHITESPACE_RE = re.compile(r"\s+")
_IMAGE_EXT_RE = re.compile(r"\.(?:jpe?g|png|gif|webp|svg)(?:\?.*)?$", re.IGNORECASE)


@dataclass
class _Entry:
    article: Article
    published_at: Optional[datetime]


def _present(value: Any) -> bool:
    return value is not None and value != "" and value != []


def extract_published_at(item: Mapping[str, Any]) -> Optional[datetime]:
    for field in DATE_FIELDS:
        value = item.get(field)
        if not _present(value):
            continue
        parsed = from_struct_time(item.get(f"{field}_parsed"))
        if parsed is None:
            parsed = parse_timestamp(value)
        return parsed
    return None


def _text_of(value: Any) -> str:
    """Flatten feedparser's ``content`` blocks (``[{"value": ...}]``) and plain strings."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return str(value.get("value") or "")
    if isinstance(value, (list, tuple)):
        return " ".join(_text_of(part) for part in value if part)
    return "" if value is None else str(value)


def clean_summary(raw: str) -> str:
    text = _TAG_RUN_RE.sub(" ", raw or "")
    text = _ANGLE_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text[:SUMMARY_MAX_CHARS]


def extract_summary(item: Mapping[str, Any]) -> str:
    for field in (SNIPPET_FIELD, BODY_FIELD):
        value = item.get(field)
        if _present(value):
            return clean_summary(_text_of(value))
    return ""


def _enclosures(item: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    found: List[Mapping[str, Any]] = []
    many = item.get("enclosures")
    if isinstance(many, (list, tuple)):
        found.extend(enc for enc in many if isinstance(enc, Mapping))
    single = item.get("enclosure")
    if isinstance(single, Mapping):
        found.append(single)
    return found


def _is_image_enclosure(url: str, media_type: str) -> bool:
    if media_type:
        return media_type.lower().startswith("image/")
    return bool(_IMAGE_EXT_RE.search(url))


def _first_img_src(html: str) -> str:
    if not html or "<img" not in html.lower():
        return ""
    soup = BeautifulSoup(html, "lxml")
    tag = soup.find("img", src=True)
    if tag is None:
        return ""
    return str(tag["src"]).strip()


def extract_image(item: Mapping[str, Any]) -> str:
    for enc in _enclosures(item):
        url = str(enc.get("url") or enc.get("href") or "").strip()
        if url and _is_image_enclosure(url, str(enc.get("type") or "").strip()):
            return url
    for field in (BODY_FIELD, SNIPPET_FIELD):
        src = _first_img_src(_text_of(item.get(field)))
        if src:
            return src
    return ""


def _to_entry(item: Mapping[str, Any], source: str) -> _Entry:
    published_at = extract_published_at(item)
    article = Article(
        title=str(item.get("title") or ""),
        link=str(item.get("link") or ""),
        published=to_iso(published_at) if published_at else "",
        summary=extract_summary(item),
        source=source,
        image=extract_image(item),
    )
    return _Entry(article=article, published_at=published_at)


def _sort_key(entry: _Entry) -> float:
    return entry.published_at.timestamp() if entry.published_at else float("-inf")


def normalize_items(
    items: Iterable[Mapping[str, Any]],
    limit: int,
    since: Optional[datetime] = None,
    source: str = DEFAULT_SOURCE_LABEL,
) -> List[Article]:
    entries: Sequence[_Entry] = [_to_entry(item, source) for item in items if isinstance(item, Mapping)]
    # sorted() is stable, so undated items keep their feed order at the tail.
    ordered = sorted(entries, key=_sort_key, reverse=True)
    if since is not None:
        ordered = [e for e in ordered if e.published_at is not None and e.published_at >= since]
    logger.debug("Normalized %d items, %d after since filter", len(entries), len(ordered))
    return [entry.article for entry in ordered[: max(limit, 0)]]
