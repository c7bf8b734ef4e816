"""
Coercion of the listing endpoint's query parameters.

Nothing here raises: bad input falls back to the documented default.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Optional

from technews.timeutil import UTC_PLUS_8, as_utc, parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MIN_LIMIT = 1
MAX_LIMIT = 50

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_BARE_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_limit(raw: Any) -> int:
    if raw is None:
        return DEFAULT_LIMIT
    if isinstance(raw, bool):
        value = DEFAULT_LIMIT
    elif isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT_RE.match(str(raw))
        if not match:
            logger.debug("Non-numeric limit %r; using default %s", raw, DEFAULT_LIMIT)
            return DEFAULT_LIMIT
        value = int(match.group(1))
    return max(MIN_LIMIT, min(MAX_LIMIT, value))


def parse_since(raw: Any) -> Optional[datetime]:
    """
    Bare ``YYYY-MM-DD`` dates mean midnight at UTC+8, the feed audience's
    local day boundary. Anything else goes through the general parser.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    match = _BARE_DATE_RE.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            since = datetime(year, month, day, tzinfo=UTC_PLUS_8)
        except ValueError:
            logger.debug("Invalid calendar date for since=%r; ignoring", raw)
            return None
        if as_utc(since) is None:
            logger.debug("since=%r is outside the representable range; ignoring", raw)
            return None
        return since
    parsed = parse_timestamp(text)
    if parsed is None:
        logger.debug("Unparseable since=%r; no lower bound applied", raw)
    return parsed
