"""
Feed fetching and parsing.

Feeds are downloaded with fetch_url and parsed with feedparser. Every item
of the document becomes exactly one FeedEntry; missing fields fall back to
sentinel strings instead of dropping the item.
"""

from __future__ import annotations

import io
import logging
from typing import Any

import feedparser

from ..config import FetchConfig
from ..core.errors import NetworkError, ParseError
from ..core.types import FeedEntry, NO_COMMENTS, NO_DESCRIPTION, NO_LINK, NO_TITLE
from .fetcher import fetch_url


logger = logging.getLogger(__name__)


def fetch_feed(url: str, cfg: FetchConfig) -> list[FeedEntry]:
    """Fetch and parse the feed at ``url``.

    Args:
        url: The feed URL
        cfg: HTTP settings

    Returns:
        One FeedEntry per item of the feed, in document order

    Raises:
        NetworkError: If the URL could not be retrieved
        ParseError: If the body is not a syndication document
    """
    logger.debug("Fetching feed from %s", url)
    result = fetch_url(url, cfg)
    if not result.ok:
        logger.error("Failed to fetch RSS feed from %s: %s", url, result.error)
        raise NetworkError(url, "Failed to fetch RSS feed")

    body = result.content if result.content is not None else (result.text or "")
    entries = parse_feed(body, url)
    logger.info("Parsed feed %s with %d items", url, len(entries))
    return entries


def parse_feed(body: str | bytes, url: str = "") -> list[FeedEntry]:
    """Parse a syndication document into normalized entries.

    Args:
        body: The raw feed document; bytes keep the declared XML encoding intact
        url: Source URL, used for error reporting only

    Raises:
        ParseError: If feedparser does not recognize a feed, or the document
            is malformed and no entries could be recovered
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    # feedparser may treat a plain string as a URL or a file path
    parsed = feedparser.parse(io.BytesIO(body))
    if not parsed.get("version") or (parsed.get("bozo") and not parsed.entries):
        reason = parsed.get("bozo_exception") or "unrecognized feed format"
        logger.error("Failed to parse RSS feed from %s: %s", url or "<body>", reason)
        raise ParseError(url, "Failed to parse RSS feed")

    return [_normalize_entry(entry) for entry in parsed.entries]


def _normalize_entry(entry: Any) -> FeedEntry:
    description = entry.get("summary") or entry.get("description")
    return FeedEntry(
        title=_text_or(entry.get("title"), NO_TITLE),
        link=_text_or(entry.get("link"), NO_LINK),
        comments=_text_or(entry.get("comments"), NO_COMMENTS),
        description=_text_or(description, NO_DESCRIPTION),
    )


def _text_or(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default
