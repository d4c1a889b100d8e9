"""
Feed and page fetching, and article extraction.

This package handles HTTP fetching, feed parsing, and content
extraction from web pages.
"""

from .extractor import DEFAULT_SELECTORS, extract_text
from .feeds import fetch_feed, parse_feed
from .fetcher import FetchResult, fetch_page_content, fetch_url

__all__ = [
    "DEFAULT_SELECTORS",
    "extract_text",
    "fetch_feed",
    "parse_feed",
    "FetchResult",
    "fetch_page_content",
    "fetch_url",
]
