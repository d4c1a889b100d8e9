"""
RSS Reader - personal feed aggregation backend.

This package keeps a list of subscribed feed URLs and a read-later queue in
a single JSON file, fetches and parses feeds on demand, extracts readable
article text from linked pages, and forwards text to an LLM for summaries.

Main entry point is the CLI via the `rss-reader` command.

Example:
    $ rss-reader feeds add https://hnrss.org/frontpage
    $ rss-reader feeds fetch 0
"""

__all__ = ["__version__", "AggregationService", "FeedStore", "extract_text"]
__version__ = "0.1.0"

from .fetch.extractor import extract_text
from .service import AggregationService
from .store import FeedStore
