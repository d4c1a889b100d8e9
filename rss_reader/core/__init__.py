"""
Core domain models and errors.

This package contains the data types and exception hierarchy that are
independent of storage, transport, and network concerns.
"""

from .errors import (
    ConfigError,
    EmptySummaryError,
    FetchError,
    NetworkError,
    ParseError,
    RssReaderError,
    SummaryError,
    SummaryResponseError,
    SummaryTransportError,
    ValidationError,
)
from .types import (
    ApiResponse,
    CUSTOM_LINK_DESCRIPTION,
    FeedEntry,
    NO_COMMENTS,
    NO_DESCRIPTION,
    NO_LINK,
    NO_TITLE,
    PersistentState,
    ReadLaterItem,
)

__all__ = [
    "ApiResponse",
    "FeedEntry",
    "ReadLaterItem",
    "PersistentState",
    "NO_TITLE",
    "NO_LINK",
    "NO_COMMENTS",
    "NO_DESCRIPTION",
    "CUSTOM_LINK_DESCRIPTION",
    "RssReaderError",
    "ValidationError",
    "ConfigError",
    "FetchError",
    "NetworkError",
    "ParseError",
    "SummaryError",
    "SummaryTransportError",
    "SummaryResponseError",
    "EmptySummaryError",
]
