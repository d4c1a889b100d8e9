"""Exception hierarchy shared across the RSS reader.

Every error here is recoverable: the aggregation service turns them into
failed response envelopes and leaves state unchanged.
"""

from __future__ import annotations


class RssReaderError(Exception):
    """Base class for all RSS reader errors."""


class ValidationError(RssReaderError):
    """Bad index, duplicate URL/link, or malformed request payload."""


class ConfigError(RssReaderError):
    """Missing or invalid runtime configuration (e.g. an absent API key)."""


class FetchError(RssReaderError):
    """A feed could not be turned into entries."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message}: {url}")
        self.url = url
        self.message = message


class NetworkError(FetchError):
    """The upstream URL could not be reached or its body could not be read."""


class ParseError(FetchError):
    """The upstream document was retrieved but is not a usable feed."""


class SummaryError(RssReaderError):
    """Base class for summarization service failures."""


class SummaryTransportError(SummaryError):
    """The request to the summarization service failed."""


class SummaryResponseError(SummaryError):
    """The summarization service answered with a body that is not JSON."""


class EmptySummaryError(SummaryError):
    """The response carried no generated text."""
