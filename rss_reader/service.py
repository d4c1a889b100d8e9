"""
Aggregation service: the operations exposed to the transport boundary.

Each public method is one request/response transaction and returns an
ApiResponse envelope. State reads and writes go through the FeedStore;
feed and page downloads always happen after the store lock is released.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .config import AppConfig, ProviderConfig, SummaryConfig
from .core.errors import (
    ConfigError,
    EmptySummaryError,
    NetworkError,
    ParseError,
    SummaryResponseError,
    SummaryTransportError,
    ValidationError,
)
from .core.types import ApiResponse, FeedEntry, PersistentState, ReadLaterItem
from .fetch.feeds import fetch_feed
from .fetch.fetcher import fetch_page_content
from .llm.providers.base import SummaryProvider
from .llm.providers.factory import create_provider, provider_label
from .logging_utils import log_event
from .store import FeedStore


logger = logging.getLogger(__name__)

ProviderFactory = Callable[[ProviderConfig, SummaryConfig], SummaryProvider]

FEED_EXISTS = "Feed already exists!"
EMPTY_FEED_URL = "Feed URL must not be empty"
INVALID_FEED_INDEX = "Invalid feed index!"
FEED_FETCH_FAILED = "Failed to fetch RSS feed."
FEED_PARSE_FAILED = "Failed to parse RSS feed."
INVALID_ENTRY_INDEX = "Invalid item index."
NO_ENTRY_LINK = "No link available for this item."
PAGE_FETCH_FAILED = "Failed to fetch webpage content."
INVALID_READ_LATER_PAYLOAD = "Invalid payload: provide either an item or both title and URL"
READ_LATER_EXISTS = "Item already in read later list!"
INVALID_READ_LATER_INDEX = "Invalid item index!"
NOTHING_TO_SUMMARIZE = "Nothing to summarize"
SUMMARY_EMPTY = "Failed to generate summary"


class AggregationService:
    """Feed subscriptions, feed browsing, article extraction, read-later queue.

    Attributes:
        store: The persistent store owning the application state
        cfg: Application configuration
    """

    def __init__(
        self,
        store: FeedStore,
        cfg: AppConfig | None = None,
        provider_factory: ProviderFactory = create_provider,
    ):
        self.store = store
        self.cfg = cfg or AppConfig()
        self._provider_factory = provider_factory

    # Feeds

    def list_feeds(self) -> ApiResponse[list[str]]:
        feeds = self.store.read_state(lambda state: list(state.feeds))
        logger.info("Listing all feeds. Number of feeds: %d", len(feeds))
        return ApiResponse.ok(feeds)

    def add_feed(self, url: str) -> ApiResponse[None]:
        url = (url or "").strip()
        logger.info("Attempting to add feed: %s", url)

        def mutate(state: PersistentState) -> None:
            if not url:
                raise ValidationError(EMPTY_FEED_URL)
            if url in state.feeds:
                raise ValidationError(FEED_EXISTS)
            state.feeds.append(url)

        try:
            self.store.with_state(mutate)
        except ValidationError as exc:
            logger.info("Rejected feed %s: %s", url, exc)
            return ApiResponse.fail(str(exc))

        logger.info("Successfully added feed: %s", url)
        return ApiResponse.ok()

    def remove_feed(self, index: int) -> ApiResponse[None]:
        logger.info("Attempting to remove feed at index: %s", index)

        def mutate(state: PersistentState) -> str:
            _check_index(index, len(state.feeds), INVALID_FEED_INDEX)
            return state.feeds.pop(index)

        try:
            removed = self.store.with_state(mutate)
        except ValidationError as exc:
            logger.error("Invalid feed index: %s", index)
            return ApiResponse.fail(str(exc))

        logger.info("Successfully removed feed: %s", removed)
        return ApiResponse.ok()

    def fetch_feed(self, index: int) -> ApiResponse[list[dict[str, str]]]:
        logger.info("Fetching feed at index: %s", index)
        try:
            entries = self._fetch_entries(index)
        except (ValidationError, NetworkError, ParseError) as exc:
            return ApiResponse.fail(_feed_error_message(exc))

        log_event(logger, "Fetched feed", feed_index=index, items=len(entries))
        return ApiResponse.ok([entry.to_dict() for entry in entries])

    def fetch_entry_content(self, feed_index: int, entry_index: int) -> ApiResponse[str]:
        logger.info(
            "Fetching content for feed index: %s, item index: %s", feed_index, entry_index
        )
        try:
            entries = self._fetch_entries(feed_index)
        except (ValidationError, NetworkError, ParseError) as exc:
            return ApiResponse.fail(_feed_error_message(exc))

        if not _in_range(entry_index, len(entries)):
            logger.error("Invalid item index: %s", entry_index)
            return ApiResponse.fail(INVALID_ENTRY_INDEX)

        entry = entries[entry_index]
        if not entry.has_link:
            logger.error("No link available for item at index: %s", entry_index)
            return ApiResponse.fail(NO_ENTRY_LINK)

        content = fetch_page_content(entry.link, self.cfg.fetch, self.cfg.extract)
        if content is None:
            logger.error("Failed to fetch webpage content for item at index: %s", entry_index)
            return ApiResponse.fail(PAGE_FETCH_FAILED)

        logger.info("Successfully fetched content for item at index: %s", entry_index)
        return ApiResponse.ok(content)

    def _fetch_entries(self, index: int) -> list[FeedEntry]:
        url = self._resolve_feed_url(index)
        # The store lock is released here; the download runs unguarded
        return fetch_feed(url, self.cfg.fetch)

    def _resolve_feed_url(self, index: int) -> str:
        def read(state: PersistentState) -> str:
            _check_index(index, len(state.feeds), INVALID_FEED_INDEX)
            return state.feeds[index]

        try:
            url = self.store.read_state(read)
        except ValidationError:
            logger.error("Invalid feed index: %s", index)
            raise
        logger.debug("Feed URL: %s", url)
        return url

    # Read later

    def list_read_later(self) -> ApiResponse[list[dict[str, str]]]:
        items = self.store.read_state(
            lambda state: [item.to_dict() for item in state.read_later]
        )
        logger.info("Listing read later items. Number of items: %d", len(items))
        return ApiResponse.ok(items)

    def add_read_later(
        self,
        item: ReadLaterItem | FeedEntry | Mapping[str, Any] | None = None,
        title: str | None = None,
        url: str | None = None,
    ) -> ApiResponse[None]:
        """Add an item to the read-later queue.

        Exactly one payload shape is accepted: ``item`` alone, or ``title``
        together with ``url``. Items are unique by link.
        """
        try:
            new_item = _build_read_later_item(item, title, url)
        except ValidationError as exc:
            logger.error("Invalid payload for adding to read later")
            return ApiResponse.fail(str(exc))

        logger.info("Attempting to add item to read later: %s", new_item.title)

        def mutate(state: PersistentState) -> None:
            if any(existing.link == new_item.link for existing in state.read_later):
                raise ValidationError(READ_LATER_EXISTS)
            state.read_later.append(new_item)

        try:
            self.store.with_state(mutate)
        except ValidationError as exc:
            logger.info("Item already in read later: %s", new_item.title)
            return ApiResponse.fail(str(exc))

        logger.info("Successfully added item to read later: %s", new_item.title)
        return ApiResponse.ok()

    def remove_read_later(self, index: int) -> ApiResponse[None]:
        logger.info("Attempting to remove read later item at index: %s", index)

        def mutate(state: PersistentState) -> ReadLaterItem:
            _check_index(index, len(state.read_later), INVALID_READ_LATER_INDEX)
            return state.read_later.pop(index)

        try:
            removed = self.store.with_state(mutate)
        except ValidationError as exc:
            logger.error("Invalid read later item index: %s", index)
            return ApiResponse.fail(str(exc))

        logger.info("Successfully removed item from read later: %s", removed.title)
        return ApiResponse.ok()

    # Summaries

    def summarize(self, text: str) -> ApiResponse[str]:
        logger.info("Received request to summarize content")
        if not text or not text.strip():
            return ApiResponse.fail(NOTHING_TO_SUMMARIZE)

        label = provider_label(self.cfg.provider)
        try:
            provider = self._provider_factory(self.cfg.provider, self.cfg.summary)
        except ConfigError as exc:
            logger.error("Summarization is not configured: %s", exc)
            return ApiResponse.fail(f"{label} API key not configured")
        except ValueError as exc:
            logger.error("Summarization is not configured: %s", exc)
            return ApiResponse.fail(str(exc))

        try:
            summary = provider.summarize(text)
        except SummaryTransportError:
            return ApiResponse.fail(f"Failed to communicate with {label} API")
        except SummaryResponseError:
            return ApiResponse.fail(f"Failed to parse {label} API response")
        except EmptySummaryError:
            return ApiResponse.fail(SUMMARY_EMPTY)

        logger.info("Successfully generated summary")
        return ApiResponse.ok(summary)


def _in_range(index: int, length: int) -> bool:
    return 0 <= index < length


def _check_index(index: int, length: int, message: str) -> None:
    if not _in_range(index, length):
        raise ValidationError(message)


def _feed_error_message(exc: Exception) -> str:
    if isinstance(exc, NetworkError):
        return FEED_FETCH_FAILED
    if isinstance(exc, ParseError):
        return FEED_PARSE_FAILED
    return str(exc)


def _build_read_later_item(
    item: ReadLaterItem | FeedEntry | Mapping[str, Any] | None,
    title: str | None,
    url: str | None,
) -> ReadLaterItem:
    if item is not None and title is None and url is None:
        try:
            if isinstance(item, ReadLaterItem):
                return ReadLaterItem.from_dict(item.to_dict())
            if isinstance(item, FeedEntry):
                return ReadLaterItem.from_entry(item)
            if isinstance(item, Mapping):
                return ReadLaterItem.from_dict(item)
        except ValueError as exc:
            raise ValidationError(INVALID_READ_LATER_PAYLOAD) from exc
        raise ValidationError(INVALID_READ_LATER_PAYLOAD)

    if item is None and title is not None and url is not None:
        return ReadLaterItem.from_link(title, url)

    raise ValidationError(INVALID_READ_LATER_PAYLOAD)
