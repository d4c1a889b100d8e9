"""
Core data types for the RSS reader.

This module defines the data structures shared by the store, the fetchers
and the aggregation service:
- FeedEntry: Transient projection of one item of a fetched feed
- ReadLaterItem: A saved article reference, persisted in the state file
- PersistentState: Root aggregate mirrored to the JSON state file
- ApiResponse: Uniform success/error envelope returned by the service
"""

from __future__ import annotations

import copy
from dataclasses import asdict, dataclass, field
from typing import Any, Generic, Mapping, TypeVar


NO_TITLE = "No Title"
NO_LINK = "No Link"
NO_COMMENTS = "No Comments Link"
NO_DESCRIPTION = "No Description"
CUSTOM_LINK_DESCRIPTION = "Custom link added by user"

_ITEM_FIELDS = ("title", "link", "comments", "description")

T = TypeVar("T")


@dataclass
class FeedEntry:
    """One item of a fetched feed, normalized with sentinel defaults.

    Attributes:
        title: The entry headline, or NO_TITLE
        link: The canonical article link, or NO_LINK
        comments: The discussion/comments link, or NO_COMMENTS
        description: Short description from the feed, or NO_DESCRIPTION
    """
    title: str = NO_TITLE
    link: str = NO_LINK
    comments: str = NO_COMMENTS
    description: str = NO_DESCRIPTION

    @property
    def has_link(self) -> bool:
        return bool(self.link) and self.link != NO_LINK

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class ReadLaterItem:
    """An article the user chose to keep.

    Items are unique by ``link`` within the read-later queue.
    """
    title: str
    link: str
    comments: str = NO_COMMENTS
    description: str = NO_DESCRIPTION

    @classmethod
    def from_entry(cls, entry: FeedEntry) -> "ReadLaterItem":
        """Promote a fetched feed entry to a read-later item.

        Raises:
            ValueError: If a field of the entry is not a string
        """
        return cls.from_dict(entry.to_dict())

    @classmethod
    def from_link(cls, title: str, url: str) -> "ReadLaterItem":
        """Build an item from a user-supplied title and URL."""
        return cls(
            title=title,
            link=url,
            comments=NO_COMMENTS,
            description=CUSTOM_LINK_DESCRIPTION,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReadLaterItem":
        """Build an item from a mapping holding all four string fields.

        Raises:
            ValueError: If a field is missing or is not a string
        """
        values = {}
        for name in _ITEM_FIELDS:
            value = data.get(name)
            if not isinstance(value, str):
                raise ValueError(f"read later item field {name!r} must be a string")
            values[name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class PersistentState:
    """Subscribed feed URLs and the read-later queue.

    Both lists are ordered; callers address elements by position.
    """
    feeds: list[str] = field(default_factory=list)
    read_later: list[ReadLaterItem] = field(default_factory=list)

    def copy(self) -> "PersistentState":
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "feeds": list(self.feeds),
            "read_later": [item.to_dict() for item in self.read_later],
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "PersistentState":
        """Rebuild state from the decoded state-file document.

        Raises:
            ValueError: If the document does not have the expected shape
        """
        if not isinstance(raw, dict):
            raise ValueError("state document must be a JSON object")
        if "feeds" not in raw or "read_later" not in raw:
            raise ValueError("state document must contain 'feeds' and 'read_later'")

        feeds = raw["feeds"]
        items = raw["read_later"]
        if not isinstance(feeds, list) or not all(isinstance(url, str) for url in feeds):
            raise ValueError("'feeds' must be a list of strings")
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise ValueError("'read_later' must be a list of objects")

        return cls(feeds=list(feeds), read_later=[ReadLaterItem.from_dict(item) for item in items])


@dataclass
class ApiResponse(Generic[T]):
    """Uniform response envelope.

    Either data (success) or error (failure) may be populated, never both.
    """
    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, error=None)

    @classmethod
    def fail(cls, message: str) -> "ApiResponse[T]":
        return cls(success=False, data=None, error=message)

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "data": self.data, "error": self.error}
