"""
HTTP fetching of feed documents and article pages.

This module provides:
1. fetch_url: Synchronous httpx GET returning a FetchResult instead of raising
2. fetch_page_content: Page Fetcher that retrieves a page and extracts its text
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time

import httpx

from ..config import ExtractConfig, FetchConfig
from .extractor import extract_text


logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    Either text will be populated (success) or error will be populated (failure),
    but never both. status_code may be None for network-level failures.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None if request failed before getting response
        text: The response body text, or None on error
        error: Error message if fetch failed, None on success
        content: The raw response body bytes, or None on error
    """
    url: str
    status_code: int | None
    text: str | None
    error: str | None
    content: bytes | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fetch_url(url: str, cfg: FetchConfig) -> FetchResult:
    """Fetch a URL using httpx with optional retries.

    Follows redirects and respects system proxy settings when trust_env is
    enabled. HTTP error statuses are not treated as failures; the body is
    returned as-is for the caller to interpret.

    Args:
        url: The URL to fetch
        cfg: Timeout, retry, proxy and User-Agent settings

    Returns:
        FetchResult with text on success or error message on failure
    """
    headers = {"User-Agent": cfg.user_agent}
    last_error: str | None = None

    for attempt in range(cfg.retries + 1):
        try:
            with httpx.Client(
                timeout=cfg.timeout_seconds,
                headers=headers,
                follow_redirects=True,
                trust_env=cfg.trust_env,
            ) as client:
                resp = client.get(url)
                return FetchResult(
                    url=url,
                    status_code=resp.status_code,
                    text=resp.text,
                    error=None,
                    content=resp.content,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            last_error = f"{type(exc).__name__}: {exc}"
            if attempt < cfg.retries:
                # Linear backoff: 0.5s, 1.0s, 1.5s...
                time.sleep(0.5 * (attempt + 1))

    return FetchResult(url=url, status_code=None, text=None, error=last_error)


def fetch_page_content(url: str, fetch_cfg: FetchConfig, extract_cfg: ExtractConfig) -> str | None:
    """Fetch a web page and return its extracted article text.

    Fetch failures and pages without extractable content both yield None.

    Args:
        url: The page URL
        fetch_cfg: HTTP settings
        extract_cfg: Selector chain and fallback extractors

    Returns:
        Extracted text, or None
    """
    logger.debug("Fetching webpage content from %s", url)
    result = fetch_url(url, fetch_cfg)
    if not result.ok:
        logger.error("Failed to fetch webpage from %s: %s", url, result.error)
        return None

    text = extract_text(result.text or "", extract_cfg.selectors, extract_cfg.fallback)
    if text is None:
        logger.info("No content extracted from %s", url)
        return None

    logger.debug("Extracted %d characters from %s", len(text), url)
    return text
