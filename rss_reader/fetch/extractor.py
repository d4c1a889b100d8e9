"""
HTML content extraction with an ordered chain of structural selectors.

The default chain tries, in priority order:
1. article: The semantic article container
2. main: The main content container
3. div.content / div.post: Common blog/CMS content wrappers
4. p: Plain paragraph text

Only the first element matching a selector is used. A selector whose match
yields no text is skipped. Optional fallback extractors (trafilatura,
readability) run only after every selector came up empty.
"""

from __future__ import annotations

from typing import Callable, Iterable

from bs4 import BeautifulSoup
import trafilatura
from readability import Document


DEFAULT_SELECTORS: tuple[str, ...] = ("article", "main", "div.content", "div.post", "p")


def extract_text(
    html: str,
    selectors: Iterable[str] = DEFAULT_SELECTORS,
    fallback: Iterable[str] = (),
) -> str | None:
    """Extract readable article text from an HTML page.

    Args:
        html: The raw HTML document
        selectors: CSS selectors tried in order
        fallback: Names of extractors tried after all selectors failed

    Returns:
        The cleaned text of the first non-empty match, or None if no content
        could be found

    Examples:
        >>> extract_text("<p>Hello world</p>")
        'Hello world'
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = clean_text(" ".join(element.strings))
        if text:
            return text

    for name in fallback:
        extractor = _get_extractor(name)
        if not extractor:
            continue
        text = extractor(html)
        if text:
            text = clean_text(text)
            if text:
                return text
    return None


def clean_text(text: str) -> str:
    """Drop carriage returns, flatten newlines to spaces, and trim."""
    return text.replace("\r", "").replace("\n", " ").strip()


def _get_extractor(name: str) -> Callable[[str], str | None] | None:
    """Get the fallback extractor function for a given method name.

    Args:
        name: The name of the extraction method ("trafilatura", "readability")

    Returns:
        The corresponding extractor function, or None if name is unrecognized
    """
    if name == "trafilatura":
        return _extract_trafilatura
    if name == "readability":
        return _extract_readability
    return None


def _extract_trafilatura(html: str) -> str | None:
    return trafilatura.extract(html)


def _extract_readability(html: str) -> str | None:
    """Extract article content using Mozilla's readability algorithm.

    Readability returns simplified HTML of the main content block, which is
    flattened to plain text with BeautifulSoup.
    """
    content_html = Document(html).summary()
    soup = BeautifulSoup(content_html, "html.parser")
    text = soup.get_text(separator=" ")
    return text if text.strip() else None
