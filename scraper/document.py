"""Minimal document query layer used by the extractors.

Extraction code only needs to find elements by tag or CSS selector, read
their text and read attributes. Keeping that behind a protocol lets tests
feed in-memory documents without going through the network.

Pages are parsed with html5lib so the tree matches what a browser builds:
the newline right after <pre> is dropped and missing <tbody> elements are
inserted.
"""

from typing import List, Optional, Protocol

from bs4 import BeautifulSoup
from bs4.element import Tag

from utils.error_handler import ParseError


class DocumentNode(Protocol):
    """Protocol for a queryable element."""

    def find_all(self, selector: str) -> List["DocumentNode"]:
        """Return matching descendants in document order."""
        ...

    def text(self) -> str:
        """Return the concatenated text of the element."""
        ...

    def attr(self, name: str, default: str = "") -> str:
        """Return an attribute value."""
        ...


class SoupNode:
    """DocumentNode backed by a BeautifulSoup tag."""

    def __init__(self, tag: Tag):
        self.tag = tag

    def find_all(self, selector: str) -> List["SoupNode"]:
        return [SoupNode(tag) for tag in self.tag.select(selector)]

    def text(self) -> str:
        return self.tag.get_text()

    def attr(self, name: str, default: str = "") -> str:
        value = self.tag.get(name)
        if value is None:
            return default
        if isinstance(value, list):
            return " ".join(value)
        return value

    def __repr__(self):
        return f"SoupNode(<{self.tag.name}>)"


def parse_html(html: str, url: Optional[str] = None) -> SoupNode:
    """
    Parse an HTML document.

    Raises:
        ParseError: If the markup cannot be parsed
    """
    try:
        soup = BeautifulSoup(html, 'html5lib')
    except Exception as e:
        raise ParseError(f"failed to parse HTML: {e}", original_exception=e, url=url) from e
    return SoupNode(soup)
