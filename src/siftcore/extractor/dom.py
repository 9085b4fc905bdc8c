"""
Parsing helpers shared by the BeautifulSoup-based components.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

# A fresh tree is built for every extraction call and discarded afterwards
ParsedDocument = BeautifulSoup


def parse_html(html: str, parser: str = "html.parser") -> ParsedDocument:
    """Parse an HTML string into a new, independently mutable tree."""
    return BeautifulSoup(html, parser)


def body_of(doc: ParsedDocument) -> Tag:
    """Return the <body> element, or the document root for body-less fragments."""
    body = doc.body
    return body if body is not None else doc


def element_text(element: Tag) -> str:
    """Visible text of an element with surrounding whitespace removed."""
    return element.get_text().strip()
