"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from bs4 import Tag

    from ..metadata.models import ExtendedMetadata

LinkType = Literal["internal", "external", "anchor"]


@dataclass(slots=True)
class ContentCandidate:
    """An element under consideration as the page's main content."""

    element: Tag
    score: float


@dataclass(slots=True, frozen=True)
class ExtractedContent:
    """Main content of a page with counts derived from its clean text."""

    text: str
    html: str
    word_count: int
    char_count: int
    paragraph_count: int
    has_code: bool = False
    has_tables: bool = False

    def __post_init__(self) -> None:
        """Validate the counts."""
        if self.char_count != len(self.text):
            raise ValueError("char_count must equal the length of text")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class Link:
    """An absolute http(s) link found on the page."""

    href: str
    text: str
    title: str | None = None
    rel: str | None = None
    type: LinkType = "external"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class LinkCategories:
    """Links split into same-domain and cross-domain groups."""

    navigation: list[Link] = field(default_factory=list)
    external: list[Link] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "navigation": [link.to_dict() for link in self.navigation],
            "external": [link.to_dict() for link in self.external],
        }


@dataclass(slots=True, frozen=True)
class TableData:
    """A table's header cells and data rows, as observed in the source."""

    headers: list[str]
    rows: list[list[str]]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class CodeBlock:
    """A block of source code and its declared language, if any."""

    code: str
    language: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class ExtractionBundle:
    """Everything the engine extracts from one document."""

    content: ExtractedContent
    metadata: ExtendedMetadata
    links: list[Link]
    tables: list[TableData]
    code_blocks: list[CodeBlock]

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content.to_dict(),
            "metadata": self.metadata.to_dict(),
            "links": [link.to_dict() for link in self.links],
            "tables": [table.to_dict() for table in self.tables],
            "code_blocks": [block.to_dict() for block in self.code_blocks],
        }


@dataclass(slots=True, frozen=True)
class LanguageDetectionResult:
    """Detected page language and the signals that led to it."""

    detected: str
    confidence: Literal["high", "medium", "low"]
    source: Literal["user", "url", "html", "content", "default"]
    signals: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
