"""
Metadata record produced for every extracted page.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass(slots=True, frozen=True)
class ExtendedMetadata:
    """
    Page metadata with every field resolved through its own fallback chain.

    ``og`` and ``twitter`` hold the open-ended Open Graph and Twitter Card
    namespaces keyed without their prefix. ``structured_data`` is None when
    the page has no parseable JSON-LD block.
    """

    title: str = ""
    description: str = ""
    keywords: list[str] = field(default_factory=list)
    language: Optional[str] = None
    author: Optional[str] = None
    publish_date: Optional[str] = None
    modified_date: Optional[str] = None
    publisher: Optional[str] = None
    og: dict[str, str] = field(default_factory=dict)
    twitter: dict[str, str] = field(default_factory=dict)
    structured_data: Optional[list[Any]] = None
    site_name: Optional[str] = None
    type: str = "website"
    url: Optional[str] = None
    image: Optional[str] = None
    canonical: Optional[str] = None
    robots: Optional[str] = None
    viewport: Optional[str] = None
    word_count: int = 0
    reading_time: int = 1

    def __post_init__(self) -> None:
        if self.word_count < 0:
            raise ValueError("word_count must be non-negative")
        if self.reading_time < 1:
            raise ValueError("reading_time must be at least 1")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
