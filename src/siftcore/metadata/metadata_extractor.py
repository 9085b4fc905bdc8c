"""
Main Metadata Extractor - Fallback-Chain Resolution

Resolves every field of :class:`ExtendedMetadata` through its own ordered
chain of sources (standard meta tags, Open Graph, Twitter Cards, markup
conventions, JSON-LD). A missing source never blocks another field.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .models import ExtendedMetadata
from .structured_data_parser import MetaTagIndex, StructuredDataParser, StructuredDataResult

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s+")


def first_non_empty(*values: Optional[str]) -> Optional[str]:
    """Return the first candidate that is a non-blank string."""
    for value in values:
        if value and value.strip():
            return value.strip()
    return None


def calculate_reading_time(word_count: int, words_per_minute: int = 200) -> int:
    """Minutes needed to read ``word_count`` words, never less than one."""
    return max(1, math.ceil(word_count / words_per_minute))


class MetadataExtractor:
    """
    Metadata extractor for a single parsed page.

    Word count and reading time come from the page's clean text rather than
    its markup, so the caller supplies the text produced by the formatter.
    """

    def __init__(self, words_per_minute: int = 200) -> None:
        self.words_per_minute = words_per_minute
        self.structured_parser = StructuredDataParser()

    def extract_metadata(self, soup: BeautifulSoup, text: str = "") -> ExtendedMetadata:
        """
        Extract metadata from a parsed document.

        Args:
            soup: Parsed HTML document (not modified)
            text: Clean main-content text of the same document

        Returns:
            Fully resolved metadata record
        """
        data = self.structured_parser.parse_all(soup)
        meta = data.meta
        og = data.og
        twitter = data.twitter
        schema = data.schema

        word_count = len(text.split())

        metadata = ExtendedMetadata(
            title=first_non_empty(
                self._tag_text(soup.find("title")),
                og.get("title"),
                twitter.get("title"),
                self._tag_text(soup.find("h1")),
            )
            or "",
            description=first_non_empty(
                meta.by_name("description"),
                og.get("description"),
                twitter.get("description"),
            )
            or "",
            keywords=self._keywords(meta),
            language=first_non_empty(
                self._html_lang(soup),
                meta.by_http_equiv("content-language"),
                meta.by_name("language"),
            ),
            author=self._author(soup, data),
            publish_date=first_non_empty(
                self._meta(meta, "article:published_time"),
                meta.by_name("published_time"),
                meta.by_name("date"),
                self._first_time_datetime(soup),
                schema.get("date_published"),
            ),
            modified_date=first_non_empty(
                self._meta(meta, "article:modified_time"),
                meta.by_name("modified_time"),
                og.get("updated_time"),
                schema.get("date_modified"),
            ),
            publisher=first_non_empty(
                self._meta(meta, "article:publisher"),
                og.get("site_name"),
                schema.get("publisher"),
            ),
            og=og,
            twitter=twitter,
            structured_data=data.json_ld or None,
            site_name=first_non_empty(og.get("site_name"), meta.by_name("application-name")),
            type=og.get("type") or "website",
            url=first_non_empty(og.get("url"), data.canonical_url),
            image=first_non_empty(og.get("image"), twitter.get("image"), twitter.get("image:src")),
            canonical=data.canonical_url,
            robots=meta.by_name("robots"),
            viewport=meta.by_name("viewport"),
            word_count=word_count,
            reading_time=calculate_reading_time(word_count, self.words_per_minute),
        )

        logger.debug(
            "Resolved metadata: title=%r, %d og tags, %d twitter tags, %d JSON-LD blocks",
            metadata.title,
            len(og),
            len(twitter),
            len(data.json_ld),
        )
        return metadata

    def _author(self, soup: BeautifulSoup, data: StructuredDataResult) -> Optional[str]:
        """Author from meta tags, then author markup, then JSON-LD."""
        meta = data.meta
        return first_non_empty(
            meta.by_name("author"),
            self._meta(meta, "article:author"),
            self._meta(meta, "twitter:creator"),
            self._markup_value(soup.select_one("[rel~='author']")),
            self._markup_value(soup.select_one("[itemprop='author']")),
            data.schema.get("author"),
        )

    @staticmethod
    def _meta(meta: MetaTagIndex, key: str) -> Optional[str]:
        # Namespaced keys appear under both property= and name= in the wild
        return first_non_empty(meta.by_property(key), meta.by_name(key))

    @staticmethod
    def _keywords(meta: MetaTagIndex) -> list[str]:
        raw = meta.by_name("keywords") or ""
        return [keyword.strip() for keyword in raw.split(",") if keyword.strip()]

    @staticmethod
    def _tag_text(tag: Optional[Tag]) -> Optional[str]:
        if tag is None:
            return None
        return WHITESPACE_PATTERN.sub(" ", tag.get_text()).strip()

    @classmethod
    def _markup_value(cls, tag: Optional[Tag]) -> Optional[str]:
        if tag is None:
            return None
        content = tag.get("content")
        if isinstance(content, str) and content.strip():
            return content.strip()
        return cls._tag_text(tag)

    @staticmethod
    def _html_lang(soup: BeautifulSoup) -> Optional[str]:
        html = soup.find("html")
        if html is None:
            return None
        lang = html.get("lang")
        return lang if isinstance(lang, str) else None

    @staticmethod
    def _first_time_datetime(soup: BeautifulSoup) -> Optional[str]:
        time_tag = soup.find("time", attrs={"datetime": True})
        if time_tag is None:
            return None
        value = time_tag.get("datetime")
        return value if isinstance(value, str) else None
