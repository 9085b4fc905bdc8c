"""
Structured Data Parser - OpenGraph, Schema.org, and Twitter Cards

Extracts the open-ended tag namespaces and JSON-LD blocks of a page, plus a
case-insensitive index of its standard meta tags, for the metadata fallback
chains.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

JSON_LD_TYPE = "application/ld+json"


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip() if isinstance(value, str) else ""


class MetaTagIndex:
    """
    First-occurrence lookup of ``<meta>`` content by name, property or http-equiv.

    Keys are matched case-insensitively. Tags with empty content are ignored
    so that a blank duplicate never hides a later value.
    """

    ATTRIBUTES = ("name", "property", "http-equiv")

    def __init__(self, soup: BeautifulSoup) -> None:
        self._index: Dict[str, Dict[str, str]] = {attribute: {} for attribute in self.ATTRIBUTES}

        for meta in soup.find_all("meta"):
            content = _attr(meta, "content")
            if not content:
                continue
            for attribute in self.ATTRIBUTES:
                key = _attr(meta, attribute).lower()
                if key:
                    self._index[attribute].setdefault(key, content)

    def by_name(self, key: str) -> Optional[str]:
        return self._index["name"].get(key.lower())

    def by_property(self, key: str) -> Optional[str]:
        return self._index["property"].get(key.lower())

    def by_http_equiv(self, key: str) -> Optional[str]:
        return self._index["http-equiv"].get(key.lower())

    def prefixed(self, prefix: str, attributes: tuple[str, ...]) -> Dict[str, str]:
        """All keys under ``prefix`` with the prefix removed, first occurrence first."""
        found: Dict[str, str] = {}
        for attribute in attributes:
            for key, content in self._index[attribute].items():
                if key.startswith(prefix) and len(key) > len(prefix):
                    found.setdefault(key[len(prefix) :], content)
        return found


class OpenGraphParser:
    """Parser for OpenGraph metadata."""

    @staticmethod
    def parse(meta: MetaTagIndex) -> Dict[str, str]:
        """Parse ``og:*`` properties, keyed without the prefix."""
        return meta.prefixed("og:", ("property", "name"))


class TwitterCardParser:
    """Parser for Twitter Card metadata."""

    @staticmethod
    def parse(meta: MetaTagIndex) -> Dict[str, str]:
        """Parse ``twitter:*`` tags, keyed without the prefix."""
        return meta.prefixed("twitter:", ("name", "property"))


class SchemaOrgParser:
    """Parser for Schema.org structured data."""

    @staticmethod
    def parse_json_ld(soup: BeautifulSoup) -> List[Any]:
        """
        Parse every JSON-LD block independently.

        A block that is empty or not valid JSON is dropped; the others are
        kept in document order exactly as parsed.
        """
        json_ld_data: List[Any] = []

        for script in soup.find_all("script"):
            if _attr(script, "type").lower() != JSON_LD_TYPE:
                continue
            data = SchemaOrgParser._parse_json_ld_block(script)
            if data is not None:
                json_ld_data.append(data)

        return json_ld_data

    @staticmethod
    def _parse_json_ld_block(script: Tag) -> Optional[Any]:
        json_text = (script.string or "").strip()
        if not json_text:
            return None
        try:
            return json.loads(json_text)
        except json.JSONDecodeError as e:
            logger.debug(f"Skipping invalid JSON-LD block: {e}")
            return None

    @staticmethod
    def iter_items(json_ld_data: List[Any]) -> Iterator[Dict[str, Any]]:
        """Yield every JSON-LD object, descending into arrays and ``@graph``."""
        pending: List[Any] = list(json_ld_data)
        while pending:
            item = pending.pop(0)
            if isinstance(item, list):
                pending[:0] = item
            elif isinstance(item, dict):
                yield item
                graph = item.get("@graph")
                if isinstance(graph, list):
                    pending[:0] = graph

    @staticmethod
    def extract_schema_fields(json_ld_data: List[Any]) -> Dict[str, str]:
        """Extract common Schema.org fields, first occurrence wins."""
        schema_fields: Dict[str, str] = {}

        field_mappings = {
            "headline": "title",
            "name": "title",
            "description": "description",
            "author": "author",
            "datePublished": "date_published",
            "dateModified": "date_modified",
            "publisher": "publisher",
            "image": "image",
        }

        for item in SchemaOrgParser.iter_items(json_ld_data):
            for json_key, schema_key in field_mappings.items():
                if schema_key in schema_fields:
                    continue
                value = SchemaOrgParser._flatten_value(item.get(json_key))
                if value:
                    schema_fields[schema_key] = value

        return schema_fields

    @staticmethod
    def _flatten_value(value: Any) -> Optional[str]:
        # Handle nested objects
        if isinstance(value, list):
            value = value[0] if value else None
        if isinstance(value, dict):
            value = value.get("name") or value.get("url") or value.get("@id")
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            text = str(value).strip()
            return text or None
        return None


@dataclass
class StructuredDataResult:
    """Result of structured data extraction."""

    meta: MetaTagIndex
    og: Dict[str, str] = field(default_factory=dict)
    twitter: Dict[str, str] = field(default_factory=dict)
    json_ld: List[Any] = field(default_factory=list)
    schema: Dict[str, str] = field(default_factory=dict)
    canonical_url: Optional[str] = None


class StructuredDataParser:
    """
    Comprehensive structured data parser.

    Extracts metadata from OpenGraph, Schema.org, Twitter Cards,
    and standard HTML meta tags.
    """

    def __init__(self) -> None:
        self.og_parser = OpenGraphParser()
        self.schema_parser = SchemaOrgParser()
        self.twitter_parser = TwitterCardParser()

    def parse_all(self, soup: BeautifulSoup) -> StructuredDataResult:
        """
        Parse all structured data from a parsed document.

        Args:
            soup: Parsed HTML document

        Returns:
            Open Graph and Twitter maps, JSON-LD blocks and derived fields
        """
        meta = MetaTagIndex(soup)
        json_ld_data = self.schema_parser.parse_json_ld(soup)

        return StructuredDataResult(
            meta=meta,
            og=self.og_parser.parse(meta),
            twitter=self.twitter_parser.parse(meta),
            json_ld=json_ld_data,
            schema=self.schema_parser.extract_schema_fields(json_ld_data),
            canonical_url=self._canonical_url(soup),
        )

    @staticmethod
    def _canonical_url(soup: BeautifulSoup) -> Optional[str]:
        for link in soup.find_all("link"):
            rel = link.get("rel") or []
            if isinstance(rel, str):
                rel = rel.split()
            if "canonical" in (token.lower() for token in rel):
                href = _attr(link, "href")
                if href:
                    return href
        return None
