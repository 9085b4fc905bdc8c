"""
Content extraction engine.

Every entry point takes a raw HTML string, validates it and works on its own
fresh parse, so calls share no mutable state and can run concurrently.
"""

from __future__ import annotations

import hashlib
from functools import lru_cache
from typing import List, Optional, Tuple

import structlog
from bs4 import Tag

from ..config.config import ExtractionSettings, settings
from ..metadata.metadata_extractor import MetadataExtractor
from ..metadata.models import ExtendedMetadata
from ..security.validation import HTMLValidator
from .content_processors import CodeProcessor, LinkProcessor, TableProcessor
from .dom import ParsedDocument, body_of, parse_html
from .formatter import TextFormatter
from .language_detector import LanguageDetector
from .models import (
    CodeBlock,
    ExtractedContent,
    ExtractionBundle,
    LanguageDetectionResult,
    Link,
    LinkCategories,
    TableData,
)
from .noise_filter import NoiseFilter
from .scorer import ContentScorer
from .selector import BestContentSelector

logger = structlog.get_logger(__name__)


def document_id(html: str) -> str:
    """Short stable identifier of an input document for log correlation."""
    return hashlib.sha1(html.encode("utf-8", "surrogatepass")).hexdigest()[:12]


class ContentExtractor:
    """
    Main-content, metadata and auxiliary-structure extraction for HTML pages.

    Holds only immutable configuration and stateless components; a single
    instance may be shared between threads.
    """

    def __init__(
        self,
        settings: Optional[ExtractionSettings] = None,
        validator: Optional[HTMLValidator] = None,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.validator = validator or HTMLValidator()

        scoring = self.settings.scoring
        self.noise_filter = NoiseFilter(self.settings.noise_selectors)
        self.scorer = ContentScorer(scoring)
        self.selector = BestContentSelector(self.scorer, self.settings.content_selectors)
        self.formatter = TextFormatter()
        self.metadata_extractor = MetadataExtractor(words_per_minute=self.settings.words_per_minute)
        self.link_processor = LinkProcessor(max_text_length=self.settings.max_link_text_length)
        self.table_processor = TableProcessor()
        self.code_processor = CodeProcessor(guess_language=self.settings.guess_code_language)
        self.language_detector = LanguageDetector()

    # --- Main content ---

    def extract_clean_text(self, html: str) -> str:
        """Clean, paragraph-structured text of the page's main content."""
        self.validator.validate(html)
        _, text = self._main_content(self._parse(html))
        return text

    def extract_content(self, html: str) -> ExtractedContent:
        """Main content text, its inner HTML and the counts derived from the text."""
        self.validator.validate(html)
        element, text = self._main_content(self._parse(html))

        min_paragraph_length = self.settings.min_paragraph_length
        paragraphs = [block for block in text.split("\n\n") if len(block.strip()) > min_paragraph_length]

        return ExtractedContent(
            text=text,
            html=element.decode_contents(),
            word_count=len(text.split()),
            char_count=len(text),
            paragraph_count=len(paragraphs),
            has_code=element.find(["pre", "code"]) is not None,
            has_tables=element.find("table") is not None,
        )

    def _main_content(self, doc: ParsedDocument) -> Tuple[Tag, str]:
        """Filter noise, select the best element and format it, falling back to <body>."""
        removed = self.noise_filter.remove_noise(doc)
        body = body_of(doc)

        candidate = self.selector.select(doc)
        element = candidate.element if candidate is not None else body
        text = self.formatter.format_text(element)

        if element is not body and len(text) < self.settings.min_content_length:
            logger.debug("Selected content too short, using body", length=len(text))
            element = body
            text = self.formatter.format_text(body)

        logger.debug(
            "Main content extracted",
            element=getattr(element, "name", None),
            score=candidate.score if candidate is not None else None,
            noise_removed=removed,
            length=len(text),
        )
        return element, text

    # --- Metadata ---

    def extract_metadata(self, html: str, text: Optional[str] = None) -> ExtendedMetadata:
        """
        Page metadata with word count and reading time from the clean text.

        Args:
            html: Raw HTML string
            text: Clean text of the same page; computed when omitted
        """
        self.validator.validate(html)
        if text is None:
            _, text = self._main_content(self._parse(html))
        return self.metadata_extractor.extract_metadata(self._parse(html), text)

    # --- Auxiliary structures ---

    def extract_links(self, html: str, base_url: Optional[str] = None) -> List[Link]:
        """Unique absolute http(s) links, resolved against ``base_url`` when given."""
        self.validator.validate(html)
        links = self.link_processor.extract_links(html, base_url)
        logger.debug("Links extracted", count=len(links), base_url=base_url)
        return links

    def categorize_links(self, html: str, base_url: str) -> LinkCategories:
        """Links split into same-domain navigation and cross-domain external groups."""
        return self.link_processor.categorize_links(self.extract_links(html, base_url), base_url)

    def extract_tables(self, html: str) -> List[TableData]:
        self.validator.validate(html)
        return self.table_processor.extract_tables(html)

    def extract_code_blocks(self, html: str) -> List[CodeBlock]:
        self.validator.validate(html)
        return self.code_processor.extract_code_blocks(html)

    def detect_language(
        self,
        html: str,
        url: Optional[str] = None,
        user_language: Optional[str] = None,
    ) -> LanguageDetectionResult:
        """Language of the page from URL, markup and clean-text signals."""
        text = self.extract_clean_text(html)
        return self.language_detector.detect(url=url, html=html, content=text, user_language=user_language)

    def extract_all(self, html: str, base_url: Optional[str] = None) -> ExtractionBundle:
        """Content, metadata, links, tables and code blocks of one page."""
        self.validator.validate(html)

        with structlog.contextvars.bound_contextvars(document_id=document_id(html)):
            content = self.extract_content(html)
            bundle = ExtractionBundle(
                content=content,
                metadata=self.extract_metadata(html, content.text),
                links=self.extract_links(html, base_url),
                tables=self.extract_tables(html),
                code_blocks=self.extract_code_blocks(html),
            )
            logger.info(
                "Extraction complete",
                words=content.word_count,
                links=len(bundle.links),
                tables=len(bundle.tables),
                code_blocks=len(bundle.code_blocks),
            )
        return bundle

    def _parse(self, html: str) -> ParsedDocument:
        return parse_html(html, self.settings.parser)


@lru_cache(maxsize=1)
def default_extractor() -> ContentExtractor:
    """Extractor built from the lazily loaded global settings."""
    return ContentExtractor(settings.extraction)


# Convenience functions


def extract_clean_text(html: str) -> str:
    return default_extractor().extract_clean_text(html)


def extract_content(html: str) -> ExtractedContent:
    return default_extractor().extract_content(html)


def extract_metadata(html: str, text: Optional[str] = None) -> ExtendedMetadata:
    return default_extractor().extract_metadata(html, text)


def extract_links(html: str, base_url: Optional[str] = None) -> List[Link]:
    return default_extractor().extract_links(html, base_url)


def categorize_links(html: str, base_url: str) -> LinkCategories:
    return default_extractor().categorize_links(html, base_url)


def extract_tables(html: str) -> List[TableData]:
    return default_extractor().extract_tables(html)


def extract_code_blocks(html: str) -> List[CodeBlock]:
    return default_extractor().extract_code_blocks(html)


def extract_all(html: str, base_url: Optional[str] = None) -> ExtractionBundle:
    return default_extractor().extract_all(html, base_url)


def detect_language(html: str, url: Optional[str] = None, user_language: Optional[str] = None) -> LanguageDetectionResult:
    return default_extractor().detect_language(html, url, user_language)
