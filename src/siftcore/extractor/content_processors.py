"""
Specialized Content Processors for Auxiliary Structures

Implements dedicated processors that run over their own Lexbor parse,
independent of main-content selection:
- Links: Resolution, de-duplication, classification and readable text
- Tables: Header detection with rows passed through as observed
- Code: Pre/code blocks with class-declared or guessed language
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import SplitResult, unquote, urljoin, urlsplit

from pygments.lexers import guess_lexer
from pygments.util import ClassNotFound
from selectolax.lexbor import LexborHTMLParser, LexborNode

from .models import CodeBlock, Link, LinkCategories, LinkType, TableData

logger = logging.getLogger(__name__)

WHITESPACE_PATTERN = re.compile(r"\s+")

SKIPPED_HREF_PREFIXES = ("javascript:", "mailto:", "tel:", "data:", "#")
ALLOWED_SCHEMES = ("http", "https")

# Stylesheet text leaking into anchors from CSS-in-JS frameworks
CSS_ARTIFACT_MARKERS = ("{", "}", "@media", "::", "var(--")
CSS_ARTIFACT_PATTERN = re.compile(r"^[.#][a-z]+-[a-z0-9]+", re.IGNORECASE)

NUMERIC_SEGMENT_PATTERN = re.compile(r"^\d+$")
FILE_EXTENSION_PATTERN = re.compile(r"\.[^.]+$")

CODE_LANGUAGE_PATTERN = re.compile(r"^(?:language|lang)-([\w+#.-]+)$", re.IGNORECASE)
MIN_INLINE_CODE_LENGTH = 10

# Pygments' fallback lexer is not a language
PLAIN_TEXT_ALIASES = frozenset({"text", "output"})


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def node_text(node: LexborNode) -> str:
    """Visible text of a node with whitespace runs collapsed."""
    return collapse_whitespace(node.text(deep=True) or "")


def direct_children(node: LexborNode, tags: Tuple[str, ...]) -> List[LexborNode]:
    return [child for child in node.iter() if child.tag in tags]


def is_css_artifact(text: str) -> bool:
    """Whether anchor text looks like leaked CSS rather than prose."""
    if text.startswith(".css-"):
        return True
    if any(marker in text for marker in CSS_ARTIFACT_MARKERS):
        return True
    return CSS_ARTIFACT_PATTERN.match(text) is not None


def humanize_path(path: str) -> str:
    """
    Turn the last meaningful URL path segment into readable words.

    ``/blog/2024/my-first_post.html`` becomes ``My First Post``; purely
    numeric segments are ignored.
    """
    parts = [part for part in unquote(path).split("/") if part and not NUMERIC_SEGMENT_PATTERN.match(part)]
    if not parts:
        return ""
    words = FILE_EXTENSION_PATTERN.sub("", parts[-1].replace("-", " ").replace("_", " ")).split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class LinkProcessor:
    """
    Link processor for resolution, de-duplication and classification.
    """

    def __init__(self, max_text_length: int = 100) -> None:
        self.max_text_length = max_text_length

    def extract_links(self, html_content: str, base_url: Optional[str] = None) -> List[Link]:
        """
        Extract unique absolute http(s) links from HTML content.

        Args:
            html_content: HTML content to process
            base_url: Base URL for resolving relative URLs

        Returns:
            Links in document order, one per canonical URL
        """
        parser = LexborHTMLParser(html_content)
        base_host = self._host_of(base_url)

        links: List[Link] = []
        seen: set[str] = set()

        for anchor in parser.css("a[href]"):
            link = self._process_link(anchor, base_url, base_host)
            if link is None:
                continue
            key = self._canonical_key(link.href)
            if key in seen:
                continue
            seen.add(key)
            links.append(link)

        return links

    def categorize_links(self, links: List[Link], base_url: str) -> LinkCategories:
        """Split links into same-domain navigation and cross-domain external groups."""
        base_host = self._host_of(base_url)
        navigation: List[Link] = []
        external: List[Link] = []

        for link in links:
            if base_host is not None and self._host_of(link.href) == base_host:
                navigation.append(link)
            else:
                external.append(link)

        return LinkCategories(navigation=navigation, external=external)

    def _process_link(self, anchor: LexborNode, base_url: Optional[str], base_host: Optional[str]) -> Optional[Link]:
        """Resolve and describe one anchor, or return None to drop it."""
        attrs = anchor.attributes
        href = (attrs.get("href") or "").strip()
        if not href or href.lower().startswith(SKIPPED_HREF_PREFIXES):
            return None

        try:
            parts = self._resolve(href, base_url)
        except ValueError as e:
            logger.debug("Dropping unresolvable link %r: %s", href, e)
            return None
        if parts is None:
            return None

        resolved = parts.geturl()
        link_type: LinkType = "external"
        # An empty fragment is dropped by geturl() but still marks an anchor
        if "#" in href:
            link_type = "anchor"
        elif base_host is not None and (parts.hostname or "") == base_host:
            link_type = "internal"

        return Link(
            href=resolved,
            text=self._link_text(anchor, parts),
            title=(attrs.get("title") or "").strip() or None,
            rel=(attrs.get("rel") or "").strip() or None,
            type=link_type,
        )

    @staticmethod
    def _resolve(href: str, base_url: Optional[str]) -> Optional[SplitResult]:
        if base_url:
            href = urljoin(base_url, href)
        elif href.startswith("//"):
            href = "https:" + href

        parts = urlsplit(href)
        if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.hostname:
            return None
        return parts

    @staticmethod
    def _canonical_key(href: str) -> str:
        parts = urlsplit(href)
        return parts._replace(scheme=parts.scheme.lower(), netloc=parts.netloc.lower()).geturl()

    @staticmethod
    def _host_of(url: Optional[str]) -> Optional[str]:
        if not url:
            return None
        try:
            return urlsplit(url).hostname
        except ValueError:
            return None

    def _link_text(self, anchor: LexborNode, parts: SplitResult) -> str:
        """Pick the first readable description of a link."""
        attrs = anchor.attributes
        image = anchor.css_first("img")
        candidates = [
            node_text(anchor),
            attrs.get("aria-label") or "",
            attrs.get("title") or "",
            (image.attributes.get("alt") or "") if image is not None else "",
        ]

        for candidate in candidates:
            text = collapse_whitespace(candidate)
            if text and not is_css_artifact(text):
                return truncate(text, self.max_text_length)

        text = humanize_path(parts.path)
        if not text:
            hostname = parts.hostname or ""
            if hostname.startswith("www."):
                hostname = hostname[4:]
            text = hostname[:1].upper() + hostname[1:]
        return truncate(collapse_whitespace(text), self.max_text_length)


class TableProcessor:
    """
    HTML table processor with header detection.
    """

    def extract_tables(self, html_content: str) -> List[TableData]:
        """
        Extract tables from HTML content.

        Args:
            html_content: HTML content to process

        Returns:
            One record per table that has headers or data rows
        """
        parser = LexborHTMLParser(html_content)
        tables: List[TableData] = []

        for table in parser.css("table"):
            table_data = self._process_table(table)
            if table_data is not None:
                tables.append(table_data)

        return tables

    def _process_table(self, table: LexborNode) -> Optional[TableData]:
        rows = table.css("tr")
        skip_first_row = False

        headers = [node_text(cell) for cell in table.css("thead th")]
        if not headers and rows:
            first_row = rows[0]
            header_cells = direct_children(first_row, ("th",)) or direct_children(first_row, ("td",))
            if header_cells:
                headers = [node_text(cell) for cell in header_cells]
                skip_first_row = True

        data: List[List[str]] = []
        for row in rows[1:] if skip_first_row else rows:
            cells = direct_children(row, ("td",))
            if cells:
                data.append([node_text(cell) for cell in cells])

        if not headers and not data:
            return None
        return TableData(headers=headers, rows=data)


class CodeProcessor:
    """
    Code block processor with language detection.
    """

    def __init__(self, guess_language: bool = False) -> None:
        self.guess_language = guess_language

    def extract_code_blocks(self, html_content: str) -> List[CodeBlock]:
        """
        Extract code blocks from HTML content.

        ``<pre>`` blocks come first; standalone ``<code>`` elements are only
        used when the page has no non-empty ``<pre>``, and only when longer
        than a short inline mention.
        """
        parser = LexborHTMLParser(html_content)
        code_blocks: List[CodeBlock] = []

        for pre in parser.css("pre"):
            code = pre.css_first("code")
            source = code if code is not None else pre
            code_text = self._clean_code_text(source.text(deep=True) or "")
            if not code_text:
                continue
            language = self._language_from_class(code) or self._language_from_class(pre)
            code_blocks.append(CodeBlock(code=code_text, language=language or self._guess(code_text)))

        if code_blocks:
            return code_blocks

        for code in parser.css("code"):
            code_text = self._clean_code_text(code.text(deep=True) or "")
            if len(code_text) <= MIN_INLINE_CODE_LENGTH:
                continue
            language = self._language_from_class(code)
            code_blocks.append(CodeBlock(code=code_text, language=language or self._guess(code_text)))

        return code_blocks

    @staticmethod
    def _language_from_class(node: Optional[LexborNode]) -> Optional[str]:
        """Read a ``language-xxx`` or ``lang-xxx`` class token."""
        if node is None:
            return None
        for token in (node.attributes.get("class") or "").split():
            match = CODE_LANGUAGE_PATTERN.match(token)
            if match:
                return match.group(1).lower()
        return None

    def _guess(self, code_text: str) -> Optional[str]:
        """Use Pygments for language detection when enabled."""
        if not self.guess_language:
            return None
        try:
            lexer = guess_lexer(code_text)
        except ClassNotFound:
            return None
        aliases = getattr(lexer, "aliases", [])
        if not aliases or aliases[0] in PLAIN_TEXT_ALIASES:
            return None
        return str(aliases[0])

    @staticmethod
    def _clean_code_text(text: str) -> str:
        """Keep indentation; drop trailing whitespace and blank edge lines."""
        if not text:
            return ""

        lines = [line.rstrip() for line in text.replace("\r\n", "\n").split("\n")]

        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()

        return "\n".join(lines)
