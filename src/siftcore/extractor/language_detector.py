"""
Language Detection from URL, Markup and Content Signals

Combines, in decreasing order of trust, a caller-specified language,
explicit URL markers, HTML language declarations and a word-frequency
fingerprint of the page text. Supports English, French, Spanish and
Haitian Creole.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Pattern, Tuple
from urllib.parse import parse_qs, urlsplit

from bs4 import BeautifulSoup

from .models import LanguageDetectionResult

logger = logging.getLogger(__name__)

Hint = Tuple[Optional[str], str]


class LanguageDetector:
    """
    Multi-signal language detection for a small set of languages.

    Features:
    - User override always wins
    - URL path segments and ``lang``-style query parameters (high confidence)
    - ``<html lang>`` and ``content-language`` declarations (high confidence)
    - ``og:locale`` and ``meta[name=language]`` (medium confidence)
    - Country TLD or language subdomain (medium confidence)
    - Common-word fingerprint over the start of the text
    """

    LANGUAGE_NAMES: Dict[str, str] = {
        "en": "English",
        "fr": "French",
        "es": "Spanish",
        "ht": "Haitian Creole",
    }

    PATH_SEGMENTS: Dict[str, str] = {
        "fr": "fr",
        "french": "fr",
        "es": "es",
        "spanish": "es",
        "espanol": "es",
        "ht": "ht",
        "haitian": "ht",
        "kreyol": "ht",
        "en": "en",
        "english": "en",
    }

    QUERY_PARAMS: Tuple[str, ...] = ("lang", "language", "locale", "hl")

    # Both TLD and subdomain markers; English has no country hint
    DOMAIN_HINTS: Tuple[str, ...] = ("fr", "es", "ht")

    # Common words weigh 2 per hit, characteristic patterns 1 per hit
    LANGUAGE_WORDS: Dict[str, List[str]] = {
        "fr": ["le", "la", "les", "de", "et", "est", "un", "une", "pour", "dans", "avec", "sur", "par", "vous", "nous", "ils", "elle"],
        "es": ["el", "la", "los", "las", "de", "y", "es", "en", "por", "para", "con", "un", "una", "que", "del"],
        "ht": ["nan", "ak", "pou", "yo", "li", "nou", "mwen", "ou", "se", "ki", "gen", "bay", "fè", "ka"],
        "en": ["the", "is", "at", "of", "and", "to", "in", "for", "with", "on", "by", "from", "up", "about", "into"],
    }

    LANGUAGE_PATTERNS: Dict[str, List[Pattern[str]]] = {
        "fr": [re.compile(r"\bqu'"), re.compile(r"\bd'"), re.compile(r"\bl'"), re.compile(r"\bc'")],
        "es": [re.compile("ñ"), re.compile("¿"), re.compile("¡")],
        "ht": [re.compile(r"\bm'"), re.compile(r"\bl'"), re.compile(r"\bn'")],
        "en": [
            re.compile(r"\b(you|your|you're|you'll)\b"),
            re.compile(r"\b(it's|isn't|aren't|won't)\b"),
        ],
    }

    CONTENT_SAMPLE_LENGTH = 1000
    CONTENT_SCORE_THRESHOLD = 10
    CONFIDENT_SCORE_MARGIN = 20
    DEFAULT_LANGUAGE = "en"

    def __init__(self) -> None:
        self._word_patterns: Dict[str, List[Pattern[str]]] = {
            lang: [re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE) for word in words]
            for lang, words in self.LANGUAGE_WORDS.items()
        }

    def detect(
        self,
        url: Optional[str] = None,
        html: Optional[str] = None,
        content: Optional[str] = None,
        user_language: Optional[str] = None,
    ) -> LanguageDetectionResult:
        """
        Detect the language of a page.

        Args:
            url: Page URL, if known
            html: Raw page markup
            content: Clean page text
            user_language: Explicit language code that overrides detection

        Returns:
            The detected language with its confidence, source and signals
        """
        if user_language and user_language.lower() in self.LANGUAGE_NAMES:
            return LanguageDetectionResult(
                detected=user_language.lower(), confidence="high", source="user", signals=["user-specified"]
            )

        signals: List[str] = []

        url_lang, url_confidence = self.detect_from_url(url) if url else (None, "medium")
        if url_lang:
            signals.append(f"URL: {url_lang}")
            if url_confidence == "high":
                return LanguageDetectionResult(detected=url_lang, confidence="high", source="url", signals=signals)

        html_lang: Optional[str] = None
        if html:
            html_lang, html_confidence = self.detect_from_html(html)
            if html_lang:
                signals.append(f"HTML: {html_lang}")
                if html_confidence == "high":
                    return LanguageDetectionResult(
                        detected=html_lang,
                        confidence="high" if url_lang == html_lang else "medium",
                        source="html",
                        signals=signals,
                    )

        if content:
            content_lang, content_confidence = self.detect_from_content(content)
            if content_lang:
                signals.append(f"Content: {content_lang}")
                return LanguageDetectionResult(
                    detected=content_lang,
                    confidence="medium" if url_lang == content_lang else content_confidence,  # type: ignore[arg-type]
                    source="content",
                    signals=signals,
                )

        if html_lang:
            return LanguageDetectionResult(detected=html_lang, confidence="medium", source="html", signals=signals)

        if url_lang:
            return LanguageDetectionResult(detected=url_lang, confidence="low", source="url", signals=signals)

        return LanguageDetectionResult(
            detected=self.DEFAULT_LANGUAGE, confidence="low", source="default", signals=["fallback to English"]
        )

    def detect_from_url(self, url: str) -> Hint:
        """Language hinted by a URL's path, query, TLD or subdomain."""
        try:
            parts = urlsplit(url)
            hostname = (parts.hostname or "").lower()
        except ValueError:
            logger.debug("Ignoring unparsable URL %r", url)
            return None, "medium"

        for segment in parts.path.lower().split("/"):
            if segment in self.PATH_SEGMENTS:
                return self.PATH_SEGMENTS[segment], "high"

        query = parse_qs(parts.query)
        for param in self.QUERY_PARAMS:
            values = query.get(param)
            if values:
                code = self._normalize_code(values[0])
                if code:
                    return code, "high"
                break

        for code in self.DOMAIN_HINTS:
            if hostname.endswith(f".{code}"):
                return code, "medium"

        subdomain = hostname.split(".")[0]
        if subdomain in self.DOMAIN_HINTS:
            return subdomain, "medium"

        return None, "medium"

    def detect_from_html(self, html: str) -> Hint:
        """Language declared by the page markup."""
        soup = BeautifulSoup(html, "html.parser")

        root = soup.find("html")
        declarations = [
            (root.get("lang") if root is not None else None, "high"),
            (self._meta_content(soup, "http-equiv", "content-language"), "high"),
            (self._meta_content(soup, "property", "og:locale"), "medium"),
            (self._meta_content(soup, "name", "language"), "medium"),
        ]

        for value, confidence in declarations:
            code = self._normalize_code(value)
            if code:
                return code, confidence

        return None, "medium"

    def detect_from_content(self, text: str) -> Hint:
        """Language suggested by common-word frequencies at the start of the text."""
        sample = text.lower()[: self.CONTENT_SAMPLE_LENGTH]

        scores: Dict[str, int] = {}
        for lang, word_patterns in self._word_patterns.items():
            score = sum(len(pattern.findall(sample)) * 2 for pattern in word_patterns)
            score += sum(len(pattern.findall(sample)) for pattern in self.LANGUAGE_PATTERNS[lang])
            scores[lang] = score

        detected: Optional[str] = None
        highest = self.CONTENT_SCORE_THRESHOLD
        for lang, score in scores.items():
            if score > highest:
                highest = score
                detected = lang

        ranked = sorted(scores.values(), reverse=True)
        confidence = "medium" if ranked[0] - ranked[1] > self.CONFIDENT_SCORE_MARGIN else "low"
        return detected, confidence

    def get_language_name(self, lang_code: str) -> str:
        """Get full language name from code."""
        return self.LANGUAGE_NAMES.get(lang_code, lang_code.upper())

    def _normalize_code(self, value: Optional[object]) -> Optional[str]:
        if not isinstance(value, str):
            return None
        code = value.strip().lower()[:2]
        return code if code in self.LANGUAGE_NAMES else None

    @staticmethod
    def _meta_content(soup: BeautifulSoup, attribute: str, value: str) -> Optional[str]:
        for meta in soup.find_all("meta"):
            attr_value = meta.get(attribute)
            if isinstance(attr_value, str) and attr_value.strip().lower() == value:
                content = meta.get("content")
                return content if isinstance(content, str) else None
        return None
