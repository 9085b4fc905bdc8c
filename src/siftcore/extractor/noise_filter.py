"""
Noise removal applied to a parsed document before content scoring.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from bs4 import Tag

from ..config.config import DEFAULT_NOISE_SELECTORS
from .dom import ParsedDocument

logger = logging.getLogger(__name__)

# Page chrome that is kept when it belongs to an article
ARTICLE_SCOPED_TAGS = ("header", "footer")

# Never removed, even when a class pattern such as "modal-open" matches
PROTECTED_TAGS = frozenset({"html", "body"})


class NoiseFilter:
    """
    Removes structural, advertising and tracking elements from a parsed document.

    Works in place on the tree it is given; callers hand it a fresh parse so
    that the original input is never affected.
    """

    def __init__(self, selectors: Optional[Iterable[str]] = None) -> None:
        self.selectors: List[str] = list(selectors) if selectors is not None else list(DEFAULT_NOISE_SELECTORS)

    def remove_noise(self, doc: ParsedDocument) -> int:
        """
        Remove every element matching the noise selectors.

        Args:
            doc: Parsed document to clean in place

        Returns:
            Number of elements removed
        """
        removed = 0

        for selector in self.selectors:
            for element in doc.select(selector):
                if self._discard(element):
                    removed += 1

        for element in doc.find_all(list(ARTICLE_SCOPED_TAGS)):
            if element.decomposed:
                continue
            if element.find_parent("article") is None and self._discard(element):
                removed += 1

        logger.debug("Removed %d noise elements", removed)
        return removed

    @staticmethod
    def _discard(element: Tag) -> bool:
        # Descendants of an already removed element are skipped
        if element.decomposed or element.name in PROTECTED_TAGS:
            return False
        element.decompose()
        return True
