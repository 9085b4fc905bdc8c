"""
Best-content selection over prioritised semantic selectors.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from bs4 import Tag

from ..config.config import DEFAULT_CONTENT_SELECTORS, SelectorWeight
from .dom import ParsedDocument, element_text
from .models import ContentCandidate
from .scorer import ContentScorer

logger = logging.getLogger(__name__)


class BestContentSelector:
    """
    Picks the element most likely to hold a page's main content.

    Every element matching a selector of the priority table is scored as
    ``scorer.score(element) + offset``. When no selector match reaches the
    scorer's ``fallback_threshold``, all ``<div>`` elements are scored too
    (without an offset) and the best of both passes wins. Ties keep the
    element seen first in document order.
    """

    def __init__(
        self,
        scorer: Optional[ContentScorer] = None,
        selectors: Optional[Iterable[SelectorWeight]] = None,
    ) -> None:
        self.scorer = scorer or ContentScorer()
        self.selectors: List[SelectorWeight] = (
            list(selectors) if selectors is not None else list(DEFAULT_CONTENT_SELECTORS)
        )

    def select(self, doc: ParsedDocument) -> Optional[ContentCandidate]:
        """Return the highest-scoring candidate, or None when nothing scores above 0."""
        best: Optional[ContentCandidate] = None

        for weight in self.selectors:
            for element in doc.select(weight.selector):
                best = self._consider(best, element, weight.score)

        if best is None or best.score < self.scorer.config.fallback_threshold:
            for element in doc.find_all("div"):
                best = self._consider(best, element, 0.0)

        if best is None:
            logger.debug("No content candidate scored above zero")
        else:
            logger.debug("Selected <%s> with score %.1f", best.element.name, best.score)
        return best

    def select_best_content(self, doc: ParsedDocument) -> Optional[Tag]:
        """Return the best content element; callers fall back to <body> on None."""
        candidate = self.select(doc)
        return candidate.element if candidate is not None else None

    def _consider(self, best: Optional[ContentCandidate], element: Tag, offset: float) -> Optional[ContentCandidate]:
        # Short elements never win on their selector offset
        text = element_text(element)
        if not text or len(text) < self.scorer.config.min_content_length:
            return best

        total = self.scorer.score(element) + offset
        if total > (best.score if best is not None else 0.0):
            return ContentCandidate(element=element, score=total)
        return best
