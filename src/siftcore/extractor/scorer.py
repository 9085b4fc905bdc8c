"""
Content-density scoring for candidate main-content elements.
"""

from __future__ import annotations

from typing import Optional

from bs4 import Tag

from ..config.config import ScoringConfig
from .dom import element_text


class ContentScorer:
    """
    Heuristic content-quality scorer.

    Combines text length, paragraph structure and semantic elements with
    penalties for link-heavy blocks, comment sections and forms. Elements
    whose text is shorter than ``min_content_length`` always score 0.
    """

    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or ScoringConfig()

    def score(self, element: Tag) -> float:
        """Score an element's likelihood of being the main content."""
        cfg = self.config

        text_length = len(element_text(element))
        if text_length < cfg.min_content_length or text_length == 0:
            return 0.0

        score = min(text_length / cfg.length_divisor, cfg.max_length_score)

        paragraphs = len(element.find_all("p"))
        score += paragraphs * cfg.paragraph_weight

        if self.link_ratio(element, text_length) > cfg.max_link_text_ratio:
            score -= cfg.link_density_penalty

        if element.find(["h1", "h2", "h3"]) is not None:
            score += cfg.heading_bonus
        if paragraphs > cfg.many_paragraphs_threshold:
            score += cfg.many_paragraphs_bonus
        if element.find("blockquote") is not None:
            score += cfg.blockquote_bonus
        if element.find(["ul", "ol"]) is not None:
            score += cfg.list_bonus

        if element.select_one(".comments, .comment") is not None:
            score -= cfg.comment_penalty
        if len(element.find_all("form")) > cfg.form_threshold:
            score -= cfg.form_penalty

        return float(score)

    @staticmethod
    def link_ratio(element: Tag, text_length: Optional[int] = None) -> float:
        """Share of the element's text that sits inside anchors."""
        if text_length is None:
            text_length = len(element_text(element))
        if text_length <= 0:
            return 0.0
        link_text = "".join(anchor.get_text() for anchor in element.find_all("a")).strip()
        return len(link_text) / text_length
