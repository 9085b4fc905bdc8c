"""
Input validation for SiftCore.

The only hard failure the extraction engine raises: HTML that is not a
string, is empty, or contains no markup at all.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field


class InvalidHTMLError(ValueError):
    """Raised when the input cannot be treated as an HTML document."""

    pass


class HTMLValidationRules(BaseModel):
    """Rules for HTML input validation."""

    require_tags: bool = Field(default=True, description="Reject input without any tag-like markup.")
    max_length: int | None = Field(default=None, description="Optional upper bound on input length in characters.")


# Opening, closing, comment, doctype or processing-instruction markup
TAG_PATTERN = re.compile(r"<[A-Za-z!/?][^>]*>")


class HTMLValidator:
    """Validates raw HTML strings before they reach the parser."""

    def __init__(self, rules: HTMLValidationRules | None = None) -> None:
        self.rules = rules or HTMLValidationRules()

    def validate(self, html: Any) -> str:
        """
        Validate an HTML string.

        Returns:
            The unchanged HTML string

        Raises:
            InvalidHTMLError: If the input is not usable HTML
        """
        if not isinstance(html, str):
            raise InvalidHTMLError(f"Invalid HTML: expected a string, got {type(html).__name__}")

        if not html.strip():
            raise InvalidHTMLError("Invalid HTML: input is empty")

        if self.rules.max_length is not None and len(html) > self.rules.max_length:
            raise InvalidHTMLError(f"Invalid HTML: input exceeds {self.rules.max_length} characters")

        if self.rules.require_tags and not TAG_PATTERN.search(html):
            raise InvalidHTMLError("Invalid HTML: missing tags")

        return html


# Convenience functions
_default_validator = HTMLValidator()


def validate_html(html: Any) -> str:
    """Validate HTML using the default validator."""
    return _default_validator.validate(html)
