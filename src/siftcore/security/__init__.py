"""
Input validation for SiftCore.
"""

from .validation import HTMLValidationRules, HTMLValidator, InvalidHTMLError, validate_html

__all__ = [
    "HTMLValidationRules",
    "HTMLValidator",
    "InvalidHTMLError",
    "validate_html",
]
