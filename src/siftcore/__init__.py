"""
SiftCore - Heuristic content and metadata extraction for HTML pages.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor import ContentExtractor
from .security import InvalidHTMLError

__all__ = ["__version__", "Config", "ContentExtractor", "InvalidHTMLError"]
