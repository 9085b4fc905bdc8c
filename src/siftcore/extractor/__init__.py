"""
SiftCore Content Extraction Module - Heuristic Main-Content Extraction

Pipeline for a single HTML page:
1. Noise Filter: Removes navigation, ads, popups and hidden elements
2. Candidate Scorer: Rates elements by text density and structure
3. Best-Content Selector: Prioritised semantic selectors plus a <div> pass
4. Text Formatter: Paragraph-structured, normalised plain text

Auxiliary processors (links, tables, code) and the language detector work
on their own parse, independent of main-content selection.
"""

from .content_processors import CodeProcessor, LinkProcessor, TableProcessor
from .engine import (
    ContentExtractor,
    categorize_links,
    default_extractor,
    detect_language,
    extract_all,
    extract_clean_text,
    extract_code_blocks,
    extract_content,
    extract_links,
    extract_metadata,
    extract_tables,
)
from .formatter import TextFormatter, normalize_text
from .language_detector import LanguageDetector
from .models import (
    CodeBlock,
    ContentCandidate,
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

__all__ = [
    "ContentExtractor",
    "default_extractor",
    "NoiseFilter",
    "ContentScorer",
    "BestContentSelector",
    "TextFormatter",
    "normalize_text",
    "LinkProcessor",
    "TableProcessor",
    "CodeProcessor",
    "LanguageDetector",
    "ContentCandidate",
    "ExtractedContent",
    "ExtractionBundle",
    "LanguageDetectionResult",
    "Link",
    "LinkCategories",
    "TableData",
    "CodeBlock",
    "extract_clean_text",
    "extract_content",
    "extract_metadata",
    "extract_links",
    "categorize_links",
    "extract_tables",
    "extract_code_blocks",
    "extract_all",
    "detect_language",
]
