"""
SiftCore Metadata Module - Page Metadata Resolution

Resolves titles, descriptions, authorship, dates and technical tags through
independent fallback chains, alongside the open Open Graph and Twitter Card
namespaces and the page's JSON-LD blocks.

Components:
- MetadataExtractor: Fallback-chain coordinator
- StructuredDataParser: OpenGraph/Schema.org/Twitter parsing
- ExtendedMetadata: The resolved record
"""

from .metadata_extractor import MetadataExtractor, calculate_reading_time
from .models import ExtendedMetadata
from .structured_data_parser import (
    MetaTagIndex,
    OpenGraphParser,
    SchemaOrgParser,
    StructuredDataParser,
    StructuredDataResult,
    TwitterCardParser,
)

__all__ = [
    # Main extractor
    "MetadataExtractor",
    "ExtendedMetadata",
    "calculate_reading_time",
    # Structured data parsing
    "StructuredDataParser",
    "StructuredDataResult",
    "MetaTagIndex",
    "OpenGraphParser",
    "SchemaOrgParser",
    "TwitterCardParser",
]
