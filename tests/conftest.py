"""
Test configuration for SiftCore.

Provides shared HTML fixtures and a default extractor. Every extraction
call parses its own copy of the input, so fixtures can be shared freely.
"""

from __future__ import annotations

import pytest

from siftcore.config.config import ExtractionSettings
from siftcore.extractor.engine import ContentExtractor

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")
    config.addinivalue_line("markers", "security: Input validation tests")


# ============================================================================
# Core Test Fixtures
# ============================================================================

ARTICLE_PARAGRAPH = (
    "Heuristic extraction works by scoring candidate elements on how much prose they hold, "
    "rewarding paragraphs and headings while penalising blocks dominated by links."
)


@pytest.fixture
def extraction_settings() -> ExtractionSettings:
    return ExtractionSettings()


@pytest.fixture
def extractor(extraction_settings: ExtractionSettings) -> ContentExtractor:
    """Provide an extractor with default settings."""
    return ContentExtractor(extraction_settings)


@pytest.fixture
def article_paragraph() -> str:
    return ARTICLE_PARAGRAPH


@pytest.fixture
def sample_html() -> str:
    """Provide a realistic article page with chrome, metadata and auxiliary structures."""
    paragraphs = "\n".join(f"<p>{ARTICLE_PARAGRAPH} Paragraph {i}.</p>" for i in range(1, 5))
    return f"""
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <title>Understanding Content Extraction</title>
        <meta name="description" content="How main-content extraction works">
        <meta name="keywords" content="html, extraction , parsing,,">
        <meta name="author" content="Ada Writer">
        <meta name="viewport" content="width=device-width, initial-scale=1">
        <meta name="robots" content="index, follow">
        <meta property="og:title" content="OG Extraction Title">
        <meta property="og:site_name" content="Sift Blog">
        <meta property="og:type" content="article">
        <meta property="og:image" content="https://example.com/cover.png">
        <meta property="article:published_time" content="2024-03-01T09:00:00Z">
        <meta name="twitter:card" content="summary">
        <link rel="canonical" href="https://example.com/posts/understanding-extraction">
        <script type="application/ld+json">
        {{"@context": "https://schema.org", "@type": "Article", "headline": "Understanding Content Extraction",
          "author": {{"@type": "Person", "name": "Ada Writer"}}, "dateModified": "2024-03-05"}}
        </script>
        <style>body {{ color: red; }}</style>
    </head>
    <body>
        <header><div class="logo">Sift Blog</div></header>
        <nav>
            <a href="/">Home</a>
            <a href="/about">About</a>
        </nav>
        <div class="cookie-banner">We use cookies to improve your experience.</div>
        <article>
            <h1>Understanding Content Extraction</h1>
            {paragraphs}
            <ul><li>Score candidates</li><li>Pick the best</li></ul>
            <table>
                <thead><tr><th>Signal</th><th>Weight</th></tr></thead>
                <tbody><tr><td>Paragraph</td><td>5</td></tr><tr><td>Heading</td><td>10</td></tr></tbody>
            </table>
            <pre><code class="language-python">def score(element):
    return len(element.text)
</code></pre>
            <p>Read the <a href="https://docs.example.org/guide#intro">external guide</a>
               or the <a href="/posts/next-post">next post</a>.</p>
        </article>
        <aside class="sidebar">Related: Something else entirely</aside>
        <footer>Copyright Sift Blog</footer>
        <script>console.log("tracking");</script>
    </body>
    </html>
    """
