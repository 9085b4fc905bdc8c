"""
Unit tests for the structured data parsers.
"""

from bs4 import BeautifulSoup

from siftcore.metadata.structured_data_parser import (
    MetaTagIndex,
    OpenGraphParser,
    SchemaOrgParser,
    StructuredDataParser,
    TwitterCardParser,
)


def soup_of(head: str) -> BeautifulSoup:
    return BeautifulSoup(f"<html><head>{head}</head><body></body></html>", "html.parser")


class TestMetaTagIndex:
    """Test cases for MetaTagIndex."""

    def test_case_insensitive_keys(self):
        meta = MetaTagIndex(soup_of('<meta name="Description" content="Hello">'))

        assert meta.by_name("description") == "Hello"
        assert meta.by_name("DESCRIPTION") == "Hello"

    def test_first_non_empty_occurrence_wins(self):
        meta = MetaTagIndex(
            soup_of('<meta name="author" content=""><meta name="author" content="First"><meta name="author" content="Second">')
        )

        assert meta.by_name("author") == "First"

    def test_lookup_by_attribute(self):
        meta = MetaTagIndex(
            soup_of('<meta property="og:title" content="OG"><meta http-equiv="Content-Language" content="fr">')
        )

        assert meta.by_property("og:title") == "OG"
        assert meta.by_name("og:title") is None
        assert meta.by_http_equiv("content-language") == "fr"

    def test_content_is_stripped(self):
        meta = MetaTagIndex(soup_of('<meta name="robots" content="  noindex  ">'))

        assert meta.by_name("robots") == "noindex"


class TestOpenGraphAndTwitter:
    """Test cases for the prefixed namespaces."""

    def test_open_graph_keys_without_prefix(self):
        meta = MetaTagIndex(
            soup_of(
                '<meta property="og:title" content="Title">'
                '<meta property="og:image:width" content="1200">'
                '<meta name="og:description" content="From name">'
                '<meta property="og:" content="Bare prefix">'
            )
        )

        assert OpenGraphParser.parse(meta) == {"title": "Title", "image:width": "1200", "description": "From name"}

    def test_property_wins_over_name_for_open_graph(self):
        meta = MetaTagIndex(soup_of('<meta name="og:title" content="Name"><meta property="og:title" content="Property">'))

        assert OpenGraphParser.parse(meta)["title"] == "Property"

    def test_twitter_card(self):
        meta = MetaTagIndex(
            soup_of('<meta name="twitter:card" content="summary"><meta property="twitter:site" content="@example">')
        )

        assert TwitterCardParser.parse(meta) == {"card": "summary", "site": "@example"}


class TestSchemaOrgParser:
    """Test cases for JSON-LD parsing."""

    def test_malformed_block_is_dropped(self):
        soup = soup_of(
            '<script type="application/ld+json">{"@type": "Article",</script>'
            '<script type="application/ld+json">{"@type": "Article", "headline": "Valid"}</script>'
        )

        data = SchemaOrgParser.parse_json_ld(soup)

        assert data == [{"@type": "Article", "headline": "Valid"}]

    def test_empty_and_other_scripts_are_ignored(self):
        soup = soup_of(
            '<script type="application/ld+json">   </script>'
            '<script type="application/json">{"a": 1}</script>'
            "<script>var x = 1;</script>"
            '<script type="Application/LD+JSON">[1, 2]</script>'
        )

        assert SchemaOrgParser.parse_json_ld(soup) == [[1, 2]]

    def test_schema_fields_first_occurrence_wins(self):
        data = [
            {"@type": "WebSite", "name": "Site name"},
            {
                "@type": "Article",
                "headline": "Headline",
                "author": [{"@type": "Person", "name": "Ada"}, {"name": "Bob"}],
                "datePublished": "2024-01-02",
                "publisher": {"@type": "Organization", "name": "Example Press"},
                "image": {"url": "https://example.com/a.png"},
            },
        ]

        fields = SchemaOrgParser.extract_schema_fields(data)

        assert fields["title"] == "Site name"
        assert fields["author"] == "Ada"
        assert fields["date_published"] == "2024-01-02"
        assert fields["publisher"] == "Example Press"
        assert fields["image"] == "https://example.com/a.png"
        assert "date_modified" not in fields

    def test_graph_items_are_searched(self):
        data = [{"@context": "https://schema.org", "@graph": [{"@type": "Article", "dateModified": "2024-03-05"}]}]

        assert SchemaOrgParser.extract_schema_fields(data) == {"date_modified": "2024-03-05"}

    def test_non_string_values_are_ignored(self):
        data = [{"headline": True, "description": {"text": "no name"}, "author": []}]

        assert SchemaOrgParser.extract_schema_fields(data) == {}


class TestStructuredDataParser:
    """Test cases for StructuredDataParser."""

    def test_parse_all(self):
        soup = soup_of(
            '<meta property="og:type" content="article">'
            '<meta name="twitter:card" content="summary">'
            '<link rel="stylesheet" href="/site.css">'
            '<link rel="Canonical" href="https://example.com/post">'
            '<script type="application/ld+json">{"headline": "From JSON-LD"}</script>'
        )

        result = StructuredDataParser().parse_all(soup)

        assert result.og == {"type": "article"}
        assert result.twitter == {"card": "summary"}
        assert result.json_ld == [{"headline": "From JSON-LD"}]
        assert result.schema == {"title": "From JSON-LD"}
        assert result.canonical_url == "https://example.com/post"

    def test_empty_document(self):
        result = StructuredDataParser().parse_all(BeautifulSoup("", "html.parser"))

        assert result.og == {}
        assert result.twitter == {}
        assert result.json_ld == []
        assert result.canonical_url is None
