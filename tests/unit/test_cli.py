"""
Tests for the command-line interface.
"""

import json
import logging

import pytest
import structlog
from click.testing import CliRunner

from siftcore import __version__
from siftcore.cli import cli


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def invoke(runner: CliRunner, args, html: str):
    return runner.invoke(cli, args, input=html)


class TestCommands:
    """Test cases for the extraction commands."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_text(self, runner, sample_html):
        result = invoke(runner, ["text"], sample_html)

        assert result.exit_code == 0
        assert result.stdout.startswith("Understanding Content Extraction")
        assert "tracking" not in result.stdout
        assert "We use cookies" not in result.stdout

    def test_text_from_file(self, runner, sample_html, tmp_path):
        path = tmp_path / "page.html"
        path.write_text(sample_html, encoding="utf-8")

        result = runner.invoke(cli, ["text", str(path)])

        assert result.exit_code == 0
        assert "Paragraph 4." in result.stdout

    def test_content(self, runner, sample_html):
        result = invoke(runner, ["content"], sample_html)

        data = json.loads(result.stdout)
        assert data["char_count"] == len(data["text"])
        assert data["has_code"] is True
        assert data["has_tables"] is True

    def test_metadata(self, runner, sample_html):
        result = invoke(runner, ["metadata"], sample_html)

        data = json.loads(result.stdout)
        assert data["title"] == "Understanding Content Extraction"
        assert data["author"] == "Ada Writer"
        assert data["keywords"] == ["html", "extraction", "parsing"]

    def test_links(self, runner, sample_html):
        result = invoke(runner, ["links", "--base-url", "https://example.com/posts/current"], sample_html)

        hrefs = [link["href"] for link in json.loads(result.stdout)]
        assert "https://example.com/posts/next-post" in hrefs
        assert "https://docs.example.org/guide#intro" in hrefs
        assert len(hrefs) == len(set(hrefs))

    def test_links_table(self, runner, sample_html):
        result = invoke(runner, ["links", "--format", "table"], sample_html)

        assert result.exit_code == 0
        assert "Links (1)" in result.stdout

    def test_categorize(self, runner, sample_html):
        result = invoke(runner, ["categorize", "--base-url", "https://example.com/"], sample_html)

        data = json.loads(result.stdout)
        assert {link["href"] for link in data["external"]} == {"https://docs.example.org/guide#intro"}
        assert "https://example.com/about" in {link["href"] for link in data["navigation"]}

    def test_categorize_requires_base_url(self, runner, sample_html):
        result = invoke(runner, ["categorize"], sample_html)

        assert result.exit_code == 2

    def test_tables(self, runner, sample_html):
        result = invoke(runner, ["tables"], sample_html)

        assert json.loads(result.stdout) == [{"headers": ["Signal", "Weight"], "rows": [["Paragraph", "5"], ["Heading", "10"]]}]

    def test_code(self, runner, sample_html):
        result = invoke(runner, ["code"], sample_html)

        blocks = json.loads(result.stdout)
        assert blocks[0]["language"] == "python"
        assert blocks[0]["code"].startswith("def score(element):")

    def test_language(self, runner, sample_html):
        detected = json.loads(invoke(runner, ["language"], sample_html).stdout)
        overridden = json.loads(invoke(runner, ["language", "--lang", "fr"], sample_html).stdout)

        assert detected["detected"] == "en"
        assert detected["source"] == "html"
        assert overridden == {"detected": "fr", "confidence": "high", "source": "user", "signals": ["user-specified"]}

    def test_all(self, runner, sample_html):
        result = invoke(runner, ["all", "--base-url", "https://example.com"], sample_html)

        data = json.loads(result.stdout)
        assert set(data) == {"content", "metadata", "links", "tables", "code_blocks"}
        assert data["metadata"]["word_count"] == data["content"]["word_count"]


class TestErrors:
    """Test cases for invalid input and options."""

    @pytest.mark.parametrize("command", ["text", "content", "metadata", "links", "tables", "code", "language", "all"])
    def test_empty_input_exits_with_error(self, runner, command):
        result = invoke(runner, [command], "")

        assert result.exit_code == 1
        assert "could not be parsed" in result.output

    def test_config_option(self, runner, tmp_path):
        path = tmp_path / "siftcore.yaml"
        path.write_text("extraction:\n  words_per_minute: 1\n", encoding="utf-8")
        html = "<html><body><p>" + "word " * 30 + "</p></body></html>"

        result = runner.invoke(cli, ["--config", str(path), "metadata"], input=html)

        data = json.loads(result.stdout)
        assert data["word_count"] == 30
        assert data["reading_time"] == 30

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["--config", str(tmp_path / "missing.yaml"), "text"], input="<p>x</p>")

        assert result.exit_code == 2
