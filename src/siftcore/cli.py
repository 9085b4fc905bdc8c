"""Command-line interface for SiftCore."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, TextIO

import click
import structlog
from rich.console import Console
from rich.table import Table

from siftcore import __version__
from siftcore.config.config import Config, settings
from siftcore.extractor.engine import ContentExtractor
from siftcore.extractor.models import Link
from siftcore.observability.logging import configure_logging
from siftcore.security.validation import InvalidHTMLError

console = Console()
err_console = Console(stderr=True)
logger = structlog.get_logger(__name__)

PARSE_FAILURE_MESSAGE = "page content could not be parsed"

html_source = click.argument("source", type=click.File("r", encoding="utf-8"), default="-")


def load_config(config_path: Optional[Path]) -> Config:
    """Load configuration from an explicit file, or the lazily discovered one."""
    if config_path is not None:
        return Config.from_yaml(config_path)
    return Config(extraction=settings.extraction, monitoring=settings.monitoring)


def emit_json(data: Any) -> None:
    # Plain echo keeps the payload machine-readable when piped
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def run_extraction(ctx: click.Context, source: TextIO, action: Callable[[ContentExtractor, str], Any]) -> Any:
    """Read HTML from ``source`` and run ``action``, mapping invalid input to exit status 1."""
    extractor: ContentExtractor = ctx.obj["extractor"]
    html = source.read()
    try:
        return action(extractor, html)
    except InvalidHTMLError as e:
        logger.debug("Rejected input", error=str(e))
        err_console.print(f"[red]Error: {PARSE_FAILURE_MESSAGE}[/red]", soft_wrap=True)
        sys.exit(1)


def render_links_table(links: List[Link], title: str) -> None:
    table = Table(title=title)
    table.add_column("Type", style="cyan")
    table.add_column("Text", style="magenta")
    table.add_column("URL", style="green", overflow="fold")

    for link in links:
        table.add_row(link.type, link.text, link.href)

    console.print(table)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: str) -> None:
    """SiftCore - Extract clean content and metadata from HTML pages."""
    ctx.ensure_object(dict)

    app_config = load_config(Path(config) if config else None)
    monitoring = app_config.monitoring.model_copy(update={"log_level": log_level})
    configure_logging(monitoring)

    ctx.obj["config"] = app_config
    ctx.obj["extractor"] = ContentExtractor(app_config.extraction)


@cli.command()
@html_source
@click.pass_context
def text(ctx: click.Context, source: TextIO) -> None:
    """Print the clean main-content text of a page."""
    click.echo(run_extraction(ctx, source, lambda extractor, html: extractor.extract_clean_text(html)))


@cli.command()
@html_source
@click.pass_context
def content(ctx: click.Context, source: TextIO) -> None:
    """Print the main content with its counts as JSON."""
    result = run_extraction(ctx, source, lambda extractor, html: extractor.extract_content(html))
    emit_json(result.to_dict())


@cli.command()
@html_source
@click.pass_context
def metadata(ctx: click.Context, source: TextIO) -> None:
    """Print the page metadata as JSON."""
    result = run_extraction(ctx, source, lambda extractor, html: extractor.extract_metadata(html))
    emit_json(result.to_dict())


@cli.command()
@html_source
@click.option("--base-url", help="URL the page was retrieved from, for resolving relative links")
@click.option(
    "--format",
    "output_format",
    default="json",
    type=click.Choice(["json", "table"]),
    help="Output format",
)
@click.pass_context
def links(ctx: click.Context, source: TextIO, base_url: Optional[str], output_format: str) -> None:
    """List the unique links of a page."""
    result = run_extraction(ctx, source, lambda extractor, html: extractor.extract_links(html, base_url))
    if output_format == "table":
        render_links_table(result, title=f"Links ({len(result)})")
    else:
        emit_json([link.to_dict() for link in result])


@cli.command()
@html_source
@click.option("--base-url", required=True, help="URL the page was retrieved from")
@click.option(
    "--format",
    "output_format",
    default="json",
    type=click.Choice(["json", "table"]),
    help="Output format",
)
@click.pass_context
def categorize(ctx: click.Context, source: TextIO, base_url: str, output_format: str) -> None:
    """Split links into same-domain navigation and external groups."""
    result = run_extraction(ctx, source, lambda extractor, html: extractor.categorize_links(html, base_url))
    if output_format == "table":
        render_links_table(result.navigation, title=f"Navigation ({len(result.navigation)})")
        render_links_table(result.external, title=f"External ({len(result.external)})")
    else:
        emit_json(result.to_dict())


@cli.command()
@html_source
@click.pass_context
def tables(ctx: click.Context, source: TextIO) -> None:
    """Print the tables of a page as JSON."""
    result = run_extraction(ctx, source, lambda extractor, html: extractor.extract_tables(html))
    emit_json([table.to_dict() for table in result])


@cli.command()
@html_source
@click.pass_context
def code(ctx: click.Context, source: TextIO) -> None:
    """Print the code blocks of a page as JSON."""
    result = run_extraction(ctx, source, lambda extractor, html: extractor.extract_code_blocks(html))
    emit_json([block.to_dict() for block in result])


@cli.command()
@html_source
@click.option("--url", help="URL the page was retrieved from")
@click.option("--lang", "user_language", help="Language code that overrides detection")
@click.pass_context
def language(ctx: click.Context, source: TextIO, url: Optional[str], user_language: Optional[str]) -> None:
    """Detect the language of a page."""
    result = run_extraction(
        ctx, source, lambda extractor, html: extractor.detect_language(html, url=url, user_language=user_language)
    )
    emit_json(result.to_dict())


@cli.command(name="all")
@html_source
@click.option("--base-url", help="URL the page was retrieved from, for resolving relative links")
@click.pass_context
def all_command(ctx: click.Context, source: TextIO, base_url: Optional[str]) -> None:
    """Print content, metadata, links, tables and code blocks as JSON."""
    result = run_extraction(ctx, source, lambda extractor, html: extractor.extract_all(html, base_url))
    emit_json(result.to_dict())


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
