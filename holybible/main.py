"""Command line interface for holybible.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and renders results with the ConsoleDisplay.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Optional

import typer

from holybible.core.bible import Bible
from holybible.domain.exceptions import BibleApiError
from holybible.domain.models.books import Book
from holybible.domain.models.common import Reference
from holybible.infrastructure.cli.display import ConsoleDisplay
from holybible.infrastructure.config.bible_config import BibleConfig
from holybible.infrastructure.monitoring.logger_setup import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Per-invocation dependencies handed to commands through the Typer context."""
    bible: Bible
    ui: ConsoleDisplay


def create_dependencies(
    bible_version: Optional[str] = None,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
    no_cache: bool = False,
    log_level: Optional[str] = None,
) -> AppState:
    """Creates and wires up the dependencies for one CLI invocation.

    This acts as the Composition Root. Command-line values override settings.
    """
    config = BibleConfig.from_settings(
        version=bible_version,
        user_token=token,
        timeout=timeout,
        cache_enabled=False if no_cache else None,
        log_level=log_level,
    )
    setup_logging(log_level=config.log_level)
    logger.debug(f"Configuration resolved: version={config.version}, cache_enabled={config.cache_enabled}")
    return AppState(bible=Bible(config), ui=ConsoleDisplay())


app = typer.Typer(
    name="holybible",
    help="Read Bible books, chapters and verses from the Bible Digital API.",
    add_completion=False,
)


def _parse_book(ui: ConsoleDisplay, text: str) -> Book:
    try:
        return Book.parse(text)
    except ValueError as e:
        ui.display_error(str(e))
        raise typer.Exit(code=1)


def _state(ctx: typer.Context) -> AppState:
    return ctx.obj


@app.callback()
def main_callback(
    ctx: typer.Context,
    bible_version: Annotated[
        Optional[str], typer.Option("--bible-version", "-b", help="Bible version code, e.g. 'nvi' or 'acf'.")
    ] = None,
    token: Annotated[Optional[str], typer.Option("--token", help="API bearer token.")] = None,
    timeout: Annotated[Optional[float], typer.Option("--timeout", help="Request timeout in seconds.")] = None,
    no_cache: Annotated[bool, typer.Option("--no-cache", help="Bypass the response cache.")] = False,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR.")] = None,
):
    """Resolve configuration and build the client before running a command."""
    try:
        ctx.obj = create_dependencies(bible_version, token, timeout, no_cache, log_level)
    except ValueError as e:
        ConsoleDisplay().display_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)
    ctx.call_on_close(ctx.obj.bible.close)


@app.command()
def books(ctx: typer.Context):
    """List all books."""
    state = _state(ctx)
    try:
        state.ui.display_books(state.bible.get_books())
    except BibleApiError as e:
        state.ui.display_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def versions(ctx: typer.Context):
    """List available Bible versions."""
    state = _state(ctx)
    try:
        state.ui.display_versions(state.bible.get_versions())
    except BibleApiError as e:
        state.ui.display_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def chapter(
    ctx: typer.Context,
    book: Annotated[str, typer.Argument(help="Book name (JOHN) or abbreviation (jo).")],
    number: Annotated[int, typer.Argument(help="Chapter number.")],
):
    """Show a whole chapter."""
    state = _state(ctx)
    parsed = _parse_book(state.ui, book)
    try:
        state.ui.display_chapter(state.bible.get_chapter(parsed, number))
    except BibleApiError as e:
        state.ui.display_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def verse(
    ctx: typer.Context,
    book: Annotated[str, typer.Argument(help="Book name (JOHN) or abbreviation (jo).")],
    chapter_number: Annotated[int, typer.Argument(metavar="CHAPTER", help="Chapter number.")],
    verse_number: Annotated[int, typer.Argument(metavar="VERSE", help="Verse number.")],
):
    """Show a single verse."""
    state = _state(ctx)
    parsed = _parse_book(state.ui, book)
    try:
        result = state.bible.get_verse(parsed, chapter_number, verse_number)
    except BibleApiError as e:
        state.ui.display_error(str(e))
        raise typer.Exit(code=1)
    state.ui.display_verse(result, str(Reference(parsed, chapter_number, verse_number)))


@app.command(name="clear-cache")
def clear_cache_command(ctx: typer.Context):
    """Clear cached API responses."""
    state = _state(ctx)
    if state.bible.clear_cache():
        state.ui.display_info("Cache cleared.")
    else:
        state.ui.display_error("Some cache entries could not be removed.")
        raise typer.Exit(code=1)


def cli_entry_point():
    """Function called by the console script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
