"""Console rendering of scripture results using rich."""

import logging
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from holybible.domain.models.dto import BookDTO, ChapterDTO, VerseDTO, VersionDTO

logger = logging.getLogger(__name__)


class ConsoleDisplay:
    """Prints books, versions, chapters and verses to a rich Console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def display_books(self, books: Iterable[BookDTO]) -> None:
        table = Table(title="Books", title_style="bold")
        table.add_column("Abbrev", style="cyan", no_wrap=True)
        table.add_column("Name")
        table.add_column("Chapters", justify="right")
        table.add_column("Testament", justify="center")
        for book in books:
            table.add_row(book.abbreviation, book.name, str(book.chapter_count), book.testament)
        self.console.print(table)

    def display_versions(self, versions: Iterable[VersionDTO]) -> None:
        table = Table(title="Versions", title_style="bold")
        table.add_column("Code", style="cyan", no_wrap=True)
        table.add_column("Name")
        for version in versions:
            table.add_row(version.code, version.name or "-")
        self.console.print(table)

    def display_chapter(self, chapter: ChapterDTO) -> None:
        body = Text()
        for verse in chapter.verses:
            body.append(f"{verse.number} ", style="bold cyan")
            body.append(f"{verse.text}\n")
        title = f"{chapter.book.name or chapter.book.abbreviation} {chapter.number}"
        self.console.print(
            Panel(body, title=f"[bold]{title}[/bold]", subtitle=f"{chapter.verse_count} verses", title_align="left")
        )

    def display_verse(self, verse: VerseDTO, reference: str) -> None:
        text = Text()
        text.append(f"{verse.number} ", style="bold cyan")
        text.append(verse.text)
        self.console.print(Panel(text, title=f"[bold]{reference}[/bold]", title_align="left"))

    def display_error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def display_info(self, message: str) -> None:
        self.console.print(f"[blue]Info:[/blue] {message}")
