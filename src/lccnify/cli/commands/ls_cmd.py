# ABOUTME: The `lccnify ls` command for listing books in a CSV.
# ABOUTME: Displays a Rich table with each book's metadata and LCCN status.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from lccnify import config
from lccnify.core.pipeline import is_resolved
from lccnify.formats.csv_books import BookFile, BookFileError
from lccnify.metadata.types import Book


def _lccn_cell(book: Book) -> str:
    if not book.has_lccn:
        return "[dim]-[/dim]"
    if not is_resolved(book):
        return f"[red]{book.lccn}[/red]"
    if book.verified:
        return f"[green]{book.lccn}[/green]"
    return f"[yellow]{book.lccn}[/yellow]"


@click.command("ls")
@click.argument(
    "csv_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar=config.ENV_INPUT_CSV,
)
@click.option("--pending", is_flag=True, default=False, help="Only books without an LCCN.")
def ls(csv_path: Path, pending: bool) -> None:
    """List the books in CSV_PATH (or $INPUT_CSV)."""
    console = Console()
    try:
        books = BookFile(csv_path).load()
    except BookFileError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    if pending:
        books = [book for book in books if not book.has_lccn]

    if not books:
        console.print("[yellow]No books found.[/yellow]")
        return

    table = Table()
    table.add_column("ISBN", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)
    table.add_column("LCCN")

    for book in books:
        table.add_row(
            book.isbn,
            book.title or book.name or "[dim]unknown[/dim]",
            book.author or "[dim]unknown[/dim]",
            book.published_year or "?",
            _lccn_cell(book),
        )

    console.print(table)
    resolved = sum(1 for book in books if is_resolved(book))
    console.print(f"\n[dim]{len(books)} book(s), {resolved} with an LCCN[/dim]")
