# ABOUTME: The `lccnify resolve` command for looking up a single book's LCCN.
# ABOUTME: Prints every ranked candidate with its decoded match signals, without touching any CSV.

from pathlib import Path

import click
from rich.console import Console
from selenium.common.exceptions import WebDriverException
from rich.table import Table

from lccnify.catalog.candidate import Candidate
from lccnify.catalog.resolver import CandidateResolver
from lccnify.catalog.selenium_browser import open_browser
from lccnify.catalog.stabilizer import SearchTimeoutError
from lccnify.cli.options import browser_options, verify_option
from lccnify.metadata.types import Book


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


def _candidate_table(candidates: list[Candidate]) -> Table:
    table = Table(title="Candidates")
    table.add_column("#", style="bold", width=3)
    table.add_column("LCCN")
    table.add_column("Verified")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Date")
    table.add_column("Index", justify="right")
    table.add_column("Score", justify="right", style="dim")

    for i, candidate in enumerate(candidates, start=1):
        signals = candidate.signals
        table.add_row(
            str(i),
            candidate.lccn,
            _flag(signals.verified),
            _flag(signals.title),
            _flag(signals.author),
            _flag(signals.date),
            str(signals.index),
            str(candidate.score),
        )
    return table


@click.command("resolve")
@click.argument("isbn")
@click.option("--title", default=None, help="Book title to search for.")
@click.option("--name", default="", help="Fallback display name to search for.")
@click.option("--author", default=None, help="Author, as 'First Last' or 'Last, First'.")
@click.option("--published", default=None, help="Publication date or year.")
@verify_option
@browser_options
def resolve(
    isbn: str,
    title: str | None,
    name: str,
    author: str | None,
    published: str | None,
    verify_isbn: bool,
    headless: bool,
    search_timeout: float,
    page_load_timeout: float,
    screenshots_dir: Path,
) -> None:
    """Find the LCCN for one book identified by ISBN."""
    console = Console()
    if not title and not name:
        raise click.UsageError("Give --title or --name to search for.")

    book = Book(isbn=isbn, name=name, title=title, author=author, published=published)
    try:
        with open_browser(
            headless=headless,
            page_load_timeout=page_load_timeout,
            screenshots_dir=screenshots_dir,
        ) as browser:
            resolver = CandidateResolver.for_browser(
                browser, verify_isbn=verify_isbn, search_timeout=search_timeout
            )
            candidates = resolver.find_candidates(book)
    except SearchTimeoutError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    except WebDriverException as exc:
        console.print(f"[red]Browser error: {exc.msg}[/red]")
        raise SystemExit(1) from exc

    if not candidates:
        console.print("[yellow]No LCCN found.[/yellow]")
        return

    console.print(_candidate_table(candidates))
    best = candidates[0]
    status = "verified" if best.signals.verified else "unverified"
    console.print(f"\n[bold]LCCN:[/bold] {best.lccn} ({status})")
