# ABOUTME: The `lccnify enrich` command: fills in metadata and LCCNs for every book in a CSV.
# ABOUTME: Looks up titles on Open Library, then searches loc.gov in one browser session.

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from selenium.common.exceptions import WebDriverException

from lccnify import config
from lccnify.catalog.resolver import CandidateResolver
from lccnify.catalog.selenium_browser import open_browser
from lccnify.catalog.stabilizer import SearchTimeoutError
from lccnify.cli.options import browser_options, verify_option
from lccnify.core.pipeline import add_book_info, add_lccns, pending_lccns
from lccnify.formats.csv_books import BookFile, BookFileError
from lccnify.metadata.http import LccnifyHttpClient
from lccnify.metadata.openlibrary import OpenLibraryProvider
from lccnify.metadata.provider import BookInfoProvider

logger = logging.getLogger(__name__)


def _create_provider() -> BookInfoProvider:
    """Create the default metadata provider (Open Library)."""
    return OpenLibraryProvider(http_client=LccnifyHttpClient())


def _make_progress(console: Console) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


@click.command("enrich")
@click.argument(
    "csv_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar=config.ENV_INPUT_CSV,
)
@click.option(
    "--skip-info",
    is_flag=True,
    default=False,
    help="Do not look up missing titles, authors, or dates.",
)
@verify_option
@browser_options
def enrich(
    csv_path: Path,
    skip_info: bool,
    verify_isbn: bool,
    headless: bool,
    search_timeout: float,
    page_load_timeout: float,
    screenshots_dir: Path,
) -> None:
    """Add LCCNs to every book in CSV_PATH (or $INPUT_CSV), saving after each book."""
    console = Console()
    run_config = config.RunConfig(
        verify_isbn=verify_isbn,
        headless=headless,
        page_load_timeout=page_load_timeout,
        search_timeout=search_timeout,
        screenshots_dir=screenshots_dir,
    )

    book_file = BookFile(csv_path)
    try:
        books = book_file.load()
    except BookFileError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc

    if not books:
        console.print("[yellow]No books in file.[/yellow]")
        return

    if not skip_info:
        provider = _create_provider()
        with _make_progress(console) as progress:
            task_id = progress.add_task("Looking up titles", total=len(books))
            info = add_book_info(
                books, provider, book_file.save, progress=lambda _: progress.advance(task_id)
            )
        if info.not_found:
            console.print(
                f"[yellow]No metadata found for {len(info.not_found)} "
                f"book{'s' if len(info.not_found) != 1 else ''}.[/yellow]"
            )

    pending = pending_lccns(books)
    if not pending:
        console.print("[green]All books already have an LCCN.[/green]")
        return

    try:
        with open_browser(
            headless=run_config.headless,
            page_load_timeout=run_config.page_load_timeout,
            screenshots_dir=run_config.screenshots_dir,
        ) as browser:
            resolver = CandidateResolver.for_browser(
                browser,
                verify_isbn=run_config.verify_isbn,
                search_timeout=run_config.search_timeout,
                poll_interval=run_config.poll_interval,
            )
            with _make_progress(console) as progress:
                task_id = progress.add_task("Resolving LCCNs", total=len(books))
                result = add_lccns(
                    books,
                    resolver,
                    book_file.save,
                    progress=lambda book: progress.update(
                        task_id, advance=1, description=book.title or book.isbn
                    ),
                )
    except SearchTimeoutError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    except WebDriverException as exc:
        console.print(f"[red]Browser error: {exc.msg}[/red]")
        raise SystemExit(1) from exc

    parts = []
    if result.verified:
        parts.append(f"[green]{result.verified} verified[/green]")
    if result.unverified:
        parts.append(f"[yellow]{result.unverified} unverified[/yellow]")
    if result.not_available:
        parts.append(f"[red]{len(result.not_available)} not found[/red]")
    if result.skipped:
        parts.append(f"[dim]{result.skipped} already done[/dim]")
    console.print(f"\nDone: {', '.join(parts)}")
