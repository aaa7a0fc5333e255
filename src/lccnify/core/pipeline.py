# ABOUTME: Enrichment pipeline run over every book in a CSV.
# ABOUTME: Fills missing title/author/date from a metadata provider, then resolves LCCNs, saving after each book.

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from lccnify.catalog.resolver import CandidateResolver
from lccnify.metadata.provider import BookInfoProvider
from lccnify.metadata.types import NOT_AVAILABLE, Book

logger = logging.getLogger(__name__)

SaveFn = Callable[[list[Book]], None]
ProgressFn = Callable[[Book], None]


@dataclass
class InfoResult:
    """Aggregated results from a metadata lookup pass."""

    updated: int = 0
    already_complete: int = 0
    not_found: list[Book] = field(default_factory=list)


@dataclass
class LccnResult:
    """Aggregated results from an LCCN resolution pass."""

    verified: int = 0
    unverified: int = 0
    skipped: int = 0
    not_available: list[Book] = field(default_factory=list)

    @property
    def resolved(self) -> int:
        return self.verified + self.unverified


def needs_info(book: Book) -> bool:
    return not book.title or not book.published


def apply_info(book: Book, provider: BookInfoProvider) -> bool:
    """Fill the book's missing title, author, and published date.

    Fields already set are never overwritten. Returns True if the provider
    had a record for the ISBN.
    """
    logger.info("Getting title and author of '%s'", book.isbn)
    info = provider.lookup_isbn(book.isbn)
    if info is None:
        return False
    if not book.title and info.title:
        book.title = info.title
    if not book.author and info.author:
        book.author = info.author
    if not book.published and info.published:
        book.published = info.published
    return True


def add_book_info(
    books: list[Book],
    provider: BookInfoProvider,
    save: SaveFn,
    progress: ProgressFn | None = None,
) -> InfoResult:
    """Look up metadata for every book missing a title or published date.

    MUTATES books in place and calls save(books) after each updated book.
    """
    result = InfoResult()
    for book in books:
        if not needs_info(book):
            result.already_complete += 1
        elif apply_info(book, provider):
            result.updated += 1
            save(books)
        else:
            result.not_found.append(book)
        if progress is not None:
            progress(book)
    return result


def add_lccns(
    books: list[Book],
    resolver: CandidateResolver,
    save: SaveFn,
    progress: ProgressFn | None = None,
) -> LccnResult:
    """Resolve an LCCN for every book that does not have one yet.

    Books with any LCCN value (including N/A) are skipped, so an interrupted
    run picks up where it stopped. MUTATES books in place and calls
    save(books) after each resolved book. Errors from the resolver (search
    timeouts, browser failures) propagate and abort the run.
    """
    result = LccnResult()
    for book in books:
        if book.has_lccn:
            result.skipped += 1
        else:
            resolution = resolver.resolve(book)
            save(books)
            if resolution is None:
                result.not_available.append(book)
            elif resolution.verified:
                result.verified += 1
            else:
                result.unverified += 1
        if progress is not None:
            progress(book)
    return result


def pending_lccns(books: list[Book]) -> int:
    """Number of books add_lccns would resolve."""
    return sum(1 for book in books if not book.has_lccn)


def is_resolved(book: Book) -> bool:
    return book.has_lccn and book.lccn != NOT_AVAILABLE
