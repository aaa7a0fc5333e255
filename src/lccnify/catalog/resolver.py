# ABOUTME: Resolves a book to a single LCCN by searching the catalog with a cascade of queries.
# ABOUTME: Merges and re-ranks candidates after each query and stops at a verified top candidate.

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, replace

from lccnify.catalog import site
from lccnify.catalog.browser import Browser
from lccnify.catalog.candidate import Candidate, rank_candidates
from lccnify.catalog.extractor import extract_candidate
from lccnify.catalog.heuristic import update
from lccnify.catalog.stabilizer import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_SEARCH_TIMEOUT,
    PageLoadStabilizer,
)
from lccnify.catalog.verifier import IsbnVerifier
from lccnify.metadata.types import NOT_AVAILABLE, Book

logger = logging.getLogger(__name__)

# "<title> by <someone>" or "<title>: <subtitle>".
_BYLINE_RE = re.compile(r"(?::\s+|\s+by\s+).+$", re.IGNORECASE)


def strip_byline(query: str) -> str | None:
    """Remove a trailing byline or subtitle from a query.

    Returns None if there is nothing to strip or stripping leaves nothing.
    """
    stripped = _BYLINE_RE.sub("", query).strip()
    if stripped and stripped != query.strip():
        return stripped
    return None


def search_queries(book: Book) -> Iterator[str]:
    """Queries to try, in order: title, name, then their stripped variants.

    Unknown or blank queries are skipped, as is any query already produced.
    """
    bases = [q.strip() for q in (book.title, book.name) if q and q.strip()]
    seen: set[str] = set()
    for query in bases + [strip_byline(q) for q in bases]:
        if query and query not in seen:
            seen.add(query)
            yield query


@dataclass(frozen=True)
class Resolution:
    """The LCCN adopted for a book."""

    lccn: str
    link: str
    verified: bool


class CandidateResolver:
    """Finds the best LCCN for a book.

    Verification is optional: without a verifier no detail pages are visited
    and the cascade always runs to completion.
    """

    def __init__(
        self, stabilizer: PageLoadStabilizer, verifier: IsbnVerifier | None = None
    ) -> None:
        self._stabilizer = stabilizer
        self._verifier = verifier

    @classmethod
    def for_browser(
        cls,
        browser: Browser,
        *,
        verify_isbn: bool = True,
        search_timeout: float = DEFAULT_SEARCH_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> "CandidateResolver":
        """Wire a resolver whose stabilizer and verifier share one browser session."""
        stabilizer = PageLoadStabilizer(
            browser, timeout=search_timeout, poll_interval=poll_interval
        )
        return cls(stabilizer, IsbnVerifier(browser) if verify_isbn else None)

    def find_candidates(self, book: Book) -> list[Candidate]:
        """Run the query cascade and return every candidate, best first."""
        candidates: list[Candidate] = []
        verified_cache: dict[str, bool] = {}

        for query in search_queries(book):
            found = self._search(book, query, verified_cache)
            candidates = rank_candidates(candidates + found)
            if candidates and candidates[0].signals.verified:
                break
        return candidates

    def resolve(self, book: Book) -> Resolution | None:
        """Resolve a book and record the outcome on it.

        MUTATES book: sets lccn, link, and verified, or marks the lccn
        as N/A when no candidate was found.
        """
        candidates = self.find_candidates(book)
        if not candidates:
            logger.info("No LCCN found for ISBN '%s'", book.isbn)
            book.lccn = NOT_AVAILABLE
            book.link = None
            book.verified = None
            return None

        best = candidates[0]
        resolution = Resolution(
            lccn=best.lccn,
            link=site.detail_url(best.lccn),
            verified=best.signals.verified,
        )
        book.lccn = resolution.lccn
        book.link = resolution.link
        book.verified = resolution.verified
        return resolution

    def _search(
        self, book: Book, query: str, verified_cache: dict[str, bool]
    ) -> list[Candidate]:
        """Candidates from a single search, in page order, verified where possible."""
        logger.info("Getting LCCN for ISBN '%s' and title '%s'", book.isbn, query)
        elements = self._stabilizer.load(site.search_url(query))
        total = len(elements)

        # Read the whole results page before verification navigates away from it.
        found: list[Candidate] = []
        for position, element in enumerate(elements):
            candidate = extract_candidate(element, book, query).candidate
            if candidate is None:
                continue
            found.append(replace(candidate, score=update(candidate.score, index=total - position)))

        if self._verifier is None:
            return found

        checked: list[Candidate] = []
        for candidate in found:
            if candidate.lccn not in verified_cache:
                verified_cache[candidate.lccn] = self._verifier.verify(candidate.lccn, book.isbn)
            if verified_cache[candidate.lccn]:
                candidate = replace(candidate, score=update(candidate.score, verified=True))
            checked.append(candidate)
        return checked
