# ABOUTME: Turns one rendered search-result element into a scored candidate.
# ABOUTME: Compares title, contributor, and year against the book; absent fields count as no match.

import logging
import re
from dataclasses import dataclass

from lccnify.catalog import site
from lccnify.catalog.browser import ElementHandle, Locator
from lccnify.catalog.candidate import Candidate
from lccnify.catalog.heuristic import MatchSignals, encode
from lccnify.metadata.types import Book

logger = logging.getLogger(__name__)

# Result titles are rendered as "Title /" or "Title / statement of responsibility";
# only the last slash segment is the artifact.
_TITLE_SUFFIX_RE = re.compile(r"\s+/(?:\s[^/]*)?$")


@dataclass(frozen=True)
class Extraction:
    """Match flags for one result, and the candidate they produced (if any)."""

    signals: MatchSignals
    candidate: Candidate | None = None


def _field_text(element: ElementHandle, locator: Locator) -> str | None:
    """Text of a child element, or None if the element is absent."""
    child = element.find(locator)
    if child is None:
        return None
    return child.text()


def clean_result_title(raw: str) -> str:
    """Trim a displayed result title and drop its trailing ' /' artifact."""
    return _TITLE_SUFFIX_RE.sub("", raw.strip()).strip()


def _title_matches(element: ElementHandle, query_title: str) -> bool:
    text = _field_text(element, site.RESULT_TITLE_LINK)
    if text is None or not query_title:
        return False
    return clean_result_title(text).lower() == query_title.strip().lower()


def _author_matches(element: ElementHandle, book: Book) -> bool:
    expected = book.catalog_author
    if expected is None:
        return False
    text = _field_text(element, site.RESULT_CONTRIBUTOR)
    if text is None:
        return False
    return text.replace(site.CONTRIBUTOR_LABEL, "", 1).strip() == expected


def _date_matches(element: ElementHandle, book: Book) -> bool:
    year = book.published_year
    if year is None:
        return False
    text = _field_text(element, site.RESULT_DATE)
    if text is None:
        return False
    return text.strip() == year


def extract_candidate(element: ElementHandle, book: Book, query_title: str) -> Extraction:
    """Score one search result against the book.

    The title is compared with the query that produced the result page, not
    necessarily the book's own title. The returned candidate carries a zero
    tie-break index; the caller injects the page position.

    Returns an Extraction whose candidate is None when nothing matched or
    when the result's link has no parseable LCCN.
    """
    signals = MatchSignals(
        title=_title_matches(element, query_title),
        author=_author_matches(element, book),
        date=_date_matches(element, book),
    )
    if not signals.matched:
        return Extraction(signals=signals)

    link = element.find(site.RESULT_TITLE_LINK)
    lccn = site.parse_lccn(link.attribute("href") if link is not None else None)
    if lccn is None:
        logger.debug("Result matched ISBN '%s' but has no parseable LCCN link", book.isbn)
        return Extraction(signals=signals)

    matched = [name for name in ("title", "author", "date") if getattr(signals, name)]
    logger.info(
        "Matched LCCN '%s' by %s for ISBN '%s'", lccn, ", ".join(matched), book.isbn
    )
    return Extraction(signals=signals, candidate=Candidate(lccn=lccn, score=encode(signals)))
