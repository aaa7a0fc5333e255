# ABOUTME: Cross-checks a candidate LCCN against the book's ISBN on the LCCN's detail page.
# ABOUTME: A detail page without an ISBN section simply fails verification.

import logging
import re

from lccnify.catalog import site
from lccnify.catalog.browser import Browser

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"\d+")
_ISBN_SEPARATORS_RE = re.compile(r"[\s-]")


def first_digit_run(text: str) -> str | None:
    """First contiguous run of digits, ignoring notes like '(pbk.)'."""
    match = _DIGITS_RE.search(text)
    return match.group(0) if match else None


class IsbnVerifier:
    """Confirms that an LCCN's catalog record lists a given ISBN."""

    def __init__(self, browser: Browser) -> None:
        self._browser = browser

    def verify(self, lccn: str, isbn: str) -> bool:
        logger.info("Verifying LCCN '%s' against ISBN '%s'", lccn, isbn)
        self._browser.navigate(site.detail_url(lccn))

        heading = self._browser.locate_one(site.ISBN_HEADING)
        if heading is None:
            logger.info("LCCN '%s' lists no ISBNs", lccn)
            return False

        target = _ISBN_SEPARATORS_RE.sub("", isbn)
        for entry in heading.find_all(site.ISBN_ENTRIES):
            if first_digit_run(entry.text()) == target:
                return True

        logger.info("Could not verify ISBN '%s' against LCCN '%s'", isbn, lccn)
        return False
