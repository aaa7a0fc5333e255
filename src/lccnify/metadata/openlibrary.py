# ABOUTME: Open Library metadata provider implementation.
# ABOUTME: Looks up title, first author, and publish date for an ISBN via the books API.

import logging
import re

from lccnify.metadata.http import HttpClient, MetadataFetchError
from lccnify.metadata.openlibrary_parser import bibkey, parse_books_response
from lccnify.metadata.types import BookInfo

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"


class OpenLibraryProvider:
    """Metadata provider backed by the Open Library books API.

    Uses dependency-injected HttpClient for testability.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "openlibrary"

    def lookup_isbn(self, isbn: str) -> BookInfo | None:
        """Fetch title, author, and publish date for an ISBN.

        Returns None (and logs a warning) on fetch errors or when Open
        Library has no record for the ISBN.
        """
        clean_isbn = re.sub(r"[\s-]", "", isbn)
        params = {"bibkeys": bibkey(clean_isbn), "format": "json", "jscmd": "data"}
        try:
            data = self._http.get(f"{_OL_BASE}/api/books", params=params)
        except MetadataFetchError as exc:
            logger.warning("ISBN lookup failed for %s: %s", isbn, exc)
            return None

        info = parse_books_response(data if isinstance(data, dict) else {}, clean_isbn)
        if info is None:
            logger.warning("Open Library has no record for ISBN %s", isbn)
        return info
