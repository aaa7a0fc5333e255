# ABOUTME: Parsing functions for Open Library books API JSON responses.
# ABOUTME: Converts the jscmd=data payload into BookInfo instances.

from typing import Any

from lccnify.metadata.types import BookInfo


def bibkey(isbn: str) -> str:
    """The books API key for an ISBN, e.g. 'ISBN:9780156001311'."""
    return f"ISBN:{isbn}"


def clean_title(title: str) -> str:
    """Strip whitespace and a single trailing period from a title."""
    title = title.strip()
    if title.endswith("."):
        title = title[:-1]
    return title


def parse_books_response(data: dict[str, Any], isbn: str) -> BookInfo | None:
    """Parse a books API response for one ISBN.

    The response is keyed by bibkey; a missing key means Open Library
    does not know the ISBN. Only the first listed author is kept.
    """
    record = data.get(bibkey(isbn))
    if not isinstance(record, dict):
        return None

    title = record.get("title")
    authors = record.get("authors") or []
    author = authors[0].get("name") if authors else None

    return BookInfo(
        title=clean_title(title) if title else None,
        author=author or None,
        published=record.get("publish_date") or None,
    )
