# ABOUTME: Core book record used throughout lccnify.
# ABOUTME: Book is the interchange format between the CSV file, metadata lookup, and LCCN resolution.

import re
from dataclasses import dataclass, field

NOT_AVAILABLE = "N/A"

_YEAR_RE = re.compile(r"\b(\d{4})\b")


@dataclass
class Book:
    """A single physical book, one row of the input CSV.

    The ISBN is always present (it falls back to the raw scanned text). Title,
    author, and published date come from the CSV or from a metadata lookup;
    lccn, link, and verified are filled in by the resolver.
    """

    isbn: str
    name: str = ""
    text: str = ""
    title: str | None = None
    author: str | None = None
    published: str | None = None
    lccn: str | None = None
    link: str | None = None
    verified: bool | None = None
    extra: dict[str, str] = field(default_factory=dict)

    @property
    def published_year(self) -> str | None:
        """First four-digit year in the published date, if any."""
        if not self.published:
            return None
        match = _YEAR_RE.search(self.published)
        return match.group(1) if match else None

    @property
    def catalog_author(self) -> str | None:
        """Author in the catalog's 'Last, First' form.

        Names already containing ', ' are returned as-is; otherwise the
        space-separated parts are reversed and joined with ', '.
        """
        if not self.author:
            return None
        if ", " in self.author:
            return self.author
        return ", ".join(reversed(self.author.split(" ")))

    @property
    def has_lccn(self) -> bool:
        return bool(self.lccn)


@dataclass
class BookInfo:
    """Title, author, and published date returned by a metadata lookup."""

    title: str | None = None
    author: str | None = None
    published: str | None = None
