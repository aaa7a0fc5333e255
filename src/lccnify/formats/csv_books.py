# ABOUTME: Reading and writing the books CSV that lccnify enriches in place.
# ABOUTME: Maps known columns onto Book fields and carries unknown columns through untouched.

import csv
import logging
from datetime import datetime
from pathlib import Path

from lccnify.metadata.types import Book

logger = logging.getLogger(__name__)

# Column order used when a column is missing from the input header.
COLUMNS = (
    "ISBN",
    "Name",
    "Text",
    "Date",
    "Time",
    "Title",
    "Author",
    "Published",
    "LCCN",
    "Link",
    "Verified",
    "Created",
)

_FIELD_COLUMNS = {
    "ISBN": "isbn",
    "Name": "name",
    "Text": "text",
    "Title": "title",
    "Author": "author",
    "Published": "published",
    "LCCN": "lccn",
    "Link": "link",
}

_CREATED_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M",
    "%m/%d/%y %H:%M",
)


class BookFileError(Exception):
    """Raised when the books CSV cannot be read or lacks an ISBN column."""


def _parse_verified(value: str) -> bool | None:
    lowered = value.strip().lower()
    if lowered in ("yes", "true"):
        return True
    if lowered in ("no", "false"):
        return False
    return None


def _format_verified(value: bool | None) -> str:
    if value is None:
        return ""
    return "Yes" if value else "No"


def _created_timestamp(date: str, time_of_day: str) -> str | None:
    """Combine the scanner's Date and Time columns into an ISO timestamp."""
    combined = f"{date} {time_of_day}"
    for fmt in _CREATED_FORMATS:
        try:
            return datetime.strptime(combined, fmt).isoformat()
        except ValueError:
            continue
    logger.debug("Could not parse created time from '%s'", combined)
    return None


def book_from_row(row: dict[str, str]) -> Book:
    """Build a Book from one CSV row (keys are column names, values trimmed).

    An empty ISBN falls back to the raw scanned Text. Created is derived
    from Date and Time when it is missing.
    """
    values = {column: row.get(column, "") for column in _FIELD_COLUMNS}
    isbn = values["ISBN"] or values["Text"]
    extra = {k: v for k, v in row.items() if k not in _FIELD_COLUMNS and k != "Verified"}

    if not extra.get("Created") and extra.get("Date") and extra.get("Time"):
        created = _created_timestamp(extra["Date"], extra["Time"])
        if created:
            extra["Created"] = created

    return Book(
        isbn=isbn,
        name=values["Name"],
        text=values["Text"],
        title=values["Title"] or None,
        author=values["Author"] or None,
        published=values["Published"] or None,
        lccn=values["LCCN"] or None,
        link=values["Link"] or None,
        verified=_parse_verified(row.get("Verified", "")),
        extra=extra,
    )


def book_to_row(book: Book) -> dict[str, str]:
    row = dict(book.extra)
    for column, attr in _FIELD_COLUMNS.items():
        row[column] = getattr(book, attr) or ""
    row["Verified"] = _format_verified(book.verified)
    return row


class BookFile:
    """A books CSV on disk.

    Remembers the header order from load() so save() writes the columns
    back in the same order, appending any it had to add.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.columns: list[str] = list(COLUMNS)

    def load(self) -> list[Book]:
        """Read every non-blank row.

        Raises:
            BookFileError: If the file is unreadable or has neither an
                ISBN nor a Text column.
        """
        try:
            with self.path.open(newline="", encoding="utf-8-sig") as handle:
                reader = csv.DictReader(handle)
                header = [name.strip() for name in reader.fieldnames or []]
                rows = [self._clean_row(header, raw) for raw in reader]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise BookFileError(f"Could not read {self.path}: {exc}") from exc

        if "ISBN" not in header and "Text" not in header:
            raise BookFileError(f"{self.path} has no 'ISBN' or 'Text' column")

        self.columns = header + [c for c in COLUMNS if c not in header]
        return [book_from_row(row) for row in rows if any(row.values())]

    def save(self, books: list[Book]) -> None:
        """Write all books, replacing the file only once the write completes."""
        rows = [book_to_row(book) for book in books]
        for row in rows:
            for column in row:
                if column not in self.columns:
                    self.columns.append(column)

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with tmp_path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=self.columns, restval="")
            writer.writeheader()
            writer.writerows(rows)
        tmp_path.replace(self.path)

    @staticmethod
    def _clean_row(header: list[str], raw: dict[str | None, str | None]) -> dict[str, str]:
        # DictReader keys are the untrimmed header; short rows yield None values
        # and long rows put the overflow under a None key.
        values = [raw.get(key) for key in raw if key is not None]
        return {name: (value or "").strip() for name, value in zip(header, values)}
