# ABOUTME: Metadata package for book records and ISBN metadata lookup.
# ABOUTME: Exports the Book record used throughout lccnify.

from lccnify.metadata.provider import BookInfoProvider
from lccnify.metadata.types import NOT_AVAILABLE, Book, BookInfo

__all__ = [
    "NOT_AVAILABLE",
    "Book",
    "BookInfo",
    "BookInfoProvider",
]
