# ABOUTME: BookInfoProvider protocol defining the contract for ISBN metadata sources.
# ABOUTME: Any external metadata API (Open Library, Google Books, etc.) implements this.

from typing import Protocol, runtime_checkable

from lccnify.metadata.types import BookInfo


@runtime_checkable
class BookInfoProvider(Protocol):
    """Protocol for looking up a book's title, author, and published date by ISBN.

    Implementations return None when the ISBN is unknown or the lookup
    fails; they do not raise for network problems.
    """

    @property
    def name(self) -> str: ...

    def lookup_isbn(self, isbn: str) -> BookInfo | None: ...
