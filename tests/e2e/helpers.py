# ABOUTME: Helpers for CLI end-to-end tests.
# ABOUTME: Stands a fake catalog in for the Chrome session opened by commands.

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from tests.fixtures.catalog_pages import FakeBrowser

# Wide terminal so Rich tables never wrap identifiers.
CLI_ENV = {"COLUMNS": "200"}


class FakeSession:
    """Replacement for open_browser() that yields one FakeBrowser and records its options."""

    def __init__(self, browser: FakeBrowser) -> None:
        self.browser = browser
        self.options: dict[str, Any] | None = None

    @contextmanager
    def __call__(self, **options: Any) -> Iterator[FakeBrowser]:
        self.options = options
        yield self.browser
