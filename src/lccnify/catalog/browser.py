# ABOUTME: Browser capability protocols consumed by the catalog search core.
# ABOUTME: Any automation backend (Selenium, a test fake) implements navigate/locate/read.

from typing import NamedTuple, Protocol, runtime_checkable

# Locator strategies. The values match Selenium's By constants so a Locator
# can be splatted straight into find_elements().
CSS = "css selector"
XPATH = "xpath"


class Locator(NamedTuple):
    """A (strategy, expression) pair addressing elements on a page."""

    by: str
    value: str


def css(selector: str) -> Locator:
    return Locator(CSS, selector)


def xpath(expression: str) -> Locator:
    return Locator(XPATH, expression)


@runtime_checkable
class ElementHandle(Protocol):
    """A rendered element on the current page.

    ``find`` returns None and ``find_all`` an empty list when nothing matches;
    a missing element is never an error.
    """

    def text(self) -> str: ...

    def attribute(self, name: str) -> str | None: ...

    def find(self, locator: Locator) -> "ElementHandle | None": ...

    def find_all(self, locator: Locator) -> "list[ElementHandle]": ...


@runtime_checkable
class Browser(Protocol):
    """A single browser session holding one current page.

    ``navigate`` is bounded by the session's page-load timeout.
    """

    def navigate(self, url: str) -> None: ...

    def locate_one(self, locator: Locator) -> ElementHandle | None: ...

    def locate_all(self, locator: Locator) -> list[ElementHandle]: ...
