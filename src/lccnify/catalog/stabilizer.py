# ABOUTME: Waits for a catalog search page to settle into results, an empty set, or a site error.
# ABOUTME: Re-navigates on transient site errors under one hard deadline for the whole attempt.

import enum
import logging
import time
from collections.abc import Callable

from lccnify.catalog import site
from lccnify.catalog.browser import Browser, ElementHandle

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_TIMEOUT = 60.0
DEFAULT_POLL_INTERVAL = 1.0


class SearchTimeoutError(Exception):
    """Raised when a search page does not settle before the deadline."""


class PageState(enum.Enum):
    NAVIGATING = "navigating"
    READY = "ready"
    TRANSIENT_ERROR = "transient-error"
    CONFIRMED_EMPTY = "confirmed-empty"


class PageLoadStabilizer:
    """Drives one search-results page until it reaches a terminal state.

    Each poll checks, in order: a populated results list (ready), the site
    error marker (re-navigate and keep polling), the no-results marker
    (empty). Anything else means the page is still loading. The timeout is
    measured from the first navigation and covers every retry.
    """

    def __init__(
        self,
        browser: Browser,
        *,
        timeout: float = DEFAULT_SEARCH_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._browser = browser
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def observe(self) -> tuple[PageState, list[ElementHandle]]:
        """Classify the current page. Result items are returned only when ready."""
        container = self._browser.locate_one(site.RESULTS_CONTAINER)
        if container is not None:
            result_list = container.find(site.RESULT_LIST)
            items = result_list.find_all(site.RESULT_ITEM) if result_list is not None else []
            if items:
                return PageState.READY, items
        if self._browser.locate_one(site.SITE_ERROR_MARKER) is not None:
            return PageState.TRANSIENT_ERROR, []
        if self._browser.locate_one(site.NO_RESULTS_MARKER) is not None:
            return PageState.CONFIRMED_EMPTY, []
        return PageState.NAVIGATING, []

    def load(self, url: str) -> list[ElementHandle]:
        """Navigate to a search URL and return its result items in page order.

        Raises:
            SearchTimeoutError: If the page has not settled within the timeout.
        """
        started = self._clock()
        self._browser.navigate(url)
        retries = 0

        while True:
            state, items = self.observe()
            if state is PageState.READY:
                return items
            if state is PageState.CONFIRMED_EMPTY:
                logger.info("No results for %s", url)
                return []
            if state is PageState.TRANSIENT_ERROR:
                retries += 1
                logger.warning("Site error on %s, reloading (retry %d)", url, retries)
                self._browser.navigate(url)

            elapsed = self._clock() - started
            if elapsed > self._timeout:
                raise SearchTimeoutError(
                    f"Search page did not load within {self._timeout:.0f}s "
                    f"({retries} retries): {url}"
                )
            self._sleep(self._poll_interval)
