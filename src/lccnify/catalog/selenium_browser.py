# ABOUTME: Selenium-backed implementation of the Browser and ElementHandle protocols.
# ABOUTME: Owns the Chrome session lifecycle and saves a screenshot when a run fails.

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from webdriver_manager.chrome import ChromeDriverManager

from lccnify.catalog.browser import Locator

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LOAD_TIMEOUT = 30.0


class SeleniumElement:
    """ElementHandle over a Selenium WebElement."""

    def __init__(self, element: WebElement) -> None:
        self._element = element

    def text(self) -> str:
        return self._element.text

    def attribute(self, name: str) -> str | None:
        return self._element.get_attribute(name)

    def find(self, locator: Locator) -> "SeleniumElement | None":
        found = self.find_all(locator)
        return found[0] if found else None

    def find_all(self, locator: Locator) -> "list[SeleniumElement]":
        # find_elements returns [] instead of raising NoSuchElementException.
        return [SeleniumElement(e) for e in self._element.find_elements(*locator)]


class SeleniumBrowser:
    """Browser over a single Selenium WebDriver session."""

    def __init__(
        self, driver: WebDriver, *, page_load_timeout: float = DEFAULT_PAGE_LOAD_TIMEOUT
    ) -> None:
        self._driver = driver
        self._driver.set_page_load_timeout(page_load_timeout)

    def navigate(self, url: str) -> None:
        self._driver.get(url)

    def locate_one(self, locator: Locator) -> SeleniumElement | None:
        found = self.locate_all(locator)
        return found[0] if found else None

    def locate_all(self, locator: Locator) -> list[SeleniumElement]:
        return [SeleniumElement(e) for e in self._driver.find_elements(*locator)]

    def save_screenshot(self, directory: Path) -> Path:
        """Save a PNG of the current page, named by the current UTC time."""
        directory.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        path = directory / f"{stamp.replace(':', '-').replace('.', '-')}.png"
        self._driver.save_screenshot(str(path))
        return path

    def quit(self) -> None:
        self._driver.quit()


def create_chrome_driver(*, headless: bool = True) -> WebDriver:
    """Create a Chrome WebDriver, downloading a matching chromedriver if needed."""
    chrome_options = Options()
    if headless:
        chrome_options.add_argument("--headless=new")
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.add_argument("--disable-gpu")
    chrome_options.add_experimental_option("excludeSwitches", ["enable-logging"])

    service = Service(ChromeDriverManager().install())
    return webdriver.Chrome(service=service, options=chrome_options)


@contextmanager
def open_browser(
    *,
    headless: bool = True,
    page_load_timeout: float = DEFAULT_PAGE_LOAD_TIMEOUT,
    screenshots_dir: Path | None = None,
) -> Iterator[SeleniumBrowser]:
    """Run a block inside one browser session.

    If the block raises, a screenshot of the current page is saved to
    screenshots_dir (when given) before the exception propagates. The
    driver is always quit.
    """
    browser = SeleniumBrowser(
        create_chrome_driver(headless=headless), page_load_timeout=page_load_timeout
    )
    try:
        yield browser
    except Exception:
        if screenshots_dir is not None:
            path = browser.save_screenshot(screenshots_dir)
            logger.error("Saved screenshot to '%s'", path)
        raise
    finally:
        browser.quit()
