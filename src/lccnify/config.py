# ABOUTME: Run configuration for lccnify: defaults, environment variable names, and .env loading.
# ABOUTME: The CLI gathers option values into a RunConfig handed to the pipeline.

from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from lccnify.catalog.selenium_browser import DEFAULT_PAGE_LOAD_TIMEOUT
from lccnify.catalog.stabilizer import DEFAULT_POLL_INTERVAL, DEFAULT_SEARCH_TIMEOUT

DEFAULT_SCREENSHOTS_DIR = Path("screenshots")

ENV_INPUT_CSV = "INPUT_CSV"
ENV_VERIFY_ISBN = "VERIFY_ISBN"
ENV_HEADLESS = "LCCNIFY_HEADLESS"
ENV_SEARCH_TIMEOUT = "LCCNIFY_SEARCH_TIMEOUT"
ENV_PAGE_LOAD_TIMEOUT = "LCCNIFY_PAGE_LOAD_TIMEOUT"
ENV_SCREENSHOTS_DIR = "LCCNIFY_SCREENSHOTS_DIR"


@dataclass(frozen=True)
class RunConfig:
    """Settings for one enrichment run."""

    verify_isbn: bool = True
    headless: bool = True
    page_load_timeout: float = DEFAULT_PAGE_LOAD_TIMEOUT
    search_timeout: float = DEFAULT_SEARCH_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    screenshots_dir: Path = DEFAULT_SCREENSHOTS_DIR

    def __post_init__(self) -> None:
        for name in ("page_load_timeout", "search_timeout", "poll_interval"):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ValueError(msg)


def load_env_file(path: Path | None = None) -> bool:
    """Load variables from a .env file without overriding the real environment.

    Without an explicit path, .env is searched for from the working directory up.
    Returns True if a file was found and loaded.
    """
    dotenv_path = path or find_dotenv(usecwd=True)
    if not dotenv_path:
        return False
    return load_dotenv(dotenv_path, override=False)
