# ABOUTME: Shared Click options for lccnify CLI commands.
# ABOUTME: Browser and search settings, each also readable from an environment variable.

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from lccnify import config

verify_option = click.option(
    "--verify/--no-verify",
    "verify_isbn",
    default=True,
    envvar=config.ENV_VERIFY_ISBN,
    show_envvar=True,
    help="Check each matched LCCN's record lists the book's ISBN (default: --verify).",
)


def browser_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Options controlling the browser session and search timing."""
    fn = click.option(
        "--screenshots-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=config.DEFAULT_SCREENSHOTS_DIR,
        envvar=config.ENV_SCREENSHOTS_DIR,
        show_envvar=True,
        show_default=True,
        help="Where to save a screenshot if the run fails.",
    )(fn)
    fn = click.option(
        "--page-load-timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=config.DEFAULT_PAGE_LOAD_TIMEOUT,
        envvar=config.ENV_PAGE_LOAD_TIMEOUT,
        show_envvar=True,
        show_default=True,
        help="Seconds to wait for a single navigation.",
    )(fn)
    fn = click.option(
        "--search-timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=config.DEFAULT_SEARCH_TIMEOUT,
        envvar=config.ENV_SEARCH_TIMEOUT,
        show_envvar=True,
        show_default=True,
        help="Seconds a search page may take to settle, retries included.",
    )(fn)
    fn = click.option(
        "--headless/--no-headless",
        default=True,
        envvar=config.ENV_HEADLESS,
        show_envvar=True,
        help="Run Chrome without a window (default: --headless).",
    )(fn)
    return fn
