# ABOUTME: Fixed URL templates and page selectors for the Library of Congress catalog.
# ABOUTME: Builds search/detail URLs and parses LCCNs out of result links.

import re
from urllib.parse import urlparse

from lccnify.catalog.browser import css, xpath

SEARCH_URL = "https://www.loc.gov/books/?all=true&q={query}"
DETAIL_URL = "https://lccn.loc.gov/{lccn}"

# Search results page.
RESULTS_CONTAINER = css("#results")
RESULT_LIST = css("ul")
RESULT_ITEM = css("li")
SITE_ERROR_MARKER = css("#error-page, .error-page")
NO_RESULTS_MARKER = css(".noresults, .no-results")

# Fields within one result item.
RESULT_CONTRIBUTOR = css(".contributor")
RESULT_DATE = css(".date span")
RESULT_TITLE_LINK = css(".item-description-title a")

CONTRIBUTOR_LABEL = "Contributor: "

# Detail page: a heading mentioning ISBN whose parent holds the identifier list.
ISBN_HEADING = xpath("//*[contains(text(), 'ISBN')]")
ISBN_ENTRIES = xpath("(./..//ul)[1]/li/span")

_TRAILING_ID_RE = re.compile(r"/(\d+)/?$")


def search_url(query: str) -> str:
    """Search URL for a title or name, spaces replaced by '+'."""
    return SEARCH_URL.format(query=query.replace(" ", "+"))


def detail_url(lccn: str) -> str:
    return DETAIL_URL.format(lccn=lccn)


def parse_lccn(href: str | None) -> str | None:
    """Extract the trailing numeric id from a catalog detail link.

    Returns None for a missing href or one without a numeric last segment.
    """
    if not href:
        return None
    match = _TRAILING_ID_RE.search(urlparse(href).path)
    return match.group(1) if match else None
