# ABOUTME: Catalog package: LCCN search, candidate scoring, and resolution against loc.gov.
# ABOUTME: Exports the resolver and the browser protocols it runs on.

from lccnify.catalog.browser import Browser, ElementHandle, Locator
from lccnify.catalog.candidate import Candidate, rank_candidates
from lccnify.catalog.heuristic import MatchSignals
from lccnify.catalog.resolver import CandidateResolver, Resolution
from lccnify.catalog.stabilizer import PageLoadStabilizer, SearchTimeoutError
from lccnify.catalog.verifier import IsbnVerifier

__all__ = [
    "Browser",
    "Candidate",
    "CandidateResolver",
    "ElementHandle",
    "IsbnVerifier",
    "Locator",
    "MatchSignals",
    "PageLoadStabilizer",
    "Resolution",
    "SearchTimeoutError",
    "rank_candidates",
]
