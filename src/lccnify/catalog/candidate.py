# ABOUTME: Candidate pairs a catalog identifier with its heuristic score.
# ABOUTME: Ranking is by score descending; equal scores keep their merge order.

from dataclasses import dataclass

from lccnify.catalog.heuristic import MatchSignals, decode


@dataclass(frozen=True)
class Candidate:
    """A tentative LCCN for a book, extracted from one search result."""

    lccn: str
    score: int

    def __post_init__(self) -> None:
        if self.score < 0:
            msg = f"score must be non-negative, got {self.score}"
            raise ValueError(msg)

    @property
    def signals(self) -> MatchSignals:
        return decode(self.score)


def rank_candidates(candidates: list[Candidate]) -> list[Candidate]:
    """Return candidates sorted by score descending.

    The sort is stable, so ties keep the order in which they were merged.
    """
    return sorted(candidates, key=lambda c: c.score, reverse=True)
