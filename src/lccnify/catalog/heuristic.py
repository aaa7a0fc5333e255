# ABOUTME: Match-confidence heuristic packed into a single totally-ordered integer.
# ABOUTME: Encodes verified/title/author/date flags plus a page-position tie-break in decimal bands.

from dataclasses import dataclass, replace

# Band weights, highest to lowest. Each flag owns one decimal digit.
WEIGHT_VERIFIED = 1_000_000
WEIGHT_TITLE = 100_000
WEIGHT_AUTHOR = 10_000
WEIGHT_DATE = 1_000

# The tie-break index must stay below the smallest flag weight.
MAX_INDEX = WEIGHT_DATE - 1


@dataclass(frozen=True)
class MatchSignals:
    """Independent match tests for one search result."""

    title: bool = False
    author: bool = False
    date: bool = False
    verified: bool = False
    index: int = 0

    @property
    def matched(self) -> bool:
        """Whether any of the three field comparisons matched."""
        return self.title or self.author or self.date


def encode(signals: MatchSignals) -> int:
    """Sum the active weights plus the tie-break index.

    Raises:
        ValueError: If the index is outside [0, MAX_INDEX].
    """
    if not 0 <= signals.index <= MAX_INDEX:
        msg = f"index must be between 0 and {MAX_INDEX}, got {signals.index}"
        raise ValueError(msg)

    score = signals.index
    if signals.verified:
        score += WEIGHT_VERIFIED
    if signals.title:
        score += WEIGHT_TITLE
    if signals.author:
        score += WEIGHT_AUTHOR
    if signals.date:
        score += WEIGHT_DATE
    return score


def decode(score: int) -> MatchSignals:
    """Recover the signals from a score, highest band first.

    Each band's weight is subtracted once detected, so whatever remains
    after the date band is the tie-break index.
    """
    if score < 0:
        raise ValueError(f"score must be non-negative, got {score}")

    flags: dict[str, bool] = {}
    for name, weight in (
        ("verified", WEIGHT_VERIFIED),
        ("title", WEIGHT_TITLE),
        ("author", WEIGHT_AUTHOR),
        ("date", WEIGHT_DATE),
    ):
        flags[name] = score >= weight
        if flags[name]:
            score -= weight
    return MatchSignals(index=score, **flags)


def update(existing: int, **changes: bool | int) -> int:
    """Re-encode a score with only the given fields overwritten.

    Accepts any of ``verified``, ``title``, ``author``, ``date``, ``index``.
    """
    return encode(replace(decode(existing), **changes))
