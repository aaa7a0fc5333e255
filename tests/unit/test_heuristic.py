# ABOUTME: Unit tests for the LCCN match heuristic encoding.
# ABOUTME: Validates band weights, exact decoding, partial updates, and index bounds.

import itertools

import pytest

from lccnify.catalog.heuristic import MAX_INDEX, MatchSignals, decode, encode, update


class TestEncode:
    """Tests for encode()."""

    def test_all_signals_with_index(self) -> None:
        """Every flag set plus index 5 packs into 1111005."""
        signals = MatchSignals(verified=True, title=True, author=True, date=True, index=5)
        assert encode(signals) == 1_111_005

    def test_no_signals_is_zero(self) -> None:
        assert encode(MatchSignals()) == 0

    def test_title_and_author_with_index(self) -> None:
        """Title + author + index 3, no date, is 110003."""
        assert encode(MatchSignals(title=True, author=True, index=3)) == 110_003

    def test_higher_band_beats_any_lower_combination(self) -> None:
        """A title match alone outranks author + date + the largest index."""
        title_only = encode(MatchSignals(title=True))
        everything_below = encode(MatchSignals(author=True, date=True, index=MAX_INDEX))
        assert title_only > everything_below

    def test_verified_outranks_unverified_full_match(self) -> None:
        verified = encode(MatchSignals(verified=True))
        full = encode(MatchSignals(title=True, author=True, date=True, index=MAX_INDEX))
        assert verified > full

    def test_index_too_large_raises(self) -> None:
        with pytest.raises(ValueError, match="index"):
            encode(MatchSignals(title=True, index=1000))

    def test_negative_index_raises(self) -> None:
        with pytest.raises(ValueError, match="index"):
            encode(MatchSignals(index=-1))


class TestDecode:
    """Tests for decode()."""

    @pytest.mark.parametrize(
        ("verified", "title", "author", "date"),
        list(itertools.product([False, True], repeat=4)),
    )
    @pytest.mark.parametrize("index", [0, MAX_INDEX])
    def test_decode_inverts_encode(
        self, verified: bool, title: bool, author: bool, date: bool, index: int
    ) -> None:
        signals = MatchSignals(
            verified=verified, title=title, author=author, date=date, index=index
        )
        assert decode(encode(signals)) == signals

    def test_verified_index_excludes_verified_weight(self) -> None:
        """The tie-break index of a verified score is only the non-flag remainder."""
        signals = decode(1_110_003)
        assert signals.verified is True
        assert signals.title is True
        assert signals.author is True
        assert signals.date is False
        assert signals.index == 3

    def test_verified_only(self) -> None:
        assert decode(1_000_000) == MatchSignals(verified=True)

    def test_negative_score_raises(self) -> None:
        with pytest.raises(ValueError):
            decode(-1)


class TestUpdate:
    """Tests for update()."""

    def test_promote_to_verified(self) -> None:
        """Verifying a title-only score keeps the title flag."""
        score = update(100_000, verified=True)
        assert score >= 1_100_000
        signals = decode(score)
        assert signals.verified is True
        assert signals.title is True

    def test_verify_keeps_index(self) -> None:
        assert update(110_003, verified=True) == 1_110_003

    def test_inject_index(self) -> None:
        assert update(110_000, index=3) == 110_003

    def test_overwrites_only_given_fields(self) -> None:
        score = encode(MatchSignals(title=True, date=True, index=7))
        updated = decode(update(score, author=True, date=False))
        assert updated == MatchSignals(title=True, author=True, index=7)

    def test_no_changes_is_identity(self) -> None:
        assert update(1_011_004) == 1_011_004

    def test_unknown_field_raises(self) -> None:
        with pytest.raises(TypeError):
            update(0, publisher=True)

    def test_is_pure(self) -> None:
        """Repeated calls with the same arguments give the same result."""
        assert update(100_000, verified=True) == update(100_000, verified=True)
