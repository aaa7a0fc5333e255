# ABOUTME: Shared pytest fixtures for lccnify tests.
# ABOUTME: Provides sample books CSV files and a fake clock for timing-dependent code.

from pathlib import Path

import pytest

from tests.fixtures.catalog_pages import FakeClock

SAMPLE_CSV = """\
ISBN,Name,Text,Date,Time,Title,Author,Published,LCCN
9780156001311,The Name of the Rose,9780156001311,2023-01-05,10:15:00,The Name of the Rose,Umberto Eco,1994,
,Example Tale,9780000000002,2023-01-05,10:16:30,,,,
9780000000003,Already Done,9780000000003,2023-01-05,10:17:00,Already Done,Jane Doe,2001,2001012345
"""


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    """A books CSV with one complete row, one bare scan, and one already resolved."""
    filepath = tmp_path / "books.csv"
    filepath.write_text(SAMPLE_CSV)
    return filepath


@pytest.fixture
def empty_csv(tmp_path: Path) -> Path:
    """A books CSV with a header and no rows."""
    filepath = tmp_path / "empty.csv"
    filepath.write_text("ISBN,Name,Text,Title,Author,Published,LCCN\n")
    return filepath
