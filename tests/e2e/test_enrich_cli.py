# ABOUTME: End-to-end tests for the lccnify enrich CLI command.
# ABOUTME: Runs the full command via CliRunner with a fake metadata provider and fake catalog.

import csv
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner
from selenium.common.exceptions import WebDriverException

from lccnify.catalog import site
from lccnify.cli import cli
from lccnify.metadata.types import BookInfo
from tests.e2e.helpers import CLI_ENV, FakeSession
from tests.fixtures.catalog_pages import (
    BrokenBrowser,
    FakeBrowser,
    detail_page,
    loading_page,
    result_item,
    results_page,
)


def _provider() -> MagicMock:
    provider = MagicMock()
    provider.lookup_isbn.side_effect = lambda isbn: (
        BookInfo("Example Tale", "Jane Doe", "2001") if isbn == "9780000000002" else None
    )
    return provider


def _catalog() -> FakeBrowser:
    return FakeBrowser(
        {
            site.search_url("The Name of the Rose"): results_page(
                result_item(
                    title="The name of the rose",
                    contributor="Eco, Umberto",
                    year="1994",
                    lccn="94012345",
                )
            ),
            site.detail_url("94012345"): detail_page("9780156001311"),
            site.search_url("Example Tale"): results_page(
                result_item(title="Example Tale", lccn="2001099999")
            ),
            site.detail_url("2001099999"): detail_page("9789999999999"),
        }
    )


def _rows(path: Path) -> list[dict[str, str]]:
    with path.open(newline="") as handle:
        return list(csv.DictReader(handle))


class TestEnrichCliEndToEnd:
    """End-to-end tests for lccnify enrich."""

    def test_enrich_writes_lccns(self, sample_csv: Path) -> None:
        session = FakeSession(_catalog())
        with (
            patch("lccnify.cli.commands.enrich_cmd._create_provider", return_value=_provider()),
            patch("lccnify.cli.commands.enrich_cmd.open_browser", new=session),
        ):
            result = CliRunner().invoke(cli, ["enrich", str(sample_csv)], env=CLI_ENV)

        assert result.exit_code == 0, result.output
        assert "Done:" in result.output
        assert "1 verified" in result.output
        assert "1 unverified" in result.output
        assert "1 already done" in result.output

        rows = _rows(sample_csv)
        assert [row["LCCN"] for row in rows] == ["94012345", "2001099999", "2001012345"]
        assert [row["Verified"] for row in rows] == ["Yes", "No", ""]
        assert rows[1]["Title"] == "Example Tale"
        assert rows[1]["Link"] == "https://lccn.loc.gov/2001099999"

    def test_input_csv_from_environment(self, sample_csv: Path) -> None:
        session = FakeSession(_catalog())
        with (
            patch("lccnify.cli.commands.enrich_cmd._create_provider", return_value=_provider()),
            patch("lccnify.cli.commands.enrich_cmd.open_browser", new=session),
        ):
            result = CliRunner().invoke(
                cli, ["enrich"], env={**CLI_ENV, "INPUT_CSV": str(sample_csv)}
            )

        assert result.exit_code == 0, result.output
        assert _rows(sample_csv)[0]["LCCN"] == "94012345"

    def test_no_verify_skips_detail_pages(self, sample_csv: Path) -> None:
        browser = _catalog()
        with (
            patch("lccnify.cli.commands.enrich_cmd._create_provider", return_value=_provider()),
            patch("lccnify.cli.commands.enrich_cmd.open_browser", new=FakeSession(browser)),
        ):
            result = CliRunner().invoke(
                cli, ["enrich", "--no-verify", str(sample_csv)], env=CLI_ENV
            )

        assert result.exit_code == 0, result.output
        assert not any(url.startswith("https://lccn.loc.gov/") for url in browser.visits)
        assert "2 unverified" in result.output

    def test_browser_options_passed_to_session(self, sample_csv: Path, tmp_path: Path) -> None:
        session = FakeSession(_catalog())
        with (
            patch("lccnify.cli.commands.enrich_cmd._create_provider", return_value=_provider()),
            patch("lccnify.cli.commands.enrich_cmd.open_browser", new=session),
        ):
            result = CliRunner().invoke(
                cli,
                [
                    "enrich",
                    "--no-headless",
                    "--page-load-timeout",
                    "12",
                    "--screenshots-dir",
                    str(tmp_path / "shots"),
                    str(sample_csv),
                ],
                env=CLI_ENV,
            )

        assert result.exit_code == 0, result.output
        assert session.options == {
            "headless": False,
            "page_load_timeout": 12.0,
            "screenshots_dir": tmp_path / "shots",
        }

    def test_skip_info_does_not_call_provider(self, sample_csv: Path) -> None:
        with (
            patch("lccnify.cli.commands.enrich_cmd._create_provider") as create_provider,
            patch("lccnify.cli.commands.enrich_cmd.open_browser", new=FakeSession(_catalog())),
        ):
            result = CliRunner().invoke(
                cli, ["enrich", "--skip-info", str(sample_csv)], env=CLI_ENV
            )

        assert result.exit_code == 0, result.output
        create_provider.assert_not_called()
        assert _rows(sample_csv)[1]["Title"] == ""

    def test_nothing_pending_does_not_open_browser(self, tmp_path: Path) -> None:
        path = tmp_path / "books.csv"
        path.write_text("ISBN,Title,Published,LCCN\n123,A Title,2001,100\n")
        with (
            patch("lccnify.cli.commands.enrich_cmd._create_provider", return_value=_provider()),
            patch("lccnify.cli.commands.enrich_cmd.open_browser") as open_browser,
        ):
            result = CliRunner().invoke(cli, ["enrich", str(path)], env=CLI_ENV)

        assert result.exit_code == 0, result.output
        assert "All books already have an LCCN" in result.output
        open_browser.assert_not_called()

    def test_search_timeout_exits_with_error(self, sample_csv: Path) -> None:
        stuck = FakeBrowser(default=loading_page())
        with (
            patch("lccnify.cli.commands.enrich_cmd._create_provider", return_value=_provider()),
            patch("lccnify.cli.commands.enrich_cmd.open_browser", new=FakeSession(stuck)),
        ):
            result = CliRunner().invoke(
                cli, ["enrich", "--search-timeout", "0.001", str(sample_csv)], env=CLI_ENV
            )

        assert result.exit_code == 1
        assert "did not load" in result.output

    def test_browser_failure_reports_error(self, sample_csv: Path) -> None:
        broken = BrokenBrowser(WebDriverException("chrome not reachable"))
        with (
            patch("lccnify.cli.commands.enrich_cmd._create_provider", return_value=_provider()),
            patch("lccnify.cli.commands.enrich_cmd.open_browser", new=FakeSession(broken)),
        ):
            result = CliRunner().invoke(cli, ["enrich", str(sample_csv)], env=CLI_ENV)

        assert result.exit_code == 1
        assert "Browser error: chrome not reachable" in result.output

    def test_missing_isbn_column_reports_error(self, tmp_path: Path) -> None:
        path = tmp_path / "books.csv"
        path.write_text("Title\nA Title\n")
        result = CliRunner().invoke(cli, ["enrich", str(path)], env=CLI_ENV)
        assert result.exit_code == 1
        assert "ISBN" in result.output

    def test_nonexistent_file_fails(self) -> None:
        result = CliRunner().invoke(cli, ["enrich", "/nonexistent/books.csv"], env=CLI_ENV)
        assert result.exit_code != 0
