"""Tests for the reportdiff command-line interface."""

import json
import logging
from collections.abc import Callable
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from reportdiff.__main__ import app
from reportdiff.cli.errors import CLIError, cli_error_handler
from reportdiff.costs.polynomial import TOP_WIRE
from reportdiff.errors import MalformedAuxDataError, ReportLoadError
from reportdiff.schemas import Location

from ..conftest import constant, linear, make_cost, make_finding, power

type WriteJson = Callable[[str, object], Path]

runner = CliRunner()

END = Location(file="lib.c", line=99)


def _dump(items: list) -> list[dict]:
    return [item.to_json_dict() for item in items]


@pytest.fixture
def reports(write_json: WriteJson) -> dict[str, Path]:
    """Write a current/previous pair of reports and costs reports."""
    return {
        "current": write_json(
            "current.json",
            _dump(
                [
                    make_finding("h1", line=1, end_locations=[END]),
                    make_finding("h4", line=4, trace_length=3, end_locations=[END]),
                    make_finding("h2", line=2),
                ]
            ),
        ),
        "previous": write_json(
            "previous.json", _dump([make_finding("h2"), make_finding("h3")])
        ),
        "current_costs": write_json(
            "current_costs.json",
            _dump([make_cost("c1", power(2)), make_cost("c2", constant(0))]),
        ),
        "previous_costs": write_json(
            "previous_costs.json",
            _dump([make_cost("c1", linear()), make_cost("c2", TOP_WIRE)]),
        ),
    }


def _read(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


# =============================================================================
# diff
# =============================================================================


@pytest.mark.usefixtures("clean_env")
class TestDiffCommand:
    """Test the diff command end to end."""

    def test_writes_differential_files(
        self, reports: dict[str, Path], tmp_path: Path
    ) -> None:
        """The diff command writes the four differential documents."""
        # Arrange
        output_dir = tmp_path / "differential"

        # Act
        result = runner.invoke(
            app,
            [
                "diff",
                str(reports["current"]),
                str(reports["previous"]),
                "--current-costs",
                str(reports["current_costs"]),
                "--previous-costs",
                str(reports["previous_costs"]),
                "--output-dir",
                str(output_dir),
            ],
        )

        # Assert
        assert result.exit_code == 0, result.output
        introduced = _read(output_dir / "introduced.json")
        fixed = _read(output_dir / "fixed.json")
        preexisting = _read(output_dir / "preexisting.json")
        assert [f["hash"] for f in introduced] == ["c1", "h1"]
        assert [f["hash"] for f in fixed] == ["c2", "h3"]
        assert [f["hash"] for f in preexisting] == ["h2"]
        assert (output_dir / "costs_summary.json").exists()
        assert "Differential Summary" in result.output

    def test_no_filtering_keeps_duplicates(
        self, reports: dict[str, Path], tmp_path: Path
    ) -> None:
        """--no-filtering disables endpoint deduplication."""
        output_dir = tmp_path / "out"

        result = runner.invoke(
            app,
            [
                "diff",
                str(reports["current"]),
                str(reports["previous"]),
                "-o",
                str(output_dir),
                "--no-filtering",
            ],
        )

        assert result.exit_code == 0, result.output
        introduced = _read(output_dir / "introduced.json")
        assert [f["hash"] for f in introduced] == ["h1", "h4"]

    def test_filtering_disabled_from_environment(
        self,
        reports: dict[str, Path],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """REPORTDIFF_FILTERING applies when the flag is not given."""
        monkeypatch.setenv("REPORTDIFF_FILTERING", "false")
        output_dir = tmp_path / "out"

        result = runner.invoke(
            app,
            [
                "diff",
                str(reports["current"]),
                str(reports["previous"]),
                "-o",
                str(output_dir),
            ],
        )

        assert result.exit_code == 0, result.output
        assert len(_read(output_dir / "introduced.json")) == 2

    def test_developer_mode(self, reports: dict[str, Path], tmp_path: Path) -> None:
        """--developer-mode adds raw polynomials to cost qualifiers."""
        output_dir = tmp_path / "out"

        result = runner.invoke(
            app,
            [
                "diff",
                str(reports["current"]),
                str(reports["previous"]),
                "--current-costs",
                str(reports["current_costs"]),
                "--previous-costs",
                str(reports["previous_costs"]),
                "-o",
                str(output_dir),
                "--developer-mode",
            ],
        )

        assert result.exit_code == 0, result.output
        [cost_issue, _] = _read(output_dir / "introduced.json")
        assert "Current cost is n^2 (degree is 2)." in cost_issue["qualifier"]

    def test_malformed_report_exits_with_error(
        self, reports: dict[str, Path], write_json: WriteJson, tmp_path: Path
    ) -> None:
        """Invalid input exits with code 1 and writes nothing."""
        broken = write_json("broken.json", [{"file": "a.c"}])
        output_dir = tmp_path / "out"

        result = runner.invoke(
            app,
            ["diff", str(broken), str(reports["previous"]), "-o", str(output_dir)],
        )

        assert result.exit_code == 1
        assert "Differential failed" in result.output
        assert not output_dir.exists()

    def test_missing_report_is_a_usage_error(
        self, reports: dict[str, Path], tmp_path: Path
    ) -> None:
        """Nonexistent input paths are rejected by argument validation."""
        result = runner.invoke(
            app, ["diff", str(tmp_path / "nope.json"), str(reports["previous"])]
        )

        assert result.exit_code == 2


# =============================================================================
# costs-summary
# =============================================================================


class TestCostsSummaryCommand:
    """Test the costs-summary command."""

    def test_prints_summary_json(self, reports: dict[str, Path]) -> None:
        """The summary JSON is printed to the console."""
        result = runner.invoke(
            app,
            [
                "costs-summary",
                str(reports["current_costs"]),
                str(reports["previous_costs"]),
            ],
        )

        assert result.exit_code == 0, result.output
        assert '"degrees"' in result.output
        assert "Cost Degrees" in result.output

    def test_invalid_polynomial_exits_with_error(self, write_json: WriteJson) -> None:
        """Undecodable polynomials exit with code 1."""
        broken = write_json("broken.json", _dump([make_cost("c1", "garbage")]))

        result = runner.invoke(app, ["costs-summary", str(broken), str(broken)])

        assert result.exit_code == 1
        assert "Costs summary failed" in result.output


# =============================================================================
# Error handling
# =============================================================================


class TestCLIErrorHandling:
    """Test CLIError formatting and the error handler."""

    def test_differential_error_message(self) -> None:
        """Expected failures show the command and the cause's message."""
        error = CLIError("diff", ReportLoadError("Invalid report 'a.json'"))

        assert not error.unexpected
        assert str(error) == "reportdiff diff: Invalid report 'a.json'"

    def test_unexpected_error_message_names_the_type(self) -> None:
        """Failures outside the differential hierarchy are flagged as such."""
        error = CLIError("costs-summary", KeyError("top"))

        assert error.unexpected
        assert str(error) == "reportdiff costs-summary: unexpected KeyError: 'top'"

    def test_handler_catches_differential_errors(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Differential errors exit with code 1 without a traceback in the log."""
        cause = MalformedAuxDataError("Cannot decode auxData blob")

        with caplog.at_level(logging.DEBUG, logger="reportdiff.cli.errors"):
            with pytest.raises(typer.Exit) as exc_info:
                with cli_error_handler("diff", "Differential failed"):
                    raise cause

        assert exc_info.value.exit_code == 1
        error = exc_info.value.__cause__
        assert isinstance(error, CLIError)
        assert error.cause is cause
        assert all(record.exc_info is None for record in caplog.records)

    def test_handler_logs_traceback_of_unexpected_errors(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unexpected exceptions exit with code 1 and log their traceback at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="reportdiff.cli.errors"):
            with pytest.raises(typer.Exit) as exc_info:
                with cli_error_handler("diff", "Differential failed"):
                    raise RuntimeError("boom")

        assert exc_info.value.exit_code == 1
        error = exc_info.value.__cause__
        assert isinstance(error, CLIError)
        assert isinstance(error.cause, RuntimeError)
        [traceback_record] = [r for r in caplog.records if r.exc_info]
        assert traceback_record.levelno == logging.DEBUG

    def test_handler_passes_through_on_success(self) -> None:
        """Nothing happens when the block completes."""
        with cli_error_handler("diff", "Differential failed"):
            result = 1 + 1

        assert result == 2

    def test_markup_in_messages_is_not_interpreted(
        self, write_json: WriteJson
    ) -> None:
        """Validation messages with square brackets are printed literally."""
        broken = write_json("broken.json", [{"hash": "h1", "file": "a.c"}])

        result = runner.invoke(app, ["costs-summary", str(broken), str(broken)])

        assert result.exit_code == 1
        assert "[type=" in result.output
