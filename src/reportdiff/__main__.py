"""Main entry point for reportdiff.

This module provides the command-line interface, including commands for:
- Computing the differential between two analysis runs
- Summarising the cost degrees of two costs reports
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from reportdiff.cli import costs_summary_command, execute_diff_command

# Load environment variables from a .env file in the working directory
load_dotenv()

app = typer.Typer(name="reportdiff", no_args_is_help=True)

_EXISTING_FILE = {
    "exists": True,
    "file_okay": True,
    "dir_okay": False,
    "readable": True,
}


@app.command()
def diff(  # noqa: PLR0913 - CLI entry point with many options
    current_report: Annotated[
        Path,
        typer.Argument(help="Path to the current report JSON", **_EXISTING_FILE),
    ],
    previous_report: Annotated[
        Path,
        typer.Argument(help="Path to the previous report JSON", **_EXISTING_FILE),
    ],
    current_costs: Annotated[
        Path | None,
        typer.Option(
            "--current-costs",
            help="Path to the current costs report JSON",
            rich_help_panel="Costs",
            **_EXISTING_FILE,
        ),
    ] = None,
    previous_costs: Annotated[
        Path | None,
        typer.Option(
            "--previous-costs",
            help="Path to the previous costs report JSON",
            rich_help_panel="Costs",
            **_EXISTING_FILE,
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the differential files, defaults to './differential/'",
            file_okay=False,
            dir_okay=True,
            writable=True,
            rich_help_panel="Output",
            show_default="./differential/",
        ),
    ] = None,
    no_filtering: Annotated[
        bool,
        typer.Option(
            "--no-filtering",
            help="Keep findings whose trace endpoints duplicate another finding",
        ),
    ] = False,
    developer_mode: Annotated[
        bool,
        typer.Option(
            "--developer-mode",
            help="Append raw cost polynomials to cost regression qualifiers",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable CLI verbose output (sets log level to DEBUG)",
        ),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Compute the differential between a current and a previous analysis run.

    Example:
        reportdiff diff current/report.json previous/report.json \\
            --current-costs current/costs-report.json \\
            --previous-costs previous/costs-report.json -o ./differential

    """
    if output_dir is None:
        output_dir = Path.cwd() / "differential"

    execute_diff_command(
        current_report,
        previous_report,
        output_dir,
        current_costs=current_costs,
        previous_costs=previous_costs,
        no_filtering=no_filtering,
        developer_mode=developer_mode,
        verbose=verbose,
        log_level=log_level,
    )


@app.command(name="costs-summary")
def costs_summary(
    current_costs: Annotated[
        Path,
        typer.Argument(help="Path to the current costs report JSON", **_EXISTING_FILE),
    ],
    previous_costs: Annotated[
        Path,
        typer.Argument(help="Path to the previous costs report JSON", **_EXISTING_FILE),
    ],
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Summarise cost degree classes of two costs reports."""
    costs_summary_command(current_costs, previous_costs, log_level)


if __name__ == "__main__":
    app()
