"""CLI command implementations for computing differentials."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from rich.console import Console

from reportdiff.cli.errors import cli_error_handler
from reportdiff.cli.formatting import OutputFormatter
from reportdiff.config import DifferentialConfiguration
from reportdiff.costs import build_costs_summary
from reportdiff.differential import of_reports
from reportdiff.logging import setup_logging
from reportdiff.persistence import load_costs_report, load_report, to_files
from reportdiff.schemas import CostItem

logger = logging.getLogger(__name__)
console = Console()


def _load_optional_costs(path: Path | None) -> list[CostItem]:
    if path is None:
        return []
    return load_costs_report(path)


def _build_configuration(
    no_filtering: bool, developer_mode: bool
) -> DifferentialConfiguration:
    # Only flags given on the command line override the environment.
    properties: dict[str, bool] = {}
    if no_filtering:
        properties["filtering"] = False
    if developer_mode:
        properties["developer_mode"] = True
    return DifferentialConfiguration.from_properties(properties)


def execute_diff_command(  # noqa: PLR0913 - Matches CLI entry point signature
    current_report: Path,
    previous_report: Path,
    output_dir: Path,
    current_costs: Path | None = None,
    previous_costs: Path | None = None,
    no_filtering: bool = False,
    developer_mode: bool = False,
    verbose: bool = False,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for computing a differential.

    Args:
        current_report: Path to the current report JSON
        previous_report: Path to the previous report JSON
        output_dir: Directory receiving the four differential files
        current_costs: Path to the current costs report JSON (optional)
        previous_costs: Path to the previous costs report JSON (optional)
        no_filtering: Disable trace-endpoint deduplication
        developer_mode: Include raw polynomials in cost qualifiers
        verbose: Enable verbose output
        log_level: Logging level

    """
    effective_log_level = "DEBUG" if verbose else log_level
    setup_logging(level=effective_log_level)

    formatter = OutputFormatter()
    formatter.show_startup_banner(
        current_report, previous_report, output_dir, log_level, verbose
    )

    with cli_error_handler("diff", "Differential failed"):
        config = _build_configuration(no_filtering, developer_mode)
        logger.debug("Using configuration: %s", config)

        differential = of_reports(
            load_report(current_report),
            load_report(previous_report),
            _load_optional_costs(current_costs),
            _load_optional_costs(previous_costs),
            config,
        )

        formatter.format_differential(differential)
        formatter.format_costs_summary(differential.costs_summary)

        written = to_files(differential, output_dir)
        formatter.show_files_written(written)


def costs_summary_command(
    current_costs: Path, previous_costs: Path, log_level: str = "INFO"
) -> None:
    """CLI command implementation for summarising two costs reports.

    Args:
        current_costs: Path to the current costs report JSON
        previous_costs: Path to the previous costs report JSON
        log_level: Logging level

    """
    setup_logging(level=log_level)

    with cli_error_handler("costs-summary", "Costs summary failed"):
        summary = build_costs_summary(
            load_costs_report(current_costs), load_costs_report(previous_costs)
        )

        OutputFormatter().format_costs_summary(summary)
        console.print_json(json.dumps(summary.to_json_dict()))
