"""Output formatting for reportdiff CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from reportdiff.costs import CostsSummary
from reportdiff.differential import Differential

logger = logging.getLogger(__name__)
console = Console()


class OutputFormatter:
    """Handles formatting CLI output for different commands."""

    def show_startup_banner(
        self,
        current_report: Path,
        previous_report: Path,
        output_dir: Path,
        log_level: str,
        verbose: bool = False,
    ) -> None:
        """Show startup banner for the diff command.

        Args:
            current_report: Path to the current report
            previous_report: Path to the previous report
            output_dir: Output directory for the differential
            log_level: Current log level
            verbose: Whether verbose mode is enabled

        """
        startup_panel = Panel(
            f"[bold cyan]🚀 Computing Differential[/bold cyan]\n\n"
            f"[bold]Current:[/bold] {current_report}\n"
            f"[bold]Previous:[/bold] {previous_report}\n"
            f"[bold]Output Dir:[/bold] {output_dir}\n"
            f"[bold]Log Level:[/bold] {log_level}{'(verbose)' if verbose else ''}",
            title="🔍 reportdiff",
            border_style="cyan",
        )
        console.print(startup_panel)

    def format_differential(self, differential: Differential) -> None:
        """Print bucket sizes and a per-bug-type breakdown.

        Args:
            differential: Computed differential

        """
        table = Table(
            title="📊 Differential Summary",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Bucket", style="cyan", no_wrap=True)
        table.add_column("Findings", justify="right")
        table.add_column("Bug Types", style="dim")

        buckets = [
            ("[red]introduced[/red]", differential.introduced),
            ("[green]fixed[/green]", differential.fixed),
            ("[yellow]preexisting[/yellow]", differential.preexisting),
        ]
        for label, findings in buckets:
            bug_types = sorted({f.bug_type for f in findings if f.bug_type})
            table.add_row(label, str(len(findings)), ", ".join(bug_types) or "-")

        console.print(table)

    def format_costs_summary(self, summary: CostsSummary) -> None:
        """Print the paired cost histogram.

        Args:
            summary: Costs summary to display

        """
        table = Table(
            title="⏱️  Cost Degrees",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Degree", style="cyan", no_wrap=True)
        table.add_column("Current", justify="right")
        table.add_column("Previous", justify="right")

        table.add_row("top", str(summary.top.current), str(summary.top.previous))
        table.add_row("zero", str(summary.zero.current), str(summary.zero.previous))
        for entry in summary.degrees:
            table.add_row(str(entry.degree), str(entry.current), str(entry.previous))

        console.print(table)
        logger.debug("Costs summary has %d degree rows", len(summary.degrees))

    def show_files_written(self, paths: list[Path]) -> None:
        """Show the list of written differential files.

        Args:
            paths: Paths of written files

        """
        listing = "\n".join(f"[bold]•[/bold] {path}" for path in paths)
        console.print(
            Panel(
                f"[bold green]✅ Differential written[/bold green]\n\n{listing}",
                title="🎉 Completion Summary",
                border_style="green",
            )
        )
