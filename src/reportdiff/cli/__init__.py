"""CLI command implementations for reportdiff."""

from reportdiff.cli.diff import costs_summary_command, execute_diff_command
from reportdiff.cli.errors import CLIError

__all__ = [
    "CLIError",
    "costs_summary_command",
    "execute_diff_command",
]
