"""Error reporting for reportdiff commands.

Differential failures (unreadable reports, corrupt auxData blobs, invalid
polynomials, unwritable output) are expected outcomes of bad input and are
shown as a single-line panel. Anything else is a bug: the panel names the
exception type and the traceback goes to the DEBUG log.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import NoReturn, override

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from reportdiff.errors import DifferentialError

logger = logging.getLogger(__name__)
console = Console()


class CLIError(Exception):
    """A reportdiff command failed.

    Attributes:
        command: Name of the failing command, e.g. ``costs-summary``
        cause: Exception that aborted the command

    """

    def __init__(self, command: str, cause: Exception) -> None:
        """Wrap ``cause`` as the failure of ``command``."""
        super().__init__(str(cause))
        self.command = command
        self.cause = cause

    @property
    def unexpected(self) -> bool:
        """Whether the cause lies outside the differential error hierarchy."""
        return not isinstance(self.cause, DifferentialError)

    @override
    def __str__(self) -> str:
        message = super().__str__()
        if self.unexpected:
            message = f"unexpected {type(self.cause).__name__}: {message}"
        return f"reportdiff {self.command}: {message}"


def _abort(error: CLIError, title: str) -> NoReturn:
    panel = Panel(
        f"[red]{escape(str(error))}[/red]", title=f"❌ {title}", border_style="red"
    )
    console.print(panel)
    raise typer.Exit(1) from error


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Turn failures inside the block into an error panel and exit code 1.

    Args:
        command: Command name shown in the error message
        title: Panel title

    """
    try:
        yield
    except DifferentialError as e:
        error = CLIError(command, e)
        logger.error("%s: %s", title, e)
        _abort(error, title)
    except Exception as e:
        error = CLIError(command, e)
        logger.error("%s: %s", title, error)
        logger.debug("Traceback of the unexpected failure", exc_info=e)
        _abort(error, title)
