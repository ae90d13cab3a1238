"""Reading analysis reports and writing differential files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from reportdiff.differential import Differential
from reportdiff.errors import ReportLoadError, ReportWriteError
from reportdiff.schemas import CostItem, Finding

logger = logging.getLogger(__name__)

_REPORT_ADAPTER: TypeAdapter[list[Finding]] = TypeAdapter(list[Finding])
_COSTS_REPORT_ADAPTER: TypeAdapter[list[CostItem]] = TypeAdapter(list[CostItem])


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise ReportLoadError(f"Cannot read report file '{path}': {e}") from e


def load_report(path: Path) -> list[Finding]:
    """Load a report document (a JSON array of findings).

    Raises:
        ReportLoadError: If the file cannot be read or is not a valid report

    """
    try:
        report = _REPORT_ADAPTER.validate_json(_read(path))
    except ValidationError as e:
        raise ReportLoadError(f"Invalid report '{path}': {e}") from e
    logger.debug("Loaded %d findings from %s", len(report), path)
    return report


def load_costs_report(path: Path) -> list[CostItem]:
    """Load a costs report document (a JSON array of cost items).

    Raises:
        ReportLoadError: If the file cannot be read or is not a valid costs report

    """
    try:
        costs = _COSTS_REPORT_ADAPTER.validate_json(_read(path))
    except ValidationError as e:
        raise ReportLoadError(f"Invalid costs report '{path}': {e}") from e
    logger.debug("Loaded %d cost items from %s", len(costs), path)
    return costs


def to_files(differential: Differential, dest_dir: Path) -> list[Path]:
    """Write the four differential documents into ``dest_dir``.

    Args:
        differential: Differential to persist
        dest_dir: Output directory, created if missing

    Returns:
        Paths of the written files

    Raises:
        ReportWriteError: If the directory or a file cannot be written

    """
    written: list[Path] = []
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        for file_name, document in differential.to_json_documents().items():
            path = dest_dir / file_name
            with path.open("w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
                f.write("\n")
            written.append(path)
    except OSError as e:
        raise ReportWriteError(f"Failed to write differential to {dest_dir}: {e}") from e

    logger.info("Differential written to %s", dest_dir)
    return written
