"""Utility functions for locating reportdiff package resources."""

from __future__ import annotations

import importlib.util
from pathlib import Path


class ProjectUtilsError(Exception):
    """Exception raised for project utility errors."""

    pass


def get_config_dir() -> Path:
    """Get the directory holding the bundled configuration files.

    The installed package location is preferred (via importlib); the
    directory alongside this module is the fallback for source checkouts.

    Returns:
        Path to the ``reportdiff/config`` directory

    Raises:
        ProjectUtilsError: If no configuration directory can be found

    """
    candidates: list[Path] = []
    try:
        spec = importlib.util.find_spec("reportdiff")
        if spec and spec.origin:
            candidates.append(Path(spec.origin).resolve().parent / "config")
    except (ImportError, ValueError):
        # Package not importable by name, fall back to this file's location
        pass
    candidates.append(Path(__file__).resolve().parent / "config")
    # Both usually point at the same directory.
    candidates = list(dict.fromkeys(candidates))

    for candidate in candidates:
        if candidate.is_dir():
            return candidate

    raise ProjectUtilsError(
        "Could not locate the reportdiff configuration directory. Searched:\n"
        + "\n".join(f"- {c}" for c in candidates)
    )
