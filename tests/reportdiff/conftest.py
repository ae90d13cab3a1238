"""Shared fixtures and builders for reportdiff tests."""

import json
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from reportdiff import aux_data
from reportdiff.schemas import CostItem, Finding, Location, TraceElement


def make_finding(  # noqa: PLR0913 - Test builder with many optional fields
    hash_: str,
    file: str = "src/main.c",
    line: int = 1,
    column: int = -1,
    trace_length: int = 1,
    end_locations: Sequence[Location] | None = None,
    **extra: object,
) -> Finding:
    """Build a finding with a trace of ``trace_length`` steps.

    When ``end_locations`` is given, the finding carries an encoded auxData blob.
    """
    trace = [
        TraceElement(filename=file, line_number=line + i, description=f"step {i}")
        for i in range(trace_length)
    ]
    encoded = None if end_locations is None else aux_data.encode(end_locations)
    return Finding(
        hash=hash_,
        file=file,
        line=line,
        column=column,
        bug_trace=trace,
        aux_data=encoded,
        bug_type="NULL_DEREFERENCE",
        **extra,
    )


def make_cost(
    hash_: str,
    polynomial: str,
    procedure_id: str = "foo",
    file: str = "src/main.c",
    line: int = 10,
) -> CostItem:
    """Build a cost item at ``file:line``."""
    return CostItem(
        hash=hash_,
        procedure_id=procedure_id,
        location=Location(file=file, line=line),
        polynomial=polynomial,
    )


def linear(variable: str = "n", coeff: int = 1, constant: int = 0) -> str:
    """Return the wire form of ``constant + coeff * variable``."""
    return json.dumps(
        {"constant": constant, "terms": [{"coeff": coeff, "vars": {variable: 1}}]}
    )


def power(degree: int, variable: str = "n") -> str:
    """Return the wire form of ``variable^degree``."""
    return json.dumps(
        {"constant": 0, "terms": [{"coeff": 1, "vars": {variable: degree}}]}
    )


def constant(value: int) -> str:
    """Return the wire form of a constant polynomial."""
    return json.dumps({"constant": value, "terms": []})


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, object], Path]:
    """Return a helper writing a JSON document under ``tmp_path``."""

    def _write(name: str, document: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove reportdiff environment variables for the duration of a test."""
    for name in ("REPORTDIFF_FILTERING", "REPORTDIFF_DEVELOPER_MODE"):
        monkeypatch.delenv(name, raising=False)
