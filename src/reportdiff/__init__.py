"""Differential between two runs of a static analyser.

Compares a current and a previous analysis report (plus optional costs
reports) and classifies findings as introduced, fixed or preexisting.
"""

from reportdiff.config import DifferentialConfiguration
from reportdiff.differential import Differential, of_reports
from reportdiff.errors import DifferentialError
from reportdiff.persistence import load_costs_report, load_report, to_files
from reportdiff.schemas import CostItem, Finding, Location, TraceElement

__version__ = "0.1.0"

__all__ = [
    "CostItem",
    "Differential",
    "DifferentialConfiguration",
    "DifferentialError",
    "Finding",
    "Location",
    "TraceElement",
    "load_costs_report",
    "load_report",
    "of_reports",
    "to_files",
]
