"""Assembly of the full differential between two analysis runs.

Findings and cost estimates are reconciled independently. Each differential
bucket holds the cost-regression findings first, then the deduplicated
findings of the reports. Cost findings skip deduplication since there is at
most one per hash and direction.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from reportdiff.config import DifferentialConfiguration
from reportdiff.costs import CostsSummary, build_costs_summary, reconcile_costs
from reportdiff.dedup import dedup
from reportdiff.reconcile import reconcile_reports
from reportdiff.schemas import CostItem, Finding

logger = logging.getLogger(__name__)

INTRODUCED_FILE = "introduced.json"
FIXED_FILE = "fixed.json"
PREEXISTING_FILE = "preexisting.json"
COSTS_SUMMARY_FILE = "costs_summary.json"


class Differential(BaseModel):
    """Result of comparing a current run with a previous run."""

    model_config = ConfigDict(frozen=True)

    introduced: list[Finding] = Field(default_factory=list)
    fixed: list[Finding] = Field(default_factory=list)
    preexisting: list[Finding] = Field(default_factory=list)
    costs_summary: CostsSummary

    def to_json_documents(self) -> dict[str, Any]:
        """Return the four output documents keyed by file name.

        Finding documents never carry ``auxData``.
        """
        return {
            INTRODUCED_FILE: [f.to_json_dict() for f in self.introduced],
            FIXED_FILE: [f.to_json_dict() for f in self.fixed],
            PREEXISTING_FILE: [f.to_json_dict() for f in self.preexisting],
            COSTS_SUMMARY_FILE: self.costs_summary.to_json_dict(),
        }


def of_reports(
    current_report: Sequence[Finding],
    previous_report: Sequence[Finding],
    current_costs: Sequence[CostItem] = (),
    previous_costs: Sequence[CostItem] = (),
    config: DifferentialConfiguration | None = None,
) -> Differential:
    """Compute the differential of two reports and two costs reports.

    Args:
        current_report: Findings of the current run
        previous_report: Findings of the previous run
        current_costs: Cost items of the current run
        previous_costs: Cost items of the previous run
        config: Differential configuration (defaults when None)

    Returns:
        The assembled differential

    Raises:
        MalformedAuxDataError: If a finding carries an undecodable auxData blob
        PolynomialDecodeError: If a cost item carries an invalid polynomial
        CostInvariantError: If a cost's top/zero/degree flags disagree

    """
    config = config or DifferentialConfiguration()

    issues = reconcile_reports(current_report, previous_report)
    costs = reconcile_costs(current_costs, previous_costs, config)
    costs_summary = build_costs_summary(current_costs, previous_costs)

    differential = Differential(
        introduced=costs.introduced + dedup(issues.introduced, config),
        fixed=costs.fixed + dedup(issues.fixed, config),
        preexisting=costs.preexisting + dedup(issues.preexisting, config),
        costs_summary=costs_summary,
    )
    logger.info(
        "Differential computed: %d introduced, %d fixed, %d preexisting",
        len(differential.introduced),
        len(differential.fixed),
        len(differential.preexisting),
    )
    return differential
