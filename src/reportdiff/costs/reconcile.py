"""Differential of cost reports, based on degree variations.

For every procedure hash present in both costs reports, the highest-degree
estimate of each side is compared by degree class:

- current degree above previous degree: introduced regression
- current degree below previous degree: fixed regression
- same degree: nothing reported, even if the polynomial changed

Hashes found in only one costs report are skipped, since there is nothing to
compare them with.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from reportdiff.config import DifferentialConfiguration
from reportdiff.costs.polynomial import NonNegativePolynomial, compare_by_degree
from reportdiff.issue_types import IssueType
from reportdiff.reconcile import Both, group_by, outer_join
from reportdiff.schemas import CostItem, Finding, TraceElement

logger = logging.getLogger(__name__)

type DecodedCost = tuple[CostItem, NonNegativePolynomial]


class Delta(StrEnum):
    """Direction of a degree variation."""

    INCREASED = "increased"
    DECREASED = "decreased"


@dataclass(frozen=True, slots=True)
class CostPartition:
    """Cost regressions as findings, split into differential buckets.

    ``preexisting`` stays empty: an unchanged degree is not an issue.
    """

    introduced: list[Finding] = field(default_factory=list)
    fixed: list[Finding] = field(default_factory=list)
    preexisting: list[Finding] = field(default_factory=list)


def _issue_type_of(cost: NonNegativePolynomial) -> IssueType:
    if cost.is_top:
        return IssueType.INFINITE_EXECUTION_TIME_CALL
    if cost.is_zero:
        return IssueType.ZERO_EXECUTION_TIME_CALL
    return IssueType.PERFORMANCE_VARIATION


def _qualifier(
    delta: Delta,
    previous_cost: NonNegativePolynomial,
    current_cost: NonNegativePolynomial,
    developer_mode: bool,
) -> str:
    qualifier = (
        f"Complexity {delta} from {previous_cost.pp_degree_hum()} "
        f"to {current_cost.pp_degree_hum()}."
    )
    if developer_mode:
        qualifier += (
            f" Previous cost is {previous_cost.pp()} "
            f"(degree is {previous_cost.pp_degree()})."
            f" Current cost is {current_cost.pp()} "
            f"(degree is {current_cost.pp_degree()})."
        )
    return qualifier


def issue_of_cost(
    cost_item: CostItem,
    delta: Delta,
    previous_cost: NonNegativePolynomial,
    current_cost: NonNegativePolynomial,
    config: DifferentialConfiguration | None = None,
) -> Finding:
    """Build the finding reporting a degree variation of one procedure.

    Args:
        cost_item: Current-side cost item of the procedure
        delta: Whether the degree increased or decreased
        previous_cost: Highest-degree previous estimate
        current_cost: Highest-degree current estimate
        config: Differential configuration (defaults when None)

    Returns:
        Finding located at the procedure, with a single-step trace

    """
    developer_mode = (config or DifferentialConfiguration()).developer_mode
    issue_type = _issue_type_of(current_cost)
    location = cost_item.location
    trace = [
        TraceElement(
            level=0,
            filename=location.file,
            line_number=location.line,
            column_number=location.column,
            description="",
        )
    ]
    return Finding(
        bug_type=issue_type.unique_id,
        bug_type_hum=issue_type.hum,
        qualifier=_qualifier(delta, previous_cost, current_cost, developer_mode),
        severity="WARNING",
        visibility="user",
        line=location.line,
        column=location.column,
        procedure=cost_item.procedure_id,
        procedure_start_line=0,
        file=location.file,
        bug_trace=trace,
        key="",
        hash=cost_item.hash,
        censored_reason="",
    )


def _compare_decoded(a: DecodedCost, b: DecodedCost) -> int:
    return compare_by_degree(a[1], b[1])


def _max_degree(costs: list[DecodedCost]) -> DecodedCost:
    # Of several maximal costs, the last one in report order wins.
    return max(reversed(costs), key=functools.cmp_to_key(_compare_decoded))


def _decoded(costs: Iterable[CostItem]) -> list[DecodedCost]:
    return [(item, NonNegativePolynomial.decode(item.polynomial)) for item in costs]


def _by_hash(cost: DecodedCost) -> str:
    return cost[0].hash


def reconcile_costs(
    current: Iterable[CostItem],
    previous: Iterable[CostItem],
    config: DifferentialConfiguration | None = None,
) -> CostPartition:
    """Classify degree variations between two costs reports.

    Args:
        current: Cost items of the current costs report
        previous: Cost items of the previous costs report
        config: Differential configuration (defaults when None)

    Returns:
        Regression findings in ascending hash order

    Raises:
        PolynomialDecodeError: If any cost item carries an invalid polynomial

    """
    partition = CostPartition()
    skipped = 0

    for _, side in outer_join(
        group_by(_decoded(current), _by_hash), group_by(_decoded(previous), _by_hash)
    ):
        if not isinstance(side, Both):
            skipped += 1
            continue

        current_item, current_cost = _max_degree(side.left)
        _, previous_cost = _max_degree(side.right)
        comparison = compare_by_degree(current_cost, previous_cost)
        if comparison > 0:
            partition.introduced.append(
                issue_of_cost(
                    current_item, Delta.INCREASED, previous_cost, current_cost, config
                )
            )
        elif comparison < 0:
            partition.fixed.append(
                issue_of_cost(
                    current_item, Delta.DECREASED, previous_cost, current_cost, config
                )
            )

    if skipped:
        logger.debug("Skipped %d costs present in only one costs report", skipped)

    return partition
