"""Cost estimates: polynomial facade, degree differential and summary."""

from reportdiff.costs.polynomial import (
    CostPolynomial,
    NonNegativePolynomial,
    compare_by_degree,
)
from reportdiff.costs.reconcile import (
    CostPartition,
    Delta,
    issue_of_cost,
    reconcile_costs,
)
from reportdiff.costs.summary import (
    CostCounts,
    CostsSummary,
    DegreeCount,
    PreviousCurrent,
    build_costs_summary,
    count_costs,
    pair_counts,
)

__all__ = [
    "CostCounts",
    "CostPartition",
    "CostPolynomial",
    "CostsSummary",
    "DegreeCount",
    "Delta",
    "NonNegativePolynomial",
    "PreviousCurrent",
    "build_costs_summary",
    "compare_by_degree",
    "count_costs",
    "issue_of_cost",
    "pair_counts",
    "reconcile_costs",
]
