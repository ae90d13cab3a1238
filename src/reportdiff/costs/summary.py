"""Histogram of cost degree classes for the current and previous costs reports."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from reportdiff.costs.polynomial import CostPolynomial, NonNegativePolynomial
from reportdiff.errors import CostInvariantError
from reportdiff.schemas import CostItem


@dataclass(slots=True)
class CostCounts:
    """Counts of top, zero and per-degree costs in one costs report."""

    top: int = 0
    zero: int = 0
    degrees: Counter[int] = field(default_factory=Counter)

    @property
    def total(self) -> int:
        """Number of counted costs."""
        return self.top + self.zero + self.degrees.total()

    def add(self, cost: CostPolynomial) -> None:
        """Count one cost.

        Raises:
            CostInvariantError: If the cost's top/zero/degree flags disagree

        """
        degree = cost.degree
        if degree is None:
            if not cost.is_top:
                raise CostInvariantError("Cost without a degree must be top")
            self.top += 1
        elif cost.is_top:
            raise CostInvariantError(f"Top cost must not have a degree, got: {degree}")
        elif cost.is_zero:
            if degree != 0:
                raise CostInvariantError(f"Zero cost must have degree 0, got: {degree}")
            self.zero += 1
        else:
            # Non-zero constants land here under degree 0.
            self.degrees[degree] += 1


class PreviousCurrent(BaseModel):
    """Pair of counts for the current and previous costs reports."""

    current: int = Field(ge=0)
    previous: int = Field(ge=0)


class DegreeCount(BaseModel):
    """Paired counts of costs with one degree."""

    degree: int = Field(ge=0)
    current: int = Field(ge=0)
    previous: int = Field(ge=0)


class CostsSummary(BaseModel):
    """Paired cost histogram, written to ``costs_summary.json``."""

    top: PreviousCurrent
    zero: PreviousCurrent
    degrees: list[DegreeCount] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialise to the ``costs_summary.json`` document."""
        return self.model_dump(mode="json")


def count_costs(costs: Iterable[CostItem]) -> CostCounts:
    """Decode every cost of a report and count it by degree class."""
    counts = CostCounts()
    for item in costs:
        counts.add(NonNegativePolynomial.decode(item.polynomial))
    return counts


def pair_counts(
    current_counts: CostCounts, previous_counts: CostCounts
) -> CostsSummary:
    """Join current and previous histograms, with 0 for a missing degree."""
    # Counter lookups yield 0 for a degree missing on one side.
    all_degrees = sorted(
        current_counts.degrees.keys() | previous_counts.degrees.keys()
    )
    degrees = [
        DegreeCount(
            degree=degree,
            current=current_counts.degrees[degree],
            previous=previous_counts.degrees[degree],
        )
        for degree in all_degrees
    ]

    return CostsSummary(
        top=PreviousCurrent(current=current_counts.top, previous=previous_counts.top),
        zero=PreviousCurrent(
            current=current_counts.zero, previous=previous_counts.zero
        ),
        degrees=degrees,
    )


def build_costs_summary(
    current_costs: Iterable[CostItem], previous_costs: Iterable[CostItem]
) -> CostsSummary:
    """Build the paired cost histogram of two costs reports."""
    return pair_counts(count_costs(current_costs), count_costs(previous_costs))
