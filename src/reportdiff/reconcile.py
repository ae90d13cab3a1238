"""Three-way reconciliation of findings between two reports.

Findings are matched by their stable ``hash``. Several findings may share a
hash within one report; they are kept verbatim rather than collapsed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from reportdiff.schemas import Finding

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Left[T]:
    """Key present only on the left (current) side."""

    items: list[T]


@dataclass(frozen=True, slots=True)
class Right[T]:
    """Key present only on the right (previous) side."""

    items: list[T]


@dataclass(frozen=True, slots=True)
class Both[T]:
    """Key present on both sides."""

    left: list[T]
    right: list[T]


type JoinSide[T] = Left[T] | Right[T] | Both[T]


def group_by[T](items: Iterable[T], key: Callable[[T], str]) -> dict[str, list[T]]:
    """Build a multimap from key to every item with that key, in input order."""
    groups: dict[str, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def outer_join[T](
    left: Mapping[str, list[T]], right: Mapping[str, list[T]]
) -> Iterator[tuple[str, JoinSide[T]]]:
    """Full outer join of two multimaps, in ascending key order."""
    for key in sorted(left.keys() | right.keys()):
        if key not in right:
            yield key, Left(left[key])
        elif key not in left:
            yield key, Right(right[key])
        else:
            yield key, Both(left[key], right[key])


def _by_hash(finding: Finding) -> str:
    return finding.hash


@dataclass(frozen=True, slots=True)
class ReportPartition:
    """Findings split into the three differential buckets."""

    introduced: list[Finding] = field(default_factory=list)
    fixed: list[Finding] = field(default_factory=list)
    preexisting: list[Finding] = field(default_factory=list)


def reconcile_reports(
    current: Iterable[Finding], previous: Iterable[Finding]
) -> ReportPartition:
    """Classify findings as introduced, fixed or preexisting by hash.

    A hash found on both sides is preexisting and keeps the current-side
    findings only; the previous-side occurrences are discarded.

    Args:
        current: Findings of the current report
        previous: Findings of the previous report

    Returns:
        Partition of findings, not yet deduplicated

    """
    partition = ReportPartition()

    for _, side in outer_join(
        group_by(current, _by_hash), group_by(previous, _by_hash)
    ):
        match side:
            case Left(items):
                partition.introduced.extend(items)
            case Right(items):
                partition.fixed.extend(items)
            case Both(current_items, _):
                partition.preexisting.extend(current_items)

    logger.debug(
        "Reconciled reports: %d introduced, %d fixed, %d preexisting",
        len(partition.introduced),
        len(partition.fixed),
        len(partition.preexisting),
    )
    return partition
