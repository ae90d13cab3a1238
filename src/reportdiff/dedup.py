"""Trace-endpoint deduplication of findings.

Two findings reported at different call sites whose error paths terminate at
the same set of locations describe the same underlying bug. Only the
terminal locations are compared, never the full trace; each endpoint
sequence is sorted before comparison so the check is order-independent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from reportdiff import aux_data
from reportdiff.config import DifferentialConfiguration
from reportdiff.schemas import Finding, Location

logger = logging.getLogger(__name__)

type CanonicalEnds = tuple[Location, ...]


def _canonical(end_locations: Iterable[Location]) -> CanonicalEnds:
    return tuple(sorted(end_locations, key=Location.sort_key))


class EndLocationSet:
    """Immutable set of canonical end-location sequences.

    Empty sequences are never inserted and never reported as members.
    """

    __slots__ = ("_members",)

    def __init__(self, members: frozenset[CanonicalEnds] = frozenset()) -> None:
        """Initialise from already-canonical members."""
        self._members = members

    def __contains__(self, end_locations: object) -> bool:
        """Return whether the sorted form of ``end_locations`` is a member."""
        if not isinstance(end_locations, Sequence) or not end_locations:
            return False
        return _canonical(end_locations) in self._members

    def __len__(self) -> int:
        """Return the number of distinct endpoint sequences."""
        return len(self._members)

    def add(self, end_locations: Sequence[Location]) -> EndLocationSet:
        """Return a set that also holds ``end_locations``.

        The receiver is returned unchanged when ``end_locations`` is empty.
        """
        if not end_locations:
            return self
        return EndLocationSet(self._members | {_canonical(end_locations)})


def is_duplicate_report(
    end_locations: Sequence[Location],
    reported_ends: EndLocationSet,
    *,
    filtering: bool,
) -> bool:
    """Check whether a finding's endpoints were already reported.

    Args:
        end_locations: Terminal locations of the finding's trace branches
        reported_ends: Endpoint sequences of findings accepted so far
        filtering: Whether deduplication is enabled at all

    Returns:
        True only if filtering is enabled and the endpoints are a member

    """
    return filtering and end_locations in reported_ends


def _preference_key(finding: Finding) -> tuple[int, str, str]:
    # Shorter traces are more actionable; the JSON dump makes the order total.
    # aux_data is left out so the order is stable once it has been cleared.
    dump = finding.model_dump_json(exclude={"aux_data"})
    return (len(finding.bug_trace), finding.hash, dump)


def sort_by_decreasing_preference_to_report(
    findings: Iterable[Finding],
) -> list[Finding]:
    """Order findings so the preferred representative of a duplicate comes first."""
    return sorted(findings, key=_preference_key)


def sort_by_location(findings: Iterable[Finding]) -> list[Finding]:
    """Order findings by ``(file, line, column)``."""
    return sorted(findings, key=Finding.location_key)


def dedup(
    findings: Iterable[Finding],
    config: DifferentialConfiguration | None = None,
) -> list[Finding]:
    """Remove findings whose trace endpoints match an already-kept finding.

    Every surviving finding has its ``aux_data`` cleared; the result is
    sorted by location.

    Args:
        findings: Findings of one differential bucket
        config: Differential configuration (defaults when None)

    Returns:
        Deduplicated findings sorted by ``(file, line, column)``

    Raises:
        MalformedAuxDataError: If any finding carries an undecodable blob

    """
    filtering = (config or DifferentialConfiguration()).filtering
    reported_ends = EndLocationSet()
    kept: list[Finding] = []
    dropped = 0

    for finding in sort_by_decreasing_preference_to_report(findings):
        if finding.aux_data is not None:
            end_locations = aux_data.decode(finding.aux_data).end_locations
            if is_duplicate_report(end_locations, reported_ends, filtering=filtering):
                dropped += 1
                continue
            reported_ends = reported_ends.add(end_locations)
        kept.append(finding.model_copy(update={"aux_data": None}))

    if dropped:
        logger.debug("Dropped %d duplicate findings by trace endpoints", dropped)

    return sort_by_location(kept)
