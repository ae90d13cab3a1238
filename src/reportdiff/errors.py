"""Error classes for the report differential.

This module provides:
- DifferentialError: Base exception class for all differential errors
- MalformedAuxDataError: Undecodable trace-endpoint blob on a finding
- PolynomialDecodeError: Undecodable wire-format cost polynomial
- CostInvariantError: Inconsistent top/zero/degree flags on a cost
- ReportLoadError, ReportWriteError: Persistence exceptions
"""


class DifferentialError(Exception):
    """Base exception for all report differential errors."""

    pass


class MalformedAuxDataError(DifferentialError):
    """Raised when a finding's auxData blob cannot be decoded.

    The blob is produced by the analyser itself, so a decoding failure means
    the upstream report is corrupt and the differential must abort.
    """

    pass


class PolynomialDecodeError(DifferentialError):
    """Raised when an encoded cost polynomial cannot be decoded."""

    pass


class CostInvariantError(DifferentialError):
    """Raised when a cost's top/zero/degree flags are mutually inconsistent."""

    pass


class ReportLoadError(DifferentialError):
    """Raised when a report or costs report cannot be read or validated."""

    pass


class ReportWriteError(DifferentialError):
    """Raised when differential output files cannot be written."""

    pass
