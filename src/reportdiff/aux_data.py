"""Codec for the ``auxData`` blob attached to findings.

The blob is the base64 encoding of a JSON triple ``[access, trace_info,
end_locations]``. Only ``end_locations`` (where each branch of the finding's
trace terminates) is consumed by the differential; the first two members are
opaque reporting data.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Sequence
from typing import Any, NamedTuple

from pydantic import TypeAdapter, ValidationError

from reportdiff.errors import MalformedAuxDataError
from reportdiff.schemas import Location


class IssueAuxData(NamedTuple):
    """Decoded contents of an ``auxData`` blob."""

    access: Any
    trace_info: Any
    end_locations: list[Location]


_TRIPLE_ADAPTER: TypeAdapter[tuple[Any, Any, list[Location]]] = TypeAdapter(
    tuple[Any, Any, list[Location]]
)


def encode(
    end_locations: Sequence[Location],
    access: Any = None,  # noqa: ANN401
    trace_info: Any = None,  # noqa: ANN401
) -> str:
    """Encode an auxData triple into its wire form."""
    payload = [
        access,
        trace_info,
        [location.to_json_dict() for location in end_locations],
    ]
    raw = json.dumps(payload, separators=(",", ":"), sort_keys=True)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode(encoded: str) -> IssueAuxData:
    """Decode an auxData blob.

    Args:
        encoded: Base64 wire form produced by :func:`encode`

    Returns:
        The decoded triple

    Raises:
        MalformedAuxDataError: If the blob is not valid base64, JSON, or does
            not hold a triple whose last member is a list of locations

    """
    try:
        raw = base64.b64decode(encoded, validate=True)
        access, trace_info, end_locations = _TRIPLE_ADAPTER.validate_json(raw)
    except (binascii.Error, ValueError, ValidationError) as e:
        raise MalformedAuxDataError(f"Cannot decode auxData blob: {e}") from e
    return IssueAuxData(access, trace_info, end_locations)
