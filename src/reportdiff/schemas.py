"""Pydantic models for analysis reports and costs reports.

JSON documents use camelCase keys (``bugTrace``, ``auxData``,
``procedureId``); snake_case keys are accepted on input as well.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase JSON shape.

        Declared optional fields left at ``None`` are omitted. Extra keys kept
        by ``extra="allow"`` are written as read, null values included.
        """
        unset = {
            name for name in type(self).model_fields if getattr(self, name) is None
        }
        return self.model_dump(mode="json", by_alias=True, exclude=unset)


class Location(_ReportModel):
    """Source location, ordered by file, then line, then column."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    column: int = -1

    def sort_key(self) -> tuple[str, int, int]:
        """Return the tuple defining the total order on locations."""
        return (self.file, self.line, self.column)


class TraceElement(_ReportModel):
    """One step of a finding's explanatory trace."""

    level: int = 0
    filename: str
    line_number: int
    column_number: int = -1
    description: str = ""


class Finding(_ReportModel):
    """A single reported defect.

    Only ``hash``, the location fields, ``bug_trace`` and ``aux_data`` take
    part in the differential. Keys this model does not know about are kept
    verbatim so findings survive a load/diff/write cycle unchanged.
    """

    model_config = ConfigDict(extra="allow")

    hash: str
    file: str
    line: int
    column: int = -1
    bug_trace: list[TraceElement] = Field(default_factory=list)
    aux_data: str | None = Field(
        default=None,
        validation_alias=AliasChoices("auxData", "aux_data", "access"),
        serialization_alias="auxData",
    )

    bug_type: str | None = None
    bug_type_hum: str | None = None
    qualifier: str | None = None
    severity: str | None = None
    visibility: str | None = None
    procedure: str | None = None
    procedure_start_line: int | None = None
    key: str | None = None
    censored_reason: str | None = None

    def location_key(self) -> tuple[str, int, int]:
        """Return ``(file, line, column)`` for location ordering."""
        return (self.file, self.line, self.column)


class CostItem(_ReportModel):
    """Upper-bound execution cost estimate for one procedure."""

    hash: str
    procedure_id: str
    location: Location = Field(validation_alias=AliasChoices("location", "loc"))
    polynomial: str
