"""Issue types synthesized by the cost differential."""

from enum import Enum


class IssueType(Enum):
    """Bug types of findings built from cost-degree variations.

    Each member's value is ``(unique_id, human_name)``.
    """

    INFINITE_EXECUTION_TIME_CALL = (
        "INFINITE_EXECUTION_TIME_CALL",
        "Infinite Execution Time Call",
    )
    ZERO_EXECUTION_TIME_CALL = ("ZERO_EXECUTION_TIME_CALL", "Zero Execution Time Call")
    PERFORMANCE_VARIATION = ("PERFORMANCE_VARIATION", "Performance Variation")

    @property
    def unique_id(self) -> str:
        """Identifier written to a finding's ``bugType``."""
        return self.value[0]

    @property
    def hum(self) -> str:
        """Human-readable name written to a finding's ``bugTypeHum``."""
        return self.value[1]
