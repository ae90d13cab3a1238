"""Configuration for differential computation with environment fallback.

This module provides the configuration object threaded through the
deduplicator and cost reconciler. Configuration supports both explicit
instantiation and environment variable fallback.
"""

from __future__ import annotations

import os
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

_TRUTHY = ("true", "1", "yes")


class DifferentialConfiguration(BaseModel):
    """Configuration for a differential run.

    Attributes:
        filtering: Whether trace-endpoint deduplication is active
        developer_mode: Whether cost qualifiers include raw polynomial renderings

    Example:
        ```python
        # Explicit configuration
        config = DifferentialConfiguration(filtering=False)

        # From properties dict with env fallback
        config = DifferentialConfiguration.from_properties({"developer_mode": True})

        # Zero-config (reads from environment)
        config = DifferentialConfiguration.from_properties({})
        ```

    """

    model_config = ConfigDict(
        # Immutable - configuration cannot be modified after creation
        frozen=True,
        # Strict - extra fields not in the model are rejected
        extra="forbid",
    )

    filtering: bool = Field(
        default=True,
        description="Drop findings whose trace endpoints match an accepted finding",
    )
    developer_mode: bool = Field(
        default=False,
        description="Append raw polynomial renderings to cost qualifiers",
    )

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties with environment fallback.

        This method implements a layered configuration system:
        1. Explicit properties (highest priority)
        2. Environment variables (fallback)
        3. Defaults (lowest priority)

        Environment variables used:
        - REPORTDIFF_FILTERING: Enable endpoint deduplication ("true"/"1"/"yes")
        - REPORTDIFF_DEVELOPER_MODE: Enable raw cost renderings ("true"/"1"/"yes")

        Args:
            properties: Configuration properties dictionary

        Returns:
            Validated configuration instance

        Raises:
            ValidationError: If configuration is invalid

        """
        config_data = properties.copy()

        if "filtering" not in config_data:
            filtering_env = os.getenv("REPORTDIFF_FILTERING")
            if filtering_env is not None:
                config_data["filtering"] = filtering_env.lower() in _TRUTHY

        if "developer_mode" not in config_data:
            developer_env = os.getenv("REPORTDIFF_DEVELOPER_MODE", "")
            config_data["developer_mode"] = developer_env.lower() in _TRUTHY

        return cls.model_validate(config_data)
