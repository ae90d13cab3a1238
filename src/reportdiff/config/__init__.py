"""Configuration for the report differential.

The ``config`` package also ships the ``logging.yaml`` dictConfig file
loaded by :func:`reportdiff.logging.setup_logging`.
"""

from reportdiff.config.configuration import DifferentialConfiguration

__all__ = ["DifferentialConfiguration"]
