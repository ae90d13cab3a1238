"""Workspace-level pytest configuration and fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True, scope="function")
def isolate_logging_state():
    """Preserve and restore the reportdiff logger configuration for each test.

    CLI commands call ``setup_logging``, which reconfigures handlers and levels
    through dictConfig. The package logger and the root logger are restored
    after each test so test order does not affect log output.
    """
    saved_state = {}
    for name in ("reportdiff", None):
        logger = logging.getLogger(name)
        saved_state[name] = (logger.level, list(logger.handlers), logger.propagate)

    yield

    for name, (level, handlers, propagate) in saved_state.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers[:] = handlers
        logger.propagate = propagate
