"""Fixtures for the CLI tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the root logger configuration performed by the commands."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
