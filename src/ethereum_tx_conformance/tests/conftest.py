"""
Pytest fixtures shared by the tests of this package.
"""

import logging

import pytest


@pytest.fixture
def restore_root_logger():
    """
    Remove handlers `configure_logging` installs on the root logger and
    restore its level.
    """
    root_logger = logging.getLogger()
    level = root_logger.level
    handlers = root_logger.handlers[:]
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            handler.close()
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
