# conftest.py - pytest configuration
import logging

import pytest


@pytest.fixture
def engine_log():
    """A real logger for stage functions; records propagate to caplog."""
    lg = logging.getLogger("patchforge.tests")
    lg.setLevel(logging.DEBUG)
    lg.propagate = True
    return lg
