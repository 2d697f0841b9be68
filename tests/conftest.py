from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pytest

from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture
def fixed_clock():
    """Return a clock that always reports the same moment."""
    moment = datetime(2024, 5, 1, 12, 30, 45)
    return lambda: moment


@pytest.fixture(autouse=True)
def _reset_srccombine_logger():
    """Undo CLI logging setup so caplog keeps receiving records."""
    yield
    logger = logging.getLogger("srccombine")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
