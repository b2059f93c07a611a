import logging
import os

import pytest

from qdraw.config import get_settings
from qdraw.lang.parser import parse_program
from qdraw.runtime import Board, Executor


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Ignore QDRAW_* variables from the outer environment."""
    for key in list(os.environ):
        if key.upper().startswith("QDRAW_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_qdraw_logging():
    """Drop handlers the CLI attaches so they never outlive captured streams."""
    yield
    logger = logging.getLogger("qdraw")
    for handler in list(logger.handlers):
        if getattr(handler, "_qdraw_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def board():
    """An empty 8x8 board with the head at the origin."""
    return Board(8, 8)


@pytest.fixture
def execute_source():
    """Parse and run a source with no pacing, returning the ExecutionResult."""

    async def _execute(source, board=None, **kwargs):
        kwargs.setdefault("speed", "instant")
        target = board if board is not None else Board(8, 8)
        executor = Executor(target, parse_program(source), **kwargs)
        return await executor.execute()

    return _execute
