"""Shared fixtures for mathfence tests."""

import logging
import threading

import pytest

from mathfence.config import ExtraOpts
from mathfence.errors import RenderError


class FakeEngine:
    """Deterministic engine: wraps the source in a tag, records calls.

    Sources containing ``\\bad`` fail to render.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, bool]] = []
        self._lock = threading.Lock()

    def render(self, source: str, *, display: bool) -> str:
        with self._lock:
            self.calls.append((source, display))
        if "\\bad" in source:
            raise RenderError("unknown command \\bad", source)
        tag = "div" if display else "span"
        return f"<{tag}>{source}</{tag}>"


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def extra_opts() -> ExtraOpts:
    return ExtraOpts()


@pytest.fixture
def reset_mathfence_logger():
    """Undo configure_logging() so handlers don't outlive a test."""
    logger = logging.getLogger("mathfence")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
