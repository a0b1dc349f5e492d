"""Pytest configuration and shared fixtures for termfx tests."""

from __future__ import annotations

import io
import logging
import os

import pytest

from termfx.clock import FrameClock
from termfx.effects.engine import EffectEngine
from termfx.random_source import RandomSource
from termfx.terminal import TerminalHandle


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("effects", "marks tests as effect engine tests"),
        ("terminal", "marks tests as terminal driver tests"),
        ("formatting", "marks tests as formatting helper tests"),
        ("config", "marks tests as configuration tests"),
        ("observability", "marks tests as logging tests"),
        ("cli", "marks tests as CLI tests"),
        ("property", "marks tests as property-based tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


class RecordingStream(io.StringIO):
    """In-memory stream that records each write and flush."""

    def __init__(self) -> None:
        super().__init__()
        self.chunks: list[str] = []
        self.flushes = 0

    def write(self, s: str) -> int:
        self.chunks.append(s)
        return super().write(s)

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


class FailingStream(RecordingStream):
    """Stream whose writes start failing after ``fail_after`` writes."""

    def __init__(self, fail_after: int) -> None:
        super().__init__()
        self.fail_after = fail_after

    def write(self, s: str) -> int:
        if len(self.chunks) >= self.fail_after:
            msg = "Broken pipe"
            raise BrokenPipeError(msg)
        return super().write(s)


class RecordingClock(FrameClock):
    """Frame clock that records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[int] = []

    def sleep(self, ms: int) -> None:
        self.delays.append(ms)


@pytest.fixture(autouse=True)
def _clean_termfx_env(monkeypatch):
    """Keep the caller's environment from leaking into config and colors."""
    for name in list(os.environ):
        if name.startswith("TERMFX_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    # setup_logging stops propagation; restore it so caplog sees records
    termfx_logger = logging.getLogger("termfx")
    termfx_logger.propagate = True
    termfx_logger.setLevel(logging.NOTSET)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture
def stream():
    """In-memory recording stream."""
    return RecordingStream()


@pytest.fixture
def clock():
    """Clock that never sleeps."""
    return RecordingClock()


@pytest.fixture
def terminal(stream):
    """Terminal handle writing to the recording stream."""
    return TerminalHandle(stream, fallback_size=(80, 24))


@pytest.fixture
def engine(terminal, clock):
    """Effect engine on an in-memory stream with a seeded random source."""
    return EffectEngine(terminal=terminal, clock=clock, rng=RandomSource(1234))


@pytest.fixture
def output(stream):
    """Callable returning everything written so far."""
    return stream.getvalue


@pytest.fixture
def failing_stream():
    """Factory for streams that break after a number of writes."""
    return FailingStream
