"""Deterministic fixtures for unit tests.

What:
  Expose a counting random source, a fixed clock, and a structured logger
  writing to memory.

Why:
  Boundaries, Message-IDs, and default dates are random or time dependent in
  production. Tests asserting exact output inject these fixtures instead.

How:
  :class:`CountingRandom` returns ``n`` copies of an incrementing byte so
  successive draws differ but stay predictable.

Interfaces:
  :func:`random_bytes`, :func:`fixed_clock`, :func:`log_stream`,
  :func:`json_logger` (pytest fixtures).
"""

import io
from datetime import datetime, timezone

import pytest

from mailforge.utils.logging import JsonLogger

FIXED_DATE = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


class CountingRandom:
    """Random source stand-in yielding ``bytes([k] * n)`` for k = 1, 2, ..."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, n: int) -> bytes:
        self.calls += 1
        return bytes([self.calls % 256] * n)


@pytest.fixture
def random_bytes() -> CountingRandom:
    return CountingRandom()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_DATE


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def json_logger(log_stream: io.StringIO) -> JsonLogger:
    """Logger capturing every level into :func:`log_stream`."""

    return JsonLogger(stream=log_stream, component="test", level="DEBUG")
