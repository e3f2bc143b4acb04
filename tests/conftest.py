"""Shared fixtures for the Keysmith test suite."""

from __future__ import annotations

from collections import deque
from typing import Iterable

import pytest

from shared.config import KeysmithConfig
from shared.logger import KeysmithLogger

from keysmith.analyzers.strength import StrengthAnalyzer
from keysmith.core.engine import KeysmithEngine
from keysmith.generators.charset import CharsetBuilder


class ScriptedRandomSource:
    """Replays a fixed byte script, then repeats it from the start.

    Records every request so tests can check how many bytes a draw took.
    """

    def __init__(self, script: Iterable[int]) -> None:
        self._script = bytes(script)
        if not self._script:
            raise ValueError("script must not be empty")
        self._queue: deque[int] = deque(self._script)
        self.requests: list[int] = []

    def token_bytes(self, n: int) -> bytes:
        self.requests.append(n)
        out = bytearray()
        for _ in range(n):
            if not self._queue:
                self._queue.extend(self._script)
            out.append(self._queue.popleft())
        return bytes(out)

    @property
    def bytes_consumed(self) -> int:
        return sum(self.requests)


class CounterRandomSource:
    """Yields 0, 1, 2, ... 255, 0, 1, ... one byte at a time."""

    def __init__(self) -> None:
        self._next = 0

    def token_bytes(self, n: int) -> bytes:
        out = bytearray()
        for _ in range(n):
            out.append(self._next)
            self._next = (self._next + 1) % 256
        return bytes(out)


@pytest.fixture
def builder() -> CharsetBuilder:
    return CharsetBuilder()


@pytest.fixture
def analyzer() -> StrengthAnalyzer:
    return StrengthAnalyzer()


@pytest.fixture
def quiet_logger() -> KeysmithLogger:
    return KeysmithLogger("test", console_output=False)


@pytest.fixture
def engine(quiet_logger: KeysmithLogger) -> KeysmithEngine:
    return KeysmithEngine(KeysmithConfig(), logger=quiet_logger)


@pytest.fixture
def scripted_source() -> type[ScriptedRandomSource]:
    return ScriptedRandomSource


@pytest.fixture
def counter_source() -> CounterRandomSource:
    return CounterRandomSource()
