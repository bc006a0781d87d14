"""
Pytest configuration and fixtures for Lumberlog tests
"""

import json
from typing import Any, Dict, List

import pytest

from lumberlog.core.config.validation import LoggerConfig
from lumberlog.core.logging.logger import Logger
from lumberlog.core.logging.sinks import Sink


class MemorySink(Sink):
    """Sink that keeps every written line in memory"""

    def __init__(self) -> None:
        super().__init__()
        self.lines: List[str] = []
        self.flushed = 0

    def write(self, line: str) -> None:
        self.lines.append(line)

    def flush(self) -> None:
        self.flushed += 1

    def records(self) -> List[Dict[str, Any]]:
        return [json.loads(line) for line in self.lines]


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def make_logger(memory_sink):
    """Factory for loggers writing to the in-memory sink"""

    def _make(**options: Any) -> Logger:
        return Logger(LoggerConfig(**options), sink=memory_sink)

    return _make


