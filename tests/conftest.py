# Program: Logicbridge Test Fixtures
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

from __future__ import annotations

import queue
import sys
from pathlib import Path
from typing import List

import pytest

# Ensure the package is importable when running tests without installation
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from logicbridge.bridge import DeviceBridge
from logicbridge.dispatch import RecordDispatcher


class FakeLink:
    """In-memory device link: tests push bytes in and inspect what was written."""

    def __init__(self) -> None:
        self.written: List[bytes] = []
        self.closed = False
        self._incoming: "queue.Queue[bytes]" = queue.Queue()

    def push(self, data: bytes) -> None:
        self._incoming.put(data)

    def read(self, size: int = 1) -> bytes:
        try:
            return self._incoming.get(timeout=0.01)
        except queue.Empty:
            return b""

    def write(self, data: bytes) -> int:
        self.written.append(data)
        return len(data)

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def link() -> FakeLink:
    return FakeLink()


@pytest.fixture()
def dispatcher() -> RecordDispatcher:
    return RecordDispatcher()


@pytest.fixture()
def bridge(link: FakeLink, dispatcher: RecordDispatcher) -> DeviceBridge:
    return DeviceBridge(link, dispatcher)


@pytest.fixture()
def ready_bridge(bridge: DeviceBridge) -> DeviceBridge:
    bridge.feed(b"initialized\r\n")
    return bridge


# Created by Dr. Z. Bakhtiyorov
