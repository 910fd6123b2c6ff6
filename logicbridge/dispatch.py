# Program: Logicbridge Record Dispatcher
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Broadcast completed records to the currently subscribed consumers."""

from __future__ import annotations

import json
import logging
import threading
from typing import Callable, List

from .models import SampleRecord

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


def serialize_record(record: SampleRecord) -> str:
    return json.dumps(record.to_payload())


class RecordDispatcher:
    """Publish/subscribe hub; records are never queued for late subscribers."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def publish(self, record: SampleRecord) -> int:
        """Deliver ``record`` to every listener; return how many received it."""
        payload = serialize_record(record)
        with self._lock:
            listeners = list(self._listeners)
        delivered = 0
        for listener in listeners:
            try:
                listener(payload)
            except Exception:  # noqa: BLE001 - isolate consumers
                logger.exception("Consumer %r failed to take record", listener)
                continue
            delivered += 1
        logger.info("Pushed record with %d channel(s) to %d consumer(s)", len(record), delivered)
        return delivered


# Created by Dr. Z. Bakhtiyorov
