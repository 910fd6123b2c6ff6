# Program: Record Dispatcher Tests
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Broadcast semantics of the record dispatcher."""

from __future__ import annotations

import json

from logicbridge.dispatch import RecordDispatcher
from logicbridge.models import SampleRecord


def test_publish_reaches_every_subscriber(dispatcher: RecordDispatcher) -> None:
    first, second = [], []
    dispatcher.subscribe(first.append)
    dispatcher.subscribe(second.append)

    delivered = dispatcher.publish(SampleRecord({"ch1": "1010", "ch3": "0001"}))

    assert delivered == 2
    assert [json.loads(p) for p in first] == [{"ch1": "1010", "ch3": "0001"}]
    assert first == second


def test_late_subscriber_misses_earlier_records(dispatcher: RecordDispatcher) -> None:
    dispatcher.publish(SampleRecord({"ch1": "1"}))
    late = []
    dispatcher.subscribe(late.append)
    assert late == []
    dispatcher.publish(SampleRecord({"ch2": "0"}))
    assert [json.loads(p) for p in late] == [{"ch2": "0"}]


def test_unsubscribe_stops_delivery(dispatcher: RecordDispatcher) -> None:
    received = []
    unsubscribe = dispatcher.subscribe(received.append)
    unsubscribe()
    unsubscribe()
    assert dispatcher.subscriber_count == 0
    assert dispatcher.publish(SampleRecord({"ch1": "1"})) == 0
    assert received == []


def test_failing_consumer_does_not_block_others(dispatcher: RecordDispatcher) -> None:
    def broken(payload: str) -> None:
        raise ConnectionError("socket gone")

    received = []
    dispatcher.subscribe(broken)
    dispatcher.subscribe(received.append)

    assert dispatcher.publish(SampleRecord({"ch4": "11"})) == 1
    assert len(received) == 1


# Created by Dr. Z. Bakhtiyorov
