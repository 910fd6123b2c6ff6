# Program: Protocol Parser Tests
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""State machine behaviour for begindata/enddata spans."""

from __future__ import annotations

from typing import Iterable, List

from logicbridge.models import SampleRecord
from logicbridge.protocol import ParserState, ProtocolParser


def _run(parser: ProtocolParser, lines: Iterable[str]) -> List[SampleRecord]:
    records = []
    for line in lines:
        record = parser.feed_line(line)
        if record is not None:
            records.append(record)
    return records


def test_full_capture() -> None:
    parser = ProtocolParser()
    records = _run(parser, ["initialized", "begindata", "ch1: 1010", "ch2: 0011", "enddata"])

    assert parser.ready
    assert len(records) == 1
    assert records[0].to_payload() == {"ch1": "1010", "ch2": "0011"}
    assert parser.state is ParserState.IDLE


def test_ready_is_sticky_and_independent_of_state() -> None:
    parser = ProtocolParser()
    assert not parser.ready
    _run(parser, ["begindata", "initialized"])
    assert parser.ready and parser.capturing
    _run(parser, ["enddata", "garbage", "begindata"])
    assert parser.ready


def test_second_begindata_discards_partial_record() -> None:
    parser = ProtocolParser()
    records = _run(parser, ["begindata", "ch1: 1111", "ch3: 0000", "begindata", "ch2: 0101", "enddata"])
    assert [r.to_payload() for r in records] == [{"ch2": "0101"}]


def test_last_write_wins() -> None:
    parser = ProtocolParser()
    records = _run(parser, ["begindata", "ch1: 0000", "ch1: 1111", "enddata"])
    assert records[0]["ch1"] == "1111"


def test_key_value_while_idle_is_ignored() -> None:
    parser = ProtocolParser()
    records = _run(parser, ["ch1: 1111", "begindata", "ch2: 01", "enddata", "ch3: 11"])
    assert [r.to_payload() for r in records] == [{"ch2": "01"}]


def test_enddata_while_idle_emits_nothing() -> None:
    parser = ProtocolParser()
    assert _run(parser, ["enddata", "enddata"]) == []
    assert parser.state is ParserState.IDLE


def test_unrecognized_lines_are_ignored() -> None:
    parser = ProtocolParser()
    records = _run(
        parser,
        ["begindata", "sampling...", "ch1 1010", "note: abc", "ch4: 0110", "enddata"],
    )
    assert [r.to_payload() for r in records] == [{"ch4": "0110"}]


def test_key_value_found_inside_surrounding_text() -> None:
    parser = ProtocolParser()
    records = _run(parser, ["begindata", "> ch1: 1010", "ch2: 0011 (96 samples)", "ch3: 10x0", "enddata"])
    assert [r.to_payload() for r in records] == [{"ch1": "1010", "ch2": "0011", "ch3": "10"}]


def test_empty_capture_yields_empty_record() -> None:
    parser = ProtocolParser()
    records = _run(parser, ["begindata", "enddata"])
    assert len(records) == 1 and len(records[0]) == 0


def test_emitted_record_is_a_snapshot() -> None:
    parser = ProtocolParser()
    (first,) = _run(parser, ["begindata", "ch1: 01", "enddata"])
    _run(parser, ["begindata", "ch1: 10"])
    assert first["ch1"] == "01"
    assert first.channel(2) is None


# Created by Dr. Z. Bakhtiyorov
