# Program: Line Framer Tests
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Line reassembly must not depend on how the stream is chunked."""

from __future__ import annotations

import random

import pytest

from logicbridge.framing import LineFramer

STREAM = "boot v1.2\r\n\r\ninitialized\r\nbegindata\r\nch1: 10101100\r\nch2: 0011\r\n  \r\nenddata\r\npartial"
EXPECTED = ["boot v1.2", "initialized", "begindata", "ch1: 10101100", "ch2: 0011", "enddata"]


def _feed_all(framer: LineFramer, chunks) -> list:
    lines = []
    for chunk in chunks:
        lines.extend(framer.feed(chunk))
    return lines


def test_whole_stream() -> None:
    framer = LineFramer()
    assert framer.feed(STREAM) == EXPECTED
    assert framer.pending.strip() == "partial"


def test_character_at_a_time() -> None:
    framer = LineFramer()
    assert _feed_all(framer, STREAM) == EXPECTED
    assert framer.pending.strip() == "partial"


@pytest.mark.parametrize("seed", range(10))
def test_random_chunk_boundaries(seed: int) -> None:
    rng = random.Random(seed)
    cuts = sorted(rng.sample(range(1, len(STREAM)), rng.randint(1, 20)))
    chunks = [STREAM[a:b] for a, b in zip([0] + cuts, cuts + [len(STREAM)])]
    framer = LineFramer()
    assert _feed_all(framer, chunks) == EXPECTED
    assert framer.pending.strip() == "partial"


def test_partial_line_completed_by_next_chunk() -> None:
    framer = LineFramer()
    assert framer.feed("endd") == []
    assert framer.feed("ata\r") == ["enddata"]
    assert framer.pending == ""


def test_blank_lines_emit_nothing() -> None:
    framer = LineFramer()
    assert framer.feed("\r\r \r\n\r") == []
    assert framer.feed("") == []


# Created by Dr. Z. Bakhtiyorov
