# Program: Logicbridge Protocol Parser
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""State machine assembling sample records from device lines.

Recognized lines::

    initialized        device finished booting, commands may be sent
    begindata          a capture starts, any partial record is discarded
    ch1: 0110...       one channel's samples (last write wins)
    enddata            the capture is complete

A key/value pair is picked out of the line wherever it appears, so a
prefixed line such as ``> ch1: 1010`` still records ``ch1``. Everything else
is ignored. The protocol has no checksum or length field, so
boot chatter and stale bytes after a reset are expected on the line.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Dict, Optional

from .models import SampleRecord

logger = logging.getLogger(__name__)

READY = "initialized"
BEGIN = "begindata"
END = "enddata"
KEY_VALUE = re.compile(r"(\S+): (\d+)")
LOG_WIDTH = 50


class ParserState(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"


def _preview(line: str) -> str:
    return line if len(line) <= LOG_WIDTH else line[:LOG_WIDTH] + "..."


class ProtocolParser:
    """Interpret trimmed lines one at a time, in arrival order."""

    def __init__(self) -> None:
        self.ready = False
        self.state = ParserState.IDLE
        self._record: Dict[str, str] = {}

    @property
    def capturing(self) -> bool:
        return self.state is ParserState.CAPTURING

    def feed_line(self, line: str) -> Optional[SampleRecord]:
        """Advance the state machine; return a record when ``enddata`` closes one."""
        line = line.strip()
        logger.debug("Device: %s", _preview(line))

        if line == READY:
            if not self.ready:
                logger.info("Device reported ready")
            self.ready = True
        elif line == BEGIN:
            if self._record:
                logger.warning("Discarding partial record with %d channel(s)", len(self._record))
            self._record = {}
            self.state = ParserState.CAPTURING
        elif line == END:
            if self.state is ParserState.CAPTURING:
                record = SampleRecord(self._record)
                self._record = {}
                self.state = ParserState.IDLE
                return record
        else:
            match = KEY_VALUE.search(line)
            if match and self.state is ParserState.CAPTURING:
                self._record[match.group(1)] = match.group(2)
        return None


# Created by Dr. Z. Bakhtiyorov
