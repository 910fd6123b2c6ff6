# Program: Logicbridge Line Framer
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Split a fragmented device stream into whole, trimmed lines."""

from __future__ import annotations

from typing import List

LINE_DELIMITER = "\r"


class LineFramer:
    """Buffer text chunks and return the complete lines they finish.

    The trailing partial line is kept in :attr:`pending` until a later chunk
    supplies its delimiter. Lines that are empty after trimming are dropped.
    """

    def __init__(self, delimiter: str = LINE_DELIMITER) -> None:
        self.delimiter = delimiter
        self.pending = ""

    def feed(self, chunk: str) -> List[str]:
        if not chunk:
            return []
        parts = (self.pending + chunk).split(self.delimiter)
        self.pending = parts.pop()
        return [line.strip() for line in parts if line.strip()]

    def reset(self) -> None:
        self.pending = ""


# Created by Dr. Z. Bakhtiyorov
