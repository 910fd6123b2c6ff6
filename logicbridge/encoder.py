# Program: Logicbridge Command Encoder
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Serialize acquisition configurations into the device command grammar.

The device accepts a single ``%``-delimited token stream::

    reset%[rising%][falling%][once%]time%<us>%[ch1%..ch4%]limit%<bytes>%start

The limit token carries bytes, not samples: the capture sketch packs eight
samples per byte and buffers twelve bytes per block, hence the 96-sample step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import CommandSyntaxError, InvalidConfigurationError, SampleLimitError
from .models import CHANNELS, Configuration, Edge, TimeUnit

DELIMITER = "%"
SAMPLE_BLOCK = 96
MIN_SAMPLE_LIMIT = 96
MAX_SAMPLE_LIMIT = 8640
SAMPLES_PER_BYTE = 8

INVALID_MODE = 1
MODE_DESCRIPTIONS: Tuple[str, ...] = (
    "Interval sampling with no trigger (immediate)",
    "Error: Trigger requested, but no edge type",
    "Sample on every trigger fall",
    "Interval sampling after falling trigger",
    "Sample on every trigger rise",
    "Interval sampling after rising trigger",
    "Sample on every changing trigger",
    "Interval sampling after changing trigger",
)


@dataclass(frozen=True)
class DecodedCommand:
    """Acquisition flags recovered from a command string."""

    rise: bool
    fall: bool
    once: bool
    interval_us: int
    channels: Tuple[int, ...]
    sample_limit: int

    def to_configuration(self) -> Configuration:
        return Configuration(
            edge=Edge.from_flags(self.rise, self.fall),
            once=self.once,
            interval=self.interval_us,
            unit=TimeUnit.US,
            channels=list(self.channels),
            sample_limit=self.sample_limit,
        )


def mode_code(cfg: Configuration) -> int:
    """Return the 3-bit mode code ``rise<<2 | fall<<1 | once``."""
    return (int(cfg.rise) << 2) | (int(cfg.fall) << 1) | int(cfg.once)


def describe_mode(cfg: Configuration) -> str:
    """Human-readable summary of the sampling mode, with runtime when it applies."""
    mode = mode_code(cfg)
    summary = MODE_DESCRIPTIONS[mode]
    if mode == 0 or mode & 1:
        runtime = estimated_runtime(cfg)
        if runtime is not None:
            summary += f", approximately {runtime:g} seconds of collection."
    return summary


def estimated_runtime(cfg: Configuration) -> Optional[float]:
    """Estimated collection time in seconds, or None without channels."""
    channel_count = len(cfg.selected_channels)
    if not channel_count:
        return None
    return cfg.sample_limit * cfg.interval_us / channel_count / 1e6


def normalize_sample_limit(limit: int) -> int:
    """Validate a sample limit and clamp it into the supported range."""
    limit = int(limit)
    if limit % SAMPLE_BLOCK != 0:
        raise SampleLimitError(f"The sample limit must be a multiple of {SAMPLE_BLOCK}, got {limit}")
    return min(max(limit, MIN_SAMPLE_LIMIT), MAX_SAMPLE_LIMIT)


def validate(cfg: Configuration) -> bool:
    """Return True when the configuration can be encoded."""
    try:
        _check(cfg)
    except (InvalidConfigurationError, SampleLimitError):
        return False
    return True


def _check(cfg: Configuration) -> int:
    if mode_code(cfg) == INVALID_MODE:
        raise InvalidConfigurationError("Please choose an edge type for your trigger.")
    return normalize_sample_limit(cfg.sample_limit)


def encode_command(cfg: Configuration) -> str:
    """Build the device command string for ``cfg``.

    Raises:
        InvalidConfigurationError: ``once`` is set without an edge.
        SampleLimitError: the sample limit is not a multiple of 96.
    """

    limit = _check(cfg)
    tokens: List[str] = ["reset"]
    if cfg.rise:
        tokens.append("rising")
    if cfg.fall:
        tokens.append("falling")
    if cfg.once:
        tokens.append("once")
    tokens += ["time", str(cfg.interval_us)]
    tokens += [f"ch{ch}" for ch in cfg.selected_channels]
    tokens += ["limit", str(limit // SAMPLES_PER_BYTE), "start"]
    return DELIMITER.join(tokens)


def decode_command(text: str) -> DecodedCommand:
    """Parse a command string produced by :func:`encode_command`.

    The sample limit follows the same contract as encoding: a limit that is
    not a multiple of 96 raises :class:`SampleLimitError`, one outside
    [96, 8640] is clamped.
    """
    tokens = [tok for tok in text.strip().split(DELIMITER) if tok]
    if len(tokens) < 2 or tokens[0] != "reset" or tokens[-1] != "start":
        raise CommandSyntaxError(f"Command must start with 'reset' and end with 'start': {text!r}")

    body = tokens[1:-1]
    flags = {"rising": False, "falling": False, "once": False}
    interval_us: Optional[int] = None
    limit_bytes: Optional[int] = None
    channels: List[int] = []
    index = 0
    while index < len(body):
        token = body[index]
        if token in flags and interval_us is None:
            flags[token] = True
        elif token in ("time", "limit"):
            if index + 1 >= len(body) or not body[index + 1].isdigit():
                raise CommandSyntaxError(f"'{token}' must be followed by an integer")
            value = int(body[index + 1])
            if token == "time":
                interval_us = value
            else:
                limit_bytes = value
            index += 1
        elif token.startswith("ch") and token[2:].isdigit() and int(token[2:]) in CHANNELS:
            channels.append(int(token[2:]))
        else:
            raise CommandSyntaxError(f"Unexpected token {token!r}")
        index += 1

    if interval_us is None or limit_bytes is None:
        raise CommandSyntaxError("Command requires both 'time' and 'limit'")
    if flags["once"] and not (flags["rising"] or flags["falling"]):
        raise InvalidConfigurationError("Trigger requested, but no edge type")
    return DecodedCommand(
        rise=flags["rising"],
        fall=flags["falling"],
        once=flags["once"],
        interval_us=interval_us,
        channels=tuple(channels),
        sample_limit=normalize_sample_limit(limit_bytes * SAMPLES_PER_BYTE),
    )


# Created by Dr. Z. Bakhtiyorov
