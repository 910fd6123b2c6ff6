# Program: Logicbridge Models
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Core data models: acquisition configuration and captured sample records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Sequence, Tuple

CHANNELS: Tuple[int, ...] = (1, 2, 3, 4)


class Edge(str, Enum):
    """Trigger edge selection."""

    NONE = "none"
    RISING = "rising"
    FALLING = "falling"
    CHANGING = "changing"

    @property
    def rise(self) -> bool:
        return self in (Edge.RISING, Edge.CHANGING)

    @property
    def fall(self) -> bool:
        return self in (Edge.FALLING, Edge.CHANGING)

    @classmethod
    def from_flags(cls, rise: bool, fall: bool) -> "Edge":
        if rise and fall:
            return cls.CHANGING
        if rise:
            return cls.RISING
        if fall:
            return cls.FALLING
        return cls.NONE


class TimeUnit(str, Enum):
    """Sampling interval unit."""

    S = "s"
    MS = "ms"
    US = "us"

    @classmethod
    def parse(cls, value: "str | TimeUnit") -> "TimeUnit":
        if isinstance(value, TimeUnit):
            return value
        text = value.strip().lower().replace("µ", "u").replace("μ", "u")
        return cls(text)

    @property
    def microseconds(self) -> int:
        return {TimeUnit.S: 1_000_000, TimeUnit.MS: 1_000, TimeUnit.US: 1}[self]


@dataclass
class Configuration:
    """Acquisition parameters edited by the client.

    Attributes:
        edge: Trigger edge, ``none`` for immediate sampling.
        once: Trigger once and then sample on the interval.
        interval: Sampling interval count in ``unit``.
        unit: Unit of ``interval``.
        channels: Selected channel numbers (1-4).
        sample_limit: Number of samples to collect, a multiple of 96.
    """

    edge: Edge = Edge.NONE
    once: bool = False
    interval: int = 1
    unit: TimeUnit = TimeUnit.MS
    channels: Sequence[int] = field(default_factory=lambda: [1, 2, 3, 4])
    sample_limit: int = 960

    def __post_init__(self) -> None:
        self.edge = Edge(self.edge)
        self.unit = TimeUnit.parse(self.unit)
        unknown = [ch for ch in self.channels if ch not in CHANNELS]
        if unknown:
            raise ValueError(f"Unknown channel(s): {unknown}")

    @property
    def rise(self) -> bool:
        return self.edge.rise

    @property
    def fall(self) -> bool:
        return self.edge.fall

    @property
    def interval_us(self) -> int:
        return max(int(self.interval), 0) * self.unit.microseconds

    @property
    def selected_channels(self) -> Tuple[int, ...]:
        return tuple(ch for ch in CHANNELS if ch in self.channels)


@dataclass(frozen=True)
class SampleRecord(Mapping[str, str]):
    """Immutable snapshot of one capture, keyed by channel name (``ch1``...)."""

    samples: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "samples", MappingProxyType(dict(self.samples)))

    def __getitem__(self, key: str) -> str:
        return self.samples[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.samples)

    def __len__(self) -> int:
        return len(self.samples)

    def channel(self, number: int) -> Optional[str]:
        return self.samples.get(f"ch{number}")

    def to_payload(self) -> dict[str, str]:
        return dict(self.samples)


# Created by Dr. Z. Bakhtiyorov
