# Program: Logicbridge Waveform Renderer
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Draw captured channels as two-level step traces.

The surface is split into four equal horizontal bands, one per channel.
Inside a band the low level sits on the band's midline and the high level
``wave_height`` pixels above it. Only ``0`` samples are low; any other
character is drawn high. A light guide box is painted behind each
trace before the trace itself.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Protocol, Sequence, Tuple
from xml.sax.saxutils import quoteattr

import numpy as np
from PIL import Image, ImageDraw

from .models import CHANNELS

Point = Tuple[float, float]

WAVE_HEIGHT = 20
BAND_COLOR = "#eeeeee"
BACKGROUND = "#ffffff"
LINE_WIDTH = 1
CHANNEL_COLORS: Mapping[int, str] = {1: "red", 2: "blue", 3: "green", 4: "orange"}
ZOOM_STEP = 0.75
MIN_ZOOM = 1.0


class Surface(Protocol):
    """Render target owned by the UI layer."""

    width: int
    height: int

    def clear(self) -> None:  # pragma: no cover - surface specific
        ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:  # pragma: no cover
        ...

    def polyline(self, points: Sequence[Point], color: str, line_width: float) -> None:  # pragma: no cover
        ...


@dataclass(frozen=True)
class Trace:
    """Geometry of one channel: guide box plus step polyline."""

    channel: int
    band: Tuple[float, float, float, float]
    points: Tuple[Point, ...]

    @property
    def steps(self) -> int:
        """Number of vertical level changes."""
        return sum(1 for a, b in zip(self.points, self.points[1:]) if a[0] == b[0] and a[1] != b[1])

    @property
    def segments(self) -> int:
        return max(len(self.points) - 1, 0)


def channel_trace(
    samples: str,
    channel: int,
    width: float,
    height: float,
    wave_height: float = WAVE_HEIGHT,
) -> Optional[Trace]:
    """Compute the trace for one channel, or None when there is nothing to draw."""
    if not samples:
        return None
    channel_height = height / len(CHANNELS)
    mid = channel_height / 2 + channel_height * (channel - 1)
    high = mid - wave_height
    pitch = width / len(samples)

    levels = np.where(np.frombuffer(samples.encode("ascii", errors="replace"), dtype=np.uint8) == ord("0"), mid, high)
    changes = np.flatnonzero(np.diff(levels)) + 1

    points: List[Point] = [(0.0, float(levels[0]))]
    for index in changes:
        x = float(index * pitch)
        points.append((x, float(levels[index - 1])))
        points.append((x, float(levels[index])))
    points.append((float(width), float(levels[-1])))

    band = (0.0, mid - 2 * wave_height, float(width), 3 * wave_height)
    return Trace(channel=channel, band=band, points=tuple(points))


def render_channel(
    surface: Surface,
    channel: int,
    samples: Optional[str],
    color: str,
    wave_height: float = WAVE_HEIGHT,
) -> Optional[Trace]:
    trace = channel_trace(samples or "", channel, surface.width, surface.height, wave_height)
    if trace is None:
        return None
    surface.fill_rect(*trace.band, color=BAND_COLOR)
    surface.polyline(trace.points, color=color, line_width=LINE_WIDTH)
    return trace


def render_record(
    surface: Surface,
    record: Mapping[str, str],
    wave_height: float = WAVE_HEIGHT,
) -> List[Trace]:
    """Clear ``surface`` and draw every channel present in ``record``."""
    surface.clear()
    traces = []
    for channel in CHANNELS:
        trace = render_channel(surface, channel, record.get(f"ch{channel}"), CHANNEL_COLORS[channel], wave_height)
        if trace is not None:
            traces.append(trace)
    return traces


class SvgSurface:
    """Surface collecting SVG elements for embedding in the browser client."""

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self._elements: List[str] = []

    def clear(self) -> None:
        self._elements = []

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        self._elements.append(
            f'<rect x="{x:g}" y="{y:g}" width="{w:g}" height="{h:g}" fill={quoteattr(color)} />'
        )

    def polyline(self, points: Sequence[Point], color: str, line_width: float) -> None:
        coords = " ".join(f"{x:g},{y:g}" for x, y in points)
        self._elements.append(
            f'<polyline points="{coords}" fill="none" stroke={quoteattr(color)} '
            f'stroke-width="{line_width:g}" stroke-linejoin="miter" stroke-linecap="square" />'
        )

    def to_svg(self) -> str:
        body = "\n  ".join(self._elements)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width} {self.height}">\n  {body}\n</svg>\n'
        )


class ImageSurface:
    """Raster surface backed by Pillow, used for PNG export."""

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.image = Image.new("RGB", (self.width, self.height), BACKGROUND)
        self._draw = ImageDraw.Draw(self.image)

    def clear(self) -> None:
        self._draw.rectangle((0, 0, self.width, self.height), fill=BACKGROUND)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        self._draw.rectangle((x, y, x + w, y + h), fill=color)

    def polyline(self, points: Sequence[Point], color: str, line_width: float) -> None:
        self._draw.line(list(points), fill=color, width=max(int(round(line_width)), 1), joint="curve")

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()


SurfaceFactory = Callable[[int, int], Surface]


class Viewport:
    """Zoomable view of the latest record over a fixed base surface size."""

    def __init__(
        self,
        base_width: int,
        base_height: int,
        surface_factory: SurfaceFactory = SvgSurface,
        wave_height: float = WAVE_HEIGHT,
    ) -> None:
        self.base_width = base_width
        self.base_height = base_height
        self.surface_factory = surface_factory
        self.wave_height = wave_height
        self.zoom_factor = MIN_ZOOM
        self.record: Mapping[str, str] = {}
        self.surface = self.resize()

    @property
    def size(self) -> Tuple[int, int]:
        return int(self.base_width * self.zoom_factor), int(self.base_height)

    def resize(self) -> Surface:
        self.surface = self.surface_factory(*self.size)
        return self.surface

    def set_data(self, record: Mapping[str, str]) -> None:
        self.record = record

    def set_zoom(self, factor: float) -> None:
        self.zoom_factor = max(float(factor), MIN_ZOOM)

    def zoom(self, direction: str) -> Surface:
        if direction == "in":
            self.zoom_factor += ZOOM_STEP
        else:
            self.zoom_factor = max(self.zoom_factor - ZOOM_STEP, MIN_ZOOM)
        self.resize()
        return self.render()

    def render(self) -> Surface:
        render_record(self.surface, self.record, self.wave_height)
        return self.surface


# Created by Dr. Z. Bakhtiyorov
