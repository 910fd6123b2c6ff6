# Program: Logicbridge Event Models
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Pydantic models for HTTP requests and responses."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .models import Configuration, Edge, TimeUnit

MAX_RENDER_WIDTH = 16384


class StartRequest(BaseModel):
    edge: Edge = Edge.NONE
    once: bool = False
    interval: int = 1
    unit: str = "ms"
    channels: List[int] = Field(default_factory=lambda: [1, 2, 3, 4])
    sample_limit: int = 960

    def to_configuration(self) -> Configuration:
        return Configuration(
            edge=self.edge,
            once=self.once,
            interval=self.interval,
            unit=TimeUnit.parse(self.unit),
            channels=self.channels,
            sample_limit=self.sample_limit,
        )


class RawCommandRequest(BaseModel):
    config: str


class CommandResponse(BaseModel):
    ok: bool = True
    command: str
    mode: int
    summary: str
    estimated_runtime_s: Optional[float] = None


class StatusResponse(BaseModel):
    ready: bool
    capturing: bool
    busy: bool
    consumers: int


class RenderRequest(BaseModel):
    record: Dict[str, str]
    width: int = Field(960, gt=0, le=4096)
    height: int = Field(400, gt=0, le=2048)
    zoom: float = Field(1.0, ge=1.0, le=16.0)
    wave_height: int = Field(20, gt=0, le=200)
    format: Literal["svg", "png"] = "svg"

    @model_validator(mode="after")
    def _limit_surface(self) -> "RenderRequest":
        if self.width * self.zoom > MAX_RENDER_WIDTH:
            raise ValueError(f"zoomed width must not exceed {MAX_RENDER_WIDTH} pixels")
        return self


# Created by Dr. Z. Bakhtiyorov
