# Program: Logicbridge Config Utilities
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""Bridge configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class AppConfig:
    device: Optional[str] = None
    baudrate: int = 115200
    boot_grace_s: float = 3.0
    read_timeout_s: float = 0.1
    http_host: str = "127.0.0.1"
    http_port: int = 8080
    canvas_width: int = 960
    canvas_height: int = 400
    wave_height: int = 20
    log_level: str = "INFO"


def load_config(path: Optional[Path]) -> AppConfig:
    """Load YAML config with sane defaults; a missing path yields the defaults."""
    if path is None:
        return AppConfig()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    defaults = AppConfig()
    return AppConfig(
        device=data.get("device", defaults.device),
        baudrate=int(data.get("baudrate", defaults.baudrate)),
        boot_grace_s=float(data.get("boot_grace_s", defaults.boot_grace_s)),
        read_timeout_s=float(data.get("read_timeout_s", defaults.read_timeout_s)),
        http_host=str(data.get("http_host", defaults.http_host)),
        http_port=int(data.get("http_port", defaults.http_port)),
        canvas_width=int(data.get("canvas_width", defaults.canvas_width)),
        canvas_height=int(data.get("canvas_height", defaults.canvas_height)),
        wave_height=int(data.get("wave_height", defaults.wave_height)),
        log_level=str(data.get("log_level", defaults.log_level)).upper(),
    )


# Created by Dr. Z. Bakhtiyorov
