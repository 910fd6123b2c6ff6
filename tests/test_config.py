# Program: Config Loader Tests
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

from __future__ import annotations

from pathlib import Path

from logicbridge.config import AppConfig, load_config


def test_defaults_without_file() -> None:
    cfg = load_config(None)
    assert cfg == AppConfig()
    assert cfg.baudrate == 115200
    assert cfg.boot_grace_s == 3.0
    assert cfg.http_port == 8080


def test_yaml_overrides(tmp_path: Path) -> None:
    path = tmp_path / "bridge.yaml"
    path.write_text("device: /dev/ttyUSB1\nhttp_port: 9000\nboot_grace_s: 1.5\nlog_level: debug\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.device == "/dev/ttyUSB1"
    assert cfg.http_port == 9000
    assert cfg.boot_grace_s == 1.5
    assert cfg.log_level == "DEBUG"
    assert cfg.canvas_width == 960


def test_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == AppConfig()


# Created by Dr. Z. Bakhtiyorov
