# Program: Logicbridge CLI
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

from __future__ import annotations

import json
import logging
import signal
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn
from rich.console import Console
from rich.logging import RichHandler

from .api import create_app
from .bridge import DeviceBridge, open_serial
from .config import load_config
from .dispatch import RecordDispatcher
from .encoder import describe_mode, encode_command
from .errors import ConfigurationError
from .models import Configuration, Edge, TimeUnit
from .render import ImageSurface, SvgSurface, Viewport

app = typer.Typer(add_completion=False)
console = Console()
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _terminate(exc: BaseException) -> None:
    logger.critical("Shutting down: %s", exc)
    signal.raise_signal(signal.SIGTERM)


@app.command()
def serve(
    device: Optional[str] = typer.Argument(None, help="Serial device, e.g. /dev/ttyACM0 or COM3"),
    config: Optional[Path] = typer.Option(None, help="YAML config file"),
    host: Optional[str] = typer.Option(None, help="HTTP bind address"),
    port: Optional[int] = typer.Option(None, help="HTTP port"),
    baudrate: Optional[int] = typer.Option(None, help="Serial baud rate"),
    log_level: Optional[str] = typer.Option(None, help="DEBUG, INFO, WARNING, ERROR"),
):
    """Open the device and serve the browser client."""

    cfg = load_config(config)
    cfg.device = device or cfg.device
    cfg.http_host = host or cfg.http_host
    cfg.http_port = port or cfg.http_port
    cfg.baudrate = baudrate or cfg.baudrate
    cfg.log_level = (log_level or cfg.log_level).upper()
    configure_logging(cfg.log_level)

    if not cfg.device:
        console.print("[red]Please specify the /dev/tty* or COM* port[/]")
        raise typer.Exit(code=2)

    link = open_serial(cfg.device, cfg.baudrate, timeout=cfg.read_timeout_s)
    bridge = DeviceBridge(link, RecordDispatcher(), on_fatal=_terminate)
    bridge.start_reader()
    bridge.wait_until_ready(cfg.boot_grace_s)

    console.print(f"[green]Server ready:[/] http://{cfg.http_host}:{cfg.http_port}")
    try:
        uvicorn.run(create_app(cfg, bridge), host=cfg.http_host, port=cfg.http_port, log_level=cfg.log_level.lower())
    finally:
        bridge.close()
    if bridge.failure is not None:
        raise typer.Exit(code=1)


@app.command()
def encode(
    edge: Edge = typer.Option(Edge.NONE, help="Trigger edge"),
    once: bool = typer.Option(False, help="Trigger once, then sample on the interval"),
    interval: int = typer.Option(1, help="Sampling interval"),
    unit: TimeUnit = typer.Option(TimeUnit.MS, help="Interval unit"),
    channel: List[int] = typer.Option([1, 2, 3, 4], "--channel", "-c", help="Channel to capture (repeatable)"),
    limit: int = typer.Option(960, help="Sample limit, a multiple of 96"),
):
    """Print the device command for the given acquisition settings."""

    try:
        cfg = Configuration(edge=edge, once=once, interval=interval, unit=unit, channels=channel, sample_limit=limit)
        command = encode_command(cfg)
    except (ConfigurationError, ValueError) as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1)
    console.print(command, markup=False, highlight=False)
    console.print(f"[dim]{describe_mode(cfg)}[/]")


@app.command()
def render(
    record: Path = typer.Argument(..., help="JSON file mapping ch1..ch4 to sample strings"),
    out: Path = typer.Argument(..., help="Output .svg or .png"),
    width: int = typer.Option(960, help="Base width in pixels"),
    height: int = typer.Option(400, help="Height in pixels"),
    zoom: float = typer.Option(1.0, help="Horizontal zoom factor (>= 1)"),
):
    """Render a captured record to an image."""

    data = json.loads(record.read_text(encoding="utf-8"))
    factory = ImageSurface if out.suffix.lower() == ".png" else SvgSurface
    viewport = Viewport(width, height, factory)
    viewport.set_zoom(zoom)
    viewport.resize()
    viewport.set_data(data)
    surface = viewport.render()

    out.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(surface, ImageSurface):
        out.write_bytes(surface.to_png())
    else:
        out.write_text(surface.to_svg(), encoding="utf-8")
    console.print(f"[green]Rendered:[/] {out}")


def main() -> int:
    app()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())


# Created by Dr. Z. Bakhtiyorov
