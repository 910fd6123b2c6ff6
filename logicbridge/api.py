# Program: Logicbridge API (FastAPI)
# Version: 0.1.0
# Author: Dr. Zulfiyor Bakhtiyorov
# Affiliations: University of Cambridge; Xinjiang Institute of Ecology and Geography; National Academy of Sciences of Tajikistan
# Year: 2025
# License: MIT License

"""FastAPI glue-service between browser clients and the device bridge."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from pathlib import Path

from fastapi import FastAPI, HTTPException, Response, WebSocket, WebSocketDisconnect
from fastapi.staticfiles import StaticFiles

from .bridge import DeviceBridge
from .config import AppConfig
from .encoder import decode_command, describe_mode, encode_command, estimated_runtime, mode_code
from .errors import CaptureInProgressError, ConfigurationError, ConnectionLostError, DeviceNotReadyError
from .events import CommandResponse, RawCommandRequest, RenderRequest, StartRequest, StatusResponse
from .models import Configuration
from .render import ImageSurface, SvgSurface, Viewport

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def _configuration(request: StartRequest) -> Configuration:
    try:
        return request.to_configuration()
    except ValueError as exc:
        raise HTTPException(422, detail=str(exc)) from exc


def _describe(cfg: Configuration, command: str) -> CommandResponse:
    return CommandResponse(
        command=command,
        mode=mode_code(cfg),
        summary=describe_mode(cfg),
        estimated_runtime_s=estimated_runtime(cfg),
    )


def _send(bridge: DeviceBridge, command: str) -> None:
    try:
        bridge.send_command(command)
    except DeviceNotReadyError as exc:
        logger.warning("Refused command: %s", exc)
        raise HTTPException(409, detail=str(exc)) from exc
    except CaptureInProgressError as exc:
        logger.warning("Refused command: %s", exc)
        raise HTTPException(409, detail=str(exc)) from exc
    except ConnectionLostError as exc:
        raise HTTPException(503, detail=str(exc)) from exc


def create_app(cfg: AppConfig, bridge: DeviceBridge) -> FastAPI:
    app = FastAPI(title="Logicbridge")
    dispatcher = bridge.dispatcher

    @app.get("/status")
    async def status() -> StatusResponse:
        return StatusResponse(
            ready=bridge.ready,
            capturing=bridge.capturing,
            busy=bridge.busy,
            consumers=dispatcher.subscriber_count,
        )

    @app.post("/encode")
    async def encode(request: StartRequest) -> CommandResponse:
        config = _configuration(request)
        try:
            command = encode_command(config)
        except ConfigurationError as exc:
            raise HTTPException(422, detail=str(exc)) from exc
        return _describe(config, command)

    @app.post("/start")
    def start(request: StartRequest) -> CommandResponse:
        config = _configuration(request)
        try:
            command = encode_command(config)
        except ConfigurationError as exc:
            logger.warning("Rejected configuration: %s", exc)
            raise HTTPException(422, detail=str(exc)) from exc
        _send(bridge, command)
        return _describe(config, command)

    @app.post("/command")
    def raw_command(request: RawCommandRequest) -> dict[str, str | bool]:
        try:
            command = encode_command(decode_command(request.config).to_configuration())
        except ConfigurationError as exc:
            logger.warning("Rejected command %r: %s", request.config, exc)
            raise HTTPException(422, detail=str(exc)) from exc
        logger.info("ClientData: %s", request.config)
        _send(bridge, command)
        return {"ok": True, "command": command}

    @app.post("/render")
    async def render(request: RenderRequest) -> Response:
        factory = SvgSurface if request.format == "svg" else ImageSurface
        viewport = Viewport(request.width, request.height, factory, wave_height=request.wave_height)
        viewport.set_zoom(request.zoom)
        viewport.resize()
        viewport.set_data(request.record)
        surface = viewport.render()
        if isinstance(surface, SvgSurface):
            return Response(surface.to_svg(), media_type="image/svg+xml")
        return Response(surface.to_png(), media_type="image/png")

    @app.websocket("/ws")
    async def push(websocket: WebSocket) -> None:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[str] = asyncio.Queue()

        def listener(payload: str) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, payload)

        unsubscribe = dispatcher.subscribe(listener)
        await websocket.accept()

        async def forward() -> None:
            while True:
                await websocket.send_text(await queue.get())

        sender = asyncio.create_task(forward())
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            pass
        finally:
            unsubscribe()
            sender.cancel()
            with suppress(asyncio.CancelledError):
                await sender

    app.state.config = cfg
    app.state.bridge = bridge
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")
    return app


# Created by Dr. Z. Bakhtiyorov
