"""HTTP and websocket API for listing and toggling patterns."""

from __future__ import annotations

import asyncio
import contextlib
import functools
import json
import logging
import queue
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path
from typing import Any

from aiohttp import web

from slisko.chassis import Chassis
from slisko.controller import Controller, PatternState

log = logging.getLogger(__name__)

STATIC_DIR = Path("ui/dist")
_UPDATE_POLL = 0.25

CHASSIS_KEY = web.AppKey("chassis", Chassis)
CONTROLLER_KEY = web.AppKey("controller", Controller)
SOCKETS_KEY = web.AppKey("sockets", set)


def _states_json(states: dict[str, list[PatternState]]) -> dict[str, list[dict[str, Any]]]:
    return {category: [s.to_json() for s in items] for category, items in states.items()}


@web.middleware
async def _cors(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
        response: web.StreamResponse = web.Response(status=204)
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, HEAD"
        response.headers["Access-Control-Allow-Headers"] = (
            "Origin, Accept, Content-Type, Authorization"
        )
    else:
        response = await handler(request)
    if not response.prepared:
        response.headers["Access-Control-Allow-Origin"] = "*"
    return response


async def _chassis_configuration(request: web.Request) -> web.Response:
    return web.json_response(request.app[CHASSIS_KEY].card_order())


async def _patterns(request: web.Request) -> web.Response:
    infos = request.app[CONTROLLER_KEY].list_patterns()
    return web.json_response([{"Name": i.name, "Category": i.category} for i in infos])


def _toggle(enable: bool) -> Callable[[web.Request], Awaitable[web.Response]]:
    async def handler(request: web.Request) -> web.Response:
        controller = request.app[CONTROLLER_KEY]
        pattern = request.match_info["pattern"]
        if not controller.pattern_exists(pattern):
            log.warning("Pattern does not exist: %s", pattern)
            return web.json_response({"message": "Could not find pattern"}, status=404)
        if enable:
            controller.enable_pattern(pattern)
            return web.json_response({"status": "pattern enabled"}, status=202)
        controller.disable_pattern(pattern)
        return web.json_response({"status": "pattern disabled"}, status=202)

    return handler


async def _websocket(request: web.Request) -> web.WebSocketResponse:
    ws = web.WebSocketResponse()
    await ws.prepare(request)
    sockets = request.app[SOCKETS_KEY]
    sockets.add(ws)
    try:
        states = request.app[CONTROLLER_KEY].patterns_per_category()
        await ws.send_str(json.dumps(_states_json(states)))
        async for _ in ws:
            pass
    finally:
        sockets.discard(ws)
    return ws


async def _broadcast_updates(app: web.Application) -> None:
    updates = app[CONTROLLER_KEY].updates
    loop = asyncio.get_running_loop()
    while True:
        try:
            update = await loop.run_in_executor(
                None, functools.partial(updates.get, timeout=_UPDATE_POLL)
            )
        except queue.Empty:
            continue
        payload = json.dumps(_states_json(update))
        for ws in list(app[SOCKETS_KEY]):
            if not ws.closed:
                await ws.send_str(payload)


async def _updates_ctx(app: web.Application) -> AsyncIterator[None]:
    task = asyncio.create_task(_broadcast_updates(app))
    yield
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


async def _close_sockets(app: web.Application) -> None:
    for ws in list(app[SOCKETS_KEY]):
        await ws.close()


def create_app(chassis: Chassis, controller: Controller) -> web.Application:
    """Build the web application serving the API, the websocket and the UI."""
    app = web.Application(middlewares=[_cors])
    app[CHASSIS_KEY] = chassis
    app[CONTROLLER_KEY] = controller
    app[SOCKETS_KEY] = set()

    app.router.add_get("/ws", _websocket)
    app.router.add_get("/chassi", _chassis_configuration)
    app.router.add_get("/patterns", _patterns)
    app.router.add_get("/pattern/enable/{pattern}", _toggle(True))
    app.router.add_get("/pattern/disable/{pattern}", _toggle(False))
    if STATIC_DIR.is_dir():
        app.router.add_static("/", STATIC_DIR)

    app.cleanup_ctx.append(_updates_ctx)
    app.on_shutdown.append(_close_sockets)
    return app


def _parse_listen(listen: str) -> tuple[str | None, int]:
    host, sep, port = listen.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"listen address must be host:port, got {listen!r}")
    return (host or None), int(port)


async def _serve(app: web.Application, host: str | None, port: int) -> None:
    runner = web.AppRunner(app)
    await runner.setup()
    try:
        await web.TCPSite(runner, host, port).start()
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


def run_api(chassis: Chassis, controller: Controller, listen: str) -> None:
    """Serve the API on ``listen`` ("host:port") until interrupted.

    Safe to call from a non-main thread.
    """
    host, port = _parse_listen(listen)
    asyncio.run(_serve(create_app(chassis, controller), host, port))