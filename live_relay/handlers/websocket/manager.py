"""Primary client WebSocket connection orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from live_relay.state.runtime import RuntimeDeps
from live_relay.handlers.registry import new_connection_id
from live_relay.config.websocket import WS_CLOSE_CLIENT_REQUEST_CODE

from .errors import safe_close
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    registry = runtime_deps.registry
    if runtime_deps.lifecycle.is_shutting_down:
        # Reject before accept: the ASGI server answers with HTTP 403.
        await ws.close(code=WS_CLOSE_CLIENT_REQUEST_CODE)
        return

    await ws.accept()

    connection_id = new_connection_id()
    record = registry.register(connection_id, ws)
    logger.info("new voice connection connection_id=%s active=%s", connection_id, len(registry))

    session = runtime_deps.upstream_bridge.new_session(record)
    session.start()
    try:
        await run_message_loop(ws, record)
    finally:
        logger.info("connection closed connection_id=%s", connection_id)
        with contextlib.suppress(Exception):
            await registry.remove(connection_id)
        await safe_close(ws, code=WS_CLOSE_CLIENT_REQUEST_CODE)


__all__ = ["handle_websocket_connection"]
