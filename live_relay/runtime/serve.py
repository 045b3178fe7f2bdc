"""Process entry point: uvicorn with relay-aware signal handling."""

from __future__ import annotations

import signal
import asyncio
import logging
from types import FrameType

import uvicorn
from fastapi import FastAPI

from live_relay.server import app
from live_relay.config.http import HOST, PORT

logger = logging.getLogger(__name__)


class RelayServer(uvicorn.Server):
    """Route SIGINT/SIGTERM through the LifecycleController.

    Every connection is torn down first; only then is the listener asked to
    stop, and ``serve()`` returns once uvicorn reports it closed.
    """

    def __init__(self, config: uvicorn.Config, app: FastAPI) -> None:
        super().__init__(config)
        self._app = app
        self._loop: asyncio.AbstractEventLoop | None = None

    async def serve(self, sockets=None) -> None:
        self._loop = asyncio.get_running_loop()
        await super().serve(sockets=sockets)
        logger.info("server closed")

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        runtime_deps = getattr(self._app.state, "runtime_deps", None)
        if runtime_deps is None or self._loop is None:
            # Still starting up: nothing to drain.
            super().handle_exit(sig, frame)
            return
        lifecycle = runtime_deps.lifecycle
        lifecycle.set_stop_listener(self._stop_listening)
        self._loop.call_soon_threadsafe(lifecycle.request_shutdown, signal.Signals(sig).name)

    def _stop_listening(self) -> None:
        self.should_exit = True


def main() -> None:
    config = uvicorn.Config(app, host=HOST, port=PORT, ws="websockets")
    server = RelayServer(config, app)
    logger.info("voice relay listening on %s:%s", HOST, PORT)
    asyncio.run(server.serve())


__all__ = ["RelayServer", "main"]
