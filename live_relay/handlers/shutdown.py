"""Graceful shutdown of every live connection."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from live_relay.handlers.reaper import IdleReaper
from live_relay.handlers.registry import ConnectionRegistry
from live_relay.handlers.websocket.errors import safe_close
from live_relay.config.websocket import WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_SHUTDOWN_REASON

logger = logging.getLogger(__name__)


class LifecycleController:
    """Drain the registry once, then tell the listener to stop.

    Repeated requests (e.g. SIGTERM followed by SIGINT) share the first drain.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        *,
        reaper: IdleReaper | None = None,
        stop_listener: Callable[[], None] | None = None,
    ) -> None:
        self._registry = registry
        self._reaper = reaper
        self._stop_listener = stop_listener
        self._drain_task: asyncio.Task | None = None
        self.closed_connections = 0

    @property
    def is_shutting_down(self) -> bool:
        return self._drain_task is not None

    def set_stop_listener(self, stop_listener: Callable[[], None] | None) -> None:
        self._stop_listener = stop_listener

    def request_shutdown(self, reason: str = "shutdown") -> asyncio.Task:
        if self._drain_task is None:
            logger.info("received %s, shutting down gracefully", reason)
            self._drain_task = asyncio.ensure_future(self._drain())
        else:
            logger.info("received %s, shutdown already in progress", reason)
        return self._drain_task

    async def shutdown(self, reason: str = "shutdown") -> int:
        task = self.request_shutdown(reason)
        await asyncio.shield(task)
        return self.closed_connections

    async def _drain(self) -> None:
        if self._reaper is not None:
            await self._reaper.stop()

        for record in self._registry.records():
            if await self._registry.remove(record.id):
                self.closed_connections += 1
                await safe_close(record.client_ws, code=WS_CLOSE_GOING_AWAY_CODE, reason=WS_CLOSE_SHUTDOWN_REASON)
        logger.info("closed %s connection(s)", self.closed_connections)

        if self._stop_listener is not None:
            self._stop_listener()


__all__ = ["LifecycleController"]
