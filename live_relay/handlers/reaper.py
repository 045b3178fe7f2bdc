"""Periodic sweep that tears down inactive connections."""

from __future__ import annotations

import time
import asyncio
import logging
from collections.abc import Callable

from live_relay.handlers.registry import ConnectionRegistry
from live_relay.handlers.websocket.errors import safe_close
from live_relay.config.websocket import (
    WS_IDLE_TIMEOUT_S,
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_REAPER_INTERVAL_S,
)

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class IdleReaper:
    """Close connections whose last client activity is older than ``idle_timeout_s``.

    ``ready`` and ``generating`` are not consulted: only the activity timestamp
    decides.
    """

    def __init__(
        self,
        registry: ConnectionRegistry,
        *,
        idle_timeout_s: float | None = None,
        interval_s: float | None = None,
        now_fn: TimeFn | None = None,
    ) -> None:
        self._registry = registry
        self._idle_timeout_s = float(WS_IDLE_TIMEOUT_S if idle_timeout_s is None else idle_timeout_s)
        self._interval_s = float(WS_REAPER_INTERVAL_S if interval_s is None else interval_s)
        self._now = now_fn or time.time
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._stop_event.clear()
            self._task = asyncio.create_task(self._sweep_loop(), name="idle-reaper")
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None

    async def sweep(self) -> list[str]:
        """Run one pass; returns the ids that were torn down."""
        cutoff = self._now() - self._idle_timeout_s
        stale = [record for record in self._registry.records() if record.last_activity < cutoff]

        reaped: list[str] = []
        for record in stale:
            # Activity may have landed while an earlier record was being closed.
            if record.last_activity >= cutoff:
                continue
            if not await self._registry.remove(record.id):
                continue
            logger.info("cleaning up inactive connection connection_id=%s", record.id)
            await safe_close(record.client_ws, code=WS_CLOSE_IDLE_CODE, reason=WS_CLOSE_IDLE_REASON)
            reaped.append(record.id)
        return reaped

    async def _sweep_loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval_s)
                break
            except TimeoutError:
                pass
            try:
                await self.sweep()
            except Exception:
                logger.exception("idle sweep failed")


__all__ = ["IdleReaper"]
