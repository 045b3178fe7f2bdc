"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import time
import logging
from dataclasses import field, dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from live_relay.state.settings import AppSettings
    from live_relay.handlers.reaper import IdleReaper
    from live_relay.upstream.bridge import UpstreamBridge
    from live_relay.handlers.shutdown import LifecycleController
    from live_relay.handlers.registry import ConnectionRegistry


@dataclass(slots=True)
class RuntimeDeps:
    registry: ConnectionRegistry
    upstream_bridge: UpstreamBridge
    reaper: IdleReaper
    lifecycle: LifecycleController
    settings: AppSettings
    started_at: float = field(default_factory=time.monotonic)

    @property
    def uptime_s(self) -> float:
        return time.monotonic() - self.started_at

    def start(self) -> None:
        self.reaper.start()

    async def shutdown(self) -> None:
        try:
            await self.lifecycle.shutdown("lifespan shutdown")
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
