"""Runtime dependency construction (registry, upstream bridge, reaper, shutdown)."""

from __future__ import annotations

import logging

from live_relay.state import RuntimeDeps
from live_relay.state.settings import AppSettings
from live_relay.handlers.reaper import IdleReaper
from live_relay.upstream.bridge import UpstreamBridge
from live_relay.handlers.shutdown import LifecycleController
from live_relay.handlers.registry import ConnectionRegistry
from live_relay.upstream.connector import UpstreamConnector, connect_upstream

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(
    settings: AppSettings | None = None,
    *,
    connector: UpstreamConnector = connect_upstream,
) -> RuntimeDeps:
    settings = settings or load_settings()

    registry = ConnectionRegistry()
    reaper = IdleReaper(
        registry,
        idle_timeout_s=settings.websocket.idle_timeout_s,
        interval_s=settings.websocket.reaper_interval_s,
    )
    lifecycle = LifecycleController(registry, reaper=reaper)
    upstream_bridge = UpstreamBridge(settings=settings.upstream, connector=connector)

    if not settings.upstream.api_key_configured:
        logger.error("GEMINI_API_KEY is not configured; voice sessions will fail until it is set")

    return RuntimeDeps(
        registry=registry,
        upstream_bridge=upstream_bridge,
        reaper=reaper,
        lifecycle=lifecycle,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
