"""Main FastAPI server for the Gemini Live voice relay."""

from __future__ import annotations

import logging
from typing import Any
from datetime import UTC, datetime
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware

from live_relay.state import RuntimeDeps
from live_relay.state.settings import AppSettings
from live_relay.runtime.settings import load_settings
from live_relay.runtime.logging import configure_logging
from live_relay.config.websocket import WS_ENDPOINT_PATH
from live_relay.runtime.dependencies import build_runtime_deps
from live_relay.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

configure_logging()

DepsFactory = Callable[[AppSettings], RuntimeDeps]


def _iso(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=UTC).isoformat()


def _get_runtime_deps(app: FastAPI) -> RuntimeDeps:
    runtime_deps = getattr(app.state, "runtime_deps", None)
    if runtime_deps is None:
        raise RuntimeError("Runtime dependencies are not initialized")
    return runtime_deps


def create_app(
    settings: AppSettings | None = None,
    *,
    deps_factory: DepsFactory = build_runtime_deps,
) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = deps_factory(settings)
        app.state.runtime_deps = runtime_deps
        runtime_deps.start()
        logger.info(
            "runtime: ready ws_path=%s model=%s api_key_configured=%s",
            WS_ENDPOINT_PATH,
            settings.upstream.model,
            "yes" if settings.upstream.api_key_configured else "no",
        )
        try:
            yield
        finally:
            await runtime_deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.http.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def _unhandled_error(_request: Request, exc: Exception) -> ORJSONResponse:
        logger.error("server error: %s", exc, exc_info=exc)
        message = "Something went wrong" if settings.http.is_production else str(exc)
        return ORJSONResponse(status_code=500, content={"error": "Internal server error", "message": message})

    @app.get("/health")
    async def health() -> dict[str, Any]:
        runtime_deps = _get_runtime_deps(app)
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "activeConnections": len(runtime_deps.registry),
            "uptime": runtime_deps.uptime_s,
            "model": settings.upstream.model,
            # Original key name, kept for existing dashboards.
            "geminiModel": settings.upstream.model,
            "apiKeyConfigured": settings.upstream.api_key_configured,
        }

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/stats")
    async def stats() -> dict[str, Any]:
        snapshot = _get_runtime_deps(app).registry.snapshot()
        return {
            "totalConnections": len(snapshot),
            "connections": [
                {
                    "id": item["id"],
                    "ready": item["ready"],
                    "connected": item["ready"],
                    "generating": item["generating"],
                    "isGenerating": item["generating"],
                    "createdAt": _iso(item["created_at"]),
                    "lastActivity": _iso(item["last_activity"]),
                }
                for item in snapshot
            ],
        }

    @app.websocket(WS_ENDPOINT_PATH)
    async def voice_endpoint(websocket: WebSocket) -> None:
        await handle_websocket_connection(websocket, _get_runtime_deps(app))

    return app


app = create_app()

__all__ = ["app", "create_app"]
