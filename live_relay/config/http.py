"""HTTP listener and CORS configuration (env-resolved constants only)."""

from __future__ import annotations

import os

APP_ENV: str = (os.getenv("APP_ENV") or "").strip().lower() or "development"
IS_PRODUCTION: bool = APP_ENV == "production"

HOST: str = (os.getenv("HOST") or "").strip() or "0.0.0.0"

_PORT_RAW = (os.getenv("PORT") or "").strip()
try:
    PORT: int = int(_PORT_RAW) if _PORT_RAW else 3001
except Exception:
    PORT = 3001
if PORT <= 0 or PORT > 65535:
    PORT = 3001

FRONTEND_URL: str = (os.getenv("FRONTEND_URL") or "").strip()
DEV_FRONTEND_URL: str = (os.getenv("DEV_FRONTEND_URL") or "").strip() or "http://localhost:3000"

# Production only trusts FRONTEND_URL; an unset value allows no cross-origin callers.
CORS_ORIGINS: list[str] = ([FRONTEND_URL] if FRONTEND_URL else []) if IS_PRODUCTION else [DEV_FRONTEND_URL]

__all__ = [
    "APP_ENV",
    "CORS_ORIGINS",
    "DEV_FRONTEND_URL",
    "FRONTEND_URL",
    "HOST",
    "IS_PRODUCTION",
    "PORT",
]
