"""Upstream credential resolution."""

from __future__ import annotations

import os

# Checked in order; the first non-empty value wins.
API_KEY_ENV_NAMES: tuple[str, ...] = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


def get_gemini_api_key() -> str:
    for name in API_KEY_ENV_NAMES:
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return ""


__all__ = ["API_KEY_ENV_NAMES", "get_gemini_api_key"]
