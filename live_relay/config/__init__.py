"""Configuration module exports (env-resolved constants only).

A `.env` file in the working directory is loaded before any constant is
resolved; variables already present in the environment win.
"""

from dotenv import load_dotenv

load_dotenv()

from .upstream import GEMINI_MODEL  # noqa: E402
from .websocket import WS_ENDPOINT_PATH  # noqa: E402

__all__ = [
    "GEMINI_MODEL",
    "WS_ENDPOINT_PATH",
]
