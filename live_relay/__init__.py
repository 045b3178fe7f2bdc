"""Real-time voice relay between browser clients and the Gemini Live API."""

__version__ = "0.1.0"

__all__ = ["__version__"]
