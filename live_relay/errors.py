"""Shared error types for the relay server."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a setting required to open an upstream session is missing."""


class ProtocolParseError(ValueError):
    """Raised for a malformed client or upstream payload."""


class TransportError(ConnectionError):
    """Raised when a socket-level operation on the upstream transport fails."""


__all__ = ["ConfigurationError", "ProtocolParseError", "TransportError"]
