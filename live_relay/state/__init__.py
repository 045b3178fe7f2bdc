from .runtime import RuntimeDeps
from .settings import AppSettings
from .connection import ConnectionPhase, ConnectionRecord

__all__ = ["AppSettings", "ConnectionPhase", "ConnectionRecord", "RuntimeDeps"]
