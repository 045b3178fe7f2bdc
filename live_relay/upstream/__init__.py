from .bridge import UpstreamBridge
from .session import UpstreamSession

__all__ = ["UpstreamBridge", "UpstreamSession"]
