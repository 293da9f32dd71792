"""Handler layer for HTTP endpoints.

Handlers depend on the worker service, not directly on repositories.

Architecture:
    Handler -> CacheWorker -> Repository
    (HTTP)  -> (Business)  -> (Data Access)
"""

from .control_handler import ControlHandler
from .proxy_handler import ProxyHandler, to_response

__all__ = [
    "ControlHandler",
    "ProxyHandler",
    "to_response",
]
