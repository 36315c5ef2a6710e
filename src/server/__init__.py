"""HTTP server exposing a static directory through the static file middleware."""

from .config import ServerConfigurationError, StaticServerConfig
from .context import RequestContext
from .service import StaticServer

__all__ = [
    "RequestContext",
    "ServerConfigurationError",
    "StaticServer",
    "StaticServerConfig",
]
