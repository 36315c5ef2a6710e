"""Static file serving with slash normalization, index files and middleware support."""

from .errors import StaticConfigurationError, StaticFileReadError, StaticFilesError
from .handler import make_handler, make_middleware, serve_static
from .middleware import MiddlewareContext, adapt
from .options import StaticOptions
from .probe import FileInfo, ProbeResult, probe
from .resolver import StaticFileResolver, StaticResponse, resolve
from .slashes import collapse_slashes

__all__ = [
    "FileInfo",
    "MiddlewareContext",
    "ProbeResult",
    "StaticConfigurationError",
    "StaticFileReadError",
    "StaticFileResolver",
    "StaticFilesError",
    "StaticOptions",
    "StaticResponse",
    "adapt",
    "collapse_slashes",
    "make_handler",
    "make_middleware",
    "probe",
    "resolve",
    "serve_static",
]
