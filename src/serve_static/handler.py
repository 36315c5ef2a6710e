"""Public constructors for static file handlers and middleware."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from .errors import StaticConfigurationError
from .middleware import ContextT, adapt
from .options import MIDDLEWARE_MODE_BAO, StaticOptions
from .resolver import StaticFileResolver, StaticResponse


def make_handler(
    root: Union[str, Path],
    options: Optional[StaticOptions] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> Callable[[str], StaticResponse]:
    """Return a callable mapping a request URL to a ``StaticResponse``."""
    return StaticFileResolver(root, options, logger=logger)


def make_middleware(
    root: Union[str, Path],
    options: Optional[StaticOptions] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> Callable[[ContextT], ContextT]:
    """Return middleware answering through a framework context.

    ``options.handle_errors`` decides whether 403/404 outcomes are sent or
    passed on to the next route.
    """
    options = options or StaticOptions()
    resolver = StaticFileResolver(root, options, logger=logger)
    return adapt(resolver.resolve, options.handle_errors)


def serve_static(
    root: Union[str, Path],
    options: Optional[StaticOptions] = None,
    *,
    logger: Optional[logging.Logger] = None,
):
    """Pick ``make_handler`` or ``make_middleware`` from ``options.middleware_mode``."""
    options = options or StaticOptions()
    if options.middleware_mode is None:
        return make_handler(root, options, logger=logger)
    if options.middleware_mode == MIDDLEWARE_MODE_BAO:
        return make_middleware(root, options, logger=logger)
    raise StaticConfigurationError(f"Unsupported middleware mode: {options.middleware_mode}")
