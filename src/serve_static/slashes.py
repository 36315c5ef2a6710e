"""Slash normalization for request paths."""

from __future__ import annotations

import re

_SLASH_RUN = re.compile(r"/+")


def collapse_slashes(
    path: str,
    *,
    keep_leading: bool = True,
    keep_trailing: bool = True,
) -> str:
    """Collapse every run of slashes into one.

    The path is wrapped in a leading and trailing slash before collapsing, so
    the presence of either end slash in the result depends only on the flags,
    never on the input.
    """
    collapsed = _SLASH_RUN.sub("/", f"/{path}/")

    if not keep_leading:
        collapsed = collapsed[1:]
    if not keep_trailing:
        collapsed = collapsed[:-1]

    return collapsed
