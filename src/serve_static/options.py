"""Immutable options shared by every request a static handler serves."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .errors import StaticConfigurationError

DEFAULT_INDEX = "index.html"
DOTFILES_ALLOW = "allow"
DOTFILES_DENY = "deny"
MIDDLEWARE_MODE_BAO = "bao"

_DOTFILE_POLICIES = {DOTFILES_ALLOW, DOTFILES_DENY}
_MIDDLEWARE_MODES = {MIDDLEWARE_MODE_BAO}


@dataclass(frozen=True)
class StaticOptions:
    """Validated static file options.

    ``index`` names the file served for directory requests; ``None`` (or
    ``False``) disables index lookup. ``headers`` are merged into every
    response but never replace ``Content-Type`` or ``Location``.
    """

    index: Union[str, None] = DEFAULT_INDEX
    dir_trailing_slash: bool = True
    collapse_slashes: bool = True
    strip_from_pathname: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    dotfiles: str = DOTFILES_DENY
    default_mime_type: str = "text/plain"
    charset: str = "utf-8"
    middleware_mode: Optional[str] = None
    handle_errors: bool = True

    def __post_init__(self) -> None:
        if self.index is False:
            object.__setattr__(self, "index", None)
        if self.index is not None:
            if not isinstance(self.index, str) or not self.index.strip():
                raise StaticConfigurationError("index must be a non-empty file name or None")
            if "/" in self.index:
                raise StaticConfigurationError(
                    f"index must be a plain file name, got: {self.index!r}"
                )

        if self.strip_from_pathname == "":
            object.__setattr__(self, "strip_from_pathname", None)

        if self.dotfiles not in _DOTFILE_POLICIES:
            allowed = ", ".join(sorted(_DOTFILE_POLICIES))
            raise StaticConfigurationError(f"dotfiles must be one of: {allowed}")

        if self.middleware_mode is not None and self.middleware_mode not in _MIDDLEWARE_MODES:
            allowed = ", ".join(sorted(_MIDDLEWARE_MODES))
            raise StaticConfigurationError(f"middleware_mode must be one of: {allowed}")

        if not self.default_mime_type.strip():
            raise StaticConfigurationError("default_mime_type cannot be empty")
        if not self.charset.strip():
            raise StaticConfigurationError("charset cannot be empty")

        for name, value in self.headers.items():
            if not isinstance(name, str) or not isinstance(value, str):
                raise StaticConfigurationError(
                    f"headers must map strings to strings, got: {name!r}={value!r}"
                )
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @property
    def index_enabled(self) -> bool:
        return self.index is not None

    @property
    def allow_dotfiles(self) -> bool:
        return self.dotfiles == DOTFILES_ALLOW

    @classmethod
    def from_settings(cls, settings: Any) -> "StaticOptions":
        """Build options from a settings object exposing the same field names."""
        return cls(
            index=settings.index or None,
            dir_trailing_slash=bool(settings.dir_trailing_slash),
            collapse_slashes=bool(settings.collapse_slashes),
            strip_from_pathname=settings.strip_from_pathname or None,
            headers=dict(settings.headers),
            dotfiles=settings.dotfiles,
            default_mime_type=settings.default_mime_type,
            charset=settings.charset,
            middleware_mode=settings.middleware_mode or None,
            handle_errors=bool(settings.handle_errors),
        )
