"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_FILE_ENV = "SERVE_STATIC_CONFIG_FILE"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class StaticSettings:
    """Static file options from `[static]` and `[static.headers]`."""
    index: Optional[str] = "index.html"
    dir_trailing_slash: bool = True
    collapse_slashes: bool = True
    strip_from_pathname: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    dotfiles: str = "deny"
    default_mime_type: str = "text/plain"
    charset: str = "utf-8"
    middleware_mode: Optional[str] = None
    handle_errors: bool = True


@dataclass(frozen=True)
class ServerSettings:
    """Built-in HTTP server settings from `[server]`."""
    root: str = ""
    host: str = "127.0.0.1"
    port: int = 8080
    mount_path: str = "/"
    healthz: bool = True
    log_level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    server: ServerSettings
    static: StaticSettings
    source_file: str
