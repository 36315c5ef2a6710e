"""Configuration model for the static file server runtime."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

from serve_static import StaticConfigurationError, StaticOptions


class ServerConfigurationError(Exception):
    """Raised when static server configuration is invalid."""


HEALTHZ_PATH = "/healthz"


@dataclass(frozen=True)
class StaticServerConfig:
    """Validated server configuration derived from app settings."""
    root: str
    host: str = "127.0.0.1"
    port: int = 8080
    mount_path: str = "/"
    healthz: bool = True
    static: StaticOptions = field(default_factory=StaticOptions)

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("server.host cannot be empty")

        if not 1 <= self.port <= 65535:
            raise ServerConfigurationError(
                f"server.port must be in [1, 65535], got: {self.port}"
            )

        if not self.mount_path.startswith("/"):
            raise ServerConfigurationError(
                f"server.mount_path must start with '/', got: {self.mount_path}"
            )

        if not self.root:
            raise ServerConfigurationError("server.root cannot be empty")

        root_path = Path(self.root)
        if not root_path.is_absolute():
            raise ServerConfigurationError(f"Static root must be absolute: {root_path}")
        if not root_path.exists():
            raise ServerConfigurationError(f"Static root not found: {root_path}")
        if not root_path.is_dir():
            raise ServerConfigurationError(f"Static root is not a directory: {root_path}")

    @property
    def mount_prefix(self) -> str:
        """Mount path without its trailing slash; empty for the site root."""
        return self.mount_path.rstrip("/")

    @property
    def healthz_path(self) -> str:
        return HEALTHZ_PATH

    @classmethod
    def from_settings(cls, server_settings, static_settings) -> "StaticServerConfig":
        mount_path = server_settings.mount_path.strip() or "/"
        try:
            static = StaticOptions.from_settings(static_settings)
        except StaticConfigurationError as error:
            raise ServerConfigurationError(str(error)) from error

        # A mounted site strips its own prefix unless told otherwise.
        prefix = mount_path.rstrip("/")
        if prefix and static.strip_from_pathname is None:
            static = replace(static, strip_from_pathname=prefix)

        return cls(
            root=server_settings.root,
            host=server_settings.host,
            port=server_settings.port,
            mount_path=mount_path,
            healthz=bool(server_settings.healthz),
            static=static,
        )
