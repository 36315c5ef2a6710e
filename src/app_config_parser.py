"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    ServerSettings,
    StaticSettings,
)

_ALLOWED_DOTFILE_POLICIES = {"allow", "deny"}
_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    server = _parse_server_settings(_section(raw, "server"), base_dir=base_dir)
    static = _parse_static_settings(_section(raw, "static"))
    return AppConfig(server=server, static=static, source_file=source_file)


def _parse_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> ServerSettings:
    root = _required_str(section, "root", "server")
    return ServerSettings(
        root=_resolve_path(base_dir, root),
        host=_as_str(section.get("host", "127.0.0.1"), "server.host"),
        port=_as_int(section.get("port", 8080), "server.port"),
        mount_path=_as_str(section.get("mount_path", "/"), "server.mount_path") or "/",
        healthz=_as_bool(section.get("healthz", True), "server.healthz"),
        log_level=_as_log_level(section.get("log_level", "INFO"), "server.log_level"),
    )


def _parse_static_settings(section: Mapping[str, Any]) -> StaticSettings:
    return StaticSettings(
        index=_as_index(section.get("index", "index.html"), "static.index"),
        dir_trailing_slash=_as_bool(
            section.get("dir_trailing_slash", True),
            "static.dir_trailing_slash",
        ),
        collapse_slashes=_as_bool(
            section.get("collapse_slashes", True),
            "static.collapse_slashes",
        ),
        strip_from_pathname=_as_optional_str(
            section.get("strip_from_pathname"),
            "static.strip_from_pathname",
        ),
        headers=_as_headers(section.get("headers", {}), "static.headers"),
        dotfiles=_as_dotfile_policy(section.get("dotfiles", "deny"), "static.dotfiles"),
        default_mime_type=_as_str(
            section.get("default_mime_type", "text/plain"),
            "static.default_mime_type",
        ),
        charset=_as_str(section.get("charset", "utf-8"), "static.charset"),
        middleware_mode=_as_optional_str(
            section.get("middleware_mode"),
            "static.middleware_mode",
        ),
        handle_errors=_as_bool(section.get("handle_errors", True), "static.handle_errors"),
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _required_str(section: Mapping[str, Any], field: str, section_name: str) -> str:
    value = section.get(field)
    text = _as_str(value, f"{section_name}.{field}")
    if not text:
        raise AppConfigurationError(f"{section_name}.{field} is required.")
    return text


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_optional_str(value: Any, field: str) -> Optional[str]:
    text = _as_str(value, field)
    if not text:
        return None
    return text


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_index(value: Any, field: str) -> Optional[str]:
    # `index = false` disables index lookup.
    if value is False:
        return None
    return _as_optional_str(value, field)


def _as_headers(value: Any, field: str) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise AppConfigurationError(f"[{field}] must be a table.")
    headers: dict[str, str] = {}
    for name, raw in value.items():
        if not isinstance(raw, str):
            raise AppConfigurationError(f"{field}.{name} must be a string.")
        headers[str(name)] = raw
    return headers


def _as_dotfile_policy(value: Any, field: str) -> str:
    policy = _as_str(value, field).lower()
    if policy not in _ALLOWED_DOTFILE_POLICIES:
        allowed = ", ".join(sorted(_ALLOWED_DOTFILE_POLICIES))
        raise AppConfigurationError(f"{field} must be one of: {allowed}.")
    return policy


def _as_log_level(value: Any, field: str) -> str:
    level = _as_str(value, field).upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"{field} must be one of: {allowed}.")
    return level


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
