"""Redirect and serve decisions for static file requests."""

from __future__ import annotations

import errno
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union
from urllib.parse import unquote, urlsplit

from .errors import StaticConfigurationError, StaticFileReadError
from .options import StaticOptions
from .probe import FileInfo, ProbeResult, probe
from .slashes import collapse_slashes

PLAIN_TEXT = "text/plain; charset=utf-8"

_RESERVED_HEADERS = {"content-type", "location"}


@dataclass(frozen=True)
class StaticResponse:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


def merge_headers(extra: Mapping[str, str], **fixed: str) -> Mapping[str, str]:
    """Merge caller headers under the fixed ones; ``Content-Type``/``Location`` always win."""
    fixed_names = {name.replace("_", "-").lower() for name in fixed}
    merged = {
        name: value
        for name, value in extra.items()
        if name.lower() not in fixed_names and name.lower() not in _RESERVED_HEADERS
    }
    for name, value in fixed.items():
        merged[name.replace("_", "-").title()] = value
    return MappingProxyType(merged)


class StaticFileResolver:
    """Resolve request URLs against a static root directory.

    The resolver holds no per-request state and may be shared freely.
    """

    def __init__(
        self,
        root: Union[str, Path],
        options: Optional[StaticOptions] = None,
        logger: Optional[logging.Logger] = None,
    ):
        root_path = Path(root)
        if not root_path.is_absolute():
            raise StaticConfigurationError(f"Static root must be an absolute path: {root}")
        self._root = root_path.resolve()
        self._options = options or StaticOptions()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def options(self) -> StaticOptions:
        return self._options

    def __call__(self, request_url: str) -> StaticResponse:
        return self.resolve(request_url)

    def resolve(self, request_url: str) -> StaticResponse:
        options = self._options
        pathname = self.pathname(request_url)
        target = self._probe_request_path(pathname)

        if not target.exists:
            self._logger.debug("Not found: %s", pathname)
            return self._not_found()

        redirect_path = self.redirect_path(pathname, target)
        if redirect_path != pathname:
            self._logger.debug("Redirecting %s -> %s", pathname, redirect_path)
            return StaticResponse(
                status=308,
                headers=merge_headers(
                    options.headers,
                    Content_Type=PLAIN_TEXT,
                    Location=redirect_path,
                ),
            )

        if target.is_file and self._servable(pathname):
            return self._serve(target)

        if target.is_directory and options.index_enabled:
            index = self._contained_probe(target.path / options.index)
            if index.is_file:
                return self._serve(index)

        self._logger.debug("Forbidden: %s", pathname)
        return StaticResponse(
            status=403,
            headers=merge_headers(options.headers, Content_Type=PLAIN_TEXT),
            body=b"403 Forbidden",
        )

    def pathname(self, request_url: str) -> str:
        """Extract the URL path, removing the first occurrence of the strip prefix."""
        if request_url.startswith("/"):
            # Origin-form targets; urlsplit would read a leading "//" as a host.
            path = request_url.split("?", 1)[0].split("#", 1)[0]
        else:
            path = urlsplit(request_url).path
        strip = self._options.strip_from_pathname
        if strip:
            path = path.replace(strip, "", 1)
        return path

    def redirect_path(self, pathname: str, target: FileInfo) -> str:
        """Return the canonical form of ``pathname`` for an existing target."""
        options = self._options
        redirect = pathname

        if options.collapse_slashes:
            keep_trailing = pathname.endswith("/") and not target.is_file
            redirect = collapse_slashes(pathname, keep_trailing=keep_trailing)

        if options.dir_trailing_slash and target.is_directory and not redirect.endswith("/"):
            redirect = f"{redirect}/"

        return redirect

    def _probe_request_path(self, pathname: str) -> FileInfo:
        relative = unquote(pathname).lstrip("/")
        candidate = self._root / relative if relative else self._root
        return self._contained_probe(candidate)

    def _contained_probe(self, candidate: Path) -> FileInfo:
        try:
            resolved = candidate.resolve()
        except (ValueError, RuntimeError):
            # NUL bytes, or a symlink loop before Python 3.13.
            return FileInfo(path=candidate, kind=ProbeResult.NOT_FOUND)
        except OSError as error:
            if error.errno == errno.ELOOP:
                return FileInfo(path=candidate, kind=ProbeResult.NOT_FOUND)
            raise StaticFileReadError(f"Failed to resolve {candidate}: {error}") from error
        # Candidates may not escape the root, through ".." or symlinks.
        if resolved != self._root and self._root not in resolved.parents:
            return FileInfo(path=candidate, kind=ProbeResult.NOT_FOUND)

        return probe(candidate)

    def _servable(self, pathname: str) -> bool:
        if self._options.allow_dotfiles:
            return True
        leaf = unquote(pathname).rstrip("/").rsplit("/", 1)[-1]
        return not leaf.startswith(".")

    def _serve(self, info: FileInfo) -> StaticResponse:
        options = self._options
        mime_type = info.mime_type or options.default_mime_type
        return StaticResponse(
            status=200,
            headers=merge_headers(
                options.headers,
                Content_Type=f"{mime_type}; charset={options.charset}",
            ),
            body=info.read_bytes(),
        )

    def _not_found(self) -> StaticResponse:
        return StaticResponse(
            status=404,
            headers=merge_headers(self._options.headers, Content_Type=PLAIN_TEXT),
            body=b"404 Not Found",
        )


def resolve(
    root: Union[str, Path],
    request_url: str,
    options: Optional[StaticOptions] = None,
) -> StaticResponse:
    """Resolve a single request without keeping a resolver around."""
    return StaticFileResolver(root, options).resolve(request_url)
