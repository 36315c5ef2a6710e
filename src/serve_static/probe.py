"""Filesystem probe returning a tagged outcome instead of raising for the ordinary cases."""

from __future__ import annotations

import enum
import errno
import mimetypes
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import StaticFileReadError


class ProbeResult(enum.Enum):
    NOT_FOUND = "not_found"
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class FileInfo:
    """Result of a single filesystem lookup, valid for one request."""

    path: Path
    kind: ProbeResult
    mime_type: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.kind is not ProbeResult.NOT_FOUND

    @property
    def is_file(self) -> bool:
        return self.kind is ProbeResult.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is ProbeResult.DIRECTORY

    def read_bytes(self) -> bytes:
        if not self.is_file:
            raise StaticFileReadError(f"Not a regular file: {self.path}")
        try:
            return self.path.read_bytes()
        except OSError as error:
            raise StaticFileReadError(f"Failed to read {self.path}: {error}") from error


def probe(path: Path) -> FileInfo:
    """Stat ``path`` and classify it as missing, a directory or a regular file."""
    try:
        mode = path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return FileInfo(path=path, kind=ProbeResult.NOT_FOUND)
    except ValueError:
        # Embedded NUL bytes cannot name a file.
        return FileInfo(path=path, kind=ProbeResult.NOT_FOUND)
    except OSError as error:
        if error.errno == errno.ELOOP:
            return FileInfo(path=path, kind=ProbeResult.NOT_FOUND)
        raise StaticFileReadError(f"Failed to stat {path}: {error}") from error

    if stat.S_ISDIR(mode):
        return FileInfo(path=path, kind=ProbeResult.DIRECTORY)
    if stat.S_ISREG(mode):
        return FileInfo(path=path, kind=ProbeResult.FILE, mime_type=guess_mime_type(path))

    # FIFOs, sockets and device nodes are never served.
    return FileInfo(path=path, kind=ProbeResult.NOT_FOUND)


def guess_mime_type(path: Path) -> Optional[str]:
    """Guess a bare MIME type from the file extension, without parameters."""
    mime_type, _ = mimetypes.guess_type(str(path))
    if not mime_type:
        return None
    return mime_type.split(";", 1)[0].strip() or None
