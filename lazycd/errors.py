"""Exception types shared by the listing, history and runtime layers.

Messages are written for the status line: they are shown to the user as-is.
"""

from __future__ import annotations

import errno
from pathlib import Path


class LazycdError(Exception):
    """Base class for all lazycd errors."""


class ListingError(LazycdError):
    """A directory could not be used as a navigation target."""

    reason = "cannot read directory"

    def __init__(self, path: Path, detail: str | None = None) -> None:
        self.path = path
        self.detail = detail
        message = f"{self.reason}: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class PermissionDenied(ListingError):
    reason = "permission denied"


class NotFound(ListingError):
    reason = "no such directory"


class NotADirectory(ListingError):
    reason = "not a directory"


class IoFailure(ListingError):
    reason = "I/O error"


class HistoryWriteError(IoFailure):
    reason = "cannot write history file"


class TerminalSizeError(LazycdError):
    """The viewport dimensions could not be determined."""


def listing_error_from_os_error(path: Path, exc: OSError) -> ListingError:
    """Map an ``OSError`` raised while reading ``path`` to a ``ListingError``."""
    detail = exc.strerror or None
    if isinstance(exc, PermissionError) or exc.errno in {errno.EACCES, errno.EPERM}:
        return PermissionDenied(path)
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return NotFound(path)
    if isinstance(exc, NotADirectoryError) or exc.errno == errno.ENOTDIR:
        return NotADirectory(path)
    return IoFailure(path, detail)


__all__ = [
    "LazycdError",
    "ListingError",
    "PermissionDenied",
    "NotFound",
    "NotADirectory",
    "IoFailure",
    "HistoryWriteError",
    "TerminalSizeError",
    "listing_error_from_os_error",
]
