"""Domain datatypes for one directory listing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Entry:
    """One item of a directory listing.

    ``is_dir`` is also true for symlinks whose target is a directory.
    ``symlink_target`` is kept for display only and is never followed.
    """

    name: str
    is_dir: bool = False
    symlink_target: Path | None = None

    @property
    def is_symlink(self) -> bool:
        return self.symlink_target is not None


Listing = tuple[Entry, ...]


__all__ = ["Entry", "Listing"]
