"""Filesystem scanning for one directory listing."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import ListingError, listing_error_from_os_error
from .types import Entry, Listing

logger = logging.getLogger(__name__)


def listing_sort_key(case_sensitive: bool):
    """Return the sort key used to order a listing by name."""
    if case_sensitive:
        return lambda entry: entry.name
    return lambda entry: (entry.name.casefold(), entry.name)


def _scan_entry(child: os.DirEntry) -> Entry:
    """Build an ``Entry`` from a scandir item, degrading fields on stat errors."""
    try:
        is_dir = child.is_dir()
    except OSError:
        is_dir = False

    symlink_target: Path | None = None
    try:
        if child.is_symlink():
            symlink_target = Path(os.readlink(child.path))
    except OSError as exc:
        logger.debug("cannot read symlink %s: %s", child.path, exc)

    return Entry(name=child.name, is_dir=is_dir, symlink_target=symlink_target)


def list_directory(
    directory: Path,
    *,
    folders_only: bool = False,
    case_sensitive: bool = False,
) -> Listing:
    """List ``directory`` and return its entries in display order.

    Raises a ``ListingError`` subclass when the directory itself cannot be
    read. The folders-only filter runs before sorting so listing indices
    never refer to filtered-out entries.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(directory) as scanned:
            for child in scanned:
                entry = _scan_entry(child)
                if folders_only and not entry.is_dir:
                    continue
                entries.append(entry)
    except OSError as exc:
        error = listing_error_from_os_error(directory, exc)
        logger.info("listing %s failed: %s", directory, error)
        raise error from exc

    entries.sort(key=listing_sort_key(case_sensitive))
    return tuple(entries)


__all__ = ["ListingError", "list_directory", "listing_sort_key"]
