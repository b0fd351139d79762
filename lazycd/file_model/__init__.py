"""Directory listing model: entry datatypes and the filesystem scanner."""

from __future__ import annotations

from .fs import list_directory, listing_sort_key
from .types import Entry, Listing

__all__ = [
    "Entry",
    "Listing",
    "list_directory",
    "listing_sort_key",
]
