"""Navigation core: cursor model, history store and the controller."""

from __future__ import annotations

from .controller import AutoCommitHooks, NavigationController, SearchState
from .cursor import CursorScroll
from .history import DEFAULT_HISTORY_PATH, HistoryStore
from .snapshot import Snapshot, SnapshotRow

__all__ = [
    "AutoCommitHooks",
    "CursorScroll",
    "DEFAULT_HISTORY_PATH",
    "HistoryStore",
    "NavigationController",
    "SearchState",
    "Snapshot",
    "SnapshotRow",
]
