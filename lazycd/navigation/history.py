"""Persistent per-directory cursor history.

Maps absolute directory paths to the last selected listing index. The JSON
file is read once at startup; a missing or malformed file falls back to an
empty mapping.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_cache_dir

from ..errors import HistoryWriteError

logger = logging.getLogger(__name__)

APP_NAME = "lazycd"
HISTORY_FILENAME = "history.json"
DEFAULT_HISTORY_PATH = Path(user_cache_dir(APP_NAME, appauthor=False)) / HISTORY_FILENAME


def _coerce_index(value: object) -> int | None:
    """Accept only non-negative integers; booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < 0:
        return None
    return value


def load_history_file(path: Path) -> dict[str, int]:
    """Load and sanitize the history mapping stored at ``path``.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a JSON object. Invalid entries are dropped.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable history file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring history file %s: not a JSON object", path)
        return {}

    history: dict[str, int] = {}
    for key, raw_index in data.items():
        index = _coerce_index(raw_index)
        if not key or index is None:
            continue
        history[key] = index
    return history


class HistoryStore:
    """Path to cursor-index mapping with an optional backing file.

    With ``path=None`` the store lives in memory only and ``save`` is a no-op.
    """

    def __init__(self, path: Path | None, entries: dict[str, int] | None = None) -> None:
        self.path = path
        self.entries: dict[str, int] = dict(entries or {})

    @classmethod
    def load(cls, path: Path | None) -> HistoryStore:
        if path is None:
            return cls(None)
        return cls(path, load_history_file(path))

    @staticmethod
    def _key(directory: Path) -> str:
        return str(directory)

    def get(self, directory: Path) -> int | None:
        return self.entries.get(self._key(directory))

    def restore_index(self, directory: Path, count: int) -> int:
        """Return the remembered index for ``directory`` clamped to ``count``."""
        index = self.get(directory)
        if index is None or count <= 0:
            return 0
        return min(index, count - 1)

    def record(self, directory: Path, index: int) -> None:
        self.entries[self._key(directory)] = max(0, index)

    def save(self) -> None:
        """Write the mapping as pretty-printed JSON.

        Raises ``HistoryWriteError`` when the file or its directory cannot be
        written.
        """
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.entries, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        except OSError as exc:
            raise HistoryWriteError(self.path, exc.strerror or str(exc)) from exc


__all__ = [
    "APP_NAME",
    "DEFAULT_HISTORY_PATH",
    "HISTORY_FILENAME",
    "HistoryStore",
    "load_history_file",
]
