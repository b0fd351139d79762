"""Navigation state engine: listing, search, cursor and history in one place.

Every user intent goes through ``NavigationController``. It owns the current
listing, the search state, the cursor model and the history store, and
produces ``Snapshot`` objects for the renderer. Nothing here touches the
terminal.
"""

from __future__ import annotations

import logging
import os
import time
from bisect import bisect_left
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from ..errors import HistoryWriteError, ListingError, NotADirectory
from ..file_model.fs import list_directory
from ..file_model.types import Entry, Listing
from ..search.matching import Match, compute_matches
from ..settings import CaseMode, Settings
from .cursor import CursorScroll
from .history import HistoryStore
from .snapshot import Snapshot

logger = logging.getLogger(__name__)

NO_MATCHES_MSG = "No matches"
NOTHING_SELECTED_MSG = "error: nothing to enter"
REFRESHED_MSG = "Refreshed directory listing"


@dataclass(frozen=True)
class SearchState:
    query: str = ""
    matches: tuple[Match, ...] = ()

    @property
    def is_searching(self) -> bool:
        return bool(self.query)


def _noop() -> None:
    return None


@dataclass(frozen=True)
class AutoCommitHooks:
    """Operations used while auto-committing a single remaining match.

    The pause is a plain blocking call: keys pressed during ``sleep`` do not
    cancel the commit, they are thrown away by ``drain_input``.
    """

    sleep: Callable[[float], None] = time.sleep
    drain_input: Callable[[], None] = _noop
    before_commit: Callable[[Snapshot], None] | None = None


def _normalize(path: Path) -> Path:
    return Path(os.path.normpath(os.path.abspath(path)))


class NavigationController:
    """Single entry point for navigation, search and cursor intents.

    Construction lists the start directory and lets ``ListingError`` escape,
    since a browser that cannot show its first directory has nothing to do.
    After that, navigation failures only set ``status_message``.
    """

    def __init__(
        self,
        settings: Settings,
        start_path: Path,
        width: int,
        height: int,
        *,
        history: HistoryStore | None = None,
        lister: Callable[..., Listing] = list_directory,
        hooks: AutoCommitHooks | None = None,
    ) -> None:
        self.settings = settings
        self.case_mode = settings.case_mode
        self.gap_mode = settings.gap_mode
        self.history = history if history is not None else HistoryStore.load(settings.history_file)
        self.hooks = hooks or AutoCommitHooks()
        self._lister = lister
        self._history_warning_shown = False

        self.current_path = _normalize(start_path)
        self.listing: Listing = self._list(self.current_path)
        self.search = SearchState()
        self.cursor = CursorScroll(width, height)
        count = len(self.listing)
        self.cursor.reset(count, self.history.restore_index(self.current_path, count))
        self.header = str(self.current_path)
        self.status_message = ""

    # -- derived views -------------------------------------------------

    def is_searching(self) -> bool:
        return self.search.is_searching

    def visible_indices(self) -> tuple[int, ...]:
        """Listing indices currently shown, in display order."""
        if self.settings.filter_search and self.search.is_searching:
            return tuple(match.index for match in self.search.matches)
        return tuple(range(len(self.listing)))

    def match_positions(self) -> list[int]:
        """Visible positions of the current matches."""
        if self.settings.filter_search:
            return list(range(len(self.search.matches)))
        return [match.index for match in self.search.matches]

    def selected_index(self) -> int | None:
        """Listing index under the cursor, or ``None`` when nothing is shown."""
        visible = self.visible_indices()
        position = self.cursor.index
        if not 0 <= position < len(visible):
            return None
        return visible[position]

    def selected_entry(self) -> Entry | None:
        index = self.selected_index()
        return None if index is None else self.listing[index]

    def entry_at_row(self, row: int) -> Entry | None:
        visible = self.visible_indices()
        position = self.cursor.scroll_pos + row
        if row < 0 or row >= self.cursor.height or position >= len(visible):
            return None
        return self.listing[visible[position]]

    def snapshot(self) -> Snapshot:
        return Snapshot(
            current_path=self.current_path,
            header=self.header,
            listing=self.listing,
            visible=self.visible_indices(),
            query=self.search.query,
            matches=self.search.matches,
            cursor_pos=self.cursor.cursor_pos,
            scroll_pos=self.cursor.scroll_pos,
            height=self.cursor.height,
            status_message=self.status_message,
            case_mode=self.case_mode,
            gap_mode=self.gap_mode,
            filter_search=self.settings.filter_search,
        )

    # -- directory changes ---------------------------------------------

    def _list(self, path: Path) -> Listing:
        return self._lister(
            path,
            folders_only=self.settings.folders_only,
            case_sensitive=self.case_mode is CaseMode.CASE_SENSITIVE,
        )

    def _resolve_token(self, token: str) -> Path | None:
        if token == "":
            entry = self.selected_entry()
            if entry is None:
                return None
            target = self.current_path / entry.name
            if not entry.is_dir:
                raise NotADirectory(target)
            return target
        if token == "..":
            return self.current_path.parent
        if token == ".":
            return self.current_path
        candidate = Path(token)
        if not candidate.is_absolute():
            candidate = self.current_path / candidate
        return _normalize(candidate)

    def _remember_position(self) -> None:
        index = self.selected_index()
        if index is not None:
            self.history.record(self.current_path, index)

    def _write_history(self) -> str:
        """Flush history during navigation; failures only warn once."""
        try:
            self.history.save()
        except HistoryWriteError as exc:
            logger.warning("%s", exc)
            if not self._history_warning_shown:
                self._history_warning_shown = True
                return f"warning: {exc}"
        return ""

    def change_dir(self, token: str) -> bool:
        """Resolve ``token`` and enter it, returning ``True`` on success.

        ``""`` enters the entry under the cursor, ``".."`` the parent and
        ``"."`` re-lists the current directory. Any other value is taken as an
        absolute path or a path relative to the current directory.
        """
        try:
            target = self._resolve_token(token)
            if target is None:
                self.status_message = NOTHING_SELECTED_MSG
                return False
            listing = self._list(target)
        except ListingError as exc:
            logger.info("change_dir(%r) failed: %s", token, exc)
            self.status_message = f"error: {exc}"
            return False

        self._remember_position()
        warning = self._write_history()

        self.current_path = target
        self.listing = listing
        self.search = SearchState()
        count = len(listing)
        self.cursor.reset(count, self.history.restore_index(target, count))
        self.header = str(target)
        self.status_message = warning
        logger.debug("entered %s (%d entries)", target, count)
        return True

    def go_home(self) -> bool:
        return self.change_dir(str(Path.home()))

    def go_root(self) -> bool:
        return self.change_dir(self.current_path.anchor or os.sep)

    def refresh(self) -> bool:
        changed = self.change_dir(".")
        if changed and not self.status_message:
            self.status_message = REFRESHED_MSG
        return changed

    # -- search ----------------------------------------------------------

    def _refresh_matches(self) -> None:
        """Recompute matches and keep the cursor on a sensible entry."""
        previous = self.selected_index()
        matches = compute_matches(self.listing, self.search.query, self.case_mode, self.gap_mode)
        self.search = replace(self.search, matches=matches)

        visible = self.visible_indices()
        if previous is None:
            position = 0
        else:
            position = bisect_left(visible, previous)
        self.cursor.set_count(len(visible))
        self.cursor.move_to(position)
        if self.search.is_searching:
            self.cursor.move_to_adjacent_match(0, self.match_positions())
            self.status_message = "" if matches else NO_MATCHES_MSG
        else:
            self.status_message = ""

    def advance_search(self, text: str) -> None:
        """Append ``text`` to the query and auto-commit a lone match."""
        self.search = replace(self.search, query=self.search.query + text)
        self._refresh_matches()
        timeout_ms = self.settings.autocd_timeout_ms
        if text and timeout_ms is not None and len(self.search.matches) == 1:
            self._auto_commit(timeout_ms)

    def _auto_commit(self, timeout_ms: int) -> None:
        if self.hooks.before_commit is not None:
            self.hooks.before_commit(self.snapshot())
        self.hooks.sleep(timeout_ms / 1000.0)
        self.hooks.drain_input()
        self.change_dir("")

    def erase_search_char(self) -> None:
        if not self.search.query:
            return
        self.search = replace(self.search, query=self.search.query[:-1])
        self._refresh_matches()

    def clear_search(self) -> None:
        self.search = replace(self.search, query="")
        self._refresh_matches()

    def cycle_case_mode(self) -> None:
        self.case_mode = self.case_mode.next()
        self._refresh_matches()

    def cycle_gap_mode(self) -> None:
        self.gap_mode = self.gap_mode.next()
        self._refresh_matches()

    # -- cursor ------------------------------------------------------------

    def move_cursor(self, delta: int, wrap: bool) -> None:
        self.cursor.move(delta, wrap)

    def move_cursor_to(self, index: int) -> None:
        self.cursor.move_to(index)

    def step(self, direction: int) -> None:
        """Arrow-key movement: between matches while searching, else one row."""
        if self.search.is_searching:
            self.cursor.move_to_adjacent_match(direction, self.match_positions())
        else:
            self.cursor.move(direction, wrap=True)

    def page(self, direction: int) -> None:
        if self.search.is_searching:
            return
        self.cursor.move(direction * max(1, self.cursor.height - 1), wrap=False)

    def home_end(self, end: bool) -> None:
        if self.search.is_searching:
            return
        self.cursor.move_to(self.cursor.count if end else 0)

    def select_row(self, row: int) -> bool:
        if self.entry_at_row(row) is None:
            return False
        self.cursor.move_to(self.cursor.scroll_pos + row)
        return True

    def activate_row(self, row: int) -> bool:
        entry = self.entry_at_row(row)
        if entry is None:
            return False
        return self.change_dir(str(self.current_path / entry.name))

    def update_viewport(self, width: int, height: int) -> None:
        self.cursor.update_viewport(width, height)

    # -- shutdown ----------------------------------------------------------

    def on_exit(self) -> None:
        """Record the current position and flush history to disk.

        Raises ``HistoryWriteError`` when the history file cannot be written.
        """
        self._remember_position()
        self.history.save()


__all__ = [
    "AutoCommitHooks",
    "NavigationController",
    "NO_MATCHES_MSG",
    "NOTHING_SELECTED_MSG",
    "REFRESHED_MSG",
    "SearchState",
]
