"""Main interactive event loop for the terminal UI.

Maps decoded key tokens to controller intents and repaints after each one.
This loop is wiring only; navigation and search logic live in the
controller.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path

from .. import __version__
from ..input import drain_keys, read_key
from ..navigation.controller import AutoCommitHooks, NavigationController
from ..navigation.snapshot import Snapshot
from ..render import render_frame
from ..render.help import HELP_INFO_MESSAGE, max_help_scroll, render_help_page
from ..terminal import HEADER_ROWS, TerminalController, main_window_size, terminal_size

RESIZE_POLL_MS = 200
GREETING = f"lazycd {__version__} - Type something to search, press '?' to view help or Esc to exit."

_ENTER_KEYS = {"RIGHT", "ALT_l", "ALT_DOWN"}
_PARENT_KEYS = {"LEFT", "ALT_h", "ALT_UP"}
_HOME_DIR_KEYS = {"~", "CTRL_HOME", "CTRL_ALT_H"}
_ROOT_DIR_KEYS = {"/", "ALT_r"}


@dataclass(frozen=True)
class ExitOutcome:
    """How the session ended; ``path=None`` means exit without changing folder."""

    path: Path | None

    @property
    def change_directory(self) -> bool:
        return self.path is not None


def _mouse_position(key: str) -> tuple[int, int] | None:
    """Extract 1-based ``(col, row)`` from a ``MOUSE_*:col:row`` token."""
    try:
        _, col_s, row_s = key.split(":")
        return int(col_s), int(row_s)
    except ValueError:
        return None


def _is_search_char(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class BrowserSession:
    """Key dispatch and painting around one ``NavigationController``."""

    def __init__(
        self,
        controller: NavigationController,
        terminal: TerminalController | None,
        stdin_fd: int,
    ) -> None:
        self.controller = controller
        self.terminal = terminal
        self.stdin_fd = stdin_fd
        self.settings = controller.settings
        self.show_help = False
        self.help_scroll = 0
        controller.hooks = AutoCommitHooks(
            sleep=time.sleep,
            drain_input=lambda: drain_keys(self.stdin_fd),
            before_commit=self._paint_pending_commit,
        )

    # -- painting ----------------------------------------------------------

    def _screen_size(self) -> tuple[int, int]:
        if self.terminal is None:
            return 80, 24
        return terminal_size(self.terminal.output_fd)

    def paint(self, *, cursor_row_only: bool = False, snapshot: Snapshot | None = None) -> None:
        if self.terminal is None:
            return
        columns, lines = self._screen_size()
        frame = render_frame(
            snapshot or self.controller.snapshot(),
            columns,
            lines,
            cursor_row_only=cursor_row_only,
            show_listing=not self.show_help,
        )
        if self.show_help:
            frame += render_help_page(columns, max(0, lines - 3), self.help_scroll)
        self.terminal.write(frame)

    def _paint_pending_commit(self, snapshot: Snapshot) -> None:
        self.paint(cursor_row_only=True, snapshot=snapshot)

    def sync_viewport(self) -> bool:
        """Push the current terminal size into the controller if it changed."""
        if self.terminal is None:
            return False
        width, height = main_window_size(self.terminal.output_fd)
        cursor = self.controller.cursor
        if (width, max(1, height)) == (cursor.width, cursor.height):
            return False
        self.controller.update_viewport(width, height)
        return True

    # -- key dispatch ------------------------------------------------------

    def _exit(self) -> ExitOutcome:
        return ExitOutcome(self.controller.current_path)

    def _handle_help_key(self, key: str) -> None:
        if key in {"ESC", "q", "?", "CTRL_C"}:
            self.show_help = False
            self.controller.status_message = ""
            return
        columns, lines = self._screen_size()
        if key in {"DOWN", "j"}:
            self.help_scroll = min(self.help_scroll + 1, max_help_scroll(columns, lines - 3))
        elif key in {"UP", "k"}:
            self.help_scroll = max(0, self.help_scroll - 1)

    def _handle_mouse(self, key: str) -> None:
        position = _mouse_position(key)
        if position is None:
            return
        row = position[1] - 1 - HEADER_ROWS
        ctrl = self.controller
        if key.startswith(("MOUSE_LEFT_DOWN", "MOUSE_LEFT_DRAG")):
            ctrl.select_row(row)
        elif key.startswith("MOUSE_LEFT_UP"):
            ctrl.activate_row(row)
        elif key.startswith("MOUSE_RIGHT_UP"):
            ctrl.change_dir("..")
        elif key.startswith("MOUSE_WHEEL_UP"):
            ctrl.step(-1)
        elif key.startswith("MOUSE_WHEEL_DOWN"):
            ctrl.step(1)

    def handle_key(self, key: str) -> ExitOutcome | None:
        """Apply one key token; return an outcome when the session should end."""
        if self.show_help:
            self._handle_help_key(key)
            return None

        ctrl = self.controller
        searching = ctrl.is_searching()

        if key.startswith("MOUSE"):
            if self.settings.mouse_enabled:
                self._handle_mouse(key)
            return None

        if key in _ENTER_KEYS or (key == " " and not searching):
            ctrl.change_dir("")
        elif key == "ENTER":
            if self.settings.enter_is_cd_and_exit:
                ctrl.change_dir("")
                return self._exit()
            if self.settings.esc_is_cancel:
                return self._exit()
            ctrl.change_dir("")
        elif key in _PARENT_KEYS or (key == "-" and not searching):
            ctrl.change_dir("..")
        elif key in {"UP", "ALT_k"}:
            ctrl.step(-1)
        elif key in {"DOWN", "ALT_j"}:
            ctrl.step(1)
        elif key in {"PAGE_UP", "CTRL_U", "ALT_u"}:
            ctrl.page(-1)
        elif key in {"PAGE_DOWN", "CTRL_D", "ALT_d"}:
            ctrl.page(1)
        elif key in _HOME_DIR_KEYS:
            ctrl.go_home()
        elif key in _ROOT_DIR_KEYS:
            ctrl.go_root()
        elif key in {"HOME", "ALT_g"}:
            ctrl.home_end(end=False)
        elif key in {"END", "ALT_G"}:
            ctrl.home_end(end=True)
        elif key == "ESC":
            if searching:
                ctrl.clear_search()
            elif self.settings.esc_is_cancel:
                return ExitOutcome(None)
            else:
                return self._exit()
        elif key == "?":
            self.show_help = True
            self.help_scroll = 0
            ctrl.status_message = HELP_INFO_MESSAGE
        elif key == "CTRL_R":
            ctrl.refresh()
        elif key == "ALT_q":
            return self._exit()
        elif key == "CTRL_C":
            return ExitOutcome(None)
        elif key == "ALT_c":
            ctrl.cycle_case_mode()
        elif key == "CTRL_F":
            ctrl.cycle_gap_mode()
        elif key == "BACKSPACE":
            if searching:
                ctrl.erase_search_char()
            else:
                ctrl.change_dir("..")
        elif _is_search_char(key):
            ctrl.advance_search(key)
        return None

    def run(self) -> ExitOutcome:
        """Run the interactive loop until an exit key is pressed."""
        if self.terminal is None:
            raise RuntimeError("an interactive session needs a terminal")
        self.controller.status_message = GREETING
        with self.terminal.raw_mode():
            self.sync_viewport()
            self.paint()
            while True:
                key = read_key(self.stdin_fd, timeout_ms=RESIZE_POLL_MS)
                resized = self.sync_viewport()
                if not key:
                    if resized:
                        self.paint()
                    continue
                outcome = self.handle_key(key)
                if outcome is not None:
                    return outcome
                self.paint()


__all__ = ["BrowserSession", "ExitOutcome", "GREETING"]
