"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and mouse toggles.
The UI is drawn on the output descriptor (stderr by default) so stdout stays
free for the final directory path.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from .errors import TerminalSizeError

HEADER_ROWS = 1
INFO_ROWS = 1
FOOTER_ROWS = 1
CHROME_ROWS = HEADER_ROWS + INFO_ROWS + FOOTER_ROWS


def terminal_size(fd: int) -> tuple[int, int]:
    """Return ``(columns, lines)`` of the terminal attached to ``fd``."""
    try:
        size = os.get_terminal_size(fd)
    except OSError as exc:
        raise TerminalSizeError(f"cannot determine terminal size: {exc}") from exc
    return size.columns, size.lines


def main_window_size(fd: int) -> tuple[int, int]:
    """Return the ``(width, height)`` available for listing rows."""
    columns, lines = terminal_size(fd)
    return columns, max(0, lines - CHROME_ROWS)


class TerminalController:
    def __init__(self, stdin_fd: int, output_fd: int, mouse_enabled: bool = False) -> None:
        self.stdin_fd = stdin_fd
        self.output_fd = output_fd
        self.mouse_enabled = mouse_enabled
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def write(self, text: str) -> None:
        os.write(self.output_fd, text.encode("utf-8", errors="replace"))

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        sequence = "\x1b[?1049h\x1b[?25l"
        if self.mouse_enabled:
            sequence += "\x1b[?1000h\x1b[?1002h\x1b[?1006h"
        self.write(sequence)

    def disable_tui_mode(self) -> None:
        sequence = ""
        if self.mouse_enabled:
            sequence += "\x1b[?1000l\x1b[?1002l\x1b[?1006l"
        # Show cursor and restore the main screen buffer.
        sequence += "\x1b[?25h\x1b[?1049l"
        self.write(sequence)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = [
    "CHROME_ROWS",
    "FOOTER_ROWS",
    "HEADER_ROWS",
    "INFO_ROWS",
    "TerminalController",
    "main_window_size",
    "terminal_size",
]
