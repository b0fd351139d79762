"""Help page content and rendering.

The help page replaces the listing rows; header, info and footer rows are
left to the regular frame renderer.
"""

from __future__ import annotations

from ..terminal import HEADER_ROWS
from .ansi import clip_right

_KEY = "\033[38;5;229m"
_SECTION = "\033[1;38;5;81m"
_RESET = "\033[0m"


def _line(keys: str, text: str) -> tuple[str, str]:
    return keys, text


HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Navigation",
        (
            _line("Right / Enter / Alt+L / Alt+Down", "enter the folder under the cursor"),
            _line("Space", "enter the folder (when not searching)"),
            _line("Left / Backspace / - / Alt+H / Alt+Up", "go to the parent folder"),
            _line("Up / Down / Alt+K / Alt+J", "move the cursor (between matches while searching)"),
            _line("PageUp / PageDown / Ctrl+U / Ctrl+D", "move one page"),
            _line("Home / End / Alt+G / Alt+Shift+G", "first / last item"),
            _line("~ / Ctrl+Home / Ctrl+Alt+H", "go to the home folder"),
            _line("/ / Alt+R", "go to the root folder"),
            _line("Ctrl+R", "refresh the listing"),
        ),
    ),
    (
        "Search",
        (
            _line("any character", "extend the search query"),
            _line("Backspace", "erase the last query character"),
            _line("Esc", "clear the search"),
            _line("Alt+C", "cycle case sensitivity: ignore / sensitive / smart"),
            _line("Ctrl+F", "cycle gap search: from start / normal / anywhere"),
        ),
    ),
    (
        "Exit",
        (
            _line("Esc / Alt+Q", "exit and change to the current folder"),
            _line("Ctrl+C", "exit without changing folder"),
            _line("?", "show this help"),
        ),
    ),
    (
        "Mouse (--mouse on)",
        (
            _line("left click", "select / enter an item"),
            _line("right click", "go to the parent folder"),
            _line("wheel", "move the cursor"),
        ),
    ),
)

HELP_INFO_MESSAGE = "Use Down/Up or j/k to scroll. Press Esc, 'q', '?' or Ctrl+C to exit help."


def help_lines(width: int) -> list[str]:
    """Return the styled help lines for a page ``width`` columns wide."""
    key_cols = max(len(keys) for _, section in HELP_SECTIONS for keys, _ in section)
    key_cols = min(key_cols, max(8, width // 2))
    out: list[str] = []
    for title, section in HELP_SECTIONS:
        if out:
            out.append("")
        out.append(f"{_SECTION}{clip_right(title, width)}{_RESET}")
        for keys, text in section:
            padded = clip_right(keys, key_cols).ljust(key_cols)
            description = clip_right(text, max(0, width - key_cols - 2))
            out.append(f"{_KEY}{padded}{_RESET}  {description}")
    return out


def max_help_scroll(width: int, height: int) -> int:
    return max(0, len(help_lines(width)) - max(1, height))


def render_help_page(width: int, height: int, scroll: int) -> str:
    """Render ``height`` rows of help starting at line ``scroll``."""
    lines = help_lines(width)
    out: list[str] = []
    for row in range(max(0, height)):
        idx = scroll + row
        text = lines[idx] if 0 <= idx < len(lines) else ""
        out.append(f"\033[{HEADER_ROWS + row + 1};1H{_RESET}{text}{_RESET}\033[K")
    return "".join(out)


__all__ = ["HELP_INFO_MESSAGE", "HELP_SECTIONS", "help_lines", "max_help_scroll", "render_help_page"]
