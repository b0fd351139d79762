"""Terminal cell-width helpers for plain (unstyled) text."""

from __future__ import annotations

import unicodedata


def cell_width(ch: str) -> int:
    """Number of terminal columns occupied by ``ch``.

    Combining marks take no column, East Asian wide and fullwidth characters
    take two, control characters are drawn as a single replacement cell.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def text_width(text: str) -> int:
    return sum(cell_width(ch) for ch in text)


def printable(ch: str) -> str:
    """Replace control characters so they cannot corrupt the screen."""
    if ch == "\x7f" or ord(ch) < 0x20:
        return "?"
    return ch


def clip_left(text: str, max_cols: int) -> str:
    """Keep the rightmost part of ``text`` that fits into ``max_cols``."""
    if max_cols <= 0:
        return ""
    kept: list[str] = []
    used = 0
    for ch in reversed(text):
        width = cell_width(ch)
        if used + width > max_cols:
            break
        kept.append(ch)
        used += width
    return "".join(reversed(kept))


def clip_right(text: str, max_cols: int) -> str:
    """Keep the leftmost part of ``text`` that fits into ``max_cols``."""
    if max_cols <= 0:
        return ""
    kept: list[str] = []
    used = 0
    for ch in text:
        width = cell_width(ch)
        if used + width > max_cols:
            break
        kept.append(ch)
        used += width
    return "".join(kept)


__all__ = ["cell_width", "clip_left", "clip_right", "printable", "text_width"]
