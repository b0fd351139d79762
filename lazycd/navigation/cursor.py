"""Cursor row and scroll offset over the visible items of a listing."""

from __future__ import annotations

from collections.abc import Sequence


class CursorScroll:
    """Viewport model for a list of ``count`` visible items.

    ``scroll_pos`` is the first visible position and ``cursor_pos`` the row
    of the cursor inside the viewport, so ``scroll_pos + cursor_pos`` is the
    selected position. With no items both are ``0``.
    """

    def __init__(self, width: int, height: int, count: int = 0) -> None:
        self.width = max(0, width)
        self.height = max(1, height)
        self.count = max(0, count)
        self.cursor_pos = 0
        self.scroll_pos = 0

    @property
    def index(self) -> int:
        """Selected position within the visible items."""
        return self.scroll_pos + self.cursor_pos

    def _max_scroll(self) -> int:
        return max(0, self.count - self.height)

    def _clamp(self, index: int) -> int:
        if self.count <= 0:
            return 0
        return max(0, min(self.count - 1, index))

    def move_to(self, index: int) -> None:
        """Select ``index`` (clamped), scrolling as little as possible."""
        target = self._clamp(index)
        scroll = min(self.scroll_pos, self._max_scroll())
        if target < scroll:
            scroll = target
        elif target >= scroll + self.height:
            scroll = target - self.height + 1
        self.scroll_pos = scroll
        self.cursor_pos = target - scroll

    def move(self, delta: int, wrap: bool) -> None:
        """Shift the selection by ``delta``, wrapping or clamping at the ends."""
        if self.count <= 0:
            self.move_to(0)
            return
        target = self.index + delta
        if wrap:
            target %= self.count
        self.move_to(target)

    def move_to_adjacent_match(self, direction: int, positions: Sequence[int]) -> None:
        """Jump to the next/previous entry of ``positions``, wrapping around.

        ``positions`` are sorted visible positions. ``direction`` 0 keeps the
        current position when it is a match and otherwise picks the first match
        after it.
        """
        if not positions:
            return
        current = self.index
        if direction < 0:
            before = [pos for pos in positions if pos < current]
            self.move_to(before[-1] if before else positions[-1])
            return
        if direction == 0:
            after = [pos for pos in positions if pos >= current]
        else:
            after = [pos for pos in positions if pos > current]
        self.move_to(after[0] if after else positions[0])

    def update_viewport(self, width: int, height: int) -> None:
        """Resize the viewport while keeping the selected position visible."""
        selected = self.index
        self.width = max(0, width)
        self.height = max(1, height)
        self.scroll_pos = min(self.scroll_pos, self._max_scroll())
        self.move_to(selected)

    def set_count(self, count: int) -> None:
        """Change the number of visible items, clamping the selection."""
        selected = self.index
        self.count = max(0, count)
        self.move_to(selected)

    def reset(self, count: int, index: int = 0) -> None:
        """Start over for a new list of ``count`` items selecting ``index``."""
        self.count = max(0, count)
        self.scroll_pos = 0
        self.cursor_pos = 0
        self.move_to(index)


__all__ = ["CursorScroll"]
