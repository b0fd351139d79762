"""Read-only view of the navigation state handed to the renderer."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ..file_model.types import Entry
from ..search.matching import Match, MatchRanges
from ..settings import CaseMode, GapMode


@dataclass(frozen=True)
class SnapshotRow:
    """One viewport row: the entry shown there and what to highlight."""

    row: int
    listing_index: int
    entry: Entry
    ranges: MatchRanges
    is_cursor: bool


@dataclass(frozen=True)
class Snapshot:
    current_path: Path
    header: str
    listing: tuple[Entry, ...]
    visible: tuple[int, ...]
    query: str
    matches: tuple[Match, ...]
    cursor_pos: int
    scroll_pos: int
    height: int
    status_message: str
    case_mode: CaseMode
    gap_mode: GapMode
    filter_search: bool

    @property
    def is_searching(self) -> bool:
        return bool(self.query)

    @property
    def total_count(self) -> int:
        return len(self.listing)

    @property
    def matching_count(self) -> int:
        return len(self.matches)

    @property
    def visible_count(self) -> int:
        return len(self.visible)

    @property
    def selected_position(self) -> int:
        return self.scroll_pos + self.cursor_pos

    @property
    def selected_entry(self) -> Entry | None:
        position = self.selected_position
        if not 0 <= position < len(self.visible):
            return None
        return self.listing[self.visible[position]]

    def match_position(self) -> int | None:
        """Position of the selected entry among the matches, if it is one."""
        position = self.selected_position
        if not 0 <= position < len(self.visible):
            return None
        listing_index = self.visible[position]
        for idx, match in enumerate(self.matches):
            if match.index == listing_index:
                return idx
        return None

    def rows(self) -> Iterator[SnapshotRow]:
        """Yield the rows currently inside the viewport."""
        ranges_by_index = {match.index: match.ranges for match in self.matches}
        for row in range(self.height):
            position = self.scroll_pos + row
            if position >= len(self.visible):
                return
            listing_index = self.visible[position]
            yield SnapshotRow(
                row=row,
                listing_index=listing_index,
                entry=self.listing[listing_index],
                ranges=ranges_by_index.get(listing_index, ()),
                is_cursor=row == self.cursor_pos,
            )


__all__ = ["Snapshot", "SnapshotRow"]
