"""Frame rendering for the directory browser.

Turns a ``Snapshot`` into one ANSI string covering the whole screen: header
with the current path, the listing rows, the info/status row and the footer
with the query and counters. Rendering is presentation-only.
"""

from __future__ import annotations

from ..navigation.snapshot import Snapshot, SnapshotRow
from ..terminal import HEADER_ROWS
from .ansi import clip_left, clip_right, printable, text_width
from .help import render_help_page

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
UNDERLINE_HEADER = "\033[1;4m"
CURSOR_STYLE = "\033[30;47m"
MATCH_STYLE = "\033[4;48;5;240m"
SYMLINK_STYLE = "\033[36m"
CLEAR_TO_EOL = "\033[K"


def _move(row: int) -> str:
    """Cursor movement to the start of 0-based screen ``row``."""
    return f"\033[{row + 1};1H"


def _matched_offsets(ranges: tuple[tuple[int, int], ...]) -> set[int]:
    return {offset for start, end in ranges for offset in range(start, end)}


def render_listing_row(item: SnapshotRow, width: int, highlight: bool) -> str:
    """Render one listing row, underlining matched characters."""
    entry = item.entry
    base = BOLD if entry.is_dir else DIM
    plain_style = CURSOR_STYLE if highlight else (SYMLINK_STYLE if entry.is_symlink else "")
    matched = _matched_offsets(item.ranges)

    out: list[str] = [RESET, base]
    used = 0
    for offset, ch in enumerate(entry.name):
        ch = printable(ch)
        ch_width = text_width(ch)
        if used + ch_width > width:
            break
        style = MATCH_STYLE if offset in matched else plain_style
        out.append(f"{RESET}{base}{style}{ch}")
        used += ch_width

    if entry.symlink_target is not None and used < width:
        suffix = clip_right(f" -> {entry.symlink_target}", width - used)
        out.append(f"{RESET}{base}{plain_style}{suffix}")
        used += text_width(suffix)

    if highlight and used < width:
        out.append(f"{RESET}{CURSOR_STYLE}{' ' * (width - used)}")
    out.append(RESET)
    return "".join(out)


def footer_text(snapshot: Snapshot) -> tuple[str, str]:
    """Return the left (query) and right (modes and counters) footer parts."""
    label = "filter" if snapshot.filter_search else "search"
    left = f"{label}: {snapshot.query}"
    modes = f"{snapshot.gap_mode.label} - {snapshot.case_mode.label} - "
    if snapshot.is_searching:
        match_position = snapshot.match_position()
        current = (match_position or 0) + 1
        counters = f"{current} / {snapshot.matching_count} / {snapshot.total_count}"
    else:
        current = min(snapshot.selected_position + 1, snapshot.visible_count)
        counters = f"{current} / {snapshot.visible_count}"
    return left, modes + counters


def render_frame(
    snapshot: Snapshot,
    columns: int,
    lines: int,
    *,
    cursor_row_only: bool = False,
    show_listing: bool = True,
) -> str:
    """Render the full browser screen for ``snapshot``.

    ``cursor_row_only`` blanks every listing row except the cursor row, which
    is how a pending auto-commit is shown. With ``show_listing=False`` the
    listing area is left untouched for the help page.
    """
    out: list[str] = ["\033[H"]

    out.append(_move(0) + RESET + UNDERLINE_HEADER + clip_left(snapshot.header, columns) + RESET + CLEAR_TO_EOL)

    rows = {item.row: item for item in snapshot.rows()} if show_listing else {}
    if cursor_row_only:
        rows = {row: item for row, item in rows.items() if item.is_cursor}
    highlight_cursor = snapshot.visible_count > 0
    main_height = max(0, lines - 3)
    for row in range(main_height if show_listing else 0):
        out.append(_move(HEADER_ROWS + row))
        item = rows.get(row)
        if item is not None:
            out.append(render_listing_row(item, columns, highlight_cursor and item.is_cursor))
        out.append(CLEAR_TO_EOL)

    if lines >= 2:
        out.append(_move(lines - 2) + RESET + BOLD + clip_right(snapshot.status_message, columns) + RESET + CLEAR_TO_EOL)

    if lines >= 1:
        left, right = footer_text(snapshot)
        right = clip_right(right, columns)
        # The query wins over the counters when space runs out.
        left = clip_right(left, columns)
        gap = columns - text_width(left) - text_width(right)
        footer = left + " " * gap + right if gap > 0 else left
        out.append(_move(lines - 1) + RESET + BOLD + footer + RESET + CLEAR_TO_EOL)

    return "".join(out)


__all__ = ["footer_text", "render_frame", "render_help_page", "render_listing_row"]
