"""Incremental name matching for the directory search.

Matches are reported in listing order together with the offsets of the
matched characters, so the renderer can underline them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..file_model.types import Entry
from ..settings import CaseMode, GapMode

MatchRanges = tuple[tuple[int, int], ...]


@dataclass(frozen=True)
class Match:
    """One matching listing entry and its matched ``[start, end)`` ranges."""

    index: int
    ranges: MatchRanges


def is_case_sensitive(query: str, case_mode: CaseMode) -> bool:
    """Resolve the effective case rule for ``query`` under ``case_mode``."""
    if case_mode is CaseMode.CASE_SENSITIVE:
        return True
    if case_mode is CaseMode.IGNORE_CASE:
        return False
    return any(ch.isupper() for ch in query)


def _chars_equal(a: str, b: str, case_sensitive: bool) -> bool:
    if a == b:
        return True
    return not case_sensitive and a.casefold() == b.casefold()


def _merge_positions(positions: Sequence[int]) -> MatchRanges:
    """Collapse sorted character positions into contiguous ranges."""
    ranges: list[tuple[int, int]] = []
    for pos in positions:
        if ranges and ranges[-1][1] == pos:
            ranges[-1] = (ranges[-1][0], pos + 1)
        else:
            ranges.append((pos, pos + 1))
    return tuple(ranges)


def _subsequence_positions(
    query: str,
    name: str,
    start: int,
    case_sensitive: bool,
) -> list[int] | None:
    """Greedy leftmost subsequence assignment of ``query`` in ``name[start:]``."""
    positions: list[int] = []
    idx = start
    for needle in query:
        while idx < len(name) and not _chars_equal(needle, name[idx], case_sensitive):
            idx += 1
        if idx >= len(name):
            return None
        positions.append(idx)
        idx += 1
    return positions


def match_name(
    query: str,
    name: str,
    case_mode: CaseMode,
    gap_mode: GapMode,
) -> MatchRanges | None:
    """Return matched ranges of ``query`` in ``name`` or ``None`` on no match.

    ``NO_GAP_SEARCH`` and ``GAP_SEARCH_FROM_START`` are anchored at the first
    character of the name; ``GAP_SEARCH_ANYWHERE`` is not anchored.
    """
    if not query:
        return None
    if len(query) > len(name):
        return None
    case_sensitive = is_case_sensitive(query, case_mode)

    if gap_mode is GapMode.NO_GAP_SEARCH:
        for offset, needle in enumerate(query):
            if not _chars_equal(needle, name[offset], case_sensitive):
                return None
        return ((0, len(query)),)

    if gap_mode is GapMode.GAP_SEARCH_FROM_START:
        if not _chars_equal(query[0], name[0], case_sensitive):
            return None
        rest = _subsequence_positions(query[1:], name, 1, case_sensitive)
        if rest is None:
            return None
        return _merge_positions([0, *rest])

    positions = _subsequence_positions(query, name, 0, case_sensitive)
    if positions is None:
        return None
    return _merge_positions(positions)


def compute_matches(
    listing: Sequence[Entry],
    query: str,
    case_mode: CaseMode,
    gap_mode: GapMode,
) -> tuple[Match, ...]:
    """Match ``query`` against every entry name, keeping listing order."""
    if not query:
        return ()
    matches: list[Match] = []
    for idx, entry in enumerate(listing):
        ranges = match_name(query, entry.name, case_mode, gap_mode)
        if ranges is not None:
            matches.append(Match(index=idx, ranges=ranges))
    return tuple(matches)


__all__ = [
    "Match",
    "MatchRanges",
    "compute_matches",
    "is_case_sensitive",
    "match_name",
]
