"""Search package exports."""

from __future__ import annotations

from .matching import Match, MatchRanges, compute_matches, is_case_sensitive, match_name

__all__ = [
    "Match",
    "MatchRanges",
    "compute_matches",
    "is_case_sensitive",
    "match_name",
]
