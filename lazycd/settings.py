"""Session settings and the search-mode enums.

Settings are produced once by the CLI and never mutated afterwards. The
controller copies the two search modes into its own state so they can be
cycled at runtime without touching the settings object.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

DEFAULT_AUTOCD_TIMEOUT_MS = 200


class CaseMode(Enum):
    IGNORE_CASE = "ignore case"
    CASE_SENSITIVE = "case sensitive"
    SMART_CASE = "smart case"

    @property
    def label(self) -> str:
        return self.value

    def next(self) -> CaseMode:
        """Return the mode that follows this one when cycling."""
        return _CASE_MODE_CYCLE[self]


_CASE_MODE_CYCLE = {
    CaseMode.IGNORE_CASE: CaseMode.CASE_SENSITIVE,
    CaseMode.CASE_SENSITIVE: CaseMode.SMART_CASE,
    CaseMode.SMART_CASE: CaseMode.IGNORE_CASE,
}


class GapMode(Enum):
    GAP_SEARCH_FROM_START = "gap search from start"
    NO_GAP_SEARCH = "normal search"
    GAP_SEARCH_ANYWHERE = "gap search anywhere"

    @property
    def label(self) -> str:
        return self.value

    def next(self) -> GapMode:
        """Return the mode that follows this one when cycling."""
        return _GAP_MODE_CYCLE[self]


_GAP_MODE_CYCLE = {
    GapMode.GAP_SEARCH_FROM_START: GapMode.NO_GAP_SEARCH,
    GapMode.NO_GAP_SEARCH: GapMode.GAP_SEARCH_ANYWHERE,
    GapMode.GAP_SEARCH_ANYWHERE: GapMode.GAP_SEARCH_FROM_START,
}


@dataclass(frozen=True)
class Settings:
    """Read-only configuration for one browsing session."""

    folders_only: bool = False
    filter_search: bool = False
    case_mode: CaseMode = CaseMode.SMART_CASE
    gap_mode: GapMode = GapMode.GAP_SEARCH_FROM_START
    autocd_timeout_ms: int | None = DEFAULT_AUTOCD_TIMEOUT_MS
    history_file: Path | None = None
    mouse_enabled: bool = False
    enter_is_cd_and_exit: bool = False
    esc_is_cancel: bool = False


__all__ = ["CaseMode", "GapMode", "Settings", "DEFAULT_AUTOCD_TIMEOUT_MS"]
