"""Interactive runtime: key dispatch loop around the navigation controller."""

from __future__ import annotations

from .loop import BrowserSession, ExitOutcome

__all__ = ["BrowserSession", "ExitOutcome"]
