"""Tests for frame, row and footer rendering."""

from __future__ import annotations

import re
import unittest
from pathlib import Path

from lazycd.file_model.types import Entry
from lazycd.navigation.snapshot import Snapshot, SnapshotRow
from lazycd.render import CURSOR_STYLE, MATCH_STYLE, footer_text, render_frame, render_listing_row
from lazycd.render.ansi import clip_left, clip_right, printable, text_width
from lazycd.render.help import HELP_SECTIONS, help_lines, max_help_scroll, render_help_page
from lazycd.search.matching import Match
from lazycd.settings import CaseMode, GapMode

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def _strip(text: str) -> str:
    return ANSI_RE.sub("", text)


def _snapshot(**overrides) -> Snapshot:
    listing = (Entry("alpha", is_dir=True), Entry("beta", is_dir=True), Entry("notes.txt"))
    values = dict(
        current_path=Path("/work"),
        header="/work",
        listing=listing,
        visible=(0, 1, 2),
        query="",
        matches=(),
        cursor_pos=1,
        scroll_pos=0,
        height=5,
        status_message="",
        case_mode=CaseMode.SMART_CASE,
        gap_mode=GapMode.GAP_SEARCH_FROM_START,
        filter_search=False,
    )
    values.update(overrides)
    return Snapshot(**values)


class AnsiHelperTests(unittest.TestCase):
    def test_wide_characters_take_two_columns(self) -> None:
        self.assertEqual(text_width("ab"), 2)
        self.assertEqual(text_width("日本"), 4)
        self.assertEqual(clip_right("日本語", 5), "日本")

    def test_clip_left_keeps_the_tail(self) -> None:
        self.assertEqual(clip_left("/home/user/projects", 8), "projects")
        self.assertEqual(clip_left("abc", 0), "")

    def test_control_characters_are_replaced(self) -> None:
        self.assertEqual(printable("\x1b"), "?")
        self.assertEqual(printable("x"), "x")


class ListingRowTests(unittest.TestCase):
    def test_matched_characters_are_styled(self) -> None:
        item = SnapshotRow(row=0, listing_index=0, entry=Entry("alpha", is_dir=True), ranges=((0, 2),), is_cursor=False)

        rendered = render_listing_row(item, 20, highlight=False)

        self.assertEqual(_strip(rendered), "alpha")
        self.assertEqual(rendered.count(MATCH_STYLE), 2)

    def test_cursor_row_is_padded_to_width(self) -> None:
        item = SnapshotRow(row=0, listing_index=0, entry=Entry("beta", is_dir=True), ranges=(), is_cursor=True)

        rendered = render_listing_row(item, 10, highlight=True)

        self.assertIn(CURSOR_STYLE, rendered)
        self.assertEqual(_strip(rendered), "beta      ")

    def test_symlink_shows_target_and_is_clipped(self) -> None:
        entry = Entry("link", is_dir=True, symlink_target=Path("/very/long/target"))
        item = SnapshotRow(row=0, listing_index=0, entry=entry, ranges=(), is_cursor=False)

        self.assertEqual(_strip(render_listing_row(item, 40, highlight=False)), "link -> /very/long/target")
        self.assertEqual(_strip(render_listing_row(item, 10, highlight=False)), "link -> /v")


class FooterTests(unittest.TestCase):
    def test_browsing_footer_shows_position(self) -> None:
        left, right = footer_text(_snapshot())

        self.assertEqual(left, "search: ")
        self.assertEqual(right, "gap search from start - smart case - 2 / 3")

    def test_searching_footer_shows_match_counters(self) -> None:
        snap = _snapshot(
            query="a",
            matches=(Match(0, ((0, 1),)), Match(1, ((4, 5),))),
            cursor_pos=1,
            filter_search=True,
        )

        left, right = footer_text(snap)

        self.assertEqual(left, "filter: a")
        self.assertTrue(right.endswith("2 / 2 / 3"))

    def test_empty_listing_counts_zero(self) -> None:
        _, right = footer_text(_snapshot(listing=(), visible=(), cursor_pos=0))

        self.assertTrue(right.endswith("0 / 0"))


class FrameTests(unittest.TestCase):
    def test_frame_contains_header_rows_status_and_footer(self) -> None:
        frame = _strip(render_frame(_snapshot(status_message="No matches"), 60, 8))

        for text in ("/work", "alpha", "beta", "notes.txt", "No matches", "search:", "2 / 3"):
            self.assertIn(text, frame)

    def test_cursor_row_only_hides_other_rows(self) -> None:
        frame = _strip(render_frame(_snapshot(), 60, 8, cursor_row_only=True))

        self.assertIn("beta", frame)
        self.assertNotIn("alpha", frame)
        self.assertNotIn("notes.txt", frame)

    def test_long_header_keeps_the_end_of_the_path(self) -> None:
        snap = _snapshot(header="/a/very/long/path/name")

        frame = _strip(render_frame(snap, 10, 6))

        self.assertIn("/path/name", frame)
        self.assertNotIn("/a/very", frame)


class HelpTests(unittest.TestCase):
    def test_help_lists_every_section(self) -> None:
        text = _strip("\n".join(help_lines(80)))

        for title, _ in HELP_SECTIONS:
            self.assertIn(title, text)

    def test_help_page_scrolls(self) -> None:
        total = len(help_lines(80))
        self.assertEqual(max_help_scroll(80, 5), total - 5)
        self.assertEqual(max_help_scroll(80, total + 10), 0)

        first = _strip(render_help_page(80, 3, 0))
        self.assertIn("Navigation", first)
        scrolled = _strip(render_help_page(80, 3, 1))
        self.assertNotIn("Navigation", scrolled)


if __name__ == "__main__":
    unittest.main()
