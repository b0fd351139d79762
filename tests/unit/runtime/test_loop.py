"""Tests for key dispatch in the browser session, without a terminal."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazycd.navigation.controller import NavigationController
from lazycd.navigation.history import HistoryStore
from lazycd.render.help import HELP_INFO_MESSAGE
from lazycd.runtime.loop import BrowserSession, ExitOutcome
from lazycd.settings import Settings


class BrowserSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        for name in ("alpha", "beta", "gamma"):
            (self.root / name).mkdir()
        (self.root / "alpha" / "inner").mkdir()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def session(self, **settings) -> BrowserSession:
        settings.setdefault("autocd_timeout_ms", None)
        controller = NavigationController(
            Settings(**settings),
            self.root,
            80,
            10,
            history=HistoryStore(None),
        )
        return BrowserSession(controller, None, stdin_fd=0)

    def test_enter_and_parent_keys(self) -> None:
        session = self.session()

        self.assertIsNone(session.handle_key("RIGHT"))
        self.assertEqual(session.controller.current_path, self.root / "alpha")

        session.handle_key("LEFT")
        self.assertEqual(session.controller.current_path, self.root)
        self.assertEqual(session.controller.selected_entry().name, "alpha")

        session.handle_key("DOWN")
        session.handle_key(" ")
        self.assertEqual(session.controller.current_path, self.root / "beta")

        session.handle_key("BACKSPACE")
        self.assertEqual(session.controller.current_path, self.root)

    def test_typing_searches_and_escape_clears(self) -> None:
        session = self.session()

        session.handle_key("g")
        self.assertEqual(session.controller.search.query, "g")
        self.assertEqual(session.controller.selected_entry().name, "gamma")

        self.assertIsNone(session.handle_key("ESC"))
        self.assertFalse(session.controller.is_searching())

    def test_escape_exits_in_current_folder(self) -> None:
        session = self.session()

        outcome = session.handle_key("ESC")

        self.assertEqual(outcome, ExitOutcome(self.root))
        self.assertTrue(outcome.change_directory)

    def test_escape_cancels_when_configured(self) -> None:
        outcome = self.session(esc_is_cancel=True).handle_key("ESC")

        self.assertEqual(outcome, ExitOutcome(None))
        self.assertFalse(outcome.change_directory)

    def test_ctrl_c_cancels(self) -> None:
        self.assertEqual(self.session().handle_key("CTRL_C"), ExitOutcome(None))

    def test_enter_is_cd_and_exit(self) -> None:
        outcome = self.session(enter_is_cd_and_exit=True).handle_key("ENTER")

        self.assertEqual(outcome, ExitOutcome(self.root / "alpha"))

    def test_enter_exits_when_esc_is_cancel(self) -> None:
        outcome = self.session(esc_is_cancel=True).handle_key("ENTER")

        self.assertEqual(outcome, ExitOutcome(self.root))

    def test_mode_keys_cycle_search_modes(self) -> None:
        session = self.session()
        case_mode = session.controller.case_mode
        gap_mode = session.controller.gap_mode

        session.handle_key("ALT_c")
        session.handle_key("CTRL_F")

        self.assertIs(session.controller.case_mode, case_mode.next())
        self.assertIs(session.controller.gap_mode, gap_mode.next())

    def test_help_view_captures_keys_until_closed(self) -> None:
        session = self.session()

        session.handle_key("?")
        self.assertTrue(session.show_help)
        self.assertEqual(session.controller.status_message, HELP_INFO_MESSAGE)

        session.handle_key("j")
        self.assertEqual(session.help_scroll, 1)
        self.assertEqual(session.controller.search.query, "")

        session.handle_key("q")
        self.assertFalse(session.show_help)

    def test_mouse_ignored_unless_enabled(self) -> None:
        session = self.session()
        session.handle_key("MOUSE_LEFT_UP:3:3")
        self.assertEqual(session.controller.current_path, self.root)

        session = self.session(mouse_enabled=True)
        session.handle_key("MOUSE_LEFT_DOWN:3:3")
        self.assertEqual(session.controller.selected_entry().name, "beta")
        session.handle_key("MOUSE_LEFT_UP:3:3")
        self.assertEqual(session.controller.current_path, self.root / "beta")
        session.handle_key("MOUSE_RIGHT_UP:1:1")
        self.assertEqual(session.controller.current_path, self.root)

    def test_home_and_root_keys(self) -> None:
        session = self.session()

        with mock.patch.object(Path, "home", return_value=self.root / "gamma"):
            session.handle_key("~")
        self.assertEqual(session.controller.current_path, self.root / "gamma")

        session.handle_key("/")
        self.assertEqual(session.controller.current_path, Path(self.root.anchor))

    def test_run_requires_a_terminal(self) -> None:
        with self.assertRaises(RuntimeError):
            self.session().run()


if __name__ == "__main__":
    unittest.main()
