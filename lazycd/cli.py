"""Command-line front door for lazycd.

Parses CLI options into ``Settings``, builds the navigation controller for
the start directory, and runs the interactive browser on the terminal. The
final directory is printed on stdout so a shell function can ``cd`` to it.
"""

from __future__ import annotations

import argparse
import logging
import sys
import termios
from pathlib import Path

from . import __version__
from .errors import HistoryWriteError, ListingError, TerminalSizeError
from .navigation.controller import NavigationController
from .navigation.history import DEFAULT_HISTORY_PATH
from .runtime.loop import BrowserSession
from .settings import DEFAULT_AUTOCD_TIMEOUT_MS, CaseMode, GapMode, Settings
from .terminal import TerminalController, main_window_size

logger = logging.getLogger(__name__)

EXIT_CANCELLED = 1
EXIT_FATAL = 2
CANCEL_MESSAGE = "lazycd: Exited without changing folder"


def _autocd_timeout(value: str) -> int | None:
    """argparse type for ``--autocd-timeout``: milliseconds or ``off``."""
    if value == "off":
        return None
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid value for 'autocd-timeout': {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0 or 'off'")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazycd",
        description="Browse folders interactively and print the one you end up in.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Start folder. Defaults to current directory.")
    parser.add_argument("--version", action="version", version=f"lazycd {__version__}")
    parser.add_argument("--folders-only", action="store_true", help="Show only folders in the listing.")
    parser.add_argument(
        "--filter-search",
        action="store_true",
        help="Show only items matching the search instead of highlighting them.",
    )

    case_group = parser.add_argument_group("case sensitivity (last one wins)")
    case_group.add_argument("--case-sensitive", dest="case_mode", action="store_const", const=CaseMode.CASE_SENSITIVE)
    case_group.add_argument("--ignore-case", dest="case_mode", action="store_const", const=CaseMode.IGNORE_CASE)
    case_group.add_argument(
        "--smart-case",
        dest="case_mode",
        action="store_const",
        const=CaseMode.SMART_CASE,
        help="Case-sensitive only when the query has an uppercase letter (default).",
    )

    gap_group = parser.add_argument_group("gap search (last one wins)")
    gap_group.add_argument(
        "--gap-search",
        dest="gap_mode",
        action="store_const",
        const=GapMode.GAP_SEARCH_FROM_START,
        help="Allow gaps between matched characters, first one anchored at the start (default).",
    )
    gap_group.add_argument(
        "--gap-search-anywhere",
        dest="gap_mode",
        action="store_const",
        const=GapMode.GAP_SEARCH_ANYWHERE,
        help="Allow gaps and match anywhere in the name.",
    )
    gap_group.add_argument(
        "--no-gap-search",
        dest="gap_mode",
        action="store_const",
        const=GapMode.NO_GAP_SEARCH,
        help="Match names that start with the query.",
    )
    parser.set_defaults(case_mode=CaseMode.SMART_CASE, gap_mode=GapMode.GAP_SEARCH_FROM_START)

    parser.add_argument(
        "--autocd-timeout",
        type=_autocd_timeout,
        default=DEFAULT_AUTOCD_TIMEOUT_MS,
        metavar="MS|off",
        help=f"Enter the only match after this many milliseconds (default: {DEFAULT_AUTOCD_TIMEOUT_MS}).",
    )
    parser.add_argument(
        "--history-file",
        default=None,
        metavar="PATH",
        help=f"Cursor history file (default: {DEFAULT_HISTORY_PATH}); empty string disables history.",
    )
    parser.add_argument("--mouse", choices=("on", "off"), default="off", help="Enable mouse support.")
    parser.add_argument(
        "--enter-is-cd-and-exit",
        action="store_true",
        help="Enter changes into the folder under the cursor and exits.",
    )
    parser.add_argument(
        "--esc-is-cancel",
        action="store_true",
        help="Esc exits without changing folder.",
    )
    parser.add_argument("--log-file", default=None, metavar="PATH", help="Write debug logging to PATH.")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    if args.history_file is None:
        history_file: Path | None = DEFAULT_HISTORY_PATH
    elif args.history_file == "":
        history_file = None
    else:
        history_file = Path(args.history_file).expanduser()

    return Settings(
        folders_only=args.folders_only,
        filter_search=args.filter_search,
        case_mode=args.case_mode,
        gap_mode=args.gap_mode,
        autocd_timeout_ms=args.autocd_timeout,
        history_file=history_file,
        mouse_enabled=args.mouse == "on",
        enter_is_cd_and_exit=args.enter_is_cd_and_exit,
        esc_is_cancel=args.esc_is_cancel,
    )


def configure_logging(log_file: str | None) -> None:
    """Route package logging to ``log_file``; the terminal itself stays quiet."""
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run the browser and print the final folder.

    Exits with ``EXIT_CANCELLED`` when the user leaves without changing folder
    and with ``EXIT_FATAL`` when the session cannot start.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    settings = settings_from_args(args)
    start_path = Path(args.path) if args.path else Path.cwd()

    stdin_fd = sys.stdin.fileno()
    output_fd = sys.stderr.fileno()
    try:
        width, height = main_window_size(output_fd)
        controller = NavigationController(settings, start_path, width, height)
        terminal = TerminalController(stdin_fd, output_fd, mouse_enabled=settings.mouse_enabled)
    except (TerminalSizeError, ListingError, termios.error) as exc:
        logger.error("cannot start: %s", exc)
        print(f"lazycd: {exc}", file=sys.stderr)
        raise SystemExit(EXIT_FATAL) from exc

    outcome = BrowserSession(controller, terminal, stdin_fd).run()

    try:
        controller.on_exit()
    except HistoryWriteError as exc:
        logger.warning("%s", exc)
        print(f"lazycd: {exc}", file=sys.stderr)

    if not outcome.change_directory:
        print(CANCEL_MESSAGE, file=sys.stderr)
        raise SystemExit(EXIT_CANCELLED)
    print(outcome.path)


if __name__ == "__main__":
    main()
