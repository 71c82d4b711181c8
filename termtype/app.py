"""Application entry point and setup for the termtype typing test."""

from __future__ import annotations

import argparse
import curses
import dataclasses
import logging
import os
import signal
import sys
import threading
from pathlib import Path
from typing import List, Optional

from termtype.core.languages import LanguageRepository
from termtype.core.results import ResultStore, data_dir
from termtype.core.session import TypingSession
from termtype.core.settings import Settings, SettingsStore
from termtype.core.spec import Difficulty, LayoutStyle, Mode, TestSpec
from termtype.ui.terminal import CursesTerminal

logger = logging.getLogger(__name__)

# Milliseconds curses waits after Esc for the rest of an escape sequence.
ESC_DELAY_MS = 25


def configure_logging(log_file: Optional[Path] = None) -> None:
    """Configure application-wide logging to a file, since curses owns the screen."""
    log_file = log_file or data_dir() / "termtype.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=str(log_file),
    )


def install_interrupt_handler(interrupt: threading.Event) -> None:
    """Turn Ctrl-C into a request to end the current test instead of a traceback."""

    def _handler(signum, frame) -> None:
        interrupt.set()

    signal.signal(signal.SIGINT, _handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termtype",
        description="A terminal-based typing test.",
    )
    parser.add_argument("--mode", choices=["words", "time"], help="test by word count or by time")
    parser.add_argument("--words", type=int, metavar="N", help="number of words in words mode")
    parser.add_argument("--time", type=int, metavar="SECONDS", help="time limit in time mode")
    parser.add_argument(
        "--difficulty", choices=[d.value.lower() for d in Difficulty], help="word list difficulty"
    )
    parser.add_argument("--language", help="language pack to draw words from")
    parser.add_argument("--layout", choices=["default", "boxes"], help="screen layout")
    parser.add_argument(
        "--list-languages", action="store_true", help="list available language packs and exit"
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Return ``settings`` with any command-line choices applied."""
    changes = {}
    if args.mode:
        changes["game_mode"] = Mode.TIME if args.mode == "time" else Mode.WORDS
    if args.words is not None:
        changes["default_test_length"] = args.words
    if args.time is not None:
        changes["default_time_limit"] = args.time
    if args.difficulty:
        changes["difficulty"] = Difficulty(args.difficulty.capitalize())
    if args.language:
        changes["language"] = args.language
    if args.layout:
        changes["layout_theme"] = LayoutStyle.FRAMED if args.layout == "boxes" else LayoutStyle.FLOWING
    return dataclasses.replace(settings, **changes)


def play(
    stdscr: "curses.window",
    spec: TestSpec,
    store: ResultStore,
    interrupt: threading.Event,
) -> None:
    """Run tests back to back until the user exits or an interrupt arrives."""
    terminal = CursesTerminal(stdscr)
    while not interrupt.is_set():
        session = TypingSession(spec, store=store, interrupt=interrupt)
        session.run(terminal)
        if not session.review(terminal):
            break


def run(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, load settings and word lists, and start the test loop."""
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        languages = LanguageRepository()
        if args.list_languages:
            for name in languages.names():
                print(name)
            return 0
        settings = apply_overrides(SettingsStore().load(), args)
        spec = TestSpec.from_settings(settings, languages)
    except (ValueError, FileNotFoundError) as e:
        logger.error("Cannot start typing test: %s", e)
        print(f"termtype: {e}", file=sys.stderr)
        return 2

    store = ResultStore()
    interrupt = threading.Event()
    install_interrupt_handler(interrupt)
    os.environ.setdefault("ESCDELAY", str(ESC_DELAY_MS))

    logger.info("Starting %s test (%s, %s)", spec.mode.value, spec.language, spec.difficulty.value)
    curses.wrapper(play, spec, store, interrupt)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
