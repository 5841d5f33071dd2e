#!/usr/bin/env python3
"""Command-line entry point: present a text file as slides in the terminal."""

import argparse
import curses
import json
import locale
import logging
import sys
from pathlib import Path

from .config import load_config
from .controller import PresentationController
from .exceptions import ConfigError
from .hosts.curses_host import CursesHost
from .slide_parser import SlideParser

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="slide-presenter", description="Present a text file as slides, one '#' heading per slide.")
    p.add_argument("source", type=Path, help="Text or markdown file to present")
    p.add_argument("--config", "-c", type=Path, help="YAML config file (default: $SLIDE_PRESENTER_CONFIG or ~/.config/slide-presenter/config.yaml)")
    p.add_argument("--label", help="Footer label (default: config source_label, then the file name)")
    p.add_argument("--dump", action="store_true", help="Print the parsed slides as JSON instead of presenting them")
    p.add_argument("--log-file", type=Path, help="Write log records to this file")
    p.add_argument("--debug", action="store_true", help="Enable verbose logging")
    return p


def _setup_logging(args) -> None:
    level = logging.DEBUG if args.debug else logging.INFO
    if args.log_file:
        logging.basicConfig(filename=str(args.log_file), level=level, format="%(asctime)s %(levelname)s  %(name)s  %(message)s")
    elif args.dump:
        logging.basicConfig(level=level, format="%(levelname)s  %(message)s")
    else:
        # The terminal belongs to curses while presenting
        logging.basicConfig(level=logging.ERROR, format="%(levelname)s  %(message)s")


def main(argv=None) -> int:
    """Command-line entry point for the slide presenter."""
    args = _build_parser().parse_args(argv)
    _setup_logging(args)

    source: Path = args.source
    if not source.exists():
        logger.error(f"Source file '{source}' not found")
        return 1

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    lines = source.read_text(encoding="utf-8").splitlines()

    if args.dump:
        deck = SlideParser(heading_marker=config.heading_marker).parse(lines)
        print(json.dumps(deck.to_dict(), indent=2, ensure_ascii=False))
        return 0

    label = args.label or config.source_label or source.name

    def _present(stdscr):
        host = CursesHost(stdscr)
        controller = PresentationController(host, config=config, source_label=label)
        host.run(controller, lines)

    # Box-drawing borders need the user locale
    locale.setlocale(locale.LC_ALL, "")
    try:
        curses.wrapper(_present)
    except ValueError as e:
        # Unknown key names surface from bind_key at start
        logger.error(f"Could not start presentation: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
