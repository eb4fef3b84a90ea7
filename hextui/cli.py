"""Command-line front door for hextui.

Parses CLI options, validates the target path, and configures logging.
Then dispatches into the interactive viewer or the dump output path.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import load_style_name, load_theme_name
from .runtime import DUMP_BYTES_PER_ROW, run_viewer
from .ui_theme import available_theme_names

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)
_installed_handler: logging.Handler | None = None


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def configure_logging(log_file: str | None) -> None:
    """Attach a file handler to the package logger when ``log_file`` is set.

    The terminal belongs to the viewer, so nothing is logged to a stream.
    The handler installed by a previous call is replaced, not stacked.
    """
    global _installed_handler
    package_logger = logging.getLogger("hextui")
    if _installed_handler is not None:
        package_logger.removeHandler(_installed_handler)
        _installed_handler.close()
    if log_file is None:
        handler: logging.Handler = logging.NullHandler()
    else:
        handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.setLevel(logging.DEBUG)
    package_logger.addHandler(handler)
    _installed_handler = handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hextui",
        description="View a file as a scrollable hexadecimal/ASCII grid.",
    )
    parser.add_argument("path", help="File to view.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--nopager", action="store_true", help="Print a hex dump directly instead of the viewer.")
    parser.add_argument("--style", default=None, help="Pygments style name for dump output coloring.")
    parser.add_argument(
        "--bytes-per-row",
        type=_positive_int,
        default=DUMP_BYTES_PER_ROW,
        help=f"Bytes per row for dump output (default: {DUMP_BYTES_PER_ROW}).",
    )
    parser.add_argument("--log-file", default=None, help="Write debug logs to this file.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch hextui on a file.

    Invalid arguments exit through argparse with status 2; a missing path or
    a non-file target exits with status 1 before the terminal is touched.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"could not find file {path}")
    if not path.is_file():
        raise SystemExit(f"not a regular file: {path}")

    theme_name = args.theme if args.theme is not None else load_theme_name()
    style = args.style if args.style is not None else load_style_name()
    try:
        run_viewer(
            path,
            theme_name=theme_name,
            no_color=args.no_color,
            nopager=args.nopager,
            style=style,
            bytes_per_row=args.bytes_per_row,
        )
    except BrokenPipeError:
        # Reader went away (e.g. piped into ``head``); silence the final flush.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        raise SystemExit(1)
    except OSError as exc:
        logger.exception("read failed for %s", path)
        raise SystemExit(f"read error: {exc}") from exc


if __name__ == "__main__":
    main()
