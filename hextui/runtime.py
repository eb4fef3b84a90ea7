"""Session orchestration for the interactive viewer.

Runs the poll-driven loop (wait for a key, apply at most one transition,
recompute layout, redraw) and the non-interactive dump path used when output
is piped or ``--nopager`` is given.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from .highlight import colorize_dump
from .input import event_for_key, read_key
from .layout import LayoutParams, compute_layout
from .navigation import NavEvent, NavigationState
from .reader import ByteWindowReader
from .render import Frame, iter_dump_rows, render_frame
from .terminal import TerminalController
from .ui_theme import UITheme, resolve_theme

POLL_TIMEOUT_MS = 200
DUMP_BYTES_PER_ROW = 16
DUMP_CHUNK_ROWS = 4096

logger = logging.getLogger(__name__)


def run_main_loop(
    reader: ByteWindowReader,
    terminal: TerminalController,
    stdin_fd: int,
    path: Path,
    theme: UITheme,
    *,
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
    read_key_fn: Callable[..., str] = read_key,
    draw: Callable[[Frame], None] = render_frame,
) -> NavigationState:
    """Run the interactive loop until a quit key arrives.

    Layout is recomputed from the terminal size on every iteration and the
    navigation state is revalidated against it before each read and draw.
    ``OSError`` from reads propagates after the terminal is restored.
    """
    state = NavigationState(file_size=reader.size)
    layout: LayoutParams | None = None

    with terminal.raw_mode():
        while True:
            term = get_terminal_size((80, 24))
            current = compute_layout(term.columns, term.lines)
            if current != layout:
                logger.debug(
                    "layout %dx%d: %d bytes/row, %d rows",
                    current.terminal_width,
                    current.terminal_height,
                    current.bytes_per_row,
                    current.visible_row_count,
                )
            layout = current
            state.revalidate(layout)

            window = reader.read_window(state.offset, layout.viewport_byte_capacity)
            draw(Frame(path=path, state=state, layout=layout, window=window, theme=theme))

            key = read_key_fn(stdin_fd, timeout_ms=POLL_TIMEOUT_MS)
            if not key:
                continue
            event = event_for_key(key)
            if event is None:
                continue
            if event is NavEvent.QUIT:
                break
            state.apply(event, layout)
    return state


def write_dump(
    reader: ByteWindowReader,
    out: TextIO,
    *,
    bytes_per_row: int = DUMP_BYTES_PER_ROW,
    colorize: bool = False,
    style: str | None = None,
) -> None:
    """Write every row of the file to ``out``, optionally Pygments-colored."""
    chunk: list[str] = []

    def flush() -> None:
        text = "\n".join(chunk) + "\n"
        out.write(colorize_dump(text, style) if colorize else text)
        chunk.clear()

    for row in iter_dump_rows(reader, bytes_per_row):
        chunk.append(row)
        if len(chunk) >= DUMP_CHUNK_ROWS:
            flush()
    if chunk:
        flush()


def run_viewer(
    path: Path,
    *,
    theme_name: str | None = None,
    no_color: bool = False,
    nopager: bool = False,
    style: str | None = None,
    bytes_per_row: int = DUMP_BYTES_PER_ROW,
) -> None:
    """Open ``path`` and either run the interactive viewer or dump it."""
    with ByteWindowReader.open(path) as reader:
        logger.info("opened %s (%d bytes)", path, reader.size)
        interactive = os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())
        if nopager or not interactive:
            colorize = not no_color and os.isatty(sys.stdout.fileno())
            write_dump(reader, sys.stdout, bytes_per_row=bytes_per_row, colorize=colorize, style=style)
            return

        terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
        theme = resolve_theme(theme_name, no_color=no_color)
        state = run_main_loop(reader, terminal, sys.stdin.fileno(), path, theme)
        logger.info("session ended at offset %d", state.offset)
