"""Rendering for the hex/ASCII grid.

Builds address/hex/ASCII rows and the title and status chrome, then writes
fully composed ANSI frames. Nothing here mutates navigation state.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .layout import ADDRESS_GUTTER_WIDTH, ASCII_GUTTER_WIDTH, LayoutParams
from .navigation import NavigationState
from .reader import ByteWindowReader
from .ui_theme import UITheme

STATUS_HINT = "│ ←↑↓→ PgUp PgDn  q Quit"


def format_address(offset: int) -> str:
    """Format a byte offset as zero-padded uppercase hex (``000000FF``)."""
    return f"{offset:08X}"


def is_printable_byte(byte: int) -> bool:
    """Return whether ``byte`` is an ASCII graphic character or space."""
    return 0x20 <= byte <= 0x7E


def ascii_char(byte: int) -> str:
    return chr(byte) if is_printable_byte(byte) else "."


def format_size(size: int) -> str:
    return f"{size * 1e-6:.2f} MB ({size} bytes)"


def _styled(text: str, style: str, reset: str) -> str:
    if not style:
        return text
    return f"{style}{text}{reset}"


def render_row(
    address: int,
    row_bytes: bytes,
    bytes_per_row: int,
    theme: UITheme | None = None,
    cursor_column: int | None = None,
) -> str:
    """Render one grid row: address, hex cells, and the ASCII column.

    Partial rows are padded so the ASCII column stays aligned. The cell at
    ``cursor_column`` gets the theme cursor style in both columns.
    """
    reset = theme.reset if theme is not None else ""
    out: list[str] = [
        _styled(format_address(address), theme.address if theme else "", reset),
        " " * ADDRESS_GUTTER_WIDTH,
    ]
    for idx, byte in enumerate(row_bytes):
        style = theme.hex_byte if theme else ""
        if theme is not None and idx == cursor_column:
            style = theme.cursor
        out.append(_styled(f"{byte:02X}", style, reset))
        out.append(" ")
    out.append("   " * max(0, bytes_per_row - len(row_bytes)))
    out.append(" " * ASCII_GUTTER_WIDTH)
    for idx, byte in enumerate(row_bytes):
        style = ""
        if theme is not None:
            if idx == cursor_column:
                style = theme.cursor
            elif is_printable_byte(byte):
                style = theme.ascii_printable
            else:
                style = theme.ascii_placeholder
        out.append(_styled(ascii_char(byte), style, reset))
    return "".join(out)


def build_title_line(path: Path, size: int, width: int) -> str:
    title = f"{path} - {format_size(size)}"
    return title[: max(0, width)]


def build_status_line(left_text: str, width: int, right_text: str = STATUS_HINT) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def _scroll_percent(offset: int, max_offset: int) -> float:
    if max_offset <= 0:
        return 100.0
    return (max(0, min(offset, max_offset)) / max_offset) * 100.0


def status_text(state: NavigationState, layout: LayoutParams, window: bytes) -> str:
    """Describe the cursor address, the byte under it, and scroll position."""
    cursor = state.cursor_offset(layout)
    percent = _scroll_percent(state.offset, state.max_offset(layout))
    index = cursor - state.offset
    if 0 <= index < len(window):
        byte = window[index]
        value = f"{byte:02X} {byte:3d} '{ascii_char(byte)}'"
    else:
        value = "--"
    return f"{format_address(cursor)} / {format_address(state.file_size)}  {value}  {percent:5.1f}%"


@dataclass
class Frame:
    """Everything the renderer needs for one draw."""

    path: Path
    state: NavigationState
    layout: LayoutParams
    window: bytes
    theme: UITheme


def build_frame_lines(frame: Frame) -> list[str]:
    """Compose the title, grid rows, and status line for ``frame``."""
    layout = frame.layout
    state = frame.state
    theme = frame.theme
    width = layout.terminal_width
    bytes_per_row = layout.bytes_per_row
    margin = " " * max(0, (width - layout.content_width) // 2)

    lines = [_styled(build_title_line(frame.path, state.file_size, width), theme.title, theme.reset)]
    content_rows = state.content_row_count(layout)
    cursor_visible = state.cursor_in_file(layout)
    # Short files sit in the middle of the grid area.
    top_padding = (layout.visible_row_count - content_rows) // 2
    lines.extend([""] * top_padding)
    for row in range(layout.visible_row_count - top_padding):
        if row >= content_rows:
            lines.append("")
            continue
        start = row * bytes_per_row
        row_bytes = frame.window[start : start + bytes_per_row]
        cursor_column = state.cursor.column if cursor_visible and row == state.cursor.row else None
        lines.append(margin + render_row(state.offset + start, row_bytes, bytes_per_row, theme, cursor_column))
    status = build_status_line(status_text(state, layout, frame.window), width)
    lines.append(_styled(status, theme.status, theme.reset))
    return lines[: layout.terminal_height]


def render_frame(frame: Frame) -> None:
    """Write one full frame to stdout."""
    out: list[str] = ["\033[H\033[J"]
    out.append("\r\n".join(build_frame_lines(frame)))
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


def iter_dump_rows(reader: ByteWindowReader, bytes_per_row: int) -> Iterator[str]:
    """Yield unstyled grid rows covering the whole file."""
    bytes_per_row = max(1, bytes_per_row)
    offset = 0
    while offset < reader.size:
        row_bytes = reader.read_window(offset, bytes_per_row)
        if not row_bytes:
            break
        yield render_row(offset, row_bytes, bytes_per_row)
        offset += len(row_bytes)
