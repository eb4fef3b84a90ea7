"""Grid geometry for the hex/ASCII view.

Maps terminal dimensions to bytes-per-row, visible row count, and rendered
content width. Everything here is a pure function of the terminal size and is
recomputed every frame, so there is no resize bookkeeping to keep in sync.
"""

from __future__ import annotations

from dataclasses import dataclass

ADDRESS_COLUMN_WIDTH = 8
ADDRESS_GUTTER_WIDTH = 4
ASCII_GUTTER_WIDTH = 3
GUTTER_WIDTH = ADDRESS_GUTTER_WIDTH + ASCII_GUTTER_WIDTH
# Two hex digits, one separator space, and one ASCII glyph.
BYTE_DISPLAY_WIDTH = 4
# Title line plus status line.
HEADER_LINES = 2


@dataclass(frozen=True)
class LayoutParams:
    """Structural parameters of one frame."""

    bytes_per_row: int
    visible_row_count: int
    content_width: int
    terminal_width: int = 0
    terminal_height: int = 0

    @property
    def viewport_byte_capacity(self) -> int:
        """Return how many bytes fit in the visible grid."""
        return self.bytes_per_row * self.visible_row_count


def content_width_for(bytes_per_row: int) -> int:
    """Return the rendered width of one grid row holding ``bytes_per_row`` bytes."""
    return ADDRESS_COLUMN_WIDTH + ADDRESS_GUTTER_WIDTH + 3 * bytes_per_row + ASCII_GUTTER_WIDTH + bytes_per_row


def compute_layout(terminal_width: int, terminal_height: int) -> LayoutParams:
    """Derive grid layout from terminal size.

    Degenerate sizes clamp instead of raising: bytes-per-row floors at 1 and
    the visible row count floors at 0, in which case only chrome is drawn.
    """
    usable_width = max(0, terminal_width - ADDRESS_COLUMN_WIDTH - GUTTER_WIDTH)
    bytes_per_row = max(1, usable_width // BYTE_DISPLAY_WIDTH)
    visible_row_count = max(0, terminal_height - HEADER_LINES)
    return LayoutParams(
        bytes_per_row=bytes_per_row,
        visible_row_count=visible_row_count,
        content_width=content_width_for(bytes_per_row),
        terminal_width=max(0, terminal_width),
        terminal_height=max(0, terminal_height),
    )


def fixed_layout(bytes_per_row: int, visible_row_count: int) -> LayoutParams:
    """Build layout for an explicit grid shape (dump output and tests)."""
    bytes_per_row = max(1, bytes_per_row)
    visible_row_count = max(0, visible_row_count)
    width = content_width_for(bytes_per_row)
    return LayoutParams(
        bytes_per_row=bytes_per_row,
        visible_row_count=visible_row_count,
        content_width=width,
        terminal_width=width,
        terminal_height=visible_row_count + HEADER_LINES,
    )
