"""Scroll offset and cursor state for the hex grid.

Navigation is a flat transition table keyed by ``NavEvent``. Every transition
takes the frame's ``LayoutParams`` as context and leaves the state clamped to
file bounds; out-of-range moves are absorbed silently, never reported.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from .layout import LayoutParams


class NavEvent(Enum):
    SCROLL_LINE_DOWN = "scroll_line_down"
    SCROLL_LINE_UP = "scroll_line_up"
    SCROLL_PAGE_DOWN = "scroll_page_down"
    SCROLL_PAGE_UP = "scroll_page_up"
    CURSOR_DOWN = "cursor_down"
    CURSOR_UP = "cursor_up"
    CURSOR_LEFT = "cursor_left"
    CURSOR_RIGHT = "cursor_right"
    QUIT = "quit"


@dataclass
class CursorPosition:
    row: int = 0
    column: int = 0


@dataclass
class NavigationState:
    """Scroll offset plus cursor cell within the visible grid.

    The cursor's absolute byte address is derived from ``offset`` and the
    layout on demand and never stored.
    """

    file_size: int
    offset: int = 0
    cursor: CursorPosition = field(default_factory=CursorPosition)

    def max_offset(self, layout: LayoutParams) -> int:
        """Return the largest offset that keeps the viewport inside the file."""
        return max(0, self.file_size - layout.viewport_byte_capacity)

    def window_length(self, layout: LayoutParams) -> int:
        """Return the number of bytes visible at the current offset."""
        return max(0, min(layout.viewport_byte_capacity, self.file_size - self.offset))

    def content_row_count(self, layout: LayoutParams) -> int:
        """Return how many visible rows hold at least one byte."""
        length = self.window_length(layout)
        return (length + layout.bytes_per_row - 1) // layout.bytes_per_row

    def cursor_offset(self, layout: LayoutParams) -> int:
        """Return the absolute byte address under the cursor."""
        return self.offset + self.cursor.row * layout.bytes_per_row + self.cursor.column

    def cursor_in_file(self, layout: LayoutParams) -> bool:
        """Return whether the cursor addresses an existing byte.

        Revalidation keeps the cursor on data, so this is only false for an
        empty file.
        """
        return self.cursor_offset(layout) < self.file_size

    def apply(self, event: NavEvent, layout: LayoutParams) -> None:
        """Apply one navigation event, then revalidate against ``layout``.

        Events without a transition (``QUIT``) leave the state untouched.
        """
        transition = _TRANSITIONS.get(event)
        if transition is None:
            return
        transition(self, layout)
        self.revalidate(layout)

    def revalidate(self, layout: LayoutParams) -> None:
        """Re-clamp offset and cursor after a layout change."""
        self.offset = max(0, min(self.offset, self.max_offset(layout)))
        last_row = max(self.content_row_count(layout), 1) - 1
        self.cursor.row = max(0, min(self.cursor.row, last_row))
        row_width = layout.bytes_per_row
        # A partial final row only has cells up to its last byte.
        row_bytes = self.window_length(layout) - self.cursor.row * layout.bytes_per_row
        if 0 < row_bytes < row_width:
            row_width = row_bytes
        self.cursor.column = max(0, min(self.cursor.column, row_width - 1))

    def _scroll_by(self, delta: int, layout: LayoutParams) -> None:
        self.offset = max(0, min(self.offset + delta, self.max_offset(layout)))


def _scroll_line_down(state: NavigationState, layout: LayoutParams) -> None:
    state._scroll_by(layout.bytes_per_row, layout)


def _scroll_line_up(state: NavigationState, layout: LayoutParams) -> None:
    state._scroll_by(-layout.bytes_per_row, layout)


def _scroll_page_down(state: NavigationState, layout: LayoutParams) -> None:
    state._scroll_by(layout.viewport_byte_capacity, layout)


def _scroll_page_up(state: NavigationState, layout: LayoutParams) -> None:
    state._scroll_by(-layout.viewport_byte_capacity, layout)


def _cursor_down(state: NavigationState, layout: LayoutParams) -> None:
    # Move within the window first; scroll only from the bottom content row.
    if state.cursor.row + 1 < state.content_row_count(layout):
        state.cursor.row += 1
    else:
        _scroll_line_down(state, layout)


def _cursor_up(state: NavigationState, layout: LayoutParams) -> None:
    if state.cursor.row > 0:
        state.cursor.row -= 1
    else:
        _scroll_line_up(state, layout)


def _cursor_left(state: NavigationState, layout: LayoutParams) -> None:
    state.cursor.column = max(0, state.cursor.column - 1)


def _cursor_right(state: NavigationState, layout: LayoutParams) -> None:
    state.cursor.column = min(layout.bytes_per_row - 1, state.cursor.column + 1)


_TRANSITIONS: dict[NavEvent, Callable[[NavigationState, LayoutParams], None]] = {
    NavEvent.SCROLL_LINE_DOWN: _scroll_line_down,
    NavEvent.SCROLL_LINE_UP: _scroll_line_up,
    NavEvent.SCROLL_PAGE_DOWN: _scroll_page_down,
    NavEvent.SCROLL_PAGE_UP: _scroll_page_up,
    NavEvent.CURSOR_DOWN: _cursor_down,
    NavEvent.CURSOR_UP: _cursor_up,
    NavEvent.CURSOR_LEFT: _cursor_left,
    NavEvent.CURSOR_RIGHT: _cursor_right,
}
