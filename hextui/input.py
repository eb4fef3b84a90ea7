"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens,
then maps the tokens the viewer understands onto navigation events.
"""

from __future__ import annotations

import os
import select

from .navigation import NavEvent

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_ARROW_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}

_TILDE_KEYS = {
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}

_KEY_EVENTS: dict[str, NavEvent] = {
    "q": NavEvent.QUIT,
    "UP": NavEvent.CURSOR_UP,
    "DOWN": NavEvent.CURSOR_DOWN,
    "LEFT": NavEvent.CURSOR_LEFT,
    "RIGHT": NavEvent.CURSOR_RIGHT,
    "PAGE_UP": NavEvent.SCROLL_PAGE_UP,
    "PAGE_DOWN": NavEvent.SCROLL_PAGE_DOWN,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when nothing arrives within ``timeout_ms``. Escape
    sequences decode to ``UP``/``DOWN``/``LEFT``/``RIGHT`` and
    ``PAGE_UP``/``PAGE_DOWN``; unrecognised ones decode to ``ESC``.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"O":
        # Application cursor mode: ESC O A..D
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        return _ARROW_KEYS.get(seq, "ESC")
    if seq != b"[":
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _ARROW_KEYS:
        return _ARROW_KEYS[seq]
    if seq in _TILDE_KEYS:
        terminator = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if terminator == b"~":
            return _TILDE_KEYS[seq]
        return "ESC"
    return "ESC"


def event_for_key(key: str) -> NavEvent | None:
    """Map a key token to its navigation event; unbound keys map to ``None``."""
    return _KEY_EVENTS.get(key)
