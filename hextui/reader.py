"""Positioned reads of a fixed-size byte window from the viewed file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO


class ByteWindowReader:
    """Read-only file handle that serves byte windows by offset.

    The file length is measured once at construction and treated as the file
    extent for the whole session; reads are capped to it.
    """

    def __init__(self, handle: BinaryIO, path: Path | None = None) -> None:
        self._handle = handle
        self.path = path
        self.size = os.fstat(handle.fileno()).st_size

    @classmethod
    def open(cls, path: Path) -> ByteWindowReader:
        """Open ``path`` for binary reading."""
        return cls(open(path, "rb"), path)

    def read_window(self, offset: int, max_len: int) -> bytes:
        """Return up to ``max_len`` bytes starting at ``offset``.

        Returns fewer bytes near end-of-file and an empty result when
        ``offset`` is at or past the extent. ``OSError`` from the underlying
        storage propagates to the caller.
        """
        if offset < 0 or max_len < 0:
            raise ValueError(f"invalid window: offset={offset} max_len={max_len}")
        length = min(max_len, self.size - offset)
        if length <= 0:
            return b""
        self._handle.seek(offset)
        return self._handle.read(length)

    def close(self) -> None:
        self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def __enter__(self) -> ByteWindowReader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
