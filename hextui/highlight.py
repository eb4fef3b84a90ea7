"""Pygments coloring for non-interactive hex dumps.

Dump rows share the canonical address/hex/ASCII shape that Pygments'
``HexdumpLexer`` understands, so piped output to a terminal gets the same
label/number/string coloring as ``hexdump -C`` output would.
"""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import HexdumpLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def normalize_style(style: str | None) -> str:
    """Return ``style`` if Pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def colorize_dump(text: str, style: str | None = DEFAULT_STYLE) -> str:
    """Highlight hex dump ``text`` with ANSI escapes for ``style``."""
    if not text:
        return text
    return highlight(text, HexdumpLexer(), _formatter_for_style(normalize_style(style)))
