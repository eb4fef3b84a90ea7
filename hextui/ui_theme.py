"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the hex grid chrome. Dump-mode coloring of
non-interactive output uses a Pygments style instead, selected separately.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    title: str
    status: str
    address: str
    hex_byte: str
    ascii_printable: str
    ascii_placeholder: str
    cursor: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    title="\033[1m",
    status="\033[7m",
    address="\033[33m",
    hex_byte="",
    ascii_printable="\033[32m",
    ascii_placeholder="\033[2;32m",
    cursor="\033[7m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    status="\033[7;38;5;31m",
    address="\033[38;5;39m",
    hex_byte="\033[38;5;153m",
    ascii_printable="\033[38;5;117m",
    ascii_placeholder="\033[2;38;5;110m",
    cursor="\033[1;7;38;5;45m",
)

# Reverse video is kept without color so the cursor and status bar stay visible.
PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    title="",
    status="\033[7m",
    address="",
    hex_byte="",
    ascii_printable="",
    ascii_placeholder="",
    cursor="\033[7m",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
