"""Colour helpers for drawing RGB theme colours on a curses screen."""

from __future__ import annotations

from typing import Dict, Tuple

RGB = Tuple[int, int, int]

# Approximate RGB of the eight standard terminal colours, keyed by curses
# colour number (COLOR_BLACK .. COLOR_WHITE).
BASIC_COLORS: Dict[int, RGB] = {
    0: (0, 0, 0),
    1: (205, 0, 0),
    2: (0, 205, 0),
    3: (205, 205, 0),
    4: (0, 0, 238),
    5: (205, 0, 205),
    6: (0, 205, 205),
    7: (229, 229, 229),
}

# Bright black, which most terminals render as dark grey.
BRIGHT_BLACK = 8


def rgb_to_hex(color: RGB) -> str:
    """Format an RGB triple as #RRGGBB, clamping each channel to 0..255."""
    r, g, b = (max(0, min(255, int(c))) for c in color)
    return f"#{r:02X}{g:02X}{b:02X}"


def nearest_curses_color(color: RGB, colors: int = 8) -> int:
    """Closest standard curses colour number for ``color``.

    With 16 or more colours available, mid greys map to bright black.
    """
    r, g, b = color
    if colors >= 16 and max(color) - min(color) < 24 and 64 <= r <= 176:
        return BRIGHT_BLACK

    def distance(item: Tuple[int, RGB]) -> int:
        cr, cg, cb = item[1]
        return (r - cr) ** 2 + (g - cg) ** 2 + (b - cb) ** 2

    return min(BASIC_COLORS.items(), key=distance)[0]
