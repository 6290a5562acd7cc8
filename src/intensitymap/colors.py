"""Intensity level to fill color ramp."""

from __future__ import annotations

from PIL import ImageColor

INACTIVE_COLOR = "#27272a"

PALETTE: tuple[str, ...] = (
    INACTIVE_COLOR,  # 0 inactive
    "#bae6fd",  # 1 pale cyan
    "#4ade80",  # 2 green
    "#facc15",  # 3 yellow
    "#f97316",  # 4 orange
    "#dc2626",  # 5 red
    "#86198f",  # 6 magenta
    "#500724",  # 7 deep maroon
)

# Out-of-range tiers; validated input never reaches them.
_OVERFLOW_DARKEST = "#4a044e"
_OVERFLOW_SECOND = "#b91c1c"


def color_of(level: int) -> str:
    if 0 <= level < len(PALETTE):
        return PALETTE[level]
    if level > 6:
        return _OVERFLOW_DARKEST
    if level > 5:
        return _OVERFLOW_SECOND
    return INACTIVE_COLOR


def to_rgb(color: str) -> tuple[int, int, int]:
    """Resolve a CSS color string to an RGB triple."""
    red, green, blue = ImageColor.getrgb(color)[:3]
    return (red, green, blue)
