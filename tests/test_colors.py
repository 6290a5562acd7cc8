from __future__ import annotations

import pytest

from intensitymap.colors import INACTIVE_COLOR, PALETTE, color_of, to_rgb


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (0, "#27272a"),
        (1, "#bae6fd"),
        (2, "#4ade80"),
        (3, "#facc15"),
        (4, "#f97316"),
        (5, "#dc2626"),
        (6, "#86198f"),
        (7, "#500724"),
    ],
)
def test_palette_levels(level: int, expected: str) -> None:
    assert color_of(level) == expected
    assert PALETTE[level] == expected


@pytest.mark.parametrize("level", [8, 9, 42])
def test_levels_above_range_use_darkest_overflow_tier(level: int) -> None:
    assert color_of(level) == "#4a044e"


def test_negative_levels_fall_back_to_inactive_color() -> None:
    assert color_of(-1) == INACTIVE_COLOR


def test_to_rgb_parses_hex() -> None:
    assert to_rgb("#dc2626") == (220, 38, 38)
    assert to_rgb("#18181b") == (24, 24, 27)
