"""Vector scene composition: background plus one styled path per region."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Sequence

from .colors import color_of
from .config import StyleConfig
from .models import IntensityAssignment, Region
from .paths import build_region_path
from .projection import Projection


@dataclass(frozen=True, slots=True)
class PathStyle:
    fill: str
    stroke: str
    stroke_width: float
    fill_opacity: float
    fill_rule: str = "evenodd"

    def to_css(self) -> str:
        return (
            f"fill:{self.fill};stroke:{self.stroke};stroke-width:{self.stroke_width:.1f};"
            f"fill-opacity:{self.fill_opacity:g};fill-rule:{self.fill_rule}"
        )


@dataclass(frozen=True, slots=True)
class ScenePath:
    region_id: int
    level: int
    d: str
    style: PathStyle

    @property
    def style_css(self) -> str:
        return self.style.to_css()


@dataclass(frozen=True, slots=True)
class VectorScene:
    width: int
    height: int
    background: str
    paths: tuple[ScenePath, ...]

    def to_svg(self) -> str:
        lines = [
            '<?xml version="1.0"?>',
            (
                f'<svg width="{self.width}" height="{self.height}" '
                'xmlns="http://www.w3.org/2000/svg">'
            ),
            (
                f'<rect x="0" y="0" width="{self.width}" height="{self.height}" '
                f'style="fill:{escape(self.background)}" />'
            ),
        ]
        for path in self.paths:
            lines.append(f'<path d="{escape(path.d)}" style="{escape(path.style_css)}" />')
        lines.append("</svg>")
        lines.append("")
        return "\n".join(lines)


def compose_scene(
    regions: Sequence[Region],
    intensities: IntensityAssignment,
    projection: Projection,
    canvas_width: int,
    canvas_height: int,
    *,
    multiplier: float = 1.0,
    style: StyleConfig | None = None,
) -> VectorScene:
    """Every region in dataset order; inactive ones get the level-0 color."""
    style = style or StyleConfig()
    stroke_width = style.stroke_width * multiplier
    paths: list[ScenePath] = []
    for region in regions:
        level = intensities.level_of(region.id)
        paths.append(
            ScenePath(
                region_id=region.id,
                level=level,
                d=build_region_path(region.geometry, projection),
                style=PathStyle(
                    fill=color_of(level),
                    stroke=style.stroke_color,
                    stroke_width=stroke_width,
                    fill_opacity=style.fill_opacity,
                    fill_rule=style.fill_rule,
                ),
            )
        )
    return VectorScene(
        width=canvas_width,
        height=canvas_height,
        background=style.background,
        paths=tuple(paths),
    )
