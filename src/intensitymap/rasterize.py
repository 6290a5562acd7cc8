"""Vector scene rasterization, text overlays, and PNG encoding."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

import cairosvg
from PIL import Image, ImageDraw, ImageFont

from .colors import to_rgb
from .config import LabelsConfig
from .errors import RenderingError
from .models import IntensityAssignment, LonLat, Region
from .projection import Projection
from .scene import VectorScene

_LOGGER = logging.getLogger("intensitymap.rasterize")

FONT_WEIGHT_REGULAR = 400
FONT_WEIGHT_MEDIUM = 500


@dataclass(frozen=True, slots=True)
class FontSet:
    """TrueType files per weight; `None` selects Pillow's bundled font."""

    regular: Path | None = None
    medium: Path | None = None

    def path_for(self, weight: int) -> Path | None:
        if weight == FONT_WEIGHT_MEDIUM:
            return self.medium
        return self.regular


@dataclass(frozen=True, slots=True)
class RegionLabel:
    text: str
    x: float
    y: float


def load_font(path: Path | None, size: int) -> Any:
    try:
        if path is None:
            return ImageFont.load_default(size=size)
        return ImageFont.truetype(str(path), size=size)
    except (OSError, ValueError) as exc:
        raise RenderingError(f"failed to load font {path or '<default>'}: {exc}") from exc


def region_label_anchor(region: Region) -> LonLat:
    """Unweighted mean of the first ring of the first polygon.

    Not an area centroid: multi-part regions are labelled on their first
    part only.
    """
    ring = next(iter(region.rings))
    count = len(ring)
    sum_lon = sum(lon for lon, _ in ring)
    sum_lat = sum(lat for _, lat in ring)
    return (sum_lon / count, sum_lat / count)


def build_region_labels(
    regions: Iterable[Region],
    intensities: IntensityAssignment,
    projection: Projection,
) -> list[RegionLabel]:
    labels: list[RegionLabel] = []
    for region in regions:
        level = intensities.level_of(region.id)
        if level == 0:
            continue
        x, y = projection.project(*region_label_anchor(region))
        labels.append(RegionLabel(text=str(level), x=x, y=y))
    return labels


class Rasterizer:
    """Draws a vector scene into an RGB canvas and encodes it as PNG."""

    def __init__(
        self,
        fonts: FontSet | None = None,
        label_style: LabelsConfig | None = None,
        *,
        font_weight: int = FONT_WEIGHT_REGULAR,
    ) -> None:
        self.fonts = fonts or FontSet()
        self.label_style = label_style or LabelsConfig()
        self.font_weight = font_weight

    def rasterize(
        self,
        scene: VectorScene,
        *,
        labels: Sequence[RegionLabel] = (),
        footer_text: str | None = None,
        multiplier: float = 1.0,
    ) -> bytes:
        image = self.draw_scene(scene)
        font = load_font(
            self.fonts.path_for(self.font_weight),
            max(int(round(self.label_style.font_size * multiplier)), 1),
        )
        text_color = to_rgb(self.label_style.color)
        draw = ImageDraw.Draw(image)

        offset_x, offset_y = self.label_style.offset_px
        for label in labels:
            origin = (int(label.x) + offset_x, int(label.y) + offset_y)
            self._draw_text(draw, origin, label.text, font, text_color, what="scale value")

        footer_x, footer_y = self.label_style.footer_offset_px
        footer_origin = (int(footer_x * multiplier), scene.height - int(footer_y * multiplier))
        text = footer_text or self.label_style.default_footer
        self._draw_text(draw, footer_origin, text, font, text_color, what="footer text")

        return encode_png(image)

    def draw_scene(self, scene: VectorScene) -> Image.Image:
        try:
            png_data = cairosvg.svg2png(
                bytestring=scene.to_svg().encode("utf-8"),
                output_width=scene.width,
                output_height=scene.height,
            )
        except Exception as exc:
            raise RenderingError(f"failed to rasterize vector scene: {exc}") from exc
        with Image.open(io.BytesIO(png_data)) as raster:
            image = raster.convert("RGB")
        _LOGGER.debug("Rasterized %d paths at %dx%d", len(scene.paths), scene.width, scene.height)
        return image

    @staticmethod
    def _draw_text(
        draw: ImageDraw.ImageDraw,
        origin: tuple[int, int],
        text: str,
        font: Any,
        color: tuple[int, int, int],
        *,
        what: str,
    ) -> None:
        # Origin is the left end of the text baseline.
        try:
            draw.text(origin, text, font=font, fill=color, anchor="ls")
        except (OSError, ValueError, UnicodeError) as exc:
            raise RenderingError(f"failed to draw {what}: {exc}") from exc


def rasterize(
    scene: VectorScene,
    *,
    labels: Sequence[RegionLabel] = (),
    footer_text: str | None = None,
    multiplier: float = 1.0,
    fonts: FontSet | None = None,
    label_style: LabelsConfig | None = None,
    font_weight: int = FONT_WEIGHT_REGULAR,
) -> bytes:
    rasterizer = Rasterizer(fonts, label_style, font_weight=font_weight)
    return rasterizer.rasterize(
        scene,
        labels=labels,
        footer_text=footer_text,
        multiplier=multiplier,
    )


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    try:
        image.save(buf, format="PNG")
    except (OSError, ValueError) as exc:
        raise RenderingError(f"failed to encode png: {exc}") from exc
    return buf.getvalue()

