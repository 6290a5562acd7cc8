"""Auto-fit rectilinear projection from lon/lat to canvas pixels."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable

from .models import LonLat, ViewBounds

DEFAULT_MARGIN = 0.1
DEFAULT_MIN_SPAN = 0.01

Projector = Callable[[float, float], tuple[float, float]]


@dataclass(frozen=True, slots=True)
class Projection:
    """Letterbox-fitted transform for one render.

    Longitude distances are scaled by cos(center latitude), a local flat-earth
    correction that only holds over a narrow latitude band. Pixel y grows
    downward, so latitude is inverted around the center.
    """

    canvas_width: float
    canvas_height: float
    margin: float
    center_lon: float
    center_lat: float
    center_x: float
    center_y: float
    lon_correction: float
    scale: float

    @classmethod
    def fit(
        cls,
        bounds: ViewBounds,
        canvas_width: float,
        canvas_height: float,
        *,
        margin: float = DEFAULT_MARGIN,
        min_span: float = DEFAULT_MIN_SPAN,
    ) -> Projection:
        if bounds.is_empty:
            raise ValueError("Cannot fit a projection to empty bounds")
        if not 0.0 <= margin < 0.5:
            raise ValueError(f"margin must be in [0, 0.5), got {margin}")
        if canvas_width <= 0 or canvas_height <= 0:
            raise ValueError("canvas dimensions must be positive")
        bounds = bounds.with_min_span(max(min_span, 1e-9))

        effective_width = canvas_width * (1.0 - 2 * margin)
        effective_height = canvas_height * (1.0 - 2 * margin)

        center_lon, center_lat = bounds.center
        lon_correction = math.cos(math.radians(center_lat))

        lon_span = bounds.width * lon_correction
        lat_span = bounds.height
        scale = min(effective_width / lon_span, effective_height / lat_span)

        return cls(
            canvas_width=float(canvas_width),
            canvas_height=float(canvas_height),
            margin=margin,
            center_lon=center_lon,
            center_lat=center_lat,
            center_x=canvas_width / 2.0,
            center_y=canvas_height / 2.0,
            lon_correction=lon_correction,
            scale=scale,
        )

    def project(self, lon: float, lat: float) -> tuple[float, float]:
        x = (lon - self.center_lon) * self.lon_correction * self.scale + self.center_x
        y = (self.center_lat - lat) * self.scale + self.center_y
        return (x, y)

    __call__ = project

    def project_ring(self, coords: Iterable[LonLat]) -> list[tuple[float, float]]:
        return [self.project(lon, lat) for lon, lat in coords]

    @property
    def drawing_area(self) -> tuple[float, float, float, float]:
        """Margin-adjusted (left, top, right, bottom) pixel rectangle."""
        return (
            self.canvas_width * self.margin,
            self.canvas_height * self.margin,
            self.canvas_width * (1.0 - self.margin),
            self.canvas_height * (1.0 - self.margin),
        )


def make_projector(
    bounds: ViewBounds,
    canvas_width: float,
    canvas_height: float,
    margin: float = DEFAULT_MARGIN,
    *,
    min_span: float = DEFAULT_MIN_SPAN,
) -> Projector:
    return Projection.fit(
        bounds,
        canvas_width,
        canvas_height,
        margin=margin,
        min_span=min_span,
    ).project
