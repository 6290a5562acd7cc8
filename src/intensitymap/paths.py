"""Polygon rings to move/line/close path data."""

from __future__ import annotations

from typing import Any, Iterator

from shapely.geometry import MultiPolygon, Polygon

from .models import polygon_rings
from .projection import Projection

PixelPoint = tuple[float, float]


def _iter_polygons(geometry: Any) -> Iterator[Polygon]:
    if isinstance(geometry, MultiPolygon):
        yield from geometry.geoms
    elif isinstance(geometry, Polygon):
        yield geometry
    else:
        raise TypeError(f"Unsupported geometry type: {getattr(geometry, 'geom_type', type(geometry))}")


def ring_to_path(points: list[PixelPoint]) -> str:
    parts: list[str] = []
    for idx, (x, y) in enumerate(points):
        if idx == 0:
            parts.append(f"M{x:.1f} {y:.1f}")
        else:
            parts.append(f" L{x:.1f} {y:.1f}")
    parts.append(" Z")
    return "".join(parts)


def build_paths(geometry: Polygon | MultiPolygon, projection: Projection) -> list[str]:
    """One closed path per ring, every vertex projected, source order kept."""
    paths: list[str] = []
    for polygon in _iter_polygons(geometry):
        for ring in polygon_rings(polygon):
            paths.append(ring_to_path(projection.project_ring(ring)))
    return paths


def build_region_path(geometry: Polygon | MultiPolygon, projection: Projection) -> str:
    return " ".join(build_paths(geometry, projection))

