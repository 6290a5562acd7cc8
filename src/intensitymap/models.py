"""Domain models shared across pipeline modules."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Polygon, shape

from .errors import GeometryShapeError

LonLat = tuple[float, float]
Ring = tuple[LonLat, ...]

MIN_LEVEL = 0
MAX_LEVEL = 7

_SUPPORTED_GEOMETRY_TYPES = ("Polygon", "MultiPolygon")


def _ring_coords(ring: Any) -> Ring:
    return tuple((float(coord[0]), float(coord[1])) for coord in ring.coords)


def _require_region_id(properties: Any, index: int) -> int:
    if not isinstance(properties, Mapping):
        raise GeometryShapeError(f"Feature #{index} has no properties mapping")
    raw = properties.get("id")
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise GeometryShapeError(f"Invalid ID format in GeoJSON feature #{index}: {raw!r}")
    if isinstance(raw, float) and (not math.isfinite(raw) or not raw.is_integer()):
        raise GeometryShapeError(f"Invalid ID format in GeoJSON feature #{index}: {raw!r}")
    return int(raw)


@dataclass(frozen=True, slots=True)
class Region:
    """One prefecture polygon keyed by its integer id."""

    id: int
    geometry: Polygon | MultiPolygon

    @classmethod
    def from_feature(cls, feature: Mapping[str, Any], index: int = 0) -> Region:
        region_id = _require_region_id(feature.get("properties"), index)
        geometry_raw = feature.get("geometry")
        if not isinstance(geometry_raw, Mapping):
            raise GeometryShapeError(f"Region {region_id} has no geometry")
        geometry_type = geometry_raw.get("type")
        if geometry_type not in _SUPPORTED_GEOMETRY_TYPES:
            raise GeometryShapeError(
                f"Region {region_id} has unsupported geometry type {geometry_type!r}"
            )
        try:
            geometry = shape(geometry_raw)
        except (GEOSException, TypeError, ValueError, IndexError) as exc:
            raise GeometryShapeError(f"Region {region_id} has invalid geometry: {exc}") from exc
        if geometry.is_empty:
            raise GeometryShapeError(f"Region {region_id} has empty geometry")
        return cls(id=region_id, geometry=geometry)

    @property
    def polygons(self) -> tuple[Polygon, ...]:
        if isinstance(self.geometry, MultiPolygon):
            return tuple(self.geometry.geoms)
        return (self.geometry,)

    @property
    def rings(self) -> Iterator[Ring]:
        """Every ring in source order: exterior then interiors, per polygon."""
        for polygon in self.polygons:
            yield from polygon_rings(polygon)


def polygon_rings(polygon: Polygon) -> Iterator[Ring]:
    yield _ring_coords(polygon.exterior)
    for interior in polygon.interiors:
        yield _ring_coords(interior)


@dataclass(frozen=True, slots=True)
class IntensityAssignment:
    """Per-request intensity level keyed by region id; unknown ids are level 0."""

    levels: Mapping[int, int] = field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, int]]) -> IntensityAssignment:
        levels: dict[int, int] = {}
        for region_id, level in pairs:
            levels[int(region_id)] = int(level)
        return cls(levels=levels)

    def level_of(self, region_id: int) -> int:
        return self.levels.get(region_id, 0)

    def is_active(self, region_id: int) -> bool:
        return self.level_of(region_id) > 0

    @property
    def active_ids(self) -> frozenset[int]:
        return frozenset(region_id for region_id, level in self.levels.items() if level > 0)


@dataclass(frozen=True, slots=True)
class ViewBounds:
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @classmethod
    def inverted(cls) -> ViewBounds:
        """Start value for a running min/max scan; empty until widened."""
        return cls(min_lon=180.0, min_lat=90.0, max_lon=-180.0, max_lat=-90.0)

    @property
    def is_empty(self) -> bool:
        return self.min_lon > self.max_lon or self.min_lat > self.max_lat

    @property
    def width(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def height(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def center(self) -> LonLat:
        return ((self.min_lon + self.max_lon) / 2.0, (self.min_lat + self.max_lat) / 2.0)

    @property
    def corners(self) -> tuple[LonLat, LonLat, LonLat, LonLat]:
        return (
            (self.min_lon, self.min_lat),
            (self.min_lon, self.max_lat),
            (self.max_lon, self.min_lat),
            (self.max_lon, self.max_lat),
        )

    def extend(self, lon: float, lat: float) -> ViewBounds:
        return ViewBounds(
            min_lon=min(self.min_lon, lon),
            min_lat=min(self.min_lat, lat),
            max_lon=max(self.max_lon, lon),
            max_lat=max(self.max_lat, lat),
        )

    def contains(self, lon: float, lat: float) -> bool:
        return self.min_lon <= lon <= self.max_lon and self.min_lat <= lat <= self.max_lat

    def with_min_span(self, min_span: float) -> ViewBounds:
        min_lon, max_lon = _ensure_min_span(self.min_lon, self.max_lon, min_span)
        min_lat, max_lat = _ensure_min_span(self.min_lat, self.max_lat, min_span)
        return ViewBounds(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_lon, self.min_lat, self.max_lon, self.max_lat)


def _ensure_min_span(start: float, end: float, min_span: float) -> tuple[float, float]:
    if end - start >= min_span:
        return (start, end)
    center = (start + end) / 2.0
    half = min_span / 2.0
    return (center - half, center + half)


@dataclass(frozen=True, slots=True)
class RenderOptions:
    multiplier: float = 1.0
    footer_text: str | None = None
    show_labels: bool = False
    font_weight: int = 400

    def canvas_size(self, base_width: int, base_height: int) -> tuple[int, int]:
        return (int(base_width * self.multiplier), int(base_height * self.multiplier))
