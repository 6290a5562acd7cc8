from __future__ import annotations

import dataclasses

import pytest

from intensitymap.errors import GeometryShapeError
from intensitymap.models import IntensityAssignment, Region, RenderOptions, ViewBounds


def _polygon_feature(region_id):
    return {
        "type": "Feature",
        "properties": {"id": region_id},
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 0.0]]],
        },
    }


def test_region_rings_keep_exterior_then_holes(regions_by_id) -> None:
    rings = list(regions_by_id[13].rings)
    assert len(rings) == 2
    assert rings[0][0] == (139.0, 35.0)
    assert rings[1][0] == (139.4, 35.4)
    assert all(ring[0] == ring[-1] for ring in rings)


def test_multipolygon_region_exposes_every_part(regions_by_id) -> None:
    region = regions_by_id[47]
    assert len(region.polygons) == 2
    assert len(list(region.rings)) == 2


def test_integral_float_id_is_accepted(regions_by_id) -> None:
    assert 27 in regions_by_id


@pytest.mark.parametrize("bad_id", [None, "13", 1.5, True])
def test_region_requires_integer_id(bad_id) -> None:
    with pytest.raises(GeometryShapeError, match="Invalid ID format"):
        Region.from_feature(_polygon_feature(bad_id))


def test_region_rejects_unsupported_geometry() -> None:
    feature = {
        "type": "Feature",
        "properties": {"id": 3},
        "geometry": {"type": "Point", "coordinates": [139.0, 35.0]},
    }
    with pytest.raises(GeometryShapeError, match="unsupported geometry type"):
        Region.from_feature(feature)


def test_region_rejects_missing_geometry() -> None:
    with pytest.raises(GeometryShapeError, match="has no geometry"):
        Region.from_feature({"type": "Feature", "properties": {"id": 3}, "geometry": None})


def test_intensity_assignment_defaults_to_level_zero() -> None:
    intensities = IntensityAssignment.from_pairs([(13, 5), (14, 0), (13, 3)])
    assert intensities.level_of(13) == 3
    assert intensities.level_of(99) == 0
    assert intensities.is_active(13)
    assert not intensities.is_active(14)
    assert intensities.active_ids == frozenset({13})


def test_view_bounds_extend() -> None:
    bounds = ViewBounds.inverted().extend(139.0, 35.0).extend(140.0, 36.0)
    assert bounds == ViewBounds(139.0, 35.0, 140.0, 36.0)
    assert bounds.center == (139.5, 35.5)


def test_view_bounds_min_span_expands_around_center() -> None:
    point = ViewBounds(139.5, 35.5, 139.5, 35.5).with_min_span(0.01)
    assert point.width == pytest.approx(0.01)
    assert point.height == pytest.approx(0.01)
    assert point.center == pytest.approx((139.5, 35.5))


def test_view_bounds_are_immutable() -> None:
    bounds = ViewBounds(0.0, 0.0, 1.0, 1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        bounds.min_lon = 5.0  # type: ignore[misc]


@pytest.mark.parametrize(
    ("multiplier", "expected"),
    [(1.0, (1280, 720)), (2.0, (2560, 1440)), (4.0, (5120, 2880))],
)
def test_render_options_canvas_size(multiplier: float, expected: tuple[int, int]) -> None:
    assert RenderOptions(multiplier=multiplier).canvas_size(1280, 720) == expected
