from __future__ import annotations

from shapely.geometry import box

from intensitymap.bounds import compute_bounds, dataset_bounds, resolve_view_bounds
from intensitymap.models import IntensityAssignment, Region, ViewBounds


def test_bounds_cover_only_active_region(regions) -> None:
    bounds = compute_bounds(regions, IntensityAssignment.from_pairs([(13, 5)]))
    assert bounds == ViewBounds(139.0, 35.0, 140.0, 36.0)


def test_bounds_contain_every_active_vertex(regions) -> None:
    intensities = IntensityAssignment.from_pairs([(13, 2), (27, 4)])
    bounds = compute_bounds(regions, intensities)
    for region in regions:
        if not intensities.is_active(region.id):
            continue
        for ring in region.rings:
            for lon, lat in ring:
                assert bounds.contains(lon, lat)
    assert bounds == ViewBounds(135.0, 34.0, 140.0, 36.0)


def test_multipolygon_parts_are_flattened(regions) -> None:
    bounds = compute_bounds(regions, IntensityAssignment.from_pairs([(47, 1)]))
    assert bounds == ViewBounds(124.0, 24.0, 128.0, 27.0)


def test_inactive_regions_never_influence_bounds(regions) -> None:
    intensities = IntensityAssignment.from_pairs([(13, 5), (1, 0)])
    before = compute_bounds(regions, intensities)

    widened = tuple(
        Region(id=region.id, geometry=box(100.0, 10.0, 160.0, 60.0)) if region.id == 1 else region
        for region in regions
    )
    after = compute_bounds(widened, intensities)

    assert before == after == ViewBounds(139.0, 35.0, 140.0, 36.0)


def test_no_active_region_yields_inverted_bounds(regions) -> None:
    bounds = compute_bounds(regions, IntensityAssignment())
    assert bounds.is_empty
    assert bounds == ViewBounds.inverted()


def test_resolve_falls_back_to_whole_dataset(regions) -> None:
    bounds = resolve_view_bounds(regions, IntensityAssignment())
    assert not bounds.is_empty
    assert bounds == dataset_bounds(regions) == ViewBounds(124.0, 24.0, 142.0, 44.0)


def test_resolve_keeps_active_bounds(regions) -> None:
    bounds = resolve_view_bounds(regions, IntensityAssignment.from_pairs([(1, 3)]))
    assert bounds == ViewBounds(141.0, 43.0, 142.0, 44.0)
