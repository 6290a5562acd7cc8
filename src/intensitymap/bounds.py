"""Auto-fit view bounds over active regions."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .models import IntensityAssignment, Region, ViewBounds

_LOGGER = logging.getLogger("intensitymap.bounds")


def _region_bounds(region: Region, bounds: ViewBounds) -> ViewBounds:
    for ring in region.rings:
        for lon, lat in ring:
            bounds = bounds.extend(lon, lat)
    return bounds


def compute_bounds(regions: Iterable[Region], intensities: IntensityAssignment) -> ViewBounds:
    """Smallest bounds covering every vertex of regions with non-zero intensity.

    Inactive regions never widen the result. With no active region the
    returned bounds stay inverted (`is_empty`).
    """
    bounds = ViewBounds.inverted()
    for region in regions:
        if intensities.level_of(region.id) == 0:
            continue
        bounds = _region_bounds(region, bounds)
    return bounds


def dataset_bounds(regions: Iterable[Region]) -> ViewBounds:
    bounds = ViewBounds.inverted()
    for region in regions:
        bounds = _region_bounds(region, bounds)
    return bounds


def resolve_view_bounds(
    regions: Sequence[Region],
    intensities: IntensityAssignment,
) -> ViewBounds:
    """Active-region bounds, or the whole-dataset extent when nothing is active."""
    bounds = compute_bounds(regions, intensities)
    if not bounds.is_empty:
        return bounds
    _LOGGER.info("No active regions; fitting view to all %d regions.", len(regions))
    return dataset_bounds(regions)
