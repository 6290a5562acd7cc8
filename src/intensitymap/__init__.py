"""Render per-prefecture intensity maps of Japan as PNG images."""

from __future__ import annotations

from .errors import (
    DatasetError,
    GeometryShapeError,
    InputValidationError,
    IntensityMapError,
    RenderingError,
)
from .models import IntensityAssignment, Region, RenderOptions, ViewBounds
from .render import MapRenderer, render

__all__ = [
    "DatasetError",
    "GeometryShapeError",
    "InputValidationError",
    "IntensityAssignment",
    "IntensityMapError",
    "MapRenderer",
    "Region",
    "RenderOptions",
    "RenderingError",
    "ViewBounds",
    "render",
]
