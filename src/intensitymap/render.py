"""Map rendering pipeline: bounds, projection, scene, raster."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Sequence

from .bounds import resolve_view_bounds
from .config import AppConfig
from .dataset import RegionDataset
from .errors import DatasetError
from .models import IntensityAssignment, Region, RenderOptions, ViewBounds
from .projection import Projection
from .rasterize import FontSet, Rasterizer, RegionLabel, build_region_labels
from .scene import VectorScene, compose_scene

_LOGGER = logging.getLogger("intensitymap.render")


@dataclass(frozen=True, slots=True)
class PreparedRender:
    bounds: ViewBounds
    projection: Projection
    scene: VectorScene
    labels: tuple[RegionLabel, ...]


class MapRenderer:
    """Deterministic renderer for one intensity map PNG."""

    def __init__(self, cfg: AppConfig) -> None:
        self.cfg = cfg

    @property
    def fonts(self) -> FontSet:
        return FontSet(regular=self.cfg.paths.font_regular, medium=self.cfg.paths.font_medium)

    def dataset(self) -> RegionDataset:
        return RegionDataset(self.cfg.paths.dataset, cache=self.cfg.dataset.cache)

    def prepare(
        self,
        regions: Sequence[Region],
        intensities: IntensityAssignment,
        options: RenderOptions,
    ) -> PreparedRender:
        if not regions:
            raise DatasetError("No regions available to render")
        width, height = options.canvas_size(self.cfg.canvas.base_width, self.cfg.canvas.base_height)
        bounds = resolve_view_bounds(regions, intensities)
        projection = Projection.fit(
            bounds,
            width,
            height,
            margin=self.cfg.canvas.margin,
            min_span=self.cfg.canvas.min_span_deg,
        )
        scene = compose_scene(
            regions,
            intensities,
            projection,
            width,
            height,
            multiplier=options.multiplier,
            style=self.cfg.style,
        )
        labels: tuple[RegionLabel, ...] = ()
        if options.show_labels:
            labels = tuple(build_region_labels(regions, intensities, projection))
        return PreparedRender(bounds=bounds, projection=projection, scene=scene, labels=labels)

    def render(
        self,
        regions: Sequence[Region],
        intensities: IntensityAssignment,
        options: RenderOptions,
    ) -> bytes:
        started = time.perf_counter()
        prepared = self.prepare(regions, intensities, options)
        png = self.rasterize(prepared, options)
        _LOGGER.debug(
            "Rendered %dx%d map (%d active regions, bounds=%s) in %.1f ms",
            prepared.scene.width,
            prepared.scene.height,
            len(intensities.active_ids),
            prepared.bounds.as_tuple(),
            (time.perf_counter() - started) * 1000.0,
        )
        return png

    def rasterize(self, prepared: PreparedRender, options: RenderOptions) -> bytes:
        rasterizer = Rasterizer(self.fonts, self.cfg.labels, font_weight=options.font_weight)
        return rasterizer.rasterize(
            prepared.scene,
            labels=prepared.labels,
            footer_text=options.footer_text,
            multiplier=options.multiplier,
        )

    def render_dataset(self, intensities: IntensityAssignment, options: RenderOptions) -> bytes:
        return self.render(self.dataset().load(), intensities, options)


def render(
    regions: Sequence[Region],
    intensities: IntensityAssignment,
    options: RenderOptions,
    *,
    cfg: AppConfig | None = None,
) -> bytes:
    return MapRenderer(cfg or AppConfig.default()).render(regions, intensities, options)
