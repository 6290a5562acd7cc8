"""Prefecture GeoJSON dataset loading."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Sequence

from .errors import DatasetError
from .models import Region

_LOGGER = logging.getLogger("intensitymap.dataset")

_CACHE_SIZE = 4


def parse_feature_collection(raw: Any, *, source: str = "<memory>") -> tuple[Region, ...]:
    """Convert a decoded FeatureCollection into regions, preserving feature order."""
    if not isinstance(raw, Mapping) or raw.get("type") != "FeatureCollection":
        raise DatasetError(f"Expected a GeoJSON FeatureCollection in {source}")
    features = raw.get("features")
    if not isinstance(features, list):
        raise DatasetError(f"FeatureCollection in {source} has no 'features' list")
    if not features:
        raise DatasetError(f"FeatureCollection in {source} contains no features")

    regions: list[Region] = []
    for idx, feature in enumerate(features):
        if not isinstance(feature, Mapping):
            raise DatasetError(f"Expected feature mapping at index {idx} in {source}")
        regions.append(Region.from_feature(feature, idx))
    return tuple(regions)


def load_regions(path: Path) -> tuple[Region, ...]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except FileNotFoundError as exc:
        raise DatasetError(f"Failed to read geojson: {path} not found") from exc
    except OSError as exc:
        raise DatasetError(f"Failed to read geojson: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DatasetError(f"Failed to unmarshal geojson {path}: {exc}") from exc
    regions = parse_feature_collection(raw, source=str(path))
    _LOGGER.info("Loaded %d regions from %s", len(regions), path)
    return regions


@lru_cache(maxsize=_CACHE_SIZE)
def _load_regions_for_key(resolved_path: str, mtime_ns: int, size: int) -> tuple[Region, ...]:
    return load_regions(Path(resolved_path))


def load_regions_cached(path: Path) -> tuple[Region, ...]:
    """Load through a process-wide cache keyed by path, mtime and size.

    Cached values are tuples of frozen regions and are never mutated, so
    concurrent renders share them safely. Editing the file changes the key.
    """
    try:
        stat = path.stat()
    except OSError:
        return load_regions(path)
    return _load_regions_for_key(str(path.resolve()), stat.st_mtime_ns, stat.st_size)


def cached_dataset_count() -> int:
    return _load_regions_for_key.cache_info().currsize


def clear_cache() -> None:
    _load_regions_for_key.cache_clear()


class RegionDataset:
    """File-backed region source used by the renderer and the service."""

    def __init__(self, path: Path, *, cache: bool = True) -> None:
        self.path = path
        self.cache = cache

    def load(self) -> tuple[Region, ...]:
        if self.cache:
            return load_regions_cached(self.path)
        return load_regions(self.path)


def duplicate_region_ids(regions: Sequence[Region]) -> list[int]:
    seen: set[int] = set()
    duplicates: set[int] = set()
    for region in regions:
        if region.id in seen:
            duplicates.add(region.id)
        seen.add(region.id)
    return sorted(duplicates)
