"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from intensitymap.config import AppConfig
from intensitymap.dataset import clear_cache, parse_feature_collection
from intensitymap.models import Region


def _square(min_lon: float, min_lat: float, max_lon: float, max_lat: float) -> list[list[float]]:
    return [
        [min_lon, min_lat],
        [max_lon, min_lat],
        [max_lon, max_lat],
        [min_lon, max_lat],
        [min_lon, min_lat],
    ]


def _feature(region_id: Any, geometry: dict[str, Any]) -> dict[str, Any]:
    return {"type": "Feature", "properties": {"id": region_id}, "geometry": geometry}


# Hokkaido-ish square, Tokyo-ish square with a hole, Osaka-ish triangle,
# Okinawa-ish two-part multipolygon. Dataset order is 1, 13, 27, 47.
FEATURE_COLLECTION: dict[str, Any] = {
    "type": "FeatureCollection",
    "features": [
        _feature(1, {"type": "Polygon", "coordinates": [_square(141.0, 43.0, 142.0, 44.0)]}),
        _feature(
            13,
            {
                "type": "Polygon",
                "coordinates": [
                    _square(139.0, 35.0, 140.0, 36.0),
                    _square(139.4, 35.4, 139.6, 35.6),
                ],
            },
        ),
        _feature(
            27.0,
            {
                "type": "Polygon",
                "coordinates": [[[135.0, 34.0], [136.0, 34.0], [135.5, 35.0], [135.0, 34.0]]],
            },
        ),
        _feature(
            47,
            {
                "type": "MultiPolygon",
                "coordinates": [
                    [_square(127.0, 26.0, 128.0, 27.0)],
                    [_square(124.0, 24.0, 125.0, 25.0)],
                ],
            },
        ),
    ],
}


@pytest.fixture(autouse=True)
def _fresh_dataset_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def feature_collection() -> dict[str, Any]:
    return json.loads(json.dumps(FEATURE_COLLECTION))


@pytest.fixture
def regions(feature_collection: dict[str, Any]) -> tuple[Region, ...]:
    return parse_feature_collection(feature_collection)


@pytest.fixture
def regions_by_id(regions: tuple[Region, ...]) -> dict[int, Region]:
    return {region.id: region for region in regions}


@pytest.fixture
def dataset_path(tmp_path: Path, feature_collection: dict[str, Any]) -> Path:
    path = tmp_path / "data" / "japan.geojson"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(feature_collection), encoding="utf-8")
    return path


@pytest.fixture
def app_config(tmp_path: Path, dataset_path: Path) -> AppConfig:
    return AppConfig.from_mapping(
        {"paths": {"dataset": str(dataset_path), "logs_dir": str(tmp_path / "logs")}},
        root_dir=tmp_path,
    )


@pytest.fixture
def config_file(tmp_path: Path, dataset_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "paths:",
                "  dataset: data/japan.geojson",
                "  logs_dir: logs",
                "dataset:",
                "  expected_regions: 4",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return path
