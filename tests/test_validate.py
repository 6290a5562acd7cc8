from __future__ import annotations

import json
from pathlib import Path

from intensitymap.config import AppConfig
from intensitymap.validate import Validator, format_report_lines


def _config(tmp_path: Path, **paths) -> AppConfig:
    return AppConfig.from_mapping({"paths": paths}, root_dir=tmp_path)


def test_count_mismatch_is_a_warning(app_config) -> None:
    report = Validator(app_config).run()
    assert report.ok
    assert any("Expected 47 regions but found 4" in msg for msg in report.warnings)
    assert any("5 polygons across 4 regions" in msg for msg in report.infos)


def test_duplicate_ids_are_reported(tmp_path: Path, feature_collection) -> None:
    feature_collection["features"].append(feature_collection["features"][1])
    path = tmp_path / "dup.geojson"
    path.write_text(json.dumps(feature_collection), encoding="utf-8")
    report = Validator(_config(tmp_path, dataset=str(path))).run()
    assert any("Duplicate region ids" in msg and "13" in msg for msg in report.warnings)


def test_missing_font_is_an_error(tmp_path: Path, dataset_path: Path) -> None:
    cfg = _config(tmp_path, dataset=str(dataset_path), font_medium="fonts/medium.ttf")
    report = Validator(cfg).run()
    assert not report.ok
    assert report.errors == [f"Missing medium font file: {tmp_path / 'fonts' / 'medium.ttf'}"]


def test_broken_dataset_is_an_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.geojson"
    path.write_text('{"type": "FeatureCollection", "features": []}', encoding="utf-8")
    report = Validator(_config(tmp_path, dataset=str(path))).run()
    assert not report.ok
    assert "[dataset]" in report.errors[0]


def test_report_lines(app_config) -> None:
    lines = list(format_report_lines(Validator(app_config).run()))
    assert lines[-1] == "[OK] Validation completed with no errors."
    assert any(line.startswith("[WARN] ") for line in lines)
    assert any(line.startswith("[INFO] ") for line in lines)


def test_missing_dataset_points_at_config_key(tmp_path: Path) -> None:
    report = Validator(AppConfig.default(root_dir=tmp_path)).run()
    assert not report.ok
    assert report.errors == [
        f"Missing region dataset: {tmp_path / 'data' / 'japan.geojson'} "
        "(set paths.dataset in the config)"
    ]


def test_repository_config_documents_dataset_source() -> None:
    text = (Path(__file__).resolve().parents[1] / "config.yaml").read_text(encoding="utf-8")
    assert "properties.id" in text
    assert "dataofjapan/land" in text
