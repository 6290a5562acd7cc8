"""Validation layer for config, fonts, and the region dataset."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .config import AppConfig
from .dataset import duplicate_region_ids, load_regions
from .errors import IntensityMapError
from .models import Region


@dataclass(slots=True)
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    infos: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_info(self, msg: str) -> None:
        self.infos.append(msg)


class Validator:
    """Top-level input and schema validator."""

    def __init__(self, cfg: AppConfig) -> None:
        self.cfg = cfg

    def run(self) -> ValidationReport:
        report = ValidationReport()
        self._validate_fonts(report)
        regions = self._validate_dataset(report)
        if regions:
            self._validate_regions(report, regions)
        return report

    def _validate_fonts(self, report: ValidationReport) -> None:
        for label, path in (
            ("regular", self.cfg.paths.font_regular),
            ("medium", self.cfg.paths.font_medium),
        ):
            if path is None:
                report.add_info(f"No {label} font configured; using Pillow's default font.")
            elif not path.exists():
                report.add_error(f"Missing {label} font file: {path}")
            else:
                report.add_info(f"Using {label} font {path}")

    def _validate_dataset(self, report: ValidationReport) -> tuple[Region, ...]:
        path = self.cfg.paths.dataset
        if not path.exists():
            report.add_error(f"Missing region dataset: {path} (set paths.dataset in the config)")
            return ()
        try:
            regions = load_regions(path)
        except IntensityMapError as exc:
            report.add_error(f"Failed loading region dataset '{path}' [{exc.kind}]: {exc}")
            return ()
        report.add_info(f"Loaded {len(regions)} regions from {path}")
        return regions

    def _validate_regions(self, report: ValidationReport, regions: tuple[Region, ...]) -> None:
        expected_count = self.cfg.dataset.expected_regions
        if expected_count and len(regions) != expected_count:
            report.add_warning(
                f"Expected {expected_count} regions but found {len(regions)}. "
                "Verify the dataset source."
            )
        duplicates = duplicate_region_ids(regions)
        if duplicates:
            report.add_warning(
                "Duplicate region ids share one intensity: " + _format_id_list(duplicates)
            )
        polygon_count = sum(len(region.polygons) for region in regions)
        report.add_info(f"Dataset holds {polygon_count} polygons across {len(regions)} regions")


def format_report_lines(report: ValidationReport) -> Iterable[str]:
    for info in report.infos:
        yield f"[INFO] {info}"
    for warning in report.warnings:
        yield f"[WARN] {warning}"
    for error in report.errors:
        yield f"[ERROR] {error}"
    if report.ok:
        yield "[OK] Validation completed with no errors."


def _format_id_list(values: list[int], limit: int = 12) -> str:
    if len(values) <= limit:
        return ", ".join(str(value) for value in values)
    shown = ", ".join(str(value) for value in values[:limit])
    return f"{shown}, ... (+{len(values) - limit} more)"
