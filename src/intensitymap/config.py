"""Typed configuration loader for `config.yaml`."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, cast

import yaml

DEFAULT_FOOTER = "Code available under the MIT License (GitHub: evacuate)."

_DEFAULT_SIZE_MULTIPLIERS = {"1": 1.0, "2": 2.0, "3": 4.0}
_FILL_RULES = {"evenodd"}


def _mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected mapping for '{field_name}'")
    return cast(Mapping[str, Any], value)


def _str(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected non-empty string for '{field_name}'")
    return value.strip()


def _int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected integer for '{field_name}'")
    return value


def _float(value: Any, field_name: str) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise ValueError(f"Expected float for '{field_name}'")


def _bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Expected bool for '{field_name}'")
    return value


def _int_pair(value: Any, field_name: str) -> tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"Expected [x, y] pair for '{field_name}'")
    return (_int(value[0], f"{field_name}[0]"), _int(value[1], f"{field_name}[1]"))


def _path_from_cfg(value: Any, field_name: str, root_dir: Path) -> Path:
    raw = _str(value, field_name)
    p = Path(raw)
    return p if p.is_absolute() else root_dir / p


def _optional_path_from_cfg(value: Any, field_name: str, root_dir: Path) -> Path | None:
    if value is None:
        return None
    return _path_from_cfg(value, field_name, root_dir)


@dataclass(frozen=True, slots=True)
class PathsConfig:
    dataset: Path
    font_regular: Path | None
    font_medium: Path | None
    logs_dir: Path

    @property
    def log_file(self) -> Path:
        return self.logs_dir / "intensitymap.log"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], root_dir: Path) -> PathsConfig:
        return cls(
            dataset=_path_from_cfg(raw.get("dataset", "data/japan.geojson"), "paths.dataset", root_dir),
            font_regular=_optional_path_from_cfg(
                raw.get("font_regular"), "paths.font_regular", root_dir
            ),
            font_medium=_optional_path_from_cfg(
                raw.get("font_medium"), "paths.font_medium", root_dir
            ),
            logs_dir=_path_from_cfg(raw.get("logs_dir", "build/logs"), "paths.logs_dir", root_dir),
        )


@dataclass(frozen=True, slots=True)
class DatasetConfig:
    cache: bool = True
    expected_regions: int = 47

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> DatasetConfig:
        expected = _int(raw.get("expected_regions", 47), "dataset.expected_regions")
        if expected < 0:
            raise ValueError("dataset.expected_regions must be >= 0")
        return cls(
            cache=_bool(raw.get("cache", True), "dataset.cache"),
            expected_regions=expected,
        )


@dataclass(frozen=True, slots=True)
class CanvasConfig:
    base_width: int = 1280
    base_height: int = 720
    margin: float = 0.1
    min_span_deg: float = 0.01
    size_multipliers: Mapping[str, float] = field(
        default_factory=lambda: dict(_DEFAULT_SIZE_MULTIPLIERS)
    )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> CanvasConfig:
        base_width = _int(raw.get("base_width", 1280), "canvas.base_width")
        base_height = _int(raw.get("base_height", 720), "canvas.base_height")
        margin = _float(raw.get("margin", 0.1), "canvas.margin")
        min_span_deg = _float(raw.get("min_span_deg", 0.01), "canvas.min_span_deg")
        if base_width <= 0 or base_height <= 0:
            raise ValueError("canvas.base_width and canvas.base_height must be > 0")
        if not 0.0 <= margin < 0.5:
            raise ValueError("canvas.margin must be >= 0 and < 0.5")
        if min_span_deg <= 0:
            raise ValueError("canvas.min_span_deg must be > 0")

        multipliers_raw = _mapping(
            raw.get("size_multipliers", _DEFAULT_SIZE_MULTIPLIERS), "canvas.size_multipliers"
        )
        multipliers: dict[str, float] = {}
        for key, value in multipliers_raw.items():
            multiplier = _float(value, f"canvas.size_multipliers.{key}")
            if multiplier <= 0:
                raise ValueError(f"canvas.size_multipliers.{key} must be > 0")
            multipliers[str(key)] = multiplier

        return cls(
            base_width=base_width,
            base_height=base_height,
            margin=margin,
            min_span_deg=min_span_deg,
            size_multipliers=multipliers,
        )


@dataclass(frozen=True, slots=True)
class StyleConfig:
    background: str = "#18181b"
    stroke_color: str = "#a1a1aa"
    stroke_width: float = 0.4
    fill_opacity: float = 0.8
    fill_rule: str = "evenodd"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> StyleConfig:
        fill_opacity = _float(raw.get("fill_opacity", 0.8), "style.fill_opacity")
        stroke_width = _float(raw.get("stroke_width", 0.4), "style.stroke_width")
        fill_rule = _str(raw.get("fill_rule", "evenodd"), "style.fill_rule").casefold()
        if not 0.0 <= fill_opacity <= 1.0:
            raise ValueError("style.fill_opacity must be between 0 and 1")
        if stroke_width < 0:
            raise ValueError("style.stroke_width must be >= 0")
        if fill_rule not in _FILL_RULES:
            raise ValueError("style.fill_rule must be one of: " + ", ".join(sorted(_FILL_RULES)))
        return cls(
            background=_str(raw.get("background", "#18181b"), "style.background"),
            stroke_color=_str(raw.get("stroke_color", "#a1a1aa"), "style.stroke_color"),
            stroke_width=stroke_width,
            fill_opacity=fill_opacity,
            fill_rule=fill_rule,
        )


@dataclass(frozen=True, slots=True)
class LabelsConfig:
    color: str = "#fafafa"
    font_size: int = 14
    offset_px: tuple[int, int] = (-5, 5)
    footer_offset_px: tuple[int, int] = (10, 14)
    default_footer: str = DEFAULT_FOOTER

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> LabelsConfig:
        font_size = _int(raw.get("font_size", 14), "labels.font_size")
        if font_size <= 0:
            raise ValueError("labels.font_size must be > 0")
        return cls(
            color=_str(raw.get("color", "#fafafa"), "labels.color"),
            font_size=font_size,
            offset_px=_int_pair(raw.get("offset_px", [-5, 5]), "labels.offset_px"),
            footer_offset_px=_int_pair(
                raw.get("footer_offset_px", [10, 14]), "labels.footer_offset_px"
            ),
            default_footer=_str(raw.get("default_footer", DEFAULT_FOOTER), "labels.default_footer"),
        )


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> ServerConfig:
        port = _int(raw.get("port", 8080), "server.port")
        if not 0 < port < 65536:
            raise ValueError("server.port must be between 1 and 65535")
        return cls(host=_str(raw.get("host", "0.0.0.0"), "server.host"), port=port)


@dataclass(frozen=True, slots=True)
class AppConfig:
    source_path: Path | None
    paths: PathsConfig
    dataset: DatasetConfig
    canvas: CanvasConfig
    style: StyleConfig
    labels: LabelsConfig
    server: ServerConfig

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any],
        source_path: Path | None = None,
        *,
        root_dir: Path | None = None,
    ) -> AppConfig:
        if root_dir is None:
            root_dir = source_path.parent.resolve() if source_path is not None else Path.cwd()
        return cls(
            source_path=source_path.resolve() if source_path is not None else None,
            paths=PathsConfig.from_mapping(_mapping(raw.get("paths"), "paths"), root_dir),
            dataset=DatasetConfig.from_mapping(_mapping(raw.get("dataset"), "dataset")),
            canvas=CanvasConfig.from_mapping(_mapping(raw.get("canvas"), "canvas")),
            style=StyleConfig.from_mapping(_mapping(raw.get("style"), "style")),
            labels=LabelsConfig.from_mapping(_mapping(raw.get("labels"), "labels")),
            server=ServerConfig.from_mapping(_mapping(raw.get("server"), "server")),
        )

    @classmethod
    def default(cls, root_dir: Path | None = None) -> AppConfig:
        return cls.from_mapping({}, root_dir=root_dir)


def load_config(path: str | Path) -> AppConfig:
    """Load and validate the YAML config file into typed settings."""
    cfg_path = Path(path).resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ValueError("Top-level config must be a YAML mapping")
    return AppConfig.from_mapping(cast(Mapping[str, Any], raw), cfg_path)
