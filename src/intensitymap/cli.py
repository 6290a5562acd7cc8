"""CLI entrypoint for the intensity map renderer."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from .config import AppConfig, load_config
from .errors import InputValidationError, IntensityMapError
from .query import build_render_options, parse_intensity_payload
from .render import MapRenderer
from .util import ensure_directories, setup_logging, write_bytes, write_text
from .validate import Validator, format_report_lines

LOGGER = logging.getLogger("intensitymap.cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intensitymap",
        description="Render per-prefecture intensity maps of Japan.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", default="config.yaml", help="Path to YAML config.")
        p.add_argument("--verbose", action="store_true", help="Enable debug logs.")

    render_p = subparsers.add_parser("render", help="Render one map to a PNG file.")
    add_common(render_p)
    render_p.add_argument(
        "--scale",
        required=True,
        help='Intensity list as JSON, e.g. \'[{"id": 13, "scale": 5}]\'.',
    )
    render_p.add_argument("--size", default="1", help="Size class: 1, 2 or 3.")
    render_p.add_argument("--footer", default=None, help="Footer caption text.")
    render_p.add_argument(
        "--scale-text",
        action="store_true",
        help="Draw each active region's intensity level.",
    )
    render_p.add_argument(
        "--font-weight",
        type=int,
        choices=(400, 500),
        default=400,
        help="Label font weight.",
    )
    render_p.add_argument("--output", required=True, help="Output PNG path.")
    render_p.add_argument("--svg", default=None, help="Also write the vector scene as SVG.")

    serve_p = subparsers.add_parser("serve", help="Run the HTTP map service.")
    add_common(serve_p)
    serve_p.add_argument("--host", default=None, help="Bind host (overrides config).")
    serve_p.add_argument("--port", type=int, default=None, help="Bind port (overrides config).")

    validate_p = subparsers.add_parser("validate", help="Validate config, fonts and dataset.")
    add_common(validate_p)

    return parser


def _load_and_setup(args: argparse.Namespace) -> AppConfig:
    cfg = load_config(args.config)
    setup_logging(cfg.paths.log_file, verbose=args.verbose)
    ensure_directories([cfg.paths.logs_dir])
    return cfg


def _run_render(cfg: AppConfig, args: argparse.Namespace) -> int:
    try:
        intensities = parse_intensity_payload(args.scale)
    except InputValidationError as exc:
        LOGGER.error("Invalid input: %s", exc)
        return EXIT_INVALID_INPUT

    options = build_render_options(
        size_class=str(args.size),
        multipliers=cfg.canvas.size_multipliers,
        footer_text=args.footer,
        show_labels=bool(args.scale_text),
        font_weight=int(args.font_weight),
    )
    renderer = MapRenderer(cfg)
    try:
        regions = renderer.dataset().load()
        prepared = renderer.prepare(regions, intensities, options)
        if args.svg:
            svg_path = Path(args.svg)
            write_text(svg_path, prepared.scene.to_svg())
            LOGGER.info("Vector scene written to %s", svg_path)
        png = renderer.rasterize(prepared, options)
    except IntensityMapError as exc:
        LOGGER.error("Render failed [%s]: %s", exc.kind, exc)
        return EXIT_FAILURE

    output_path = Path(args.output)
    write_bytes(output_path, png)
    LOGGER.info("Map written to %s (%d bytes)", output_path, len(png))
    return EXIT_OK


def _run_validate(cfg: AppConfig) -> int:
    report = Validator(cfg).run()
    for line in format_report_lines(report):
        LOGGER.info(line)
    return EXIT_OK if report.ok else EXIT_FAILURE


def _run_serve(cfg: AppConfig, args: argparse.Namespace) -> int:
    from .server import run_server

    run_server(cfg, host=args.host, port=args.port)
    return EXIT_OK


def _dispatch(args: argparse.Namespace) -> int:
    cfg = _load_and_setup(args)
    command = str(args.command)
    if command == "render":
        return _run_render(cfg, args)
    if command == "validate":
        return _run_validate(cfg)
    if command == "serve":
        return _run_serve(cfg, args)
    raise ValueError(f"Unknown command: {command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return _dispatch(args)


if __name__ == "__main__":
    raise SystemExit(main())
