"""HTTP service exposing the map renderer."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response

from .config import AppConfig
from .dataset import cached_dataset_count
from .errors import InputValidationError, IntensityMapError
from .query import build_render_options, parse_bool_flag, parse_intensity_payload
from .render import MapRenderer

_LOGGER = logging.getLogger("intensitymap.server")


def create_app(cfg: AppConfig) -> FastAPI:
    app = FastAPI(
        title="Intensity Map API",
        description="Renders per-prefecture intensity maps of Japan as PNG images.",
        version="1.0.0",
    )
    renderer = MapRenderer(cfg)

    # Sync handlers run on the worker thread pool; renders share no mutable state.
    @app.get("/map")
    def get_map(
        scale: str | None = None,
        size: str | None = None,
        footer: str | None = None,
        scale_text: str | None = None,
    ) -> Response:
        try:
            intensities = parse_intensity_payload(scale)
        except InputValidationError as exc:
            _LOGGER.warning("Rejected map request: %s", exc)
            return PlainTextResponse(str(exc), status_code=400)

        options = build_render_options(
            size_class=size,
            multipliers=cfg.canvas.size_multipliers,
            footer_text=footer,
            show_labels=parse_bool_flag(scale_text),
        )
        try:
            png = renderer.render_dataset(intensities, options)
        except IntensityMapError as exc:
            _LOGGER.error("Map render failed [%s]: %s", exc.kind, exc)
            return PlainTextResponse(str(exc), status_code=500)
        return Response(content=png, media_type="image/png")

    @app.get("/health")
    def health() -> dict[str, object]:
        return {"status": "ok", "cached_datasets": cached_dataset_count()}

    return app


def run_server(cfg: AppConfig, *, host: str | None = None, port: int | None = None) -> None:
    import uvicorn

    bind_host = host or cfg.server.host
    bind_port = port or cfg.server.port
    _LOGGER.info("Starting server on %s:%d", bind_host, bind_port)
    uvicorn.run(create_app(cfg), host=bind_host, port=bind_port, log_config=None)
