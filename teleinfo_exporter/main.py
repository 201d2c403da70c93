from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from prometheus_client import CollectorRegistry

from teleinfo_exporter import __version__
from teleinfo_exporter.core.config import Settings, get_settings
from teleinfo_exporter.metrics import TeleinfoCollector
from teleinfo_exporter.routers import health
from teleinfo_exporter.routers import metrics as api_metrics
from teleinfo_exporter.teleinfo import SampleCollector, default_metric_descriptors
from teleinfo_exporter.teleinfo.serial_port import open_serial_port

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def create_app(settings: Settings | None = None, stream: Any | None = None) -> FastAPI:
    """Build the exporter application.

    Args:
        settings: Exporter settings (None = read from the environment).
        stream: Already open byte stream (None = open the configured serial port).

    Returns:
        The FastAPI application with the sampler wired on ``app.state``.
    """
    settings = settings or get_settings()
    if stream is None:
        stream = open_serial_port(settings)

    sampler = SampleCollector(
        stream, descriptors=default_metric_descriptors(settings.metrics_namespace)
    )
    collector = TeleinfoCollector(sampler)
    registry = CollectorRegistry()
    registry.register(collector)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Serving Teleinfo metrics from {settings.serial_device}")
        yield
        close = getattr(stream, "close", None)
        if close is not None:
            close()
            logger.info(f"Closed {settings.serial_device}")

    app = FastAPI(
        title="Teleinfo Exporter",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.stream = stream
    app.state.sampler = sampler
    app.state.collector = collector
    app.state.registry = registry

    app.include_router(health.router, prefix="/health", tags=["Health"])
    app.include_router(api_metrics.router, tags=["Metrics"])
    return app
