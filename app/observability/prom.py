# -*- coding: utf-8 -*-
"""
backend/app/observability/prom.py

Observabilidad Prometheus del backend de tesis.

Incluye:
- Middleware HTTP para conteo y latencia por ruta/estado
- Endpoint /metrics compatible con Prometheus (pull model)
- Soporte multiproceso (PROMETHEUS_MULTIPROC_DIR)

El label `path` es la plantilla de la ruta (/tesis/{thesis_id}), nunca el
path concreto: los ids no entran en las series.

Fecha: 2026-02-03
"""
from __future__ import annotations

import os
from time import perf_counter
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from prometheus_client import (
    CollectorRegistry, multiprocess, generate_latest, CONTENT_TYPE_LATEST,
    Counter, Histogram,
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "http_request_latency_seconds",
    "Latency per request (s)",
    ["method", "path", "status"],
)

UNMATCHED_PATH = "__unmatched__"


def route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_PATH


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Instrumenta peticiones HTTP por método, plantilla de ruta y status."""

    async def dispatch(self, request, call_next):
        if request.url.path == "/metrics":
            return await call_next(request)

        start = perf_counter()
        status = "500"
        try:
            resp = await call_next(request)
            status = str(resp.status_code)
            return resp
        finally:
            elapsed = perf_counter() - start
            path = route_template(request)
            REQUEST_LATENCY.labels(request.method, path, status).observe(elapsed)
            REQUEST_COUNT.labels(request.method, path, status).inc()


def _build_registry() -> Optional[CollectorRegistry]:
    """CollectorRegistry multiproceso si PROMETHEUS_MULTIPROC_DIR está definido."""
    if os.environ.get("PROMETHEUS_MULTIPROC_DIR"):
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return registry
    return None


def mount_metrics(app: FastAPI, path: str = "/metrics") -> None:
    registry = _build_registry()

    @app.get(path, include_in_schema=False)
    def metrics():
        data = generate_latest(registry) if registry else generate_latest()
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)


def setup_observability(app: FastAPI, *, http_metrics: bool = True) -> None:
    """Agrega el middleware HTTP (opcional) y monta /metrics."""
    if http_metrics:
        app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)


__all__ = ["PrometheusMiddleware", "route_template", "mount_metrics", "setup_observability"]

# Fin del archivo backend/app/observability/prom.py
