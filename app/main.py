# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada del backend de gestión de tesis.

- Configuración vía app.core.settings (pydantic-settings, según PYTHON_ENV)
- Logging con dictConfig (json en producción)
- Observabilidad Prometheus (/metrics)
- Middleware JSON para errores no manejados (request_id)
- Handlers de errores de dominio de tesis (404/403/409/422)
- Health en /health, API en /api/tesis

Fecha: 2026-02-03
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(dotenv_path=_ENV_PATH, override=False)

import anyio
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from app.core.settings import get_settings
from app.core.logging import setup_logging_from_settings
from app.core.db import create_all_tables, engine
from app.observability.prom import setup_observability
from app.shared.middleware import JSONExceptionMiddleware, RequestLoggingMiddleware
from app.shared.utils.json_response import UTF8JSONResponse, json_response_utf8

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    # En producción el esquema lo gestionan las migraciones
    if settings.is_dev or settings.is_test or settings.is_sqlite:
        await create_all_tables()
        logger.info("db_schema_ready dialect=%s", engine.dialect.name)

    logger.info("🟢 Backend de tesis iniciado (env=%s)", settings.python_env)
    try:
        yield
    finally:
        with anyio.CancelScope(shield=True):
            await engine.dispose()
        logger.info("🔴 Backend de tesis apagado.")


def _configure_cors(app_instance: FastAPI, settings) -> None:
    origins = settings.get_cors_origins()
    wildcard = origins == ["*"]
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # "*" con credenciales es inválido en navegadores
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
        max_age=600,
    )
    logger.info("cors_configured origins=%s credentials=%s", origins, not wildcard)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging_from_settings(settings)

    app = FastAPI(
        title=settings.app_name,
        description="API del flujo de tesis: registro, revisión, jurado, informe final y sustentación",
        version=settings.app_version,
        lifespan=lifespan,
        default_response_class=UTF8JSONResponse,
        openapi_tags=[
            {"name": "tesis", "description": "Ciclo de vida de la tesis"},
            {"name": "health", "description": "Estado del servicio"},
        ],
    )

    # El orden real de ejecución de middlewares es inverso al registro:
    # CORS queda como el más externo.
    app.add_middleware(RequestLoggingMiddleware)
    setup_observability(app, http_metrics=settings.http_metrics_enabled)
    app.add_middleware(JSONExceptionMiddleware)
    _configure_cors(app, settings)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return json_response_utf8(
            content={"detail": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    from app.modules.thesis.routes import get_thesis_router, register_thesis_exception_handlers
    from app.routes import router as main_router

    register_thesis_exception_handlers(app)
    app.include_router(main_router)
    app.include_router(get_thesis_router(), prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("app.main:app", host=_settings.app_host, port=_settings.app_port, reload=_settings.is_dev)

# Fin del archivo backend/app/main.py
