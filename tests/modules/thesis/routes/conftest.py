# -*- coding: utf-8 -*-
"""
backend/tests/modules/thesis/routes/conftest.py

App de prueba para las rutas del módulo de tesis.

Monta solo el router de tesis (prefijo /api) con los handlers de errores
de dominio y overridea:
- get_db                   → sesión SQLite del test
- get_current_actor        → actor elegido con `api.as_(actor)`
- fábricas de servicios    → notificador en memoria y storage en tmp_path

Se usa httpx.AsyncClient + ASGITransport porque la sesión async vive en
el loop del test.

Fecha: 2026-02-03
"""

import datetime as dt

import httpx
import pytest
from fastapi import FastAPI, HTTPException, status

from app.shared.auth_context import get_current_actor
from app.shared.database.database import get_db
from app.shared.storage.storage_io import LocalDocumentStorage
from app.shared.utils.json_response import UTF8JSONResponse
from app.modules.thesis.routes import deps as thesis_deps
from app.modules.thesis.routes import get_thesis_router, register_thesis_exception_handlers
from app.modules.thesis.services import (
    ThesisCommandService,
    ThesisQueryService,
    ThesisWorkflowService,
)


class ThesisApi:
    """Cliente HTTP con el actor "logueado" intercambiable."""

    def __init__(self, client: httpx.AsyncClient, storage: LocalDocumentStorage):
        self.client = client
        self.storage = storage
        self.actor = None

    def as_(self, actor) -> httpx.AsyncClient:
        self.actor = actor
        return self.client


@pytest.fixture
def storage(tmp_path) -> LocalDocumentStorage:
    return LocalDocumentStorage(str(tmp_path))


@pytest.fixture
async def api(db, notifier, storage):
    app = FastAPI(title="Thesis Test App", default_response_class=UTF8JSONResponse)
    register_thesis_exception_handlers(app)
    app.include_router(get_thesis_router(), prefix="/api")

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        holder = ThesisApi(client, storage)

        async def _override_get_db():
            yield db

        async def _override_actor():
            if holder.actor is None:
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
            return holder.actor

        app.dependency_overrides[get_db] = _override_get_db
        app.dependency_overrides[get_current_actor] = _override_actor
        app.dependency_overrides[thesis_deps.get_thesis_workflow_service] = (
            lambda: ThesisWorkflowService(db, notifier=notifier)
        )
        app.dependency_overrides[thesis_deps.get_thesis_command_service] = (
            lambda: ThesisCommandService(db, notifier=notifier, storage=storage, max_document_size_bytes=1024 * 1024)
        )
        app.dependency_overrides[thesis_deps.get_thesis_query_service] = (
            lambda: ThesisQueryService(db, duracion_sustentacion=dt.timedelta(hours=2))
        )

        yield holder

        app.dependency_overrides.clear()

# Fin del archivo backend/tests/modules/thesis/routes/conftest.py
