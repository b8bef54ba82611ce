# -*- coding: utf-8 -*-
"""
backend/tests/shared/middleware/test_json_exception_middleware.py

JSONExceptionMiddleware: 500 JSON uniforme con request_id y X-Request-ID
en todas las respuestas.
"""

import httpx
import pytest
from fastapi import FastAPI

from app.shared.middleware import JSONExceptionMiddleware
from app.shared.utils.json_response import UTF8JSONResponse


@pytest.fixture
async def client():
    app = FastAPI(default_response_class=UTF8JSONResponse)
    app.add_middleware(JSONExceptionMiddleware)

    @app.get("/ok")
    async def ok():
        return {"mensaje": "Sustentación registrada"}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("fallo inesperado")

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def test_unhandled_error_is_json_500(client):
    resp = await client.get("/boom", headers={"X-Request-ID": "abc-1"})
    assert resp.status_code == 500
    assert resp.headers["content-type"] == "application/json; charset=utf-8"
    assert resp.headers["X-Request-ID"] == "abc-1"
    assert resp.json() == {
        "detail": {
            "error_code": "INTERNAL_SERVER_ERROR",
            "message": "Error interno del servidor",
            "request_id": "abc-1",
        }
    }


async def test_success_gets_generated_request_id(client):
    resp = await client.get("/ok")
    assert resp.status_code == 200
    assert resp.json() == {"mensaje": "Sustentación registrada"}
    assert len(resp.headers["X-Request-ID"]) == 16


async def test_correlation_id_header_is_honored(client):
    resp = await client.get("/ok", headers={"X-Correlation-ID": "corr-9"})
    assert resp.headers["X-Request-ID"] == "corr-9"

# Fin del archivo backend/tests/shared/middleware/test_json_exception_middleware.py
