# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/exception_handler.py

Middleware que convierte cualquier excepción no manejada en un 500 JSON
con `request_id`. Los errores de dominio de tesis NO llegan aquí: los
traduce su exception handler (404/403/409/422).

Fecha: 2026-02-03
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.shared.utils.json_response import error_response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADERS = ("x-request-id", "x-correlation-id")


def get_request_id(request: Request) -> str:
    """request_id del proxy si viene en headers; si no, uno nuevo."""
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return uuid.uuid4().hex[:16]


class JSONExceptionMiddleware(BaseHTTPMiddleware):
    """
    Garantiza:
    - Content-Type: application/json en errores 500
    - error_code estable (INTERNAL_SERVER_ERROR)
    - X-Request-ID en todas las respuestas
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_exception request_id=%s method=%s path=%s error=%r",
                request_id, request.method, request.url.path, e,
            )
            return error_response(
                500,
                "INTERNAL_SERVER_ERROR",
                "Error interno del servidor",
                headers={"X-Request-ID": request_id},
                request_id=request_id,
            )

        response.headers.setdefault("X-Request-ID", request_id)
        return response


__all__ = ["JSONExceptionMiddleware", "get_request_id"]

# Fin del archivo backend/app/shared/middleware/exception_handler.py
