# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/json_response.py

Respuestas JSON con charset UTF-8 explícito (títulos, nombres y mensajes
del flujo de tesis llevan tildes y eñes).

- UTF8JSONResponse: default_response_class de la app
- json_response_utf8: helper para exception handlers
- error_response: cuerpo de error uniforme {"detail": {"error_code", "message", ...}}

Fecha: 2026-02-03
"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


def json_response_utf8(
    content: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> UTF8JSONResponse:
    return UTF8JSONResponse(content=content, status_code=status_code, headers=headers)


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **extra: Any,
) -> UTF8JSONResponse:
    """
    Error con la misma forma que los errores de dominio de tesis, para que
    el frontend lea siempre `detail.error_code`.
    """
    detail = {"error_code": error_code, "message": message, **extra}
    return json_response_utf8({"detail": detail}, status_code=status_code, headers=headers)


__all__ = ["UTF8JSONResponse", "json_response_utf8", "error_response"]

# Fin del archivo backend/app/shared/utils/json_response.py
