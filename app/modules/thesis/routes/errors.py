# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/routes/errors.py

Traducción de errores de dominio del módulo de tesis a respuestas HTTP.

    404  ThesisNotFound, DocumentNotFound
    403  UnauthorizedAction
    409  InvalidTransition, DuplicateEvaluation, ConcurrentModification
    422  PreconditionFailed, MissingObservations, InvalidJuror, ParticipantConflict

Cuerpo: {"detail": {"error_code", "message", "retryable", ...extra}}

Fecha: 2026-02-03
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status

from app.shared.utils.json_response import UTF8JSONResponse, json_response_utf8
from app.modules.thesis.facades.errors import (
    ConcurrentModification,
    DocumentNotFound,
    DuplicateEvaluation,
    InvalidJuror,
    InvalidTransition,
    MissingObservations,
    ParticipantConflict,
    PreconditionFailed,
    ThesisNotFound,
    ThesisWorkflowError,
    UnauthorizedAction,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ThesisNotFound, status.HTTP_404_NOT_FOUND),
    (DocumentNotFound, status.HTTP_404_NOT_FOUND),
    (UnauthorizedAction, status.HTTP_403_FORBIDDEN),
    (InvalidTransition, status.HTTP_409_CONFLICT),
    (DuplicateEvaluation, status.HTTP_409_CONFLICT),
    (ConcurrentModification, status.HTTP_409_CONFLICT),
    (PreconditionFailed, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (MissingObservations, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidJuror, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ParticipantConflict, status.HTTP_422_UNPROCESSABLE_ENTITY),
)


def status_for(exc: ThesisWorkflowError) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def thesis_error_handler(request: Request, exc: ThesisWorkflowError) -> UTF8JSONResponse:
    code = status_for(exc)
    logger.info(
        "thesis_error_response status=%s error_code=%s path=%s",
        code, exc.error_code, request.url.path,
    )
    headers = {"Retry-After": "1"} if exc.retryable else None
    return json_response_utf8(content={"detail": exc.to_dict()}, status_code=code, headers=headers)


def register_thesis_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ThesisWorkflowError, thesis_error_handler)


__all__ = ["STATUS_BY_ERROR", "status_for", "thesis_error_handler", "register_thesis_exception_handlers"]

# Fin del archivo backend/app/modules/thesis/routes/errors.py
