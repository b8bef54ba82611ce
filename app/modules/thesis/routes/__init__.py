# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/routes/__init__.py

Router principal del módulo de tesis.
Compone subrouters de:
- queries (bandejas, historial, cruces, notificaciones)
- thesis_crud (registro, detalle, edición, eliminación)
- thesis_workflow (acciones del flujo, dictamen, resolución, evaluaciones)
- documents (documentos y firma)
- jury (conformación del jurado, progreso, requisitos)
- participants (invitaciones y equipo)

Fecha: 2026-02-03
"""
from fastapi import APIRouter

from .queries import router as queries_router
from .thesis_crud import router as thesis_crud_router
from .thesis_workflow import router as thesis_workflow_router
from .documents import router as documents_router
from .jury import router as jury_router
from .participants import router as participants_router
from .errors import register_thesis_exception_handlers


def get_thesis_router() -> APIRouter:
    """
    Devuelve el router del módulo con prefijo /tesis.

    Orden de ensamblado: las consultas con paths fijos van primero para que
    /{thesis_id} no las capture.
    """
    router = APIRouter(
        prefix="/tesis",
        tags=["tesis"],
        responses={404: {"description": "No encontrado"}},
    )

    router.include_router(queries_router)
    router.include_router(documents_router)
    router.include_router(thesis_crud_router)
    router.include_router(thesis_workflow_router)
    router.include_router(jury_router)
    router.include_router(participants_router)

    return router


__all__ = ["get_thesis_router", "register_thesis_exception_handlers"]

# Fin del archivo backend/app/modules/thesis/routes/__init__.py
