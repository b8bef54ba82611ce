# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/routes/thesis_crud.py

Rutas CRUD de tesis:
- Registrar tesis (BORRADOR)
- Detalle con predicados derivados (plazos, acciones disponibles, requisitos)
- Editar metadatos (solo en estados editables)
- Eliminación lógica (autor principal, BORRADOR) y restauración (ADMIN)

Fecha: 2026-02-03
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.shared.auth_context import Actor, get_current_actor
from app.modules.thesis.routes.deps import get_thesis_command_service, get_thesis_query_service
from app.modules.thesis.schemas import (
    ThesisCreateIn,
    ThesisDetailResponse,
    ThesisRead,
    ThesisUpdateIn,
)
from app.modules.thesis.services import ThesisCommandService, ThesisQueryService

router = APIRouter(tags=["tesis:crud"])


@router.post(
    "",
    response_model=ThesisRead,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar una tesis (queda en BORRADOR)",
)
async def create_thesis(
    body: ThesisCreateIn,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    thesis = await svc.create_thesis(
        actor=actor,
        titulo=body.titulo,
        asesor_id=body.asesor_id,
        resumen=body.resumen,
        palabras_clave=body.palabras_clave,
        coautor_id=body.coautor_id,
        coasesor_id=body.coasesor_id,
    )
    return ThesisRead.model_validate(thesis)


@router.get(
    "/{thesis_id}",
    response_model=ThesisDetailResponse,
    summary="Detalle de la tesis con plazos y acciones disponibles",
)
async def get_thesis(
    thesis_id: UUID,
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    detail = await q.get_thesis(thesis_id, actor)
    return ThesisDetailResponse.model_validate(detail)


@router.patch(
    "/{thesis_id}",
    response_model=ThesisRead,
    summary="Editar título, resumen o palabras clave",
)
async def update_thesis(
    thesis_id: UUID,
    body: ThesisUpdateIn,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    thesis = await svc.update_thesis(
        thesis_id,
        actor=actor,
        titulo=body.titulo,
        resumen=body.resumen,
        palabras_clave=body.palabras_clave,
    )
    return ThesisRead.model_validate(thesis)


@router.delete(
    "/{thesis_id}",
    response_model=ThesisRead,
    summary="Eliminar (lógicamente) una tesis en BORRADOR",
)
async def delete_thesis(
    thesis_id: UUID,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    thesis = await svc.delete_thesis(thesis_id, actor=actor)
    return ThesisRead.model_validate(thesis)


@router.post(
    "/{thesis_id}/restaurar",
    response_model=ThesisRead,
    summary="Restaurar una tesis eliminada (ADMIN)",
)
async def restore_thesis(
    thesis_id: UUID,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    thesis = await svc.restore_thesis(thesis_id, actor=actor)
    return ThesisRead.model_validate(thesis)

# Fin del archivo backend/app/modules/thesis/routes/thesis_crud.py
