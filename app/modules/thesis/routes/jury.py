# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/routes/jury.py

Conformación del jurado y seguimiento de evaluaciones:
- GET    /{thesis_id}/jurado                   jurado + evaluaciones de la ronda
- POST   /{thesis_id}/jurado                   asignar miembro (Mesa de Partes)
- DELETE /{thesis_id}/jurado/{juror_id}        dar de baja (lógica)
- POST   /{thesis_id}/jurado/reemplazo         accesitario reemplaza a un titular (ADMIN)
- GET    /{thesis_id}/evaluaciones/progreso    avance de la ronda
- GET    /{thesis_id}/requisitos               requisitos documentales del estado

Fecha: 2026-02-03
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.shared.auth_context import Actor, get_current_actor
from app.modules.thesis.routes.deps import get_thesis_command_service, get_thesis_query_service
from app.modules.thesis.schemas import (
    AssignJurorIn,
    EvaluationProgressRead,
    EvaluationRead,
    JuryPanelResponse,
    JurorRead,
    PromoteAlternateIn,
    RequirementCheckRead,
)
from app.modules.thesis.services import ThesisCommandService, ThesisQueryService

router = APIRouter(tags=["tesis:jurado"])


@router.get("/{thesis_id}/jurado", response_model=JuryPanelResponse, summary="Jurado y evaluaciones")
async def get_jury_panel(
    thesis_id: UUID,
    ronda: Optional[int] = Query(None, ge=0),
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    jurados, evaluaciones, progreso = await q.get_jury_panel(thesis_id, actor, ronda=ronda)
    return JuryPanelResponse(
        jurados=[JurorRead.model_validate(j) for j in jurados],
        evaluaciones=[EvaluationRead.model_validate(e) for e in evaluaciones],
        progreso=EvaluationProgressRead.model_validate(progreso),
    )


@router.post(
    "/{thesis_id}/jurado",
    response_model=JurorRead,
    status_code=status.HTTP_201_CREATED,
    summary="Asignar un miembro del jurado",
)
async def assign_juror(
    thesis_id: UUID,
    body: AssignJurorIn,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    juror = await svc.assign_juror(thesis_id, actor=actor, user_id=body.user_id, tipo=body.tipo)
    return JurorRead.model_validate(juror)


@router.delete(
    "/{thesis_id}/jurado/{juror_id}",
    response_model=JurorRead,
    summary="Dar de baja a un miembro del jurado",
)
async def remove_juror(
    thesis_id: UUID,
    juror_id: UUID,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    juror = await svc.remove_juror(thesis_id, juror_id, actor=actor)
    return JurorRead.model_validate(juror)


@router.post(
    "/{thesis_id}/jurado/reemplazo",
    response_model=JurorRead,
    summary="El accesitario reemplaza a un jurado titular ausente",
)
async def promote_alternate(
    thesis_id: UUID,
    body: PromoteAlternateIn,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    juror = await svc.promote_alternate(thesis_id, actor=actor, ausente_id=body.ausente_id)
    return JurorRead.model_validate(juror)


@router.get(
    "/{thesis_id}/evaluaciones/progreso",
    response_model=EvaluationProgressRead,
    summary="Avance de evaluaciones de la ronda",
)
async def evaluation_progress(
    thesis_id: UUID,
    ronda: Optional[int] = Query(None, ge=0),
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    return EvaluationProgressRead.model_validate(await q.evaluation_progress(thesis_id, actor, ronda))


@router.get(
    "/{thesis_id}/requisitos",
    response_model=RequirementCheckRead,
    summary="Requisitos documentales del estado actual",
)
async def check_requirements(
    thesis_id: UUID,
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    return RequirementCheckRead.model_validate(await q.check_requirements(thesis_id, actor))

# Fin del archivo backend/app/modules/thesis/routes/jury.py
