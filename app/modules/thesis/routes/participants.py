# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/routes/participants.py

Equipo de la tesis (coautor, asesor, coasesor):
- Responder invitación (aceptar / rechazar con motivo)
- Invitar a un participante (autor principal)
- Retirar a un participante (autor principal)

Fecha: 2026-02-03
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.shared.auth_context import Actor, get_current_actor
from app.modules.thesis.routes.deps import get_thesis_command_service
from app.modules.thesis.schemas import InvitationResponseIn, InvitationResponseRead, InviteParticipantIn
from app.modules.thesis.services import ThesisCommandService

router = APIRouter(tags=["tesis:participantes"])


@router.post(
    "/{thesis_id}/invitacion/respuesta",
    response_model=InvitationResponseRead,
    summary="Aceptar o rechazar una invitación",
)
async def respond_invitation(
    thesis_id: UUID,
    body: InvitationResponseIn,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    response = await svc.respond_invitation(thesis_id, actor=actor, aceptar=body.aceptar, motivo=body.motivo)
    return InvitationResponseRead.model_validate(response)


@router.post(
    "/{thesis_id}/participantes",
    status_code=status.HTTP_201_CREATED,
    summary="Invitar a un coautor, asesor o coasesor",
)
async def invite_participant(
    thesis_id: UUID,
    body: InviteParticipantIn,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    participant = await svc.invite_participant(thesis_id, actor=actor, rol=body.rol, user_id=body.user_id)
    return {
        "id": participant.id,
        "user_id": participant.user_id,
        "tipo": participant.tipo.value,
        "estado": participant.estado.value,
    }


@router.delete(
    "/{thesis_id}/participantes/{rol}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Retirar a un participante del equipo",
)
async def remove_participant(
    thesis_id: UUID,
    rol: str,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    await svc.remove_participant(thesis_id, actor=actor, rol=rol.upper())

# Fin del archivo backend/app/modules/thesis/routes/participants.py
