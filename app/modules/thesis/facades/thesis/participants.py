# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/thesis/participants.py

Autores y asesores: invitaciones y su respuesta.

- respond_invitation: el coautor / asesor / coasesor acepta o rechaza
  (motivo obligatorio al rechazar).
- invite_participant: el autor principal invita a un coautor, asesor o
  coasesor (reemplaza una invitación rechazada).
- remove_participant: el autor principal retira a un invitado; si es un
  asesor, su carta de aceptación deja de ser la versión vigente.

Solo en BORRADOR u OBSERVADA: después del envío a revisión el equipo
queda congelado.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.auth_context import Actor
from app.modules.thesis.enums import (
    EstadoParticipacion,
    EstadoTesis,
    TipoAsesor,
    TipoAutor,
    TipoDocumento,
)
from app.modules.thesis.facades.base import now_utc, run_locked
from app.modules.thesis.facades.errors import (
    InvalidTransition,
    ParticipantConflict,
    PreconditionFailed,
    UnauthorizedAction,
)
from app.modules.thesis.facades.thesis.documents import retire_current_document
from app.modules.thesis.models import Thesis, ThesisAdvisor, ThesisAuthor

logger = logging.getLogger(__name__)

TEAM_EDITABLE_STATES = frozenset({EstadoTesis.BORRADOR, EstadoTesis.OBSERVADA})

INVITABLE_ROLES = ("COAUTOR", "ASESOR", "COASESOR")

_LETTER_FOR = {
    TipoAsesor.ASESOR: TipoDocumento.CARTA_ACEPTACION_ASESOR,
    TipoAsesor.COASESOR: TipoDocumento.CARTA_ACEPTACION_COASESOR,
}

Participant = Union[ThesisAuthor, ThesisAdvisor]


@dataclass(frozen=True)
class InvitationResponse:
    """Resultado de responder una invitación (para notificar al autor principal)."""
    thesis_id: UUID
    codigo: str
    rol: str
    aceptada: bool
    motivo: Optional[str]
    autor_principal_id: Optional[UUID]


def _principal_author_id(thesis: Thesis) -> Optional[UUID]:
    return next((a.user_id for a in thesis.autores if a.tipo == TipoAutor.AUTOR_PRINCIPAL), None)


def _require_team_editable(thesis: Thesis, operacion: str) -> None:
    if thesis.estado not in TEAM_EDITABLE_STATES:
        raise InvalidTransition(
            operacion, thesis.estado.value,
            "El equipo de la tesis solo se puede modificar en BORRADOR u OBSERVADA",
        )


def _require_principal(thesis: Thesis, actor: Actor) -> None:
    if _principal_author_id(thesis) != actor.user_id:
        raise UnauthorizedAction("Solo el autor principal puede gestionar a los participantes")


def _find_slot(thesis: Thesis, rol: str) -> Optional[Participant]:
    if rol == "COAUTOR":
        return next((a for a in thesis.autores if a.tipo == TipoAutor.COAUTOR), None)
    tipo = TipoAsesor(rol)
    return next((a for a in thesis.asesores if a.tipo == tipo), None)


def _normalize_role(rol: str) -> str:
    rol = str(rol).upper()
    if rol not in INVITABLE_ROLES:
        raise PreconditionFailed("ROL_NO_INVITABLE", f"Rol no invitable: {rol}", permitidos=list(INVITABLE_ROLES))
    return rol


async def respond_invitation(
    db: AsyncSession,
    thesis_id: UUID,
    *,
    actor: Actor,
    aceptar: bool,
    motivo: Optional[str] = None,
    now: Optional[dt.datetime] = None,
) -> InvitationResponse:
    """
    Acepta o rechaza la invitación pendiente del actor en la tesis.

    Raises:
        UnauthorizedAction: el actor no fue invitado.
        PreconditionFailed: MOTIVO_REQUERIDO / INVITACION_YA_RESPONDIDA.
        InvalidTransition: la tesis ya no está en BORRADOR/OBSERVADA.
    """
    motivo = (motivo or "").strip() or None
    if not aceptar and motivo is None:
        raise PreconditionFailed("MOTIVO_REQUERIDO", "Debe indicar el motivo del rechazo")

    async def _work(thesis: Thesis) -> InvitationResponse:
        invitaciones = [
            p for p in [*thesis.autores, *thesis.asesores]
            if p.user_id == actor.user_id and getattr(p, "tipo", None) != TipoAutor.AUTOR_PRINCIPAL
        ]
        if not invitaciones:
            raise UnauthorizedAction("No tienes una invitación en esta tesis")

        participante = next((p for p in invitaciones if p.estado == EstadoParticipacion.PENDIENTE), None)
        if participante is None:
            raise PreconditionFailed("INVITACION_YA_RESPONDIDA", "La invitación ya fue respondida")

        _require_team_editable(thesis, "RESPONDER_INVITACION")

        ts = now or now_utc()
        participante.estado = EstadoParticipacion.ACEPTADO if aceptar else EstadoParticipacion.RECHAZADO
        participante.motivo_rechazo = None if aceptar else motivo
        participante.fecha_respuesta = ts
        thesis.updated_at = ts

        logger.info(
            "thesis_invitation_answered thesis_id=%s rol=%s aceptada=%s",
            thesis.id, participante.tipo.value, aceptar,
        )
        return InvitationResponse(
            thesis_id=thesis.id,
            codigo=thesis.codigo,
            rol=participante.tipo.value,
            aceptada=aceptar,
            motivo=participante.motivo_rechazo,
            autor_principal_id=_principal_author_id(thesis),
        )

    return await run_locked(db, thesis_id, _work)


async def invite_participant(
    db: AsyncSession,
    thesis_id: UUID,
    *,
    actor: Actor,
    rol: str,
    user_id: UUID,
    now: Optional[dt.datetime] = None,
) -> Participant:
    """
    Invita a un coautor, asesor o coasesor.

    Un puesto ocupado por una invitación PENDIENTE o ACEPTADA no se
    reemplaza; una RECHAZADA sí.
    """
    rol = _normalize_role(rol)

    async def _work(thesis: Thesis) -> Participant:
        _require_principal(thesis, actor)
        _require_team_editable(thesis, "INVITAR_PARTICIPANTE")

        ocupados = {
            p.user_id for p in [*thesis.autores, *thesis.asesores]
            if p.estado != EstadoParticipacion.RECHAZADO
        }
        if user_id in ocupados:
            raise ParticipantConflict("La persona ya participa en la tesis")

        actual = _find_slot(thesis, rol)
        if actual is not None:
            if actual.estado != EstadoParticipacion.RECHAZADO:
                raise ParticipantConflict(f"El puesto de {rol} ya está asignado")
            if isinstance(actual, ThesisAuthor):
                thesis.autores.remove(actual)
            else:
                thesis.asesores.remove(actual)
                retire_current_document(thesis, _LETTER_FOR[actual.tipo])

        ts = now or now_utc()
        if rol == "COAUTOR":
            nuevo: Participant = ThesisAuthor(
                user_id=user_id, tipo=TipoAutor.COAUTOR, orden=2,
                estado=EstadoParticipacion.PENDIENTE, created_at=ts,
            )
            thesis.autores.append(nuevo)
        else:
            nuevo = ThesisAdvisor(
                user_id=user_id, tipo=TipoAsesor(rol),
                estado=EstadoParticipacion.PENDIENTE, created_at=ts,
            )
            thesis.asesores.append(nuevo)

        thesis.updated_at = ts
        await db.flush()
        logger.info("thesis_participant_invited thesis_id=%s rol=%s", thesis.id, rol)
        return nuevo

    return await run_locked(db, thesis_id, _work)


async def remove_participant(
    db: AsyncSession,
    thesis_id: UUID,
    *,
    actor: Actor,
    rol: str,
    now: Optional[dt.datetime] = None,
) -> None:
    """Retira al coautor, asesor o coasesor de la tesis."""
    rol = _normalize_role(rol)

    async def _work(thesis: Thesis) -> None:
        _require_principal(thesis, actor)
        _require_team_editable(thesis, "RETIRAR_PARTICIPANTE")

        actual = _find_slot(thesis, rol)
        if actual is None:
            raise PreconditionFailed("PARTICIPANTE_NO_ENCONTRADO", f"La tesis no tiene {rol}")

        if isinstance(actual, ThesisAuthor):
            thesis.autores.remove(actual)
        else:
            thesis.asesores.remove(actual)
            retire_current_document(thesis, _LETTER_FOR[actual.tipo])

        thesis.updated_at = now or now_utc()
        logger.info("thesis_participant_removed thesis_id=%s rol=%s", thesis.id, rol)

    await run_locked(db, thesis_id, _work)


__all__ = [
    "TEAM_EDITABLE_STATES",
    "INVITABLE_ROLES",
    "InvitationResponse",
    "respond_invitation",
    "invite_participant",
    "remove_participant",
]

# Fin del archivo backend/app/modules/thesis/facades/thesis/participants.py
