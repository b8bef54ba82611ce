# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/thesis/jury.py

Conformación del jurado (Mesa de Partes) y reemplazo por accesitario.

- assign_juror / remove_juror: solo en ASIGNANDO_JURADOS. La baja es
  lógica (is_active=False) para no perder evaluaciones ya registradas.
- promote_alternate: override de ADMIN; el accesitario asume el rol del
  jurado ausente. No cambia el estado ni escribe historial.

La verificación "exactamente un PRESIDENTE, VOCAL y SECRETARIO" se hace
en CONFIRMAR_JURADOS (máquina de estados); aquí solo se impide duplicar.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.auth_context import Actor
from app.modules.thesis.enums import (
    EstadoParticipacion,
    EstadoTesis,
    RolActor,
    TipoJurado,
    VOTING_JUROR_TYPES,
    is_terminal,
)
from app.modules.thesis.facades.base import now_utc, run_locked
from app.modules.thesis.facades.errors import (
    InvalidJuror,
    InvalidTransition,
    ParticipantConflict,
    PreconditionFailed,
    UnauthorizedAction,
)
from app.modules.thesis.models import Thesis, ThesisJuror

logger = logging.getLogger(__name__)

# Estados con jurado ya conformado en los que cabe reemplazar a un miembro
PANEL_STATES = frozenset({
    EstadoTesis.ASIGNANDO_JURADOS,
    EstadoTesis.EN_EVALUACION_JURADO,
    EstadoTesis.OBSERVADA_JURADO,
    EstadoTesis.PROYECTO_APROBADO,
    EstadoTesis.INFORME_FINAL,
    EstadoTesis.EN_EVALUACION_INFORME,
    EstadoTesis.OBSERVADA_INFORME,
    EstadoTesis.EN_SUSTENTACION,
})


def _require_registrar(actor: Actor) -> None:
    if not actor.has_role(RolActor.MESA_PARTES):
        raise UnauthorizedAction("Solo Mesa de Partes puede conformar el jurado")


def _require_assigning(thesis: Thesis, operacion: str) -> None:
    if thesis.estado != EstadoTesis.ASIGNANDO_JURADOS:
        raise InvalidTransition(
            operacion, thesis.estado.value,
            "El jurado solo se modifica mientras la tesis está en ASIGNANDO_JURADOS",
        )


def _active_juror(thesis: Thesis, juror_id: UUID) -> ThesisJuror:
    juror = next((j for j in thesis.jurados if j.id == juror_id and j.is_active), None)
    if juror is None:
        raise InvalidJuror(f"El jurado {juror_id} no es un miembro activo de la tesis")
    return juror


async def assign_juror(
    db: AsyncSession,
    thesis_id: UUID,
    *,
    actor: Actor,
    user_id: UUID,
    tipo: TipoJurado,
    now: Optional[dt.datetime] = None,
) -> ThesisJuror:
    """
    Asigna un docente al jurado.

    Reglas:
    - No puede ser autor ni asesor de la tesis
    - No puede estar ya en el jurado activo
    - Un solo miembro activo por rol votante; a lo sumo un ACCESITARIO

    Raises:
        UnauthorizedAction, InvalidTransition, ParticipantConflict
    """
    tipo = TipoJurado(tipo)
    _require_registrar(actor)

    async def _work(thesis: Thesis) -> ThesisJuror:
        _require_assigning(thesis, "ASIGNAR_JURADO")

        autores_asesores = {
            p.user_id for p in [*thesis.autores, *thesis.asesores]
            if p.estado != EstadoParticipacion.RECHAZADO
        }
        if user_id in autores_asesores:
            raise ParticipantConflict("Un autor o asesor de la tesis no puede integrar su jurado")

        activos = [j for j in thesis.jurados if j.is_active]
        if any(j.user_id == user_id for j in activos):
            raise ParticipantConflict("El docente ya integra el jurado de esta tesis")
        if any(j.tipo == tipo for j in activos):
            raise ParticipantConflict(f"El rol {tipo.value} ya está asignado")

        juror = ThesisJuror(
            user_id=user_id,
            tipo=tipo,
            is_active=True,
            fecha_asignacion=now or now_utc(),
        )
        thesis.jurados.append(juror)
        thesis.updated_at = now or now_utc()
        await db.flush()
        logger.info("thesis_juror_assigned thesis_id=%s tipo=%s", thesis.id, tipo.value)
        return juror

    return await run_locked(db, thesis_id, _work)


async def remove_juror(
    db: AsyncSession,
    thesis_id: UUID,
    juror_id: UUID,
    *,
    actor: Actor,
    now: Optional[dt.datetime] = None,
) -> ThesisJuror:
    """Da de baja (lógica) a un jurado mientras se conforma el panel."""
    _require_registrar(actor)

    async def _work(thesis: Thesis) -> ThesisJuror:
        _require_assigning(thesis, "RETIRAR_JURADO")
        juror = _active_juror(thesis, juror_id)
        ts = now or now_utc()
        juror.is_active = False
        juror.fecha_baja = ts
        thesis.updated_at = ts
        logger.info("thesis_juror_removed thesis_id=%s tipo=%s", thesis.id, juror.tipo.value)
        return juror

    return await run_locked(db, thesis_id, _work)


async def promote_alternate(
    db: AsyncSession,
    thesis_id: UUID,
    *,
    actor: Actor,
    ausente_id: UUID,
    now: Optional[dt.datetime] = None,
) -> ThesisJuror:
    """
    Promueve al ACCESITARIO para reemplazar a un jurado votante ausente.

    El accesitario toma el tipo del ausente (y empieza a votar); el
    ausente queda inactivo. Sus evaluaciones previas se conservan pero ya
    no cuentan para la mayoría.
    """
    if not actor.has_role(RolActor.ADMIN):
        raise UnauthorizedAction("Solo un administrador puede promover al accesitario")

    async def _work(thesis: Thesis) -> ThesisJuror:
        if is_terminal(thesis.estado) or thesis.estado not in PANEL_STATES:
            raise InvalidTransition(
                "PROMOVER_ACCESITARIO", thesis.estado.value,
                "No hay un jurado vigente que reemplazar",
            )

        ausente = _active_juror(thesis, ausente_id)
        if ausente.tipo not in VOTING_JUROR_TYPES:
            raise InvalidJuror("Solo se reemplaza a un jurado votante (PRESIDENTE, VOCAL o SECRETARIO)")

        accesitario = next(
            (j for j in thesis.jurados if j.is_active and j.tipo == TipoJurado.ACCESITARIO),
            None,
        )
        if accesitario is None:
            raise PreconditionFailed("SIN_ACCESITARIO", "La tesis no tiene un accesitario activo")

        ts = now or now_utc()
        ausente.is_active = False
        ausente.fecha_baja = ts
        accesitario.tipo = ausente.tipo
        accesitario.reemplaza_a_id = ausente.id
        thesis.updated_at = ts

        logger.info(
            "thesis_alternate_promoted thesis_id=%s tipo=%s",
            thesis.id, accesitario.tipo.value,
        )
        return accesitario

    return await run_locked(db, thesis_id, _work)


__all__ = [
    "PANEL_STATES",
    "assign_juror",
    "remove_juror",
    "promote_alternate",
]

# Fin del archivo backend/app/modules/thesis/facades/thesis/jury.py
