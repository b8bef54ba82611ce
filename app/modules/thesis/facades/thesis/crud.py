# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/thesis/crud.py

Operaciones CRUD de tesis: create, update (metadatos), soft delete, restore.
Incluye generación de código y whitelist de campos.

No escriben estado/ronda/fase: eso es exclusivo de apply_transition.

Transacciones: commit_or_raise / run_locked.
Runtime: AsyncSession only.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
import logging
import secrets
from typing import Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.auth_context import Actor
from app.modules.thesis.enums import (
    EstadoParticipacion,
    EstadoTesis,
    FaseTesis,
    RolActor,
    TipoAsesor,
    TipoAutor,
    is_editable,
)
from app.modules.thesis.facades.base import commit_or_raise, now_utc, run_locked
from app.modules.thesis.facades.errors import (
    InvalidTransition,
    ParticipantConflict,
    PreconditionFailed,
    UnauthorizedAction,
)
from app.modules.thesis.models import Thesis, ThesisAdvisor, ThesisAuthor

logger = logging.getLogger(__name__)

# Lista blanca de campos permitidos en update_metadata()
ALLOWED_UPDATE_FIELDS: Set[str] = {
    "titulo",
    "resumen",
    "palabras_clave",
}

MAX_CODE_ATTEMPTS = 5


def generate_codigo(now: Optional[dt.datetime] = None) -> str:
    """Código legible: TES-<año>-<6 hex>."""
    year = (now or now_utc()).year
    return f"TES-{year}-{secrets.token_hex(3).upper()}"


def normalize_keywords(palabras: Optional[Iterable[str]]) -> List[str]:
    vistas, resultado = set(), []
    for palabra in palabras or []:
        limpia = " ".join(str(palabra).split())
        if limpia and limpia.lower() not in vistas:
            vistas.add(limpia.lower())
            resultado.append(limpia)
    return resultado


def _require_title(titulo: Optional[str]) -> str:
    limpio = " ".join((titulo or "").split())
    if not limpio:
        raise PreconditionFailed("TITULO_REQUERIDO", "El título de la tesis es obligatorio")
    return limpio


async def create_thesis(
    db: AsyncSession,
    *,
    actor: Actor,
    titulo: str,
    asesor_id: UUID,
    resumen: Optional[str] = None,
    palabras_clave: Optional[Iterable[str]] = None,
    coautor_id: Optional[UUID] = None,
    coasesor_id: Optional[UUID] = None,
    now: Optional[dt.datetime] = None,
) -> Thesis:
    """
    Registra una tesis nueva en BORRADOR.

    Reglas de negocio:
    - Solo estudiantes; el creador queda como AUTOR_PRINCIPAL (ACEPTADO)
    - Asesor obligatorio; coautor y coasesor opcionales (invitados, PENDIENTE)
    - Una misma persona no puede ocupar dos roles
    - ronda_actual=0, fase PROYECTO, sin plazos

    Raises:
        UnauthorizedAction, ParticipantConflict, PreconditionFailed
    """
    if not actor.has_role(RolActor.ESTUDIANTE):
        raise UnauthorizedAction("Solo un estudiante puede registrar una tesis")

    titulo = _require_title(titulo)
    participantes = [actor.user_id, asesor_id] + [u for u in (coautor_id, coasesor_id) if u is not None]
    if len(set(participantes)) != len(participantes):
        raise ParticipantConflict("Una misma persona no puede ocupar dos roles en la tesis")

    now = now or now_utc()

    async def _work() -> Thesis:
        from app.modules.thesis.repositories import ThesisRepository

        repo = ThesisRepository()
        codigo = generate_codigo(now)
        for _ in range(MAX_CODE_ATTEMPTS - 1):
            if not await repo.codigo_exists(db, codigo):
                break
            codigo = generate_codigo(now)

        autores = [
            ThesisAuthor(
                user_id=actor.user_id,
                tipo=TipoAutor.AUTOR_PRINCIPAL,
                orden=1,
                estado=EstadoParticipacion.ACEPTADO,
                fecha_respuesta=now,
                created_at=now,
            )
        ]
        if coautor_id is not None:
            autores.append(ThesisAuthor(
                user_id=coautor_id,
                tipo=TipoAutor.COAUTOR,
                orden=2,
                estado=EstadoParticipacion.PENDIENTE,
                created_at=now,
            ))

        asesores = [ThesisAdvisor(
            user_id=asesor_id, tipo=TipoAsesor.ASESOR,
            estado=EstadoParticipacion.PENDIENTE, created_at=now,
        )]
        if coasesor_id is not None:
            asesores.append(ThesisAdvisor(
                user_id=coasesor_id, tipo=TipoAsesor.COASESOR,
                estado=EstadoParticipacion.PENDIENTE, created_at=now,
            ))

        thesis = Thesis(
            codigo=codigo,
            titulo=titulo,
            resumen=(resumen or "").strip() or None,
            palabras_clave=normalize_keywords(palabras_clave),
            estado=EstadoTesis.BORRADOR,
            fase_actual=FaseTesis.PROYECTO,
            ronda_actual=0,
            voucher_fisico_entregado=False,
            eliminada=False,
            created_at=now,
            updated_at=now,
            autores=autores,
            asesores=asesores,
            jurados=[],
            documentos=[],
            evaluaciones=[],
            historial=[],
        )
        db.add(thesis)
        await db.flush()
        logger.info("thesis_created thesis_id=%s codigo=%s", thesis.id, thesis.codigo)
        return thesis

    try:
        return await commit_or_raise(db, _work)
    except IntegrityError as e:
        if "codigo" in str(e.orig):
            raise PreconditionFailed("CODIGO_DUPLICADO", "No se pudo generar un código único, intente nuevamente") from e
        raise


async def update_metadata(
    db: AsyncSession,
    thesis_id: UUID,
    *,
    actor: Actor,
    now: Optional[dt.datetime] = None,
    **changes,
) -> Thesis:
    """
    Actualiza título, resumen y palabras clave.

    Solo autores, y solo mientras la tesis sea editable. Los campos fuera
    de ALLOWED_UPDATE_FIELDS se ignoran.
    """
    allowed = {k: v for k, v in changes.items() if k in ALLOWED_UPDATE_FIELDS}

    async def _work(thesis: Thesis) -> Thesis:
        if not any(a.user_id == actor.user_id for a in thesis.autores):
            raise UnauthorizedAction("Solo los autores pueden editar la tesis")
        if not is_editable(thesis.estado):
            raise InvalidTransition(
                "EDITAR", thesis.estado.value,
                f"La tesis no admite cambios en estado {thesis.estado.value}",
            )

        if "titulo" in allowed:
            thesis.titulo = _require_title(allowed["titulo"])
        if "resumen" in allowed:
            thesis.resumen = (allowed["resumen"] or "").strip() or None
        if "palabras_clave" in allowed:
            thesis.palabras_clave = normalize_keywords(allowed["palabras_clave"])

        thesis.updated_at = now or now_utc()
        logger.info("thesis_updated thesis_id=%s fields=%s", thesis.id, sorted(allowed))
        return thesis

    return await run_locked(db, thesis_id, _work)


async def soft_delete(
    db: AsyncSession,
    thesis_id: UUID,
    *,
    actor: Actor,
    now: Optional[dt.datetime] = None,
) -> Thesis:
    """
    Elimina lógicamente una tesis (eliminada=True). El estado no cambia.

    - Autor principal: solo en BORRADOR.
    - ADMIN: en cualquier estado, siempre que no esté ya eliminada.
    """
    is_admin = actor.has_role(RolActor.ADMIN)

    async def _work(thesis: Thesis) -> Thesis:
        if thesis.eliminada:
            raise PreconditionFailed("TESIS_YA_ELIMINADA", "La tesis ya está eliminada")
        if not is_admin:
            principal = any(
                a.user_id == actor.user_id and a.tipo == TipoAutor.AUTOR_PRINCIPAL for a in thesis.autores
            )
            if not principal:
                raise UnauthorizedAction("Solo el autor principal puede eliminar la tesis")
            if thesis.estado != EstadoTesis.BORRADOR:
                raise InvalidTransition(
                    "ELIMINAR", thesis.estado.value,
                    "Solo se puede eliminar una tesis en BORRADOR",
                )
        ts = now or now_utc()
        thesis.eliminada = True
        thesis.deleted_at = ts
        thesis.updated_at = ts
        logger.info(
            "thesis_soft_deleted thesis_id=%s estado=%s by_admin=%s",
            thesis.id, thesis.estado.value, is_admin,
        )
        return thesis

    return await run_locked(db, thesis_id, _work, include_deleted=is_admin)


async def restore(
    db: AsyncSession,
    thesis_id: UUID,
    *,
    actor: Actor,
    now: Optional[dt.datetime] = None,
) -> Thesis:
    """Revierte un soft delete (solo ADMIN)."""
    if not actor.has_role(RolActor.ADMIN):
        raise UnauthorizedAction("Solo un administrador puede restaurar tesis eliminadas")

    async def _work(thesis: Thesis) -> Thesis:
        if not thesis.eliminada:
            raise PreconditionFailed("TESIS_NO_ELIMINADA", "La tesis no está eliminada")
        thesis.eliminada = False
        thesis.deleted_at = None
        thesis.updated_at = now or now_utc()
        logger.info("thesis_restored thesis_id=%s", thesis.id)
        return thesis

    return await run_locked(db, thesis_id, _work, include_deleted=True)


__all__ = [
    "ALLOWED_UPDATE_FIELDS",
    "generate_codigo",
    "normalize_keywords",
    "create_thesis",
    "update_metadata",
    "soft_delete",
    "restore",
]

# Fin del archivo backend/app/modules/thesis/facades/thesis/crud.py
