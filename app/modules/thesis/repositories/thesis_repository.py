# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/repositories/thesis_repository.py

Repositorio async para la raíz del agregado Tesis.

Responsabilidades:
- Lecturas por id / código (excluyendo eliminadas salvo que se pida)
- Lectura con bloqueo de fila para transiciones (SELECT ... FOR UPDATE)
- Listados por participante y por estado (bandeja de Mesa de Partes)
- Sustentaciones programadas en una ventana (chequeo de conflictos)

La lógica de negocio permanece en facades/servicios.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.thesis.enums import EstadoTesis
from app.modules.thesis.models import Thesis, ThesisAdvisor, ThesisAuthor, ThesisJuror


class ThesisRepository:
    """Acceso a datos de Thesis (colecciones cargadas con selectin)."""

    async def get_by_id(
        self,
        session: AsyncSession,
        thesis_id: UUID,
        *,
        include_deleted: bool = False,
    ) -> Optional[Thesis]:
        stmt = (
            select(Thesis)
            .where(Thesis.id == thesis_id)
            .execution_options(populate_existing=True)
        )
        if not include_deleted:
            stmt = stmt.where(Thesis.eliminada.is_(False))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_update(
        self,
        session: AsyncSession,
        thesis_id: UUID,
        *,
        include_deleted: bool = False,
    ) -> Optional[Thesis]:
        """
        Obtiene la tesis con bloqueo pesimista de fila.

        populate_existing fuerza a refrescar la instancia del identity map
        (y sus colecciones) con lo que hay en BD al tomar el lock.
        En SQLite FOR UPDATE se ignora; la concurrencia optimista
        (version_id_col) sigue protegiendo la escritura.
        """
        stmt = (
            select(Thesis)
            .where(Thesis.id == thesis_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        if not include_deleted:
            stmt = stmt.where(Thesis.eliminada.is_(False))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_codigo(self, session: AsyncSession, codigo: str) -> Optional[Thesis]:
        result = await session.execute(select(Thesis).where(Thesis.codigo == codigo))
        return result.scalar_one_or_none()

    async def codigo_exists(self, session: AsyncSession, codigo: str) -> bool:
        result = await session.execute(select(Thesis.id).where(Thesis.codigo == codigo))
        return result.first() is not None

    async def list_for_participant(
        self,
        session: AsyncSession,
        user_id: UUID,
        *,
        estados: Optional[Iterable[EstadoTesis]] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Thesis]:
        """
        Tesis donde el usuario es autor, asesor (incluye invitaciones
        pendientes) o jurado activo. Más recientes primero.
        """
        stmt = (
            select(Thesis)
            .where(
                Thesis.eliminada.is_(False),
                or_(
                    Thesis.autores.any(ThesisAuthor.user_id == user_id),
                    Thesis.asesores.any(ThesisAdvisor.user_id == user_id),
                    Thesis.jurados.any(
                        and_(ThesisJuror.user_id == user_id, ThesisJuror.is_active.is_(True))
                    ),
                ),
            )
            .order_by(desc(Thesis.updated_at))
            .offset(offset)
            .limit(limit)
        )
        if estados:
            stmt = stmt.where(Thesis.estado.in_(list(estados)))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_by_estados(
        self,
        session: AsyncSession,
        estados: Iterable[EstadoTesis],
        *,
        include_deleted: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Thesis]:
        """Bandeja por estado, la más antigua primero (orden de atención)."""
        stmt = (
            select(Thesis)
            .where(Thesis.estado.in_(list(estados)))
            .order_by(Thesis.updated_at)
            .offset(offset)
            .limit(limit)
        )
        if not include_deleted:
            stmt = stmt.where(Thesis.eliminada.is_(False))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_deleted(
        self,
        session: AsyncSession,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Thesis]:
        stmt = (
            select(Thesis)
            .where(Thesis.eliminada.is_(True))
            .order_by(desc(Thesis.deleted_at))
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_scheduled_defenses(
        self,
        session: AsyncSession,
        *,
        desde: dt.datetime,
        hasta: dt.datetime,
        exclude_id: Optional[UUID] = None,
    ) -> Sequence[Thesis]:
        """Tesis con sustentación programada que empieza en [desde, hasta)."""
        stmt = select(Thesis).where(
            Thesis.eliminada.is_(False),
            Thesis.estado.in_([EstadoTesis.EN_SUSTENTACION, EstadoTesis.SUSTENTADA]),
            Thesis.fecha_sustentacion.is_not(None),
            Thesis.fecha_sustentacion >= desde,
            Thesis.fecha_sustentacion < hasta,
        )
        if exclude_id is not None:
            stmt = stmt.where(Thesis.id != exclude_id)
        result = await session.execute(stmt.order_by(Thesis.fecha_sustentacion))
        return result.scalars().all()

    async def count_by_estado(self, session: AsyncSession) -> Dict[EstadoTesis, int]:
        stmt = (
            select(Thesis.estado, func.count(Thesis.id))
            .where(Thesis.eliminada.is_(False))
            .group_by(Thesis.estado)
        )
        result = await session.execute(stmt)
        return {EstadoTesis(estado): int(n) for estado, n in result.all()}


__all__ = ["ThesisRepository"]

# Fin del archivo backend/app/modules/thesis/repositories/thesis_repository.py
