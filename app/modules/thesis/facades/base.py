# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/base.py

Utilidades base compartidas por los facades de tesis.
Helpers de timestamps y operaciones transaccionales.

Runtime: AsyncSession only.

Fecha: 2026-02-03
"""

import datetime as dt
from typing import Awaitable, Callable, Optional, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.modules.thesis.facades.errors import ConcurrentModification, ThesisNotFound

T = TypeVar("T")


def now_utc() -> dt.datetime:
    """
    Retorna timestamp actual UTC.

    Centralizado para facilitar testing con mocks.
    """
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: Optional[dt.datetime]) -> Optional[dt.datetime]:
    """
    Normaliza un datetime a UTC aware.

    SQLite devuelve datetimes naive aunque la columna sea timezone=True;
    se asume que ya estaban en UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


async def commit_or_raise(db: AsyncSession, work: Callable[[], Awaitable[T]]) -> T:
    """
    Ejecuta work() dentro de un contexto transaccional.

    Aplica commit si work() tiene éxito.
    Aplica rollback y re-lanza si work() o el commit fallan: ninguna
    escritura parcial queda persistida.

    Args:
        db: Sesión SQLAlchemy async
        work: Corrutina a ejecutar dentro de la transacción

    Returns:
        Resultado de work()
    """
    try:
        result = await work()
        await db.commit()
        return result
    except Exception:
        await db.rollback()
        raise


async def get_thesis_for_update(db: AsyncSession, thesis_id: UUID, *, include_deleted: bool = False):
    """Obtiene la tesis con bloqueo pesimista o lanza ThesisNotFound."""
    from app.modules.thesis.repositories import ThesisRepository

    thesis = await ThesisRepository().get_for_update(db, thesis_id, include_deleted=include_deleted)
    if thesis is None:
        raise ThesisNotFound(thesis_id)
    return thesis


async def run_locked(
    db: AsyncSession,
    thesis_id: UUID,
    work: Callable[..., Awaitable[T]],
    *,
    include_deleted: bool = False,
) -> T:
    """
    Bloquea la tesis, ejecuta work(thesis) y confirma.

    Un conflicto de versión (version_id_col) al confirmar se reporta como
    ConcurrentModification; nada queda escrito.
    """
    async def _work() -> T:
        thesis = await get_thesis_for_update(db, thesis_id, include_deleted=include_deleted)
        return await work(thesis)

    try:
        return await commit_or_raise(db, _work)
    except StaleDataError as e:
        raise ConcurrentModification(thesis_id) from e


__all__ = [
    "now_utc",
    "as_utc",
    "commit_or_raise",
    "get_thesis_for_update",
    "run_locked",
]

# Fin del archivo backend/app/modules/thesis/facades/base.py
