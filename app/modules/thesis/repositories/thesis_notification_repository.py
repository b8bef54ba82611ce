# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/repositories/thesis_notification_repository.py

Bandeja de notificaciones in-app por usuario.

Fecha: 2026-02-03
"""

from __future__ import annotations

from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.thesis.models import ThesisNotification


class ThesisNotificationRepository:

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        *,
        only_unread: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[ThesisNotification]:
        stmt = select(ThesisNotification).where(ThesisNotification.user_id == user_id)
        if only_unread:
            stmt = stmt.where(ThesisNotification.leida.is_(False))
        stmt = stmt.order_by(desc(ThesisNotification.created_at)).offset(offset).limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def mark_read(self, session: AsyncSession, user_id: UUID, ids: Iterable[UUID]) -> int:
        """Marca como leídas; solo afecta notificaciones del propio usuario."""
        ids = list(ids)
        if not ids:
            return 0
        stmt = (
            update(ThesisNotification)
            .where(ThesisNotification.user_id == user_id, ThesisNotification.id.in_(ids))
            .values(leida=True)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return int(result.rowcount or 0)


__all__ = ["ThesisNotificationRepository"]

# Fin del archivo backend/app/modules/thesis/repositories/thesis_notification_repository.py
