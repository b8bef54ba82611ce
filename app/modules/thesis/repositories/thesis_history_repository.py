# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/repositories/thesis_history_repository.py

Lecturas del historial de estados (append-only; lo escribe
thesis_state_machine.apply_transition).

Fecha: 2026-02-03
"""

from __future__ import annotations

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.thesis.models import ThesisStatusHistory


class ThesisHistoryRepository:

    async def list_by_thesis(self, session: AsyncSession, thesis_id: UUID) -> Sequence[ThesisStatusHistory]:
        """Timeline en orden de ocurrencia (secuencia ascendente)."""
        stmt = (
            select(ThesisStatusHistory)
            .where(ThesisStatusHistory.thesis_id == thesis_id)
            .order_by(ThesisStatusHistory.secuencia)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


__all__ = ["ThesisHistoryRepository"]

# Fin del archivo backend/app/modules/thesis/repositories/thesis_history_repository.py
