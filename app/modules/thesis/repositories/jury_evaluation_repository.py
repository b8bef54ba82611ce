# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/repositories/jury_evaluation_repository.py

Repositorio async para evaluaciones del jurado.

Las evaluaciones se insertan a través del agregado (thesis.evaluaciones)
en services/workflow.py; aquí solo hay lecturas.

Fecha: 2026-02-03
"""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.thesis.models import JuryEvaluation


class JuryEvaluationRepository:

    async def list_by_thesis(
        self,
        session: AsyncSession,
        thesis_id: UUID,
        *,
        ronda: Optional[int] = None,
    ) -> Sequence[JuryEvaluation]:
        stmt = select(JuryEvaluation).where(JuryEvaluation.thesis_id == thesis_id)
        if ronda is not None:
            stmt = stmt.where(JuryEvaluation.ronda == ronda)
        stmt = stmt.order_by(JuryEvaluation.ronda, JuryEvaluation.created_at)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def exists(self, session: AsyncSession, jury_member_id: UUID, ronda: int) -> bool:
        stmt = select(JuryEvaluation.id).where(
            JuryEvaluation.jury_member_id == jury_member_id,
            JuryEvaluation.ronda == ronda,
        )
        result = await session.execute(stmt)
        return result.first() is not None


__all__ = ["JuryEvaluationRepository"]

# Fin del archivo backend/app/modules/thesis/repositories/jury_evaluation_repository.py
