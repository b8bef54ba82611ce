# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/repositories/thesis_document_repository.py

Repositorio async para documentos del expediente (ThesisDocument).

Fecha: 2026-02-03
"""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.thesis.enums import TipoDocumento
from app.modules.thesis.models import ThesisDocument


class ThesisDocumentRepository:

    async def get_by_id(self, session: AsyncSession, document_id: UUID) -> Optional[ThesisDocument]:
        result = await session.execute(select(ThesisDocument).where(ThesisDocument.id == document_id))
        return result.scalar_one_or_none()

    async def list_by_thesis(
        self,
        session: AsyncSession,
        thesis_id: UUID,
        *,
        tipo: Optional[TipoDocumento] = None,
        only_current: bool = False,
    ) -> Sequence[ThesisDocument]:
        """
        Documentos de una tesis agrupables por tipo; dentro de cada tipo,
        la versión más reciente primero.
        """
        stmt = select(ThesisDocument).where(ThesisDocument.thesis_id == thesis_id)
        if tipo is not None:
            stmt = stmt.where(ThesisDocument.tipo == tipo)
        if only_current:
            stmt = stmt.where(ThesisDocument.es_version_actual.is_(True))
        stmt = stmt.order_by(ThesisDocument.tipo, desc(ThesisDocument.version))
        result = await session.execute(stmt)
        return result.scalars().all()


__all__ = ["ThesisDocumentRepository"]

# Fin del archivo backend/app/modules/thesis/repositories/thesis_document_repository.py
