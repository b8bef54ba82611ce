# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/routes/deps.py

Dependencias inyectables para los servicios del módulo de tesis.
Los tests pueden overridear `get_db` y `get_current_actor`, o directamente
estas fábricas (p. ej. para inyectar un notificador falso).

Fecha: 2026-02-03
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.database import get_db
from app.modules.thesis.services import (
    ThesisCommandService,
    ThesisQueryService,
    ThesisWorkflowService,
)


async def get_thesis_workflow_service(
    db: AsyncSession = Depends(get_db),
) -> ThesisWorkflowService:
    return ThesisWorkflowService(db)


async def get_thesis_command_service(
    db: AsyncSession = Depends(get_db),
) -> ThesisCommandService:
    return ThesisCommandService(db)


async def get_thesis_query_service(
    db: AsyncSession = Depends(get_db),
) -> ThesisQueryService:
    return ThesisQueryService(db)


def page_params(limit: int, offset: int):
    """Acota la paginación a los límites configurados."""
    from app.core.settings import get_settings

    settings = get_settings()
    limit = max(1, min(limit or settings.page_size_default, settings.page_size_max))
    return limit, max(0, offset)

# Fin del archivo backend/app/modules/thesis/routes/deps.py
