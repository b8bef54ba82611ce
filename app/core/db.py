# -*- coding: utf-8 -*-
"""
backend/app/core/db.py

Fachada para la capa de acceso a datos (SQLAlchemy async). Envuelve
`app.shared.database` para exponer:

- engine / SessionLocal / Base
- get_async_session / get_db
- session_scope()
- check_database_health()
- create_all_tables(): DDL para entornos locales y tests

Fecha: 2026-02-03
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from app.shared.database.base import Base
from app.shared.database.database import (
    engine,
    SessionLocal,
    get_async_session,
    get_db,
    session_scope,
    check_database_health,
)


async def create_all_tables(bind: AsyncEngine = engine) -> None:
    """
    Crea las tablas registradas en Base.metadata.

    En producción el esquema lo gestionan las migraciones; esto es para
    desarrollo local (SQLite) y tests.
    """
    import app.modules.thesis.models  # noqa: F401  registra las tablas

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "get_db",
    "session_scope",
    "check_database_health",
    "create_all_tables",
]

# Fin del archivo backend/app/core/db.py
