# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy 2 async (asyncpg en PostgreSQL, aiosqlite en tests / local).

Provee:
- build_engine(url, echo): fábrica de engines (la usan la app y los tests)
- engine (create_async_engine) y SessionLocal (async_sessionmaker)
- Dependencias FastAPI: get_async_session / get_db
- session_scope(): context manager fuera de FastAPI (jobs, notificaciones)
- check_database_health()

Notas:
- expire_on_commit=False: los objetos siguen legibles tras commit.
- En PostgreSQL se fija un statement_timeout por conexión (asyncpg).
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.shared.config import settings

logger = logging.getLogger(__name__)

DB_COMMAND_TIMEOUT_S: float = 10.0
DB_SESSION_STATEMENT_TIMEOUT_MS: int = 10000


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """
    Crea un AsyncEngine para `url`.

    - sqlite: StaticPool (una sola conexión compartida, necesaria para
      `:memory:`) y check_same_thread desactivado.
    - postgresql+asyncpg: pool de la app con timeouts a nivel de conexión.
    """
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        url,
        echo=echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=settings.db_pool_pre_ping,
        connect_args={
            "command_timeout": DB_COMMAND_TIMEOUT_S,
            "server_settings": {
                "statement_timeout": str(DB_SESSION_STATEMENT_TIMEOUT_MS),
                "application_name": settings.app_name,
            },
            "ssl": settings.db_sslmode,
        },
    )


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


engine = build_engine(settings.database_url, echo=settings.db_echo_sql)
SessionLocal = build_sessionmaker(engine)

logger.debug("[DB] engine listo (dialect=%s)", engine.dialect.name)


# ── Dependencias FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


# Alias usado por las rutas
get_db = get_async_session


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Sesión con commit al salir y rollback ante error (uso fuera de FastAPI).
    """
    async with SessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ── Health check
async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except Exception as e:
        logger.warning("[DB] health check falló: %s", e)
        return False


__all__ = [
    "build_engine",
    "build_sessionmaker",
    "engine",
    "SessionLocal",
    "get_async_session",
    "get_db",
    "session_scope",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
