# -*- coding: utf-8 -*-
"""
backend/tests/conftest.py

Config global de tests del backend de tesis.

- PYTHON_ENV=test ANTES de importar la app (SQLite en memoria, sin
  notificaciones reales, logging WARNING)
- Engine async SQLite (aiosqlite + StaticPool) con el esquema creado
  desde Base.metadata, uno por test
- Actores de prueba (estudiante, asesor, Mesa de Partes, admin, jurados)
- Notificador que registra los envíos en memoria

Fecha: 2026-02-03
"""

import datetime as dt
import os
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

import pytest

# -----------------------------------------------------------------------------
# 0) Entorno de pruebas (debe ir antes de cualquier import de `app`)
# -----------------------------------------------------------------------------
os.environ["PYTHON_ENV"] = "test"
os.environ["DB_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("NOTIFICATION_MODE", "disabled")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-chars!")
os.environ.setdefault("HTTP_METRICS_ENABLED", "false")

from app.shared.config.config_loader import get_settings  # noqa: E402

get_settings.cache_clear()

from app.core.db import create_all_tables  # noqa: E402
from app.shared.auth_context import Actor  # noqa: E402
from app.shared.database.database import build_engine, build_sessionmaker  # noqa: E402
from app.modules.thesis.enums import RolActor  # noqa: E402


# -----------------------------------------------------------------------------
# 1) Base de datos: SQLite async en memoria, esquema limpio por test
# -----------------------------------------------------------------------------
@pytest.fixture
async def engine():
    eng = build_engine("sqlite+aiosqlite:///:memory:")
    await create_all_tables(eng)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# -----------------------------------------------------------------------------
# 2) Reloj fijo: lunes 2026-03-02 10:00 UTC
# -----------------------------------------------------------------------------
@pytest.fixture
def now() -> dt.datetime:
    return dt.datetime(2026, 3, 2, 10, 0, tzinfo=dt.timezone.utc)


# -----------------------------------------------------------------------------
# 3) Actores
# -----------------------------------------------------------------------------
def make_actor(*roles, user_id: Optional[UUID] = None) -> Actor:
    return Actor.of(user_id or uuid4(), roles)


@pytest.fixture
def student() -> Actor:
    return make_actor(RolActor.ESTUDIANTE)


@pytest.fixture
def coauthor() -> Actor:
    return make_actor(RolActor.ESTUDIANTE)


@pytest.fixture
def advisor() -> Actor:
    return make_actor(RolActor.DOCENTE)


@pytest.fixture
def coadvisor() -> Actor:
    return make_actor(RolActor.DOCENTE)


@pytest.fixture
def registrar() -> Actor:
    return make_actor(RolActor.MESA_PARTES)


@pytest.fixture
def admin() -> Actor:
    return make_actor(RolActor.ADMIN)


@pytest.fixture
def outsider() -> Actor:
    return make_actor(RolActor.ESTUDIANTE)


@pytest.fixture
def jurors() -> dict:
    """Docentes para PRESIDENTE, VOCAL, SECRETARIO y ACCESITARIO."""
    return {
        "PRESIDENTE": make_actor(RolActor.DOCENTE),
        "VOCAL": make_actor(RolActor.DOCENTE),
        "SECRETARIO": make_actor(RolActor.DOCENTE),
        "ACCESITARIO": make_actor(RolActor.DOCENTE),
    }


# -----------------------------------------------------------------------------
# 4) Notificador en memoria
# -----------------------------------------------------------------------------
class RecordingNotifier:
    """Guarda (evento, destinatarios); con fail=True simula un proveedor caído."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[Tuple[object, List[UUID]]] = []

    async def notify(self, event, recipients, context=None) -> None:
        if self.fail:
            raise RuntimeError("proveedor de notificaciones no disponible")
        self.sent.append((event, list(recipients)))

    def tipos(self) -> List[str]:
        return [event.tipo for event, _ in self.sent]

    def recipients_of(self, tipo: str) -> List[UUID]:
        return [uid for event, rec in self.sent if event.tipo == tipo for uid in rec]


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> RecordingNotifier:
    return RecordingNotifier(fail=True)

# Fin del archivo backend/tests/conftest.py
