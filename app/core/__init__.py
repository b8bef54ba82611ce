# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada unificada para componentes centrales del backend de tesis:
- Configuración (settings)
- Logging
- Motor de base de datos y sesiones

Envuelve la implementación en `app.shared.*` para ofrecer puntos de
entrada estables al resto de los módulos.

Fecha: 2026-02-03
"""

from .settings import get_settings, workflow_params
from .logging import setup_logging, setup_logging_from_settings
from .db import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    get_db,
    session_scope,
    check_database_health,
    create_all_tables,
)

__all__ = [
    "get_settings",
    "workflow_params",
    "setup_logging",
    "setup_logging_from_settings",
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "get_db",
    "session_scope",
    "check_database_health",
    "create_all_tables",
]

# Fin del archivo backend/app/core/__init__.py
