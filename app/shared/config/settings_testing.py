# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Determinista: logging moderado, SQLite en memoria (aiosqlite) y
notificaciones deshabilitadas.

Fecha: 2026-02-03
"""

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    # --- Identidad de entorno ---
    python_env: str = "test"

    # --- Logging en test: menos ruido ---
    log_level: str = "WARNING"
    log_format: str = "pretty"

    # --- Base de datos aislada ---
    db_url: str = "sqlite+aiosqlite:///:memory:"

    # --- Auth: clave fija para firmar tokens de prueba ---
    jwt_secret_key: SecretStr = SecretStr("test-secret-key-with-at-least-32-chars!")

    # --- Sin efectos externos ---
    notification_mode: str = "disabled"
    storage_base_dir: str = "./.pytest_storage"
    http_metrics_enabled: bool = False

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
