# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selección de la configuración por PYTHON_ENV (development | test |
production). La instancia se cachea: los tests que cambian el entorno
deben llamar a `get_settings.cache_clear()`.

Fecha: 2026-02-03
"""

import logging
import os
from functools import lru_cache
from typing import Dict, Type

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_testing import EnvTestingSettings
from .settings_prod import ProdSettings

logger = logging.getLogger(__name__)

SETTINGS_BY_ENV: Dict[str, Type[BaseAppSettings]] = {
    "development": DevSettings,
    "test": EnvTestingSettings,
    "production": ProdSettings,
}


def settings_class_for(env: str) -> Type[BaseAppSettings]:
    key = (env or "development").lower()
    try:
        return SETTINGS_BY_ENV[key]
    except KeyError:
        raise ValueError(
            f"PYTHON_ENV desconocido: {env!r} (usa {', '.join(SETTINGS_BY_ENV)})"
        ) from None


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Instancia la configuración del entorno actual y aplica los chequeos de
    seguridad (`_security_checks`). En producción un chequeo fallido
    impide arrancar (ValueError).
    """
    settings_cls = settings_class_for(os.getenv("PYTHON_ENV", "development"))
    settings = settings_cls()
    settings._security_checks()
    logger.debug("settings_loaded env=%s class=%s", settings.python_env, settings_cls.__name__)
    return settings


__all__ = ["SETTINGS_BY_ENV", "settings_class_for", "get_settings"]

# Fin del archivo backend/app/shared/config/config_loader.py
