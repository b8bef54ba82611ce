# -*- coding: utf-8 -*-
"""
backend/app/core/settings.py

Fachada de configuración. Reexpone la carga de settings (Pydantic v2)
definida en `app.shared.config` y deriva los parámetros del flujo de tesis.

Fecha: 2026-02-03
"""

from typing import cast

from app.shared.config.config_loader import get_settings as _get_settings
from app.shared.config.settings_base import BaseAppSettings


def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración global de la aplicación (según PYTHON_ENV).
    """
    return cast(BaseAppSettings, _get_settings())


def workflow_params():
    """Plazos en días hábiles configurados (DIAS_HABILES_*)."""
    from app.modules.thesis.facades.thesis_state_machine import WorkflowParams

    return WorkflowParams.from_settings(get_settings())

# Fin del archivo backend/app/core/settings.py
