# -*- coding: utf-8 -*-
"""
backend/app/core/logging.py

Fachada del módulo `app.shared.config.logging_config` para mantener un
punto de entrada único bajo `app.core`.

Fecha: 2026-02-03
"""

from typing import Literal

from app.shared.config.logging_config import setup_logging as _setup_logging


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain",
) -> None:
    """
    Configura el sistema de logging de la aplicación.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt: Formato de salida (plain, pretty, json).
    """
    _setup_logging(level=level, fmt=fmt)


def setup_logging_from_settings(settings) -> None:
    setup_logging(level=settings.log_level, fmt=settings.log_format)

# Fin del archivo backend/app/core/logging.py
