# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Utilidades compartidas: modelos base pydantic, días hábiles y respuestas
JSON UTF-8.

Fecha: 2026-02-03
"""

from .base_models import UTF8SafeModel, Field
from .business_days import (
    is_business_day,
    add_business_days,
    business_days_between,
    is_past_deadline,
)
from .json_response import UTF8JSONResponse, json_response_utf8

__all__ = [
    "UTF8SafeModel",
    "Field",
    "is_business_day",
    "add_business_days",
    "business_days_between",
    "is_past_deadline",
    "UTF8JSONResponse",
    "json_response_utf8",
]

# Fin del archivo backend/app/shared/utils/__init__.py
