# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/base_models.py

Modelo base para los esquemas Pydantic v2 de la API de tesis.

- `from_attributes=True`: validación directa desde modelos ORM
- `str_strip_whitespace=True`: recorta espacios en campos de texto
- `populate_by_name=True`: permite usar nombres de campo además de alias

Fecha: 2026-02-03
"""

from pydantic import BaseModel, ConfigDict, Field


class UTF8SafeModel(BaseModel):
    """
    Base común de request/response. FastAPI serializa en UTF-8; los textos
    con tildes (títulos, observaciones) se devuelven tal cual.
    """
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


__all__ = ["UTF8SafeModel", "Field"]

# Fin del archivo backend/app/shared/utils/base_models.py
