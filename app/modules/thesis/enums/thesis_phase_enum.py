# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/enums/thesis_phase_enum.py

Fase académica de la tesis. Avanza una sola vez:
PROYECTO → INFORME_FINAL (nunca retrocede).

Fecha: 2026-02-03
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class FaseTesis(StrEnum):
    PROYECTO = "PROYECTO"
    INFORME_FINAL = "INFORME_FINAL"

    __db_enum_name__ = "fase_tesis_enum"

    @classmethod
    def as_db_enum(cls, name: str = "fase_tesis_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


__all__ = ["FaseTesis"]

# Fin del archivo backend/app/modules/thesis/enums/thesis_phase_enum.py
