# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/enums/evaluation_enums.py

Enums de evaluación y sustentación:
- ResultadoEvaluacion: veredicto de cada jurado y del dictamen
- ModalidadSustentacion: PRESENCIAL | VIRTUAL | MIXTA

Fecha: 2026-02-03
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class ResultadoEvaluacion(StrEnum):
    APROBADO = "APROBADO"
    OBSERVADO = "OBSERVADO"

    __db_enum_name__ = "resultado_evaluacion_enum"

    @classmethod
    def as_db_enum(cls, name: str = "resultado_evaluacion_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


class ModalidadSustentacion(StrEnum):
    PRESENCIAL = "PRESENCIAL"
    VIRTUAL = "VIRTUAL"
    MIXTA = "MIXTA"

    __db_enum_name__ = "modalidad_sustentacion_enum"

    @classmethod
    def as_db_enum(cls, name: str = "modalidad_sustentacion_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


__all__ = ["ResultadoEvaluacion", "ModalidadSustentacion"]

# Fin del archivo backend/app/modules/thesis/enums/evaluation_enums.py
