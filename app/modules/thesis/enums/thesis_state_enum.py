# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/enums/thesis_state_enum.py

Enum: estado_tesis_enum
Estados del ciclo de vida académico de una tesis.

Flujo principal:
  BORRADOR → EN_REVISION → ASIGNANDO_JURADOS → EN_EVALUACION_JURADO
  → PROYECTO_APROBADO → INFORME_FINAL → EN_EVALUACION_INFORME
  → EN_SUSTENTACION → SUSTENTADA

Estados terminales: SUSTENTADA, ARCHIVADA, RECHAZADA.

📋 APROBADA se conserva solo para leer expedientes antiguos con informe
aprobado sin sustentación programada: ninguna acción entra ni sale de
ese estado. El flujo actual pasa directo de EN_EVALUACION_INFORME a
EN_SUSTENTACION.

Fecha: 2026-02-03
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class EstadoTesis(StrEnum):
    """
    Estados del ciclo de vida de una tesis.

    Valores:
    - BORRADOR             : Creada por el estudiante, editable
    - EN_REVISION          : Enviada a Mesa de Partes
    - OBSERVADA            : Observada por Mesa de Partes, editable
    - ASIGNANDO_JURADOS    : Documentos aprobados, conformando jurado
    - EN_EVALUACION_JURADO : Jurado evaluando el proyecto
    - OBSERVADA_JURADO     : Proyecto observado por el jurado
    - PROYECTO_APROBADO    : Proyecto aprobado, falta resolución
    - INFORME_FINAL        : Fase de informe final, editable
    - EN_EVALUACION_INFORME: Jurado evaluando el informe final
    - OBSERVADA_INFORME    : Informe observado por el jurado
    - APROBADA             : Registro antiguo (sin transiciones)
    - EN_SUSTENTACION      : Sustentación programada
    - SUSTENTADA           : Terminal
    - ARCHIVADA            : Terminal
    - RECHAZADA            : Terminal
    """

    BORRADOR = "BORRADOR"
    EN_REVISION = "EN_REVISION"
    OBSERVADA = "OBSERVADA"
    ASIGNANDO_JURADOS = "ASIGNANDO_JURADOS"
    EN_EVALUACION_JURADO = "EN_EVALUACION_JURADO"
    OBSERVADA_JURADO = "OBSERVADA_JURADO"
    PROYECTO_APROBADO = "PROYECTO_APROBADO"
    INFORME_FINAL = "INFORME_FINAL"
    EN_EVALUACION_INFORME = "EN_EVALUACION_INFORME"
    OBSERVADA_INFORME = "OBSERVADA_INFORME"
    APROBADA = "APROBADA"
    EN_SUSTENTACION = "EN_SUSTENTACION"
    SUSTENTADA = "SUSTENTADA"
    ARCHIVADA = "ARCHIVADA"
    RECHAZADA = "RECHAZADA"

    __db_enum_name__ = "estado_tesis_enum"

    @classmethod
    def as_db_enum(cls, name: str = "estado_tesis_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


__all__ = ["EstadoTesis"]

# Fin del archivo backend/app/modules/thesis/enums/thesis_state_enum.py
