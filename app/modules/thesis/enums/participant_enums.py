# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/enums/participant_enums.py

Enums de participantes de una tesis:
- TipoAutor: AUTOR_PRINCIPAL | COAUTOR
- TipoAsesor: ASESOR | COASESOR
- TipoJurado: PRESIDENTE | VOCAL | SECRETARIO | ACCESITARIO
- EstadoParticipacion: PENDIENTE | ACEPTADO | RECHAZADO (autores y asesores)

Los jurados no se invitan: se asignan, por eso no tienen EstadoParticipacion.

Fecha: 2026-02-03
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class TipoAutor(StrEnum):
    AUTOR_PRINCIPAL = "AUTOR_PRINCIPAL"
    COAUTOR = "COAUTOR"

    __db_enum_name__ = "tipo_autor_enum"

    @classmethod
    def as_db_enum(cls, name: str = "tipo_autor_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


class TipoAsesor(StrEnum):
    ASESOR = "ASESOR"
    COASESOR = "COASESOR"

    __db_enum_name__ = "tipo_asesor_enum"

    @classmethod
    def as_db_enum(cls, name: str = "tipo_asesor_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


class TipoJurado(StrEnum):
    """PRESIDENTE, VOCAL y SECRETARIO votan; ACCESITARIO es suplente."""

    PRESIDENTE = "PRESIDENTE"
    VOCAL = "VOCAL"
    SECRETARIO = "SECRETARIO"
    ACCESITARIO = "ACCESITARIO"

    __db_enum_name__ = "tipo_jurado_enum"

    @classmethod
    def as_db_enum(cls, name: str = "tipo_jurado_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


class EstadoParticipacion(StrEnum):
    PENDIENTE = "PENDIENTE"
    ACEPTADO = "ACEPTADO"
    RECHAZADO = "RECHAZADO"

    __db_enum_name__ = "estado_participacion_enum"

    @classmethod
    def as_db_enum(cls, name: str = "estado_participacion_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


# Roles que cuentan para quórum y mayoría
VOTING_JUROR_TYPES = frozenset({TipoJurado.PRESIDENTE, TipoJurado.VOCAL, TipoJurado.SECRETARIO})


__all__ = [
    "TipoAutor",
    "TipoAsesor",
    "TipoJurado",
    "EstadoParticipacion",
    "VOTING_JUROR_TYPES",
]

# Fin del archivo backend/app/modules/thesis/enums/participant_enums.py
