# -*- coding: utf-8 -*-
"""
backend/app/shared/database/base.py

Base declarativa y convención de nombres para modelos ORM.

Este módulo proporciona:
- Base: clase base declarativa de SQLAlchemy
- NAMING_CONVENTION: convención de nombres para constraints
- as_db_enum: helper genérico para mapear enums Python a columnas ENUM

Fecha: 2026-02-03
"""

from __future__ import annotations

from enum import Enum
from typing import Type

from sqlalchemy import Enum as SAEnum
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# ===== BASE DECLARATIVA =====
class Base(DeclarativeBase):
    """
    Base declarativa para todos los modelos ORM del backend de tesis.
    Incluye convención de nombres para constraints.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ===== HELPER GENÉRICO PARA ENUMS =====
def as_db_enum(enum_cls: Type[Enum], name: str | None = None) -> SAEnum:
    """
    Devuelve un tipo Enum de SQLAlchemy basado en un Enum de Python.

    Uso típico:

        from app.shared.database.base import Base, as_db_enum
        from .enums import EstadoTesis

        class Thesis(Base):
            estado: Mapped[EstadoTesis] = mapped_column(
                as_db_enum(EstadoTesis, name="estado_tesis_enum"),
                nullable=False,
            )

    - En PostgreSQL se mapea a un tipo ENUM nativo con el nombre dado.
    - En SQLite (tests) se degrada a VARCHAR sin CHECK.
    - Persiste el `.value` del enum, no el nombre del miembro.
    - Si no se pasa `name`, usa `__db_enum_name__` del enum o el nombre
      de la clase en minúsculas.
    """
    enum_name = name or getattr(enum_cls, "__db_enum_name__", enum_cls.__name__.lower())

    def _values(cls: Type[Enum]) -> list[str]:
        return [e.value for e in cls]

    return SAEnum(
        enum_cls,
        name=enum_name,
        values_callable=_values,
        validate_strings=True,
        create_constraint=False,
        length=40,
    )


__all__ = ["Base", "NAMING_CONVENTION", "as_db_enum"]

# Fin del archivo backend/app/shared/database/base.py
