# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/models/thesis_models.py

Modelo ORM de la tesis (raíz del agregado).

Reglas de escritura:
- `estado`, `ronda_actual` y `fase_actual` solo los escribe
  facades/thesis_state_machine.apply_transition.
- `version` es el contador de concurrencia optimista (version_id_col):
  un UPDATE sobre una versión obsoleta lanza StaleDataError.
- Nunca se borra físicamente: `eliminada` + `deleted_at` (soft delete).

Las colecciones usan lazy="selectin" para que la carga sea explícita en
AsyncSession (sin lazy-load implícito al acceder atributos).

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.modules.thesis.enums import EstadoTesis, FaseTesis, ModalidadSustentacion

if TYPE_CHECKING:
    from .thesis_participant_models import ThesisAdvisor, ThesisAuthor, ThesisJuror
    from .thesis_document_models import ThesisDocument
    from .jury_evaluation_models import JuryEvaluation
    from .thesis_history_models import ThesisStatusHistory


def _now_utc() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Thesis(Base):
    """Tesis registrada por un estudiante."""

    __tablename__ = "theses"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    codigo: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    titulo: Mapped[str] = mapped_column(String(500), nullable=False)
    resumen: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    palabras_clave: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    estado: Mapped[EstadoTesis] = mapped_column(
        EstadoTesis.as_db_enum(),
        nullable=False,
        default=EstadoTesis.BORRADOR,
        index=True,
    )
    fase_actual: Mapped[FaseTesis] = mapped_column(
        FaseTesis.as_db_enum(),
        nullable=False,
        default=FaseTesis.PROYECTO,
    )
    ronda_actual: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    fecha_limite_evaluacion: Mapped[Optional[dt.datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    fecha_limite_correccion: Mapped[Optional[dt.datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    # Voucher físico confirmado por Mesa de Partes (independiente de la copia digital)
    voucher_fisico_entregado: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Sustentación (se fija junto con el dictamen aprobatorio del informe)
    fecha_sustentacion: Mapped[Optional[dt.datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    lugar_sustentacion: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    modalidad_sustentacion: Mapped[Optional[ModalidadSustentacion]] = mapped_column(
        ModalidadSustentacion.as_db_enum(), nullable=True,
    )

    eliminada: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    deleted_at: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now_utc,
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now_utc, onupdate=_now_utc,
    )

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    autores: Mapped[List["ThesisAuthor"]] = relationship(
        back_populates="thesis",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ThesisAuthor.orden",
    )
    asesores: Mapped[List["ThesisAdvisor"]] = relationship(
        back_populates="thesis",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    jurados: Mapped[List["ThesisJuror"]] = relationship(
        back_populates="thesis",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    documentos: Mapped[List["ThesisDocument"]] = relationship(
        back_populates="thesis",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ThesisDocument.created_at",
    )
    evaluaciones: Mapped[List["JuryEvaluation"]] = relationship(
        back_populates="thesis",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="JuryEvaluation.created_at",
    )
    historial: Mapped[List["ThesisStatusHistory"]] = relationship(
        back_populates="thesis",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ThesisStatusHistory.secuencia",
    )

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("idx_theses_estado_eliminada", "estado", "eliminada"),
    )

    def __repr__(self):
        return (
            f"<Thesis(id={self.id}, "
            f"codigo='{self.codigo}', "
            f"estado={self.estado}, "
            f"ronda={self.ronda_actual})>"
        )


__all__ = ["Thesis"]

# Fin del archivo backend/app/modules/thesis/models/thesis_models.py
