# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/models/thesis_participant_models.py

Participantes de una tesis:
- ThesisAuthor : 1–2 autores (uno AUTOR_PRINCIPAL), con estado de invitación
- ThesisAdvisor: 1 asesor obligatorio + coasesor opcional, con estado de invitación
- ThesisJuror  : jurado asignado por Mesa de Partes (sin invitación);
                 la baja es lógica (is_active=False) para no perder evaluaciones

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.modules.thesis.enums import EstadoParticipacion, TipoAsesor, TipoAutor, TipoJurado

if TYPE_CHECKING:
    from .thesis_models import Thesis


def _now_utc() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class ThesisAuthor(Base):
    __tablename__ = "thesis_authors"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    thesis_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("theses.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    tipo: Mapped[TipoAutor] = mapped_column(TipoAutor.as_db_enum(), nullable=False)
    orden: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    estado: Mapped[EstadoParticipacion] = mapped_column(
        EstadoParticipacion.as_db_enum(), nullable=False, default=EstadoParticipacion.PENDIENTE,
    )
    motivo_rechazo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fecha_respuesta: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now_utc)

    thesis: Mapped["Thesis"] = relationship(back_populates="autores")

    def __repr__(self):
        return f"<ThesisAuthor(user_id={self.user_id}, tipo={self.tipo}, estado={self.estado})>"


class ThesisAdvisor(Base):
    __tablename__ = "thesis_advisors"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    thesis_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("theses.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    tipo: Mapped[TipoAsesor] = mapped_column(TipoAsesor.as_db_enum(), nullable=False)
    estado: Mapped[EstadoParticipacion] = mapped_column(
        EstadoParticipacion.as_db_enum(), nullable=False, default=EstadoParticipacion.PENDIENTE,
    )
    motivo_rechazo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fecha_respuesta: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now_utc)

    thesis: Mapped["Thesis"] = relationship(back_populates="asesores")

    def __repr__(self):
        return f"<ThesisAdvisor(user_id={self.user_id}, tipo={self.tipo}, estado={self.estado})>"


class ThesisJuror(Base):
    __tablename__ = "thesis_jurors"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    thesis_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("theses.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    tipo: Mapped[TipoJurado] = mapped_column(TipoJurado.as_db_enum(), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Accesitario promovido: jurado titular al que reemplaza
    reemplaza_a_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey("thesis_jurors.id", ondelete="SET NULL"), nullable=True,
    )
    fecha_asignacion: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now_utc)
    fecha_baja: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    thesis: Mapped["Thesis"] = relationship(back_populates="jurados")

    __table_args__ = (
        Index("idx_thesis_jurors_thesis_active", "thesis_id", "is_active"),
    )

    def __repr__(self):
        return f"<ThesisJuror(user_id={self.user_id}, tipo={self.tipo}, activo={self.is_active})>"


__all__ = ["ThesisAuthor", "ThesisAdvisor", "ThesisJuror"]

# Fin del archivo backend/app/modules/thesis/models/thesis_participant_models.py
