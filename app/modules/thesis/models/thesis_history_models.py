# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/models/thesis_history_models.py

Historial de transiciones de estado (auditoría + timeline de UI).

Append-only: una fila por transición exitosa, nunca se actualiza ni se
borra. `secuencia` ordena las entradas de una tesis sin depender del reloj.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.modules.thesis.enums import AccionTesis, EstadoTesis

if TYPE_CHECKING:
    from .thesis_models import Thesis


class ThesisStatusHistory(Base):
    __tablename__ = "thesis_status_history"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    thesis_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("theses.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    secuencia: Mapped[int] = mapped_column(Integer, nullable=False)
    estado_anterior: Mapped[EstadoTesis] = mapped_column(EstadoTesis.as_db_enum(), nullable=False)
    estado_nuevo: Mapped[EstadoTesis] = mapped_column(EstadoTesis.as_db_enum(), nullable=False)
    accion: Mapped[AccionTesis] = mapped_column(AccionTesis.as_db_enum(), nullable=False)
    comentario: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ronda: Mapped[int] = mapped_column(Integer, nullable=False)
    changed_by_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    thesis: Mapped["Thesis"] = relationship(back_populates="historial")

    __table_args__ = (
        UniqueConstraint("thesis_id", "secuencia", name="uq_thesis_status_history_secuencia"),
    )

    def __repr__(self):
        return (
            f"<ThesisStatusHistory(#{self.secuencia} {self.estado_anterior} → "
            f"{self.estado_nuevo} accion={self.accion})>"
        )


__all__ = ["ThesisStatusHistory"]

# Fin del archivo backend/app/modules/thesis/models/thesis_history_models.py
