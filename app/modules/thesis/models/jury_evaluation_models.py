# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/models/jury_evaluation_models.py

Evaluación individual de un jurado para una ronda.

Invariante (reforzado en BD): a lo sumo una evaluación por
(jury_member_id, ronda). Las rondas anteriores se conservan intactas.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.modules.thesis.enums import FaseTesis, ResultadoEvaluacion

if TYPE_CHECKING:
    from .thesis_models import Thesis


def _now_utc() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class JuryEvaluation(Base):
    __tablename__ = "jury_evaluations"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    thesis_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("theses.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    jury_member_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("thesis_jurors.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    ronda: Mapped[int] = mapped_column(Integer, nullable=False)
    fase: Mapped[FaseTesis] = mapped_column(FaseTesis.as_db_enum(), nullable=False)
    resultado: Mapped[ResultadoEvaluacion] = mapped_column(ResultadoEvaluacion.as_db_enum(), nullable=False)
    observaciones: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    archivo_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now_utc)

    thesis: Mapped["Thesis"] = relationship(back_populates="evaluaciones")

    __table_args__ = (
        UniqueConstraint("jury_member_id", "ronda", name="uq_jury_evaluations_member_ronda"),
    )

    def __repr__(self):
        return f"<JuryEvaluation(jurado={self.jury_member_id}, ronda={self.ronda}, resultado={self.resultado})>"


__all__ = ["JuryEvaluation"]

# Fin del archivo backend/app/modules/thesis/models/jury_evaluation_models.py
