# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/models/thesis_document_models.py

Documentos del expediente. El backend nunca inspecciona los bytes: solo
guarda la referencia devuelta por el servicio de storage y metadatos.

Versionado: por (thesis_id, tipo) la versión crece de 1 en 1 y solo una
fila tiene es_version_actual=True. Las verificaciones de requisitos usan
siempre la versión actual.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.modules.thesis.enums import TipoDocumento

if TYPE_CHECKING:
    from .thesis_models import Thesis


def _now_utc() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class ThesisDocument(Base):
    __tablename__ = "thesis_documents"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    thesis_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("theses.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    tipo: Mapped[TipoDocumento] = mapped_column(TipoDocumento.as_db_enum(), nullable=False)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    ruta_archivo: Mapped[str] = mapped_column(String(1024), nullable=False, doc="Referencia en storage")
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False, default="application/pdf")
    tamano: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    es_version_actual: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    firmado: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    fecha_firma: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    uploaded_by_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    ronda: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now_utc)

    thesis: Mapped["Thesis"] = relationship(back_populates="documentos")

    __table_args__ = (
        Index("idx_thesis_documents_tipo_actual", "thesis_id", "tipo", "es_version_actual"),
    )

    def __repr__(self):
        return (
            f"<ThesisDocument(tipo={self.tipo}, version={self.version}, "
            f"actual={self.es_version_actual}, firmado={self.firmado})>"
        )


__all__ = ["ThesisDocument"]

# Fin del archivo backend/app/modules/thesis/models/thesis_document_models.py
