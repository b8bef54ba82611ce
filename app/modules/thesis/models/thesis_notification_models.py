# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/models/thesis_notification_models.py

Bandeja de notificaciones in-app. La escribe InAppNotificationSender en
su propia transacción, después del commit de la transición.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base


def _now_utc() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class ThesisNotification(Base):
    __tablename__ = "thesis_notifications"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    thesis_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    tipo: Mapped[str] = mapped_column(String(64), nullable=False)
    titulo: Mapped[str] = mapped_column(String(255), nullable=False)
    mensaje: Mapped[str] = mapped_column(Text, nullable=False)
    enlace: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    leida: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now_utc)

    __table_args__ = (
        Index("idx_thesis_notifications_user_leida", "user_id", "leida"),
    )


__all__ = ["ThesisNotification"]

# Fin del archivo backend/app/modules/thesis/models/thesis_notification_models.py
