# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/notification_sender.py

Factory unificado para el emisor de notificaciones del flujo de tesis.
Soporta tres modos (NOTIFICATION_MODE):
- console: solo loguea (desarrollo)
- in_app: escribe en la bandeja thesis_notifications (sesión propia)
- disabled: no hace nada (tests)

El orquestador notifica DESPUÉS del commit y trata cualquier fallo como
best-effort: una notificación perdida nunca revierte una transición.

Fecha: 2026-02-03
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence, TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationEvent:
    """Evento a notificar (p. ej. TESIS_OBSERVADA, DICTAMEN_EMITIDO)."""
    tipo: str
    titulo: str
    mensaje: str
    thesis_id: Optional[UUID] = None
    enlace: Optional[str] = None


class INotificationSender(Protocol):
    """Protocolo para implementaciones del emisor de notificaciones."""
    async def notify(
        self,
        event: NotificationEvent,
        recipients: Sequence[UUID],
        context: Optional[Mapping[str, Any]] = None,
    ) -> None: ...


class ConsoleNotificationSender:
    """Implementación que no entrega nada; solo hace logging (modo console)."""

    async def notify(self, event, recipients, context=None) -> None:
        logger.info(
            "[CONSOLE NOTIFY] %s → %d destinatarios | thesis_id=%s | %s",
            event.tipo,
            len(recipients),
            event.thesis_id,
            event.titulo,
        )


class NullNotificationSender:
    async def notify(self, event, recipients, context=None) -> None:
        return None


class InAppNotificationSender:
    """
    Bandeja in-app: una fila de thesis_notifications por destinatario.

    Usa su propia sesión (session_factory) para no mezclarse con la
    transacción de la transición, que ya está confirmada.
    """

    def __init__(self, session_factory: Callable[[], "AsyncSession"]):
        self._session_factory = session_factory

    async def notify(self, event, recipients, context=None) -> None:
        from app.modules.thesis.models import ThesisNotification

        unique = list(dict.fromkeys(recipients))
        if not unique:
            return
        async with self._session_factory() as session:
            try:
                session.add_all([
                    ThesisNotification(
                        user_id=user_id,
                        thesis_id=event.thesis_id,
                        tipo=event.tipo,
                        titulo=event.titulo,
                        mensaje=event.mensaje,
                        enlace=event.enlace,
                    )
                    for user_id in unique
                ])
                await session.commit()
            except Exception:
                await session.rollback()
                raise
        logger.debug("[IN-APP NOTIFY] %s → %d destinatarios", event.tipo, len(unique))


class NotificationSender:
    """
    Factory unificado para selección de emisor.

    Ejemplos de configuración:
    - Desarrollo: NOTIFICATION_MODE=console
    - Producción: NOTIFICATION_MODE=in_app
    - Tests: NOTIFICATION_MODE=disabled
    """

    @staticmethod
    def from_settings(
        settings: "BaseAppSettings",
        session_factory: Optional[Callable[[], "AsyncSession"]] = None,
    ) -> INotificationSender:
        mode = (settings.notification_mode or "console").strip().lower()
        logger.info("[NotificationSender] mode=%r", mode)

        if mode == "disabled":
            return NullNotificationSender()

        if mode == "in_app":
            if session_factory is None:
                from app.shared.database.database import SessionLocal
                session_factory = SessionLocal
            return InAppNotificationSender(session_factory)

        if mode == "console":
            return ConsoleNotificationSender()

        if settings.is_prod:
            raise ValueError(
                f"NOTIFICATION_MODE '{mode}' no reconocido. "
                f"Configure NOTIFICATION_MODE=console|in_app|disabled"
            )
        logger.warning("[NotificationSender] NOTIFICATION_MODE=%r no reconocido, usando console (solo dev)", mode)
        return ConsoleNotificationSender()


def get_notification_sender() -> INotificationSender:
    """Emisor según la configuración global."""
    from app.shared.config import get_settings
    return NotificationSender.from_settings(get_settings())


__all__ = [
    "NotificationEvent",
    "INotificationSender",
    "ConsoleNotificationSender",
    "NullNotificationSender",
    "InAppNotificationSender",
    "NotificationSender",
    "get_notification_sender",
]

# Fin del archivo backend/app/shared/integrations/notification_sender.py
