# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/__init__.py

Integraciones externas del backend de tesis.
Por ahora solo el envío de notificaciones del flujo.

Fecha: 2026-02-03
"""

from .notification_sender import (
    NotificationEvent,
    INotificationSender,
    ConsoleNotificationSender,
    NullNotificationSender,
    InAppNotificationSender,
    NotificationSender,
    get_notification_sender,
)

__all__ = [
    "NotificationEvent",
    "INotificationSender",
    "ConsoleNotificationSender",
    "NullNotificationSender",
    "InAppNotificationSender",
    "NotificationSender",
    "get_notification_sender",
]

# Fin del archivo backend/app/shared/integrations/__init__.py
