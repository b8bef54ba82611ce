# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/repositories/__init__.py

Repositorios async del módulo de tesis (sin lógica de negocio).

Fecha: 2026-02-03
"""

from .thesis_repository import ThesisRepository
from .thesis_document_repository import ThesisDocumentRepository
from .jury_evaluation_repository import JuryEvaluationRepository
from .thesis_history_repository import ThesisHistoryRepository
from .thesis_notification_repository import ThesisNotificationRepository

__all__ = [
    "ThesisRepository",
    "ThesisDocumentRepository",
    "JuryEvaluationRepository",
    "ThesisHistoryRepository",
    "ThesisNotificationRepository",
]

# Fin del archivo backend/app/modules/thesis/repositories/__init__.py
