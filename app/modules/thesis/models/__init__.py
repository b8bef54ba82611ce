# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/models/__init__.py

Modelos ORM del módulo de tesis. Importar este paquete registra todas las
tablas en Base.metadata (necesario para resolver relationships por nombre).

Fecha: 2026-02-03
"""

from .thesis_models import Thesis
from .thesis_participant_models import ThesisAuthor, ThesisAdvisor, ThesisJuror
from .thesis_document_models import ThesisDocument
from .jury_evaluation_models import JuryEvaluation
from .thesis_history_models import ThesisStatusHistory
from .thesis_notification_models import ThesisNotification

__all__ = [
    "Thesis",
    "ThesisAuthor",
    "ThesisAdvisor",
    "ThesisJuror",
    "ThesisDocument",
    "JuryEvaluation",
    "ThesisStatusHistory",
    "ThesisNotification",
]

# Fin del archivo backend/app/modules/thesis/models/__init__.py
