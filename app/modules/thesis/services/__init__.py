# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/services/__init__.py

Servicios de aplicación del módulo de tesis.

Capa de orquestación sobre las facades:
- ThesisWorkflowService : transiciones del flujo y evaluaciones del jurado
- ThesisCommandService  : crear/editar/eliminar, participantes, jurado, documentos
- ThesisQueryService    : lecturas (detalle, bandejas, historial, cruces)

Fecha: 2026-02-03
"""

from .workflow import ThesisWorkflowService, TransitionResult, EvaluationResult, dispatch_notifications
from .commands import ThesisCommandService
from .queries import ThesisQueryService, ThesisDetail, DeadlineStatus

__all__ = [
    "ThesisWorkflowService",
    "TransitionResult",
    "EvaluationResult",
    "dispatch_notifications",
    "ThesisCommandService",
    "ThesisQueryService",
    "ThesisDetail",
    "DeadlineStatus",
]

# Fin del archivo backend/app/modules/thesis/services/__init__.py
