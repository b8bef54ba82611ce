# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/__init__.py

Re-exporta errores de dominio y los componentes puros del flujo de tesis.

Fecha: 2026-02-03
"""

from .errors import (
    ThesisWorkflowError,
    ThesisNotFound,
    DocumentNotFound,
    UnauthorizedAction,
    InvalidTransition,
    PreconditionFailed,
    DuplicateEvaluation,
    InvalidJuror,
    MissingObservations,
    ParticipantConflict,
    ConcurrentModification,
)
from .snapshots import ThesisSnapshot, build_snapshot
from .thesis_state_machine import (
    ActionPayload,
    DefenseSchedule,
    NewDocument,
    TransitionOutcome,
    WorkflowParams,
    apply_transition,
    available_actions,
    decide,
)

__all__ = [
    # Errors
    "ThesisWorkflowError",
    "ThesisNotFound",
    "DocumentNotFound",
    "UnauthorizedAction",
    "InvalidTransition",
    "PreconditionFailed",
    "DuplicateEvaluation",
    "InvalidJuror",
    "MissingObservations",
    "ParticipantConflict",
    "ConcurrentModification",

    # Máquina de estados
    "ThesisSnapshot",
    "build_snapshot",
    "ActionPayload",
    "DefenseSchedule",
    "NewDocument",
    "TransitionOutcome",
    "WorkflowParams",
    "apply_transition",
    "available_actions",
    "decide",
]

# Fin del archivo backend/app/modules/thesis/facades/__init__.py
