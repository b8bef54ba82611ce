# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/schemas/__init__.py

Schemas Pydantic del módulo de tesis y mapa de presentación de estados.

Fecha: 2026-02-03
"""

from .presentation import EstadoInfo, describe_estado
from .thesis_schemas import (
    ThesisCreateIn,
    ThesisUpdateIn,
    ActionIn,
    InvitationResponseIn,
    InviteParticipantIn,
    AssignJurorIn,
    PromoteAlternateIn,
    MarkNotificationsReadIn,
    EstadoInfoRead,
    AuthorRead,
    AdvisorRead,
    JurorRead,
    DocumentRead,
    EvaluationRead,
    HistoryRead,
    NotificationRead,
    ThesisSummaryRead,
    ThesisRead,
    DeadlineStatusRead,
    MissingRequirementRead,
    RequirementCheckRead,
    EvaluationProgressRead,
    ThesisDetailResponse,
    ThesisListResponse,
    TransitionResponse,
    EvaluationResponse,
    JuryPanelResponse,
    InvitationResponseRead,
    DefenseConflictRead,
    DefenseConflictsResponse,
    CountByEstadoRead,
    MarkReadResponse,
)

__all__ = [
    "EstadoInfo",
    "describe_estado",
    "ThesisCreateIn",
    "ThesisUpdateIn",
    "ActionIn",
    "InvitationResponseIn",
    "InviteParticipantIn",
    "AssignJurorIn",
    "PromoteAlternateIn",
    "MarkNotificationsReadIn",
    "EstadoInfoRead",
    "AuthorRead",
    "AdvisorRead",
    "JurorRead",
    "DocumentRead",
    "EvaluationRead",
    "HistoryRead",
    "NotificationRead",
    "ThesisSummaryRead",
    "ThesisRead",
    "DeadlineStatusRead",
    "MissingRequirementRead",
    "RequirementCheckRead",
    "EvaluationProgressRead",
    "ThesisDetailResponse",
    "ThesisListResponse",
    "TransitionResponse",
    "EvaluationResponse",
    "JuryPanelResponse",
    "InvitationResponseRead",
    "DefenseConflictRead",
    "DefenseConflictsResponse",
    "CountByEstadoRead",
    "MarkReadResponse",
]

# Fin del archivo backend/app/modules/thesis/schemas/__init__.py
