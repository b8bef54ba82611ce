# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/enums/__init__.py

Superficie de exportación de enums del módulo de tesis.

Fecha: 2026-02-03
"""

from .thesis_state_enum import EstadoTesis
from .thesis_phase_enum import FaseTesis
from .thesis_action_enum import AccionTesis
from .participant_enums import (
    TipoAutor,
    TipoAsesor,
    TipoJurado,
    EstadoParticipacion,
    VOTING_JUROR_TYPES,
)
from .document_type_enum import (
    TipoDocumento,
    STUDENT_DOCUMENT_TYPES,
    ADVISOR_LETTER_TYPES,
    WORKFLOW_DOCUMENT_TYPES,
)
from .evaluation_enums import ResultadoEvaluacion, ModalidadSustentacion
from .actor_role_enum import RolActor
from .thesis_state_transitions import (
    VALID_STATE_TRANSITIONS,
    LEGACY_STATES,
    TERMINAL_STATES,
    EDITABLE_STATES,
    EVALUATION_STATES,
    JURY_OBSERVED_STATES,
    is_valid_state_transition,
    get_allowed_transitions,
    validate_state_transition,
    is_editable,
    is_terminal,
)

__all__ = [
    "EstadoTesis",
    "FaseTesis",
    "AccionTesis",
    "TipoAutor",
    "TipoAsesor",
    "TipoJurado",
    "EstadoParticipacion",
    "VOTING_JUROR_TYPES",
    "TipoDocumento",
    "STUDENT_DOCUMENT_TYPES",
    "ADVISOR_LETTER_TYPES",
    "WORKFLOW_DOCUMENT_TYPES",
    "ResultadoEvaluacion",
    "ModalidadSustentacion",
    "RolActor",
    "VALID_STATE_TRANSITIONS",
    "LEGACY_STATES",
    "TERMINAL_STATES",
    "EDITABLE_STATES",
    "EVALUATION_STATES",
    "JURY_OBSERVED_STATES",
    "is_valid_state_transition",
    "get_allowed_transitions",
    "validate_state_transition",
    "is_editable",
    "is_terminal",
]

# Fin del archivo backend/app/modules/thesis/enums/__init__.py
