# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/enums/thesis_state_transitions.py

Mapa de transiciones válidas para EstadoTesis y predicados derivados.

Reglas de transición:
- BORRADOR              → EN_REVISION
- EN_REVISION           → EN_REVISION (voucher) | OBSERVADA | ASIGNANDO_JURADOS | RECHAZADA
- OBSERVADA             → OBSERVADA (voucher) | EN_REVISION | ASIGNANDO_JURADOS | RECHAZADA
- ASIGNANDO_JURADOS     → EN_EVALUACION_JURADO
- EN_EVALUACION_JURADO  → PROYECTO_APROBADO | OBSERVADA_JURADO
- OBSERVADA_JURADO      → EN_EVALUACION_JURADO
- PROYECTO_APROBADO     → INFORME_FINAL
- INFORME_FINAL         → EN_EVALUACION_INFORME
- EN_EVALUACION_INFORME → EN_SUSTENTACION | OBSERVADA_INFORME
- OBSERVADA_INFORME     → EN_EVALUACION_INFORME
- APROBADA              → (sin salidas; solo expedientes antiguos)
- EN_SUSTENTACION       → SUSTENTADA | ARCHIVADA
- SUSTENTADA, ARCHIVADA, RECHAZADA → (terminales)

Fecha: 2026-02-03
"""

from typing import Dict, FrozenSet, Set

from .thesis_state_enum import EstadoTesis


# Mapa de transiciones válidas: estado_origen → {estados_destino_permitidos}
VALID_STATE_TRANSITIONS: Dict[EstadoTesis, Set[EstadoTesis]] = {
    EstadoTesis.BORRADOR: {
        EstadoTesis.EN_REVISION,
    },
    EstadoTesis.EN_REVISION: {
        EstadoTesis.EN_REVISION,  # confirmación de voucher
        EstadoTesis.OBSERVADA,
        EstadoTesis.ASIGNANDO_JURADOS,
        EstadoTesis.RECHAZADA,
    },
    EstadoTesis.OBSERVADA: {
        EstadoTesis.OBSERVADA,  # confirmación de voucher
        EstadoTesis.EN_REVISION,
        EstadoTesis.ASIGNANDO_JURADOS,
        EstadoTesis.RECHAZADA,
    },
    EstadoTesis.ASIGNANDO_JURADOS: {
        EstadoTesis.EN_EVALUACION_JURADO,
    },
    EstadoTesis.EN_EVALUACION_JURADO: {
        EstadoTesis.PROYECTO_APROBADO,
        EstadoTesis.OBSERVADA_JURADO,
    },
    EstadoTesis.OBSERVADA_JURADO: {
        EstadoTesis.EN_EVALUACION_JURADO,
    },
    EstadoTesis.PROYECTO_APROBADO: {
        EstadoTesis.INFORME_FINAL,
    },
    EstadoTesis.INFORME_FINAL: {
        EstadoTesis.EN_EVALUACION_INFORME,
    },
    EstadoTesis.EN_EVALUACION_INFORME: {
        EstadoTesis.EN_SUSTENTACION,
        EstadoTesis.OBSERVADA_INFORME,
    },
    EstadoTesis.OBSERVADA_INFORME: {
        EstadoTesis.EN_EVALUACION_INFORME,
    },
    EstadoTesis.APROBADA: set(),
    EstadoTesis.EN_SUSTENTACION: {
        EstadoTesis.SUSTENTADA,
        EstadoTesis.ARCHIVADA,
    },
    EstadoTesis.SUSTENTADA: set(),
    EstadoTesis.ARCHIVADA: set(),
    EstadoTesis.RECHAZADA: set(),
}

# Estados que ninguna acción alcanza; se conservan para leer registros antiguos
LEGACY_STATES: FrozenSet[EstadoTesis] = frozenset({EstadoTesis.APROBADA})

TERMINAL_STATES: FrozenSet[EstadoTesis] = frozenset(
    estado for estado, destinos in VALID_STATE_TRANSITIONS.items()
    if not destinos and estado not in LEGACY_STATES
)

# Estados en los que el estudiante puede editar metadatos y subir documentos
EDITABLE_STATES: FrozenSet[EstadoTesis] = frozenset({
    EstadoTesis.BORRADOR,
    EstadoTesis.OBSERVADA,
    EstadoTesis.OBSERVADA_JURADO,
    EstadoTesis.INFORME_FINAL,
    EstadoTesis.OBSERVADA_INFORME,
})

EVALUATION_STATES: FrozenSet[EstadoTesis] = frozenset({
    EstadoTesis.EN_EVALUACION_JURADO,
    EstadoTesis.EN_EVALUACION_INFORME,
})

JURY_OBSERVED_STATES: FrozenSet[EstadoTesis] = frozenset({
    EstadoTesis.OBSERVADA_JURADO,
    EstadoTesis.OBSERVADA_INFORME,
})


def is_valid_state_transition(
    from_state: EstadoTesis,
    to_state: EstadoTesis,
) -> bool:
    """
    Valida si una transición de estado es permitida.

    Args:
        from_state: Estado actual.
        to_state: Estado destino.

    Returns:
        True si la transición es válida, False en caso contrario.
    """
    if from_state not in VALID_STATE_TRANSITIONS:
        return False
    return to_state in VALID_STATE_TRANSITIONS[from_state]


def get_allowed_transitions(from_state: EstadoTesis) -> Set[EstadoTesis]:
    """Estados permitidos como destino desde `from_state`."""
    return VALID_STATE_TRANSITIONS.get(from_state, set())


def validate_state_transition(
    from_state: EstadoTesis,
    to_state: EstadoTesis,
) -> None:
    """
    Valida una transición de estado, lanzando excepción si no es válida.

    Raises:
        ValueError: Si la transición no es válida.
    """
    if not is_valid_state_transition(from_state, to_state):
        allowed = get_allowed_transitions(from_state)
        allowed_str = ", ".join(sorted(s.value for s in allowed)) if allowed else "ninguno"
        raise ValueError(
            f"Transición de estado inválida: '{from_state.value}' → '{to_state.value}'. "
            f"Transiciones permitidas desde '{from_state.value}': {allowed_str}"
        )


def is_editable(estado: EstadoTesis) -> bool:
    """
    Predicado único de edición: el estudiante puede modificar metadatos y
    subir documentos solo en estos estados.
    """
    return estado in EDITABLE_STATES


def is_terminal(estado: EstadoTesis) -> bool:
    return estado in TERMINAL_STATES


__all__ = [
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

# Fin del archivo backend/app/modules/thesis/enums/thesis_state_transitions.py
