# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/errors.py

Excepciones de dominio para el módulo de tesis.

Todas derivan de ThesisWorkflowError y exponen:
- error_code: código estable para la UI / clientes
- message: mensaje en español, accionable por el usuario
- retryable: solo ConcurrentModification es reintentable

Las rutas las traducen a HTTP en routes/errors.py.

Fecha: 2026-02-03
"""

from typing import Any, Dict, Optional


class ThesisWorkflowError(Exception):
    """Base de errores del flujo de tesis."""

    error_code: str = "THESIS_WORKFLOW_ERROR"
    retryable: bool = False

    def __init__(self, message: str, *, error_code: Optional[str] = None, **extra: Any):
        self.message = message
        if error_code:
            self.error_code = error_code
        self.extra: Dict[str, Any] = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "retryable": self.retryable,
            **self.extra,
        }


class ThesisNotFound(ThesisWorkflowError):
    """Se lanza cuando no se encuentra una tesis por ID (o está eliminada)."""
    error_code = "TESIS_NO_ENCONTRADA"

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(f"Tesis no encontrada: {identifier}", thesis_id=str(identifier))


class DocumentNotFound(ThesisWorkflowError):
    error_code = "DOCUMENTO_NO_ENCONTRADO"

    def __init__(self, document_id):
        super().__init__(f"Documento no encontrado: {document_id}", document_id=str(document_id))


class UnauthorizedAction(ThesisWorkflowError):
    """El actor no tiene el rol (o la relación con la tesis) que exige la acción."""
    error_code = "ACCION_NO_AUTORIZADA"


class InvalidTransition(ThesisWorkflowError):
    """La acción no es legal desde el estado actual."""
    error_code = "TRANSICION_INVALIDA"

    def __init__(self, accion, estado, message: Optional[str] = None):
        self.accion = accion
        self.estado = estado
        default_msg = f"No se puede ejecutar {accion} cuando la tesis está en {estado}"
        super().__init__(message or default_msg, accion=str(accion), estado=str(estado))


class PreconditionFailed(ThesisWorkflowError):
    """
    Precondición específica del estado no cumplida.

    `code` identifica la precondición (p. ej. VOUCHER_NO_CONFIRMADO) para que
    la UI explique exactamente qué falta.
    """
    error_code = "PRECONDICION_NO_CUMPLIDA"

    def __init__(self, code: str, message: str, **extra: Any):
        self.code = code
        super().__init__(message, code=code, **extra)


class DuplicateEvaluation(ThesisWorkflowError):
    error_code = "EVALUACION_DUPLICADA"

    def __init__(self, jury_member_id, ronda: int):
        super().__init__(
            f"Ya registraste tu evaluación para la ronda {ronda}",
            jury_member_id=str(jury_member_id),
            ronda=ronda,
        )


class InvalidJuror(ThesisWorkflowError):
    """El usuario no es un miembro activo del jurado de la tesis."""
    error_code = "JURADO_INVALIDO"


class MissingObservations(ThesisWorkflowError):
    error_code = "OBSERVACIONES_REQUERIDAS"

    def __init__(self):
        super().__init__("Debe incluir observaciones cuando el resultado es OBSERVADO")


class ParticipantConflict(ThesisWorkflowError):
    """Conflicto de roles: p. ej. un autor asignado como jurado."""
    error_code = "CONFLICTO_PARTICIPANTE"


class ConcurrentModification(ThesisWorkflowError):
    """La tesis cambió entre la lectura y la escritura; el cliente puede reintentar."""
    error_code = "MODIFICACION_CONCURRENTE"
    retryable = True

    def __init__(self, thesis_id):
        super().__init__(
            "La tesis fue modificada por otra operación. Recarga e intenta nuevamente.",
            thesis_id=str(thesis_id),
        )


__all__ = [
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
]

# Fin del archivo backend/app/modules/thesis/facades/errors.py
