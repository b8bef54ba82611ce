# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/document_requirements.py

Verificador de requisitos documentales.

El conjunto de requisitos se deriva del estado de la tesis y de su
composición de participantes (p. ej. la carta del coasesor solo se exige
si hay coasesor). Solo cuenta la versión actual de cada documento.

No muta nada: la máquina de estados lo consulta antes de ENVIAR_REVISION
y ENVIAR_INFORME, y la UI lo usa para mostrar el checklist.

Fecha: 2026-02-03
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from app.modules.thesis.enums import (
    EstadoTesis,
    TipoAsesor,
    TipoDocumento,
)
from app.modules.thesis.facades.snapshots import DocumentView, ThesisParticipants


@dataclass(frozen=True)
class DocumentRequirement:
    """Requisito individual; `tipo_documento` es None si es de participantes."""
    codigo: str
    descripcion: str
    tipo_documento: Optional[TipoDocumento] = None
    requiere_firma: bool = False


@dataclass(frozen=True)
class RequirementCheck:
    complete: bool
    missing: Tuple[DocumentRequirement, ...] = ()

    @property
    def missing_codes(self) -> List[str]:
        return [r.codigo for r in self.missing]


DOC_PROYECTO = DocumentRequirement(
    "DOC_PROYECTO", "Proyecto de tesis (PDF)", TipoDocumento.PROYECTO,
)
ASESOR_ASIGNADO = DocumentRequirement(
    "ASESOR_ASIGNADO", "La tesis debe tener un asesor",
)
ASESOR_ACEPTADO = DocumentRequirement(
    "ASESOR_ACEPTADO", "El asesor debe aceptar la invitación",
)
CARTA_ASESOR = DocumentRequirement(
    "CARTA_ASESOR_FIRMADA", "Carta de aceptación del asesor firmada",
    TipoDocumento.CARTA_ACEPTACION_ASESOR, requiere_firma=True,
)
COASESOR_ACEPTADO = DocumentRequirement(
    "COASESOR_ACEPTADO", "El coasesor debe aceptar la invitación",
)
CARTA_COASESOR = DocumentRequirement(
    "CARTA_COASESOR_FIRMADA", "Carta de aceptación del coasesor firmada",
    TipoDocumento.CARTA_ACEPTACION_COASESOR, requiere_firma=True,
)
COAUTOR_ACEPTADO = DocumentRequirement(
    "COAUTOR_ACEPTADO", "El coautor debe aceptar la invitación",
)
DOC_VOUCHER = DocumentRequirement(
    "DOC_VOUCHER_PAGO", "Voucher de pago (copia digital)", TipoDocumento.VOUCHER_PAGO,
)
DOC_INFORME_FINAL = DocumentRequirement(
    "DOC_INFORME_FINAL", "Informe final de tesis", TipoDocumento.INFORME_FINAL_DOC,
)

_PROJECT_SUBMISSION_STATES = frozenset({
    EstadoTesis.BORRADOR,
    EstadoTesis.OBSERVADA,
    EstadoTesis.EN_REVISION,
})
_FINAL_REPORT_STATES = frozenset({
    EstadoTesis.INFORME_FINAL,
    EstadoTesis.OBSERVADA_INFORME,
})


def requirements_for(estado: EstadoTesis, participants: ThesisParticipants) -> List[DocumentRequirement]:
    """Requisitos aplicables a `estado` según la composición de participantes."""
    if estado in _PROJECT_SUBMISSION_STATES:
        reqs = [DOC_PROYECTO, ASESOR_ASIGNADO, ASESOR_ACEPTADO, CARTA_ASESOR]
        if participants.advisor(TipoAsesor.COASESOR) is not None:
            reqs += [COASESOR_ACEPTADO, CARTA_COASESOR]
        if participants.coauthors():
            reqs.append(COAUTOR_ACEPTADO)
        reqs.append(DOC_VOUCHER)
        return reqs
    if estado == EstadoTesis.OBSERVADA_JURADO:
        return [DOC_PROYECTO]
    if estado in _FINAL_REPORT_STATES:
        return [DOC_INFORME_FINAL]
    return []


def _current(documents: Iterable[DocumentView], tipo: TipoDocumento) -> Optional[DocumentView]:
    actuales = [d for d in documents if d.tipo == tipo and d.es_version_actual]
    return max(actuales, key=lambda d: d.version) if actuales else None


def _satisfied(
    req: DocumentRequirement,
    documents: Sequence[DocumentView],
    participants: ThesisParticipants,
) -> bool:
    if req.tipo_documento is not None:
        doc = _current(documents, req.tipo_documento)
        if doc is None:
            return False
        return doc.firmado or not req.requiere_firma

    asesor = participants.advisor(TipoAsesor.ASESOR)
    if req is ASESOR_ASIGNADO:
        return asesor is not None
    if req is ASESOR_ACEPTADO:
        return asesor is not None and asesor.accepted
    if req is COASESOR_ACEPTADO:
        coasesor = participants.advisor(TipoAsesor.COASESOR)
        return coasesor is None or coasesor.accepted
    if req is COAUTOR_ACEPTADO:
        return all(c.accepted for c in participants.coauthors())
    return False


def is_complete(
    thesis,
    documents: Sequence[DocumentView],
    participants: ThesisParticipants,
) -> RequirementCheck:
    """
    Determina si la tesis cumple los requisitos documentales de su estado.

    Args:
        thesis: Cualquier objeto con atributo `estado` (snapshot o modelo).
        documents: Documentos de la tesis (todas las versiones).
        participants: Autores y asesores.

    Returns:
        RequirementCheck con `complete` y la lista de requisitos faltantes.
    """
    missing = tuple(
        req for req in requirements_for(thesis.estado, participants)
        if not _satisfied(req, documents, participants)
    )
    return RequirementCheck(complete=not missing, missing=missing)


def check_snapshot(snapshot) -> RequirementCheck:
    """Atajo: verifica un ThesisSnapshot con sus propios documentos y participantes."""
    return is_complete(snapshot, snapshot.documentos, snapshot.participants)


__all__ = [
    "DocumentRequirement",
    "RequirementCheck",
    "requirements_for",
    "is_complete",
    "check_snapshot",
]

# Fin del archivo backend/app/modules/thesis/facades/document_requirements.py
