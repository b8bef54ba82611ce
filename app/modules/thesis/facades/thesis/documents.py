# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/thesis/documents.py

Operaciones sobre documentos del expediente.

- add_document_version: versionado por (tesis, tipo). Lo usan la subida
  directa y apply_transition (dictamen / resolución).
- upload_document: subida directa con reglas por tipo de documento.
- register_signature: callback del servicio de firma digital.
- check_file: tamaño y formato, compartido con los adjuntos de evaluación.

El backend nunca inspecciona los bytes: recibe la referencia devuelta
por el storage (`ruta_archivo`) y metadatos.

Transacciones: run_locked (bloqueo de fila + commit_or_raise).

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, FrozenSet, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.auth_context import Actor
from app.modules.thesis.enums import (
    ADVISOR_LETTER_TYPES,
    EDITABLE_STATES,
    EstadoParticipacion,
    EstadoTesis,
    RolActor,
    STUDENT_DOCUMENT_TYPES,
    TipoAsesor,
    TipoDocumento,
    WORKFLOW_DOCUMENT_TYPES,
    is_editable,
)
from app.modules.thesis.facades.base import now_utc, run_locked
from app.modules.thesis.facades.errors import (
    DocumentNotFound,
    InvalidTransition,
    PreconditionFailed,
    UnauthorizedAction,
)
from app.modules.thesis.models import Thesis, ThesisDocument

logger = logging.getLogger(__name__)

PDF = "application/pdf"
IMAGE_TYPES = frozenset({"image/jpeg", "image/png"})

# Estados en que el estudiante puede subir cada tipo (todos ⊆ EDITABLE_STATES)
UPLOAD_STATES: Dict[TipoDocumento, FrozenSet[EstadoTesis]] = {
    TipoDocumento.PROYECTO: frozenset({
        EstadoTesis.BORRADOR, EstadoTesis.OBSERVADA, EstadoTesis.OBSERVADA_JURADO,
    }),
    TipoDocumento.VOUCHER_PAGO: frozenset({EstadoTesis.BORRADOR, EstadoTesis.OBSERVADA}),
    TipoDocumento.INFORME_FINAL_DOC: frozenset({
        EstadoTesis.INFORME_FINAL, EstadoTesis.OBSERVADA_INFORME,
    }),
    TipoDocumento.DOCUMENTO_SUSTENTATORIO: frozenset(EDITABLE_STATES),
    TipoDocumento.CARTA_ACEPTACION_ASESOR: frozenset({EstadoTesis.BORRADOR, EstadoTesis.OBSERVADA}),
    TipoDocumento.CARTA_ACEPTACION_COASESOR: frozenset({EstadoTesis.BORRADOR, EstadoTesis.OBSERVADA}),
}

ALLOWED_MIME_TYPES: Dict[TipoDocumento, FrozenSet[str]] = {
    TipoDocumento.VOUCHER_PAGO: frozenset({PDF}) | IMAGE_TYPES,
    TipoDocumento.DOCUMENTO_SUSTENTATORIO: frozenset({PDF}) | IMAGE_TYPES,
}

_LETTER_ADVISOR = {
    TipoDocumento.CARTA_ACEPTACION_ASESOR: TipoAsesor.ASESOR,
    TipoDocumento.CARTA_ACEPTACION_COASESOR: TipoAsesor.COASESOR,
}


def allowed_mime_types(tipo: TipoDocumento) -> FrozenSet[str]:
    return ALLOWED_MIME_TYPES.get(tipo, frozenset({PDF}))


def check_file(
    mime_type: str,
    tamano: int,
    *,
    permitidos: FrozenSet[str],
    etiqueta: str,
    max_size_bytes: Optional[int] = None,
) -> None:
    """Tamaño y formato de un archivo antes de guardarlo o registrarlo."""
    if max_size_bytes is not None and tamano > max_size_bytes:
        raise PreconditionFailed(
            "DOCUMENTO_MUY_GRANDE",
            f"El archivo supera el tamaño máximo de {max_size_bytes // (1024 * 1024)} MB",
            tamano=tamano,
        )
    if mime_type not in permitidos:
        raise PreconditionFailed(
            "FORMATO_NO_PERMITIDO",
            f"Formato {mime_type} no permitido para {etiqueta}",
            permitidos=sorted(permitidos),
        )


def add_document_version(
    thesis: Thesis,
    tipo: TipoDocumento,
    *,
    nombre: str,
    ruta_archivo: str,
    mime_type: str,
    tamano: int,
    uploaded_by_id: UUID,
    now: dt.datetime,
    firmado: bool = False,
    fecha_firma: Optional[dt.datetime] = None,
) -> ThesisDocument:
    """
    Agrega una nueva versión de `tipo` a la tesis.

    version = última + 1; la versión actual anterior deja de serlo. En
    OBSERVADA_JURADO / OBSERVADA_INFORME una segunda subida en la misma
    ronda reemplaza a la corrección previa por esta misma regla.
    """
    previas = [d for d in thesis.documentos if d.tipo == tipo]
    for doc in previas:
        if doc.es_version_actual:
            doc.es_version_actual = False

    documento = ThesisDocument(
        tipo=tipo,
        nombre=nombre,
        ruta_archivo=ruta_archivo,
        mime_type=mime_type,
        tamano=tamano,
        version=max((d.version for d in previas), default=0) + 1,
        es_version_actual=True,
        firmado=firmado,
        fecha_firma=fecha_firma if firmado else None,
        uploaded_by_id=uploaded_by_id,
        ronda=thesis.ronda_actual,
        created_at=now,
    )
    thesis.documentos.append(documento)
    return documento


def retire_current_document(thesis: Thesis, tipo: TipoDocumento) -> None:
    """La versión actual de `tipo` deja de contar para los requisitos."""
    for doc in thesis.documentos:
        if doc.tipo == tipo and doc.es_version_actual:
            doc.es_version_actual = False


def _check_uploader(thesis: Thesis, tipo: TipoDocumento, actor: Actor) -> None:
    if tipo in WORKFLOW_DOCUMENT_TYPES:
        raise PreconditionFailed(
            "DOCUMENTO_DE_FLUJO",
            f"El documento {tipo.value} se adjunta con su acción del flujo, no por subida directa",
        )

    if tipo in STUDENT_DOCUMENT_TYPES:
        es_autor = any(
            a.user_id == actor.user_id and a.estado == EstadoParticipacion.ACEPTADO
            for a in thesis.autores
        )
        if not (actor.has_role(RolActor.ESTUDIANTE) and es_autor):
            raise UnauthorizedAction("Solo los autores de la tesis pueden subir este documento")
        return

    if tipo in ADVISOR_LETTER_TYPES:
        tipo_asesor = _LETTER_ADVISOR[tipo]
        asesor = next(
            (a for a in thesis.asesores if a.tipo == tipo_asesor and a.user_id == actor.user_id),
            None,
        )
        if asesor is None:
            raise UnauthorizedAction(f"Solo el {tipo_asesor.value.lower()} puede subir su carta de aceptación")
        if asesor.estado != EstadoParticipacion.ACEPTADO:
            raise PreconditionFailed(
                "INVITACION_NO_ACEPTADA",
                "Debe aceptar la invitación antes de subir la carta de aceptación",
            )


async def upload_document(
    db: AsyncSession,
    thesis_id: UUID,
    *,
    actor: Actor,
    tipo: TipoDocumento,
    nombre: str,
    ruta_archivo: str,
    mime_type: str,
    tamano: int,
    firmado: bool = False,
    max_size_bytes: Optional[int] = None,
    now: Optional[dt.datetime] = None,
) -> ThesisDocument:
    """
    Registra un documento subido por un participante.

    Reglas:
    - Dictamen y resolución solo entran con su acción del flujo.
    - Documentos del estudiante: autor aceptado, tesis editable y tipo
      permitido en el estado actual.
    - Cartas de aceptación: el asesor/coasesor correspondiente, con la
      invitación aceptada.

    Raises:
        ThesisNotFound, UnauthorizedAction, InvalidTransition, PreconditionFailed
    """
    tipo = TipoDocumento(tipo)
    now = now or now_utc()

    check_file(
        mime_type, tamano,
        permitidos=allowed_mime_types(tipo), etiqueta=tipo.value, max_size_bytes=max_size_bytes,
    )

    async def _work(thesis: Thesis) -> ThesisDocument:
        _check_uploader(thesis, tipo, actor)

        if not is_editable(thesis.estado):
            raise InvalidTransition(
                "SUBIR_DOCUMENTO",
                thesis.estado.value,
                f"La tesis no admite cambios en estado {thesis.estado.value}",
            )
        if thesis.estado not in UPLOAD_STATES[tipo]:
            raise PreconditionFailed(
                "DOCUMENTO_NO_PERMITIDO",
                f"No se puede subir {tipo.value} cuando la tesis está en {thesis.estado.value}",
            )

        documento = add_document_version(
            thesis,
            tipo,
            nombre=nombre,
            ruta_archivo=ruta_archivo,
            mime_type=mime_type,
            tamano=tamano,
            uploaded_by_id=actor.user_id,
            now=now,
            firmado=firmado,
            fecha_firma=now if firmado else None,
        )
        thesis.updated_at = now
        await db.flush()
        logger.info(
            "thesis_document_uploaded thesis_id=%s tipo=%s version=%s",
            thesis.id, tipo.value, documento.version,
        )
        return documento

    return await run_locked(db, thesis_id, _work)


async def register_signature(
    db: AsyncSession,
    document_id: UUID,
    *,
    actor: Actor,
    fecha_firma: Optional[dt.datetime] = None,
) -> ThesisDocument:
    """
    Marca un documento como firmado digitalmente (callback de firma).

    Solo se registra `firmado` y `fecha_firma`. Idempotente.
    """
    from app.modules.thesis.repositories import ThesisDocumentRepository

    existing = await ThesisDocumentRepository().get_by_id(db, document_id)
    if existing is None:
        raise DocumentNotFound(document_id)
    thesis_id = existing.thesis_id

    async def _work(thesis: Thesis) -> ThesisDocument:
        documento = next((d for d in thesis.documentos if d.id == document_id), None)
        if documento is None:
            raise DocumentNotFound(document_id)
        if documento.uploaded_by_id != actor.user_id and not actor.has_role(RolActor.ADMIN):
            raise UnauthorizedAction("Solo quien subió el documento puede registrar su firma")
        if not documento.es_version_actual:
            raise PreconditionFailed("VERSION_NO_VIGENTE", "Solo se firma la versión actual del documento")
        if documento.firmado:
            return documento
        documento.firmado = True
        documento.fecha_firma = fecha_firma or now_utc()
        thesis.updated_at = now_utc()
        await db.flush()
        logger.info("thesis_document_signed document_id=%s tipo=%s", documento.id, documento.tipo.value)
        return documento

    return await run_locked(db, thesis_id, _work)


__all__ = [
    "PDF",
    "UPLOAD_STATES",
    "ALLOWED_MIME_TYPES",
    "allowed_mime_types",
    "check_file",
    "add_document_version",
    "retire_current_document",
    "upload_document",
    "register_signature",
]

# Fin del archivo backend/app/modules/thesis/facades/thesis/documents.py
