# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/services/commands.py

Capa de aplicación (comandos/mutaciones) del módulo de tesis que no son
transiciones de estado. Orquesta las facades de tesis y NO reimplementa
reglas de dominio; agrega storage y notificaciones post-commit.

Las transiciones van por ThesisWorkflowService (services/workflow.py).
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.auth_context import Actor
from app.shared.integrations.notification_sender import INotificationSender, get_notification_sender
from app.shared.storage.storage_io import IDocumentStorage, StoredFileMetadata, get_document_storage
from app.modules.thesis.enums import TipoDocumento, TipoJurado
from app.modules.thesis.facades import thesis as thesis_ops
from app.modules.thesis.facades.notifications import (
    build_invitation_notification,
    build_invitation_response_notification,
)
from app.modules.thesis.facades.snapshots import build_snapshot
from app.modules.thesis.facades.thesis_state_machine import NewDocument
from app.modules.thesis.repositories import ThesisNotificationRepository, ThesisRepository
from app.modules.thesis.services.workflow import dispatch_notifications

logger = logging.getLogger(__name__)

# Carpeta de storage de los adjuntos de evaluación: {thesis_id}/observaciones/
EVALUATION_ATTACHMENT_TYPE = "OBSERVACIONES"


class ThesisCommandService:
    """Comandos: crear/editar/eliminar, participantes, jurado, documentos."""

    def __init__(
        self,
        db: AsyncSession,
        *,
        notifier: Optional[INotificationSender] = None,
        storage: Optional[IDocumentStorage] = None,
        max_document_size_bytes: Optional[int] = None,
    ):
        self.db = db
        self.notifier = notifier if notifier is not None else get_notification_sender()
        self._storage = storage
        if max_document_size_bytes is None:
            from app.core.settings import get_settings
            max_document_size_bytes = get_settings().max_document_size_bytes
        self.max_document_size_bytes = max_document_size_bytes

    @property
    def storage(self) -> IDocumentStorage:
        if self._storage is None:
            self._storage = get_document_storage()
        return self._storage

    async def _reload_snapshot(self, thesis_id: UUID):
        thesis = await ThesisRepository().get_by_id(self.db, thesis_id)
        return build_snapshot(thesis) if thesis is not None else None

    # ---- Crear / actualizar / eliminar ----
    async def create_thesis(
        self,
        *,
        actor: Actor,
        titulo: str,
        asesor_id: UUID,
        resumen: Optional[str] = None,
        palabras_clave: Optional[Iterable[str]] = None,
        coautor_id: Optional[UUID] = None,
        coasesor_id: Optional[UUID] = None,
    ):
        thesis = await thesis_ops.create_thesis(
            self.db,
            actor=actor,
            titulo=titulo,
            asesor_id=asesor_id,
            resumen=resumen,
            palabras_clave=palabras_clave,
            coautor_id=coautor_id,
            coasesor_id=coasesor_id,
        )
        snapshot = build_snapshot(thesis)
        invitaciones = [(p.user_id, p.tipo.value) for p in snapshot.autores if p.user_id != actor.user_id]
        invitaciones += [(p.user_id, p.tipo.value) for p in snapshot.asesores]
        await dispatch_notifications(
            self.notifier,
            [n for n in (build_invitation_notification(snapshot, uid, rol) for uid, rol in invitaciones) if n],
        )
        return thesis

    async def update_thesis(
        self,
        thesis_id: UUID,
        *,
        actor: Actor,
        titulo: Optional[str] = None,
        resumen: Optional[str] = None,
        palabras_clave: Optional[List[str]] = None,
    ):
        payload = {}
        if titulo is not None:
            payload["titulo"] = titulo
        if resumen is not None:
            payload["resumen"] = resumen
        if palabras_clave is not None:
            payload["palabras_clave"] = palabras_clave
        return await thesis_ops.update_metadata(self.db, thesis_id, actor=actor, **payload)

    async def delete_thesis(self, thesis_id: UUID, *, actor: Actor):
        return await thesis_ops.soft_delete(self.db, thesis_id, actor=actor)

    async def restore_thesis(self, thesis_id: UUID, *, actor: Actor):
        return await thesis_ops.restore(self.db, thesis_id, actor=actor)

    # ---- Participantes ----
    async def respond_invitation(
        self,
        thesis_id: UUID,
        *,
        actor: Actor,
        aceptar: bool,
        motivo: Optional[str] = None,
    ):
        response = await thesis_ops.respond_invitation(
            self.db, thesis_id, actor=actor, aceptar=aceptar, motivo=motivo,
        )
        snapshot = await self._reload_snapshot(thesis_id)
        if snapshot is not None:
            pending = build_invitation_response_notification(
                snapshot,
                rol=response.rol,
                aceptada=response.aceptada,
                motivo=response.motivo,
                autor_principal_id=response.autor_principal_id,
            )
            await dispatch_notifications(self.notifier, [pending] if pending else [])
        return response

    async def invite_participant(self, thesis_id: UUID, *, actor: Actor, rol: str, user_id: UUID):
        participant = await thesis_ops.invite_participant(
            self.db, thesis_id, actor=actor, rol=rol, user_id=user_id,
        )
        snapshot = await self._reload_snapshot(thesis_id)
        if snapshot is not None:
            pending = build_invitation_notification(snapshot, user_id, participant.tipo.value)
            await dispatch_notifications(self.notifier, [pending] if pending else [])
        return participant

    async def remove_participant(self, thesis_id: UUID, *, actor: Actor, rol: str) -> None:
        await thesis_ops.remove_participant(self.db, thesis_id, actor=actor, rol=rol)

    # ---- Jurado ----
    async def assign_juror(self, thesis_id: UUID, *, actor: Actor, user_id: UUID, tipo: TipoJurado):
        return await thesis_ops.assign_juror(self.db, thesis_id, actor=actor, user_id=user_id, tipo=tipo)

    async def remove_juror(self, thesis_id: UUID, juror_id: UUID, *, actor: Actor):
        return await thesis_ops.remove_juror(self.db, thesis_id, juror_id, actor=actor)

    async def promote_alternate(self, thesis_id: UUID, *, actor: Actor, ausente_id: UUID):
        return await thesis_ops.promote_alternate(self.db, thesis_id, actor=actor, ausente_id=ausente_id)

    # ---- Documentos ----
    async def upload_document(
        self,
        thesis_id: UUID,
        *,
        actor: Actor,
        tipo: TipoDocumento,
        nombre: str,
        data: bytes,
        mime_type: str,
        firmado: bool = False,
    ):
        """Guarda el archivo en storage y registra la nueva versión."""
        tipo = TipoDocumento(tipo)
        ref = await self.storage.store(
            data,
            StoredFileMetadata(nombre=nombre, mime_type=mime_type, thesis_id=thesis_id, tipo_documento=tipo.value),
        )
        return await thesis_ops.upload_document(
            self.db,
            thesis_id,
            actor=actor,
            tipo=tipo,
            nombre=nombre,
            ruta_archivo=ref,
            mime_type=mime_type,
            tamano=len(data),
            firmado=firmado,
            max_size_bytes=self.max_document_size_bytes,
        )

    async def store_workflow_document(
        self,
        thesis_id: UUID,
        *,
        tipo: TipoDocumento,
        nombre: str,
        data: bytes,
        mime_type: str,
        firmado: bool = False,
    ) -> NewDocument:
        """Guarda un dictamen / resolución; la acción del flujo lo adjunta."""
        ref = await self.storage.store(
            data,
            StoredFileMetadata(nombre=nombre, mime_type=mime_type, thesis_id=thesis_id, tipo_documento=tipo.value),
        )
        return NewDocument(
            nombre=nombre,
            ruta_archivo=ref,
            mime_type=mime_type,
            tamano=len(data),
            firmado=firmado,
        )

    async def store_evaluation_attachment(
        self,
        thesis_id: UUID,
        *,
        nombre: str,
        data: bytes,
        mime_type: str,
    ) -> str:
        """
        Guarda el archivo de observaciones de un jurado (solo PDF, mismo
        límite de tamaño que los documentos) y devuelve su referencia.
        Se valida antes de escribir en storage.
        """
        thesis_ops.check_file(
            mime_type,
            len(data),
            permitidos=frozenset({thesis_ops.PDF}),
            etiqueta=EVALUATION_ATTACHMENT_TYPE,
            max_size_bytes=self.max_document_size_bytes,
        )
        ref = await self.storage.store(
            data,
            StoredFileMetadata(
                nombre=nombre, mime_type=mime_type, thesis_id=thesis_id,
                tipo_documento=EVALUATION_ATTACHMENT_TYPE,
            ),
        )
        logger.info("evaluation_attachment_stored thesis_id=%s ref=%s", thesis_id, ref)
        return ref

    async def register_signature(self, document_id: UUID, *, actor: Actor):
        return await thesis_ops.register_signature(self.db, document_id, actor=actor)

    # ---- Bandeja ----
    async def mark_notifications_read(self, *, actor: Actor, ids: Iterable[UUID]) -> int:
        updated = await ThesisNotificationRepository().mark_read(self.db, actor.user_id, ids)
        await self.db.commit()
        return updated


__all__ = ["ThesisCommandService"]

# Fin del archivo backend/app/modules/thesis/services/commands.py
