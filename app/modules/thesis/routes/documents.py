# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/routes/documents.py

Documentos de la tesis:
- Subir documento (multipart; nueva versión del tipo)
- Listar documentos (por tipo / solo vigentes)
- Descargar una versión
- Registrar firma digital (callback del servicio de firma)

Fecha: 2026-02-03
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile, status

from app.shared.auth_context import Actor, get_current_actor
from app.modules.thesis.enums import TipoDocumento
from app.modules.thesis.routes.deps import get_thesis_command_service, get_thesis_query_service
from app.modules.thesis.schemas import DocumentRead
from app.modules.thesis.services import ThesisCommandService, ThesisQueryService

router = APIRouter(tags=["tesis:documentos"])


@router.post(
    "/{thesis_id}/documentos",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Subir un documento de la tesis",
)
async def upload_document(
    thesis_id: UUID,
    tipo: TipoDocumento = Form(...),
    archivo: UploadFile = File(...),
    firmado: bool = Form(False),
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    documento = await svc.upload_document(
        thesis_id,
        actor=actor,
        tipo=tipo,
        nombre=archivo.filename or tipo.value.lower(),
        data=await archivo.read(),
        mime_type=archivo.content_type or "application/octet-stream",
        firmado=firmado,
    )
    return DocumentRead.model_validate(documento)


@router.get(
    "/{thesis_id}/documentos",
    response_model=List[DocumentRead],
    summary="Listar documentos de la tesis",
)
async def list_documents(
    thesis_id: UUID,
    tipo: Optional[TipoDocumento] = Query(None),
    solo_vigentes: bool = Query(False),
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    documentos = await q.list_documents(thesis_id, actor, tipo=tipo, only_current=solo_vigentes)
    return [DocumentRead.model_validate(d) for d in documentos]


@router.get(
    "/documentos/{document_id}/archivo",
    summary="Descargar el archivo de un documento",
    response_class=Response,
)
async def download_document(
    document_id: UUID,
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    documento = await q.get_document(document_id, actor)
    try:
        data = await svc.storage.retrieve(documento.ruta_archivo)
    except FileNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Archivo no disponible en storage")
    return Response(
        content=data,
        media_type=documento.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{documento.nombre}"'},
    )


@router.post(
    "/documentos/{document_id}/firma",
    response_model=DocumentRead,
    summary="Registrar la firma digital de un documento",
)
async def register_signature(
    document_id: UUID,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    documento = await svc.register_signature(document_id, actor=actor)
    return DocumentRead.model_validate(documento)

# Fin del archivo backend/app/modules/thesis/routes/documents.py
