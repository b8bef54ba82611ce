# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/routes/thesis_workflow.py

Rutas del flujo de tesis (transiciones de estado):
- POST /{thesis_id}/acciones/{accion}   acciones sin archivo
- POST /{thesis_id}/dictamen            dictamen firmado (multipart)
- POST /{thesis_id}/resolucion          resolución de aprobación (multipart)
- POST /{thesis_id}/evaluaciones        evaluación de un jurado (multipart, adjunto PDF opcional)
- GET  /{thesis_id}/acciones            acciones disponibles para el actor

Toda la lógica de autorización y precondiciones vive en la máquina de
estados; aquí solo se arma el payload.

Fecha: 2026-02-03
"""

from datetime import date, time
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from app.shared.auth_context import Actor, get_current_actor
from app.modules.thesis.enums import AccionTesis, ModalidadSustentacion, ResultadoEvaluacion, TipoDocumento
from app.modules.thesis.facades.thesis_state_machine import ActionPayload, DefenseSchedule
from app.modules.thesis.routes.deps import (
    get_thesis_command_service,
    get_thesis_query_service,
    get_thesis_workflow_service,
)
from app.modules.thesis.schemas import (
    ActionIn,
    EvaluationProgressRead,
    EvaluationRead,
    EvaluationResponse,
    HistoryRead,
    ThesisRead,
    TransitionResponse,
)
from app.modules.thesis.services import (
    ThesisCommandService,
    ThesisQueryService,
    ThesisWorkflowService,
    TransitionResult,
)

router = APIRouter(tags=["tesis:flujo"])


def _norm_accion(slug: str) -> AccionTesis:
    """Acepta 'enviar-revision' o 'ENVIAR_REVISION'."""
    try:
        return AccionTesis(slug.strip().upper().replace("-", "_"))
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Acción inválida: {slug}")


def _transition_response(result: TransitionResult) -> TransitionResponse:
    return TransitionResponse(
        accion=result.outcome.accion,
        estado_anterior=result.outcome.estado_anterior,
        estado_nuevo=result.outcome.estado_nuevo,
        ronda=result.outcome.ronda_nueva,
        thesis=ThesisRead.model_validate(result.thesis),
        historial=HistoryRead.model_validate(result.history),
    )


def _schedule_from_form(
    fecha: Optional[date],
    hora: Optional[time],
    lugar: Optional[str],
    modalidad: Optional[ModalidadSustentacion],
) -> Optional[DefenseSchedule]:
    if fecha is None and hora is None and not lugar and modalidad is None:
        return None
    return DefenseSchedule(fecha=fecha, hora=hora, lugar=lugar, modalidad=modalidad)


@router.get("/{thesis_id}/acciones", summary="Acciones disponibles para el usuario actual")
async def list_available_actions(
    thesis_id: UUID,
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    detail = await q.get_thesis(thesis_id, actor)
    return {"thesis_id": thesis_id, "acciones": [a.value for a in detail.acciones_disponibles]}


@router.post(
    "/{thesis_id}/acciones/{accion}",
    response_model=TransitionResponse,
    summary="Ejecutar una acción del flujo",
)
async def execute_action(
    thesis_id: UUID,
    accion: str,
    body: Optional[ActionIn] = None,
    actor: Actor = Depends(get_current_actor),
    wf: ThesisWorkflowService = Depends(get_thesis_workflow_service),
):
    payload = ActionPayload(comentario=body.comentario if body else None)
    result = await wf.execute(thesis_id, _norm_accion(accion), actor, payload)
    return _transition_response(result)


@router.post(
    "/{thesis_id}/dictamen",
    response_model=TransitionResponse,
    summary="Subir el dictamen firmado (presidente del jurado)",
)
async def upload_verdict(
    thesis_id: UUID,
    archivo: UploadFile = File(...),
    firmado: bool = Form(False),
    comentario: Optional[str] = Form(None),
    fecha: Optional[date] = Form(None),
    hora: Optional[time] = Form(None),
    lugar: Optional[str] = Form(None),
    modalidad: Optional[ModalidadSustentacion] = Form(None),
    actor: Actor = Depends(get_current_actor),
    wf: ThesisWorkflowService = Depends(get_thesis_workflow_service),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    """
    En la fase de informe final, un dictamen aprobatorio requiere además
    la fecha, hora, lugar y modalidad de la sustentación.
    """
    documento = await svc.store_workflow_document(
        thesis_id,
        tipo=TipoDocumento.DICTAMEN,
        nombre=archivo.filename or "dictamen.pdf",
        data=await archivo.read(),
        mime_type=archivo.content_type or "application/octet-stream",
        firmado=firmado,
    )
    payload = ActionPayload(
        comentario=comentario,
        documento=documento,
        sustentacion=_schedule_from_form(fecha, hora, lugar, modalidad),
    )
    result = await wf.execute(thesis_id, AccionTesis.SUBIR_DICTAMEN, actor, payload)
    return _transition_response(result)


@router.post(
    "/{thesis_id}/resolucion",
    response_model=TransitionResponse,
    summary="Subir la resolución de aprobación (Mesa de Partes)",
)
async def upload_resolution(
    thesis_id: UUID,
    archivo: UploadFile = File(...),
    comentario: Optional[str] = Form(None),
    actor: Actor = Depends(get_current_actor),
    wf: ThesisWorkflowService = Depends(get_thesis_workflow_service),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    documento = await svc.store_workflow_document(
        thesis_id,
        tipo=TipoDocumento.RESOLUCION_APROBACION,
        nombre=archivo.filename or "resolucion.pdf",
        data=await archivo.read(),
        mime_type=archivo.content_type or "application/octet-stream",
    )
    payload = ActionPayload(comentario=comentario, documento=documento)
    result = await wf.execute(thesis_id, AccionTesis.SUBIR_RESOLUCION, actor, payload)
    return _transition_response(result)


@router.post(
    "/{thesis_id}/evaluaciones",
    response_model=EvaluationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar la evaluación del jurado en la ronda vigente",
)
async def record_evaluation(
    thesis_id: UUID,
    resultado: ResultadoEvaluacion = Form(...),
    observaciones: Optional[str] = Form(None, max_length=10000),
    archivo: Optional[UploadFile] = File(None),
    actor: Actor = Depends(get_current_actor),
    wf: ThesisWorkflowService = Depends(get_thesis_workflow_service),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    """
    El adjunto de observaciones (opcional) se valida como los documentos
    (solo PDF, MAX_DOCUMENT_SIZE_MB) y se guarda en storage; la evaluación
    registra solo la referencia devuelta.
    """
    archivo_ref = None
    if archivo is not None:
        archivo_ref = await svc.store_evaluation_attachment(
            thesis_id,
            nombre=archivo.filename or "observaciones.pdf",
            data=await archivo.read(),
            mime_type=archivo.content_type or "application/octet-stream",
        )
    result = await wf.record_evaluation(
        thesis_id,
        actor,
        resultado,
        observaciones=observaciones,
        archivo_ref=archivo_ref,
    )
    return EvaluationResponse(
        evaluation=EvaluationRead.model_validate(result.evaluation),
        progreso=EvaluationProgressRead.model_validate(result.progress),
    )

# Fin del archivo backend/app/modules/thesis/routes/thesis_workflow.py
