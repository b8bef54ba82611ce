# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/routes/queries.py

Rutas de solo lectura y bandeja del usuario:
- Mis tesis (autor, asesor o jurado)
- Bandeja por estado y resumen (Mesa de Partes)
- Tesis eliminadas (ADMIN)
- Búsqueda por código, historial
- Cruces de horario de sustentación
- Notificaciones in-app

Se incluye ANTES del router CRUD para que los paths fijos (/bandeja,
/eliminadas, ...) no los capture /{thesis_id}.

Fecha: 2026-02-03
"""

import datetime as dt
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.shared.auth_context import Actor, get_current_actor
from app.modules.thesis.enums import EstadoTesis
from app.modules.thesis.routes.deps import (
    get_thesis_command_service,
    get_thesis_query_service,
    page_params,
)
from app.modules.thesis.schemas import (
    CountByEstadoRead,
    DefenseConflictRead,
    DefenseConflictsResponse,
    HistoryRead,
    MarkNotificationsReadIn,
    MarkReadResponse,
    NotificationRead,
    ThesisListResponse,
    ThesisRead,
    ThesisSummaryRead,
)
from app.modules.thesis.services import ThesisCommandService, ThesisQueryService

router = APIRouter(tags=["tesis:consultas"])


def _list_response(items) -> ThesisListResponse:
    return ThesisListResponse(
        items=[ThesisSummaryRead.model_validate(t) for t in items],
        total=len(items),
    )


@router.get("", response_model=ThesisListResponse, summary="Mis tesis")
async def list_my_theses(
    estado: Optional[List[EstadoTesis]] = Query(None),
    limit: int = Query(0, ge=0),
    offset: int = Query(0, ge=0),
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    limit, offset = page_params(limit, offset)
    items = await q.list_my_theses(actor, estados=estado, limit=limit, offset=offset)
    return _list_response(items)


@router.get("/bandeja", response_model=ThesisListResponse, summary="Bandeja por estado (Mesa de Partes)")
async def list_by_estados(
    estado: List[EstadoTesis] = Query(...),
    limit: int = Query(0, ge=0),
    offset: int = Query(0, ge=0),
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    limit, offset = page_params(limit, offset)
    items = await q.list_by_estados(actor, estado, limit=limit, offset=offset)
    return _list_response(items)


@router.get("/resumen", response_model=List[CountByEstadoRead], summary="Cantidad de tesis por estado")
async def count_by_estado(
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    counts = await q.count_by_estado(actor)
    return [CountByEstadoRead(estado=e, total=n) for e, n in sorted(counts.items(), key=lambda kv: kv[0].value)]


@router.get("/eliminadas", response_model=ThesisListResponse, summary="Tesis eliminadas (ADMIN)")
async def list_deleted(
    limit: int = Query(0, ge=0),
    offset: int = Query(0, ge=0),
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    limit, offset = page_params(limit, offset)
    return _list_response(await q.list_deleted(actor, limit=limit, offset=offset))


@router.get("/codigo/{codigo}", response_model=ThesisRead, summary="Buscar tesis por código")
async def get_by_codigo(
    codigo: str,
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    return ThesisRead.model_validate(await q.get_by_codigo(codigo, actor))


@router.get(
    "/sustentaciones/cruces",
    response_model=DefenseConflictsResponse,
    summary="Cruces de horario con otras sustentaciones",
)
async def defense_conflicts(
    fecha: dt.date,
    hora: dt.time,
    lugar: Optional[str] = Query(None),
    jurado_id: Optional[List[UUID]] = Query(None),
    thesis_id: Optional[UUID] = Query(None, description="Tesis a programar (se excluye y aporta su jurado)"),
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    inicio = dt.datetime.combine(fecha, hora.replace(tzinfo=None), tzinfo=hora.tzinfo or dt.timezone.utc)
    conflictos = await q.find_defense_conflicts(
        inicio=inicio,
        lugar=lugar,
        jurado_ids=jurado_id or (),
        exclude_thesis_id=thesis_id,
    )
    return DefenseConflictsResponse(
        inicio=inicio,
        duracion_minutos=int(q.duracion_sustentacion.total_seconds() // 60),
        conflictos=[
            DefenseConflictRead(
                thesis_id=c.thesis_id,
                codigo=c.codigo,
                inicio=c.inicio,
                fin=c.fin,
                motivos=list(c.motivos),
                jurados_compartidos=sorted(c.jurados_compartidos, key=str),
            )
            for c in conflictos
        ],
    )


@router.get("/notificaciones", response_model=List[NotificationRead], summary="Mis notificaciones")
async def list_notifications(
    solo_no_leidas: bool = Query(False),
    limit: int = Query(0, ge=0),
    offset: int = Query(0, ge=0),
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    limit, offset = page_params(limit, offset)
    items = await q.list_notifications(actor, only_unread=solo_no_leidas, limit=limit, offset=offset)
    return [NotificationRead.model_validate(n) for n in items]


@router.post("/notificaciones/leidas", response_model=MarkReadResponse, summary="Marcar notificaciones como leídas")
async def mark_notifications_read(
    body: MarkNotificationsReadIn,
    actor: Actor = Depends(get_current_actor),
    svc: ThesisCommandService = Depends(get_thesis_command_service),
):
    return MarkReadResponse(actualizadas=await svc.mark_notifications_read(actor=actor, ids=body.ids))


@router.get("/{thesis_id}/historial", response_model=List[HistoryRead], summary="Historial de estados")
async def get_history(
    thesis_id: UUID,
    actor: Actor = Depends(get_current_actor),
    q: ThesisQueryService = Depends(get_thesis_query_service),
):
    return [HistoryRead.model_validate(h) for h in await q.get_history(thesis_id, actor)]

# Fin del archivo backend/app/modules/thesis/routes/queries.py
