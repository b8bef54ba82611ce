# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/services/queries.py

Capa de aplicación (lecturas/consultas) del módulo de tesis.

Los predicados derivados (editable, plazos vencidos, días hábiles
restantes, acciones disponibles) se calculan al leer: no hay jobs que
cambien estados por vencimiento.

Visibilidad: participantes de la tesis (autores, asesores, jurados) y
los roles MESA_PARTES / ADMIN.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.auth_context import Actor
from app.shared.utils.business_days import business_days_between, is_past_deadline
from app.modules.thesis.enums import (
    AccionTesis,
    EVALUATION_STATES,
    EstadoTesis,
    JURY_OBSERVED_STATES,
    RolActor,
    TipoDocumento,
    is_editable,
    is_terminal,
)
from app.modules.thesis.facades.base import as_utc, now_utc
from app.modules.thesis.facades.defense_schedule import DefenseConflict, find_conflicts, slot_from_thesis
from app.modules.thesis.facades.document_requirements import RequirementCheck, check_snapshot
from app.modules.thesis.facades.errors import ThesisNotFound, UnauthorizedAction
from app.modules.thesis.facades.jury_evaluation_aggregator import EvaluationProgress, progress_for_snapshot
from app.modules.thesis.facades.snapshots import build_snapshot
from app.modules.thesis.facades.thesis_state_machine import available_actions
from app.modules.thesis.models import Thesis
from app.modules.thesis.repositories import (
    JuryEvaluationRepository,
    ThesisDocumentRepository,
    ThesisHistoryRepository,
    ThesisNotificationRepository,
    ThesisRepository,
)

STAFF_ROLES = (RolActor.MESA_PARTES, RolActor.ADMIN)


@dataclass(frozen=True)
class DeadlineStatus:
    fecha_limite_evaluacion: Optional[dt.datetime]
    fecha_limite_correccion: Optional[dt.datetime]
    evaluacion_vencida: bool
    correccion_vencida: bool
    dias_habiles_restantes: Optional[int]


@dataclass(frozen=True)
class ThesisDetail:
    thesis: Thesis
    plazos: DeadlineStatus
    editable: bool
    terminal: bool
    acciones_disponibles: List[AccionTesis]
    requisitos: RequirementCheck
    progreso: Optional[EvaluationProgress]


def deadline_status(thesis: Thesis, now: dt.datetime) -> DeadlineStatus:
    """Estado de plazos calculado en `now` (sin persistir nada)."""
    evaluacion = as_utc(thesis.fecha_limite_evaluacion)
    correccion = as_utc(thesis.fecha_limite_correccion)

    evaluando = thesis.estado in EVALUATION_STATES
    corrigiendo = thesis.estado in JURY_OBSERVED_STATES
    vigente = evaluacion if evaluando else correccion if corrigiendo else None

    return DeadlineStatus(
        fecha_limite_evaluacion=evaluacion,
        fecha_limite_correccion=correccion,
        evaluacion_vencida=evaluando and is_past_deadline(evaluacion, now),
        correccion_vencida=corrigiendo and is_past_deadline(correccion, now),
        dias_habiles_restantes=business_days_between(now, vigente) if vigente is not None else None,
    )


def can_view(thesis: Thesis, actor: Actor) -> bool:
    if any(actor.has_role(r) for r in STAFF_ROLES):
        return True
    uid = actor.user_id
    return (
        any(a.user_id == uid for a in thesis.autores)
        or any(a.user_id == uid for a in thesis.asesores)
        or any(j.user_id == uid for j in thesis.jurados)
    )


class ThesisQueryService:
    """Consultas de tesis, historial, documentos, jurado y bandeja. Async."""

    def __init__(self, db: AsyncSession, *, duracion_sustentacion: Optional[dt.timedelta] = None):
        self.db = db
        self.repo = ThesisRepository()
        if duracion_sustentacion is None:
            from app.core.settings import get_settings
            duracion_sustentacion = dt.timedelta(minutes=get_settings().duracion_sustentacion_minutos)
        self.duracion_sustentacion = duracion_sustentacion

    async def _get_visible(self, thesis_id: UUID, actor: Actor, *, include_deleted: bool = False) -> Thesis:
        thesis = await self.repo.get_by_id(self.db, thesis_id, include_deleted=include_deleted)
        if thesis is None:
            raise ThesisNotFound(thesis_id)
        if not can_view(thesis, actor):
            raise UnauthorizedAction("No participas en esta tesis")
        return thesis

    # ---- Tesis ----
    async def get_thesis(self, thesis_id: UUID, actor: Actor, *, now: Optional[dt.datetime] = None) -> ThesisDetail:
        include_deleted = actor.has_role(RolActor.ADMIN)
        thesis = await self._get_visible(thesis_id, actor, include_deleted=include_deleted)
        now = now or now_utc()
        snapshot = build_snapshot(thesis)
        return ThesisDetail(
            thesis=thesis,
            plazos=deadline_status(thesis, now),
            editable=is_editable(thesis.estado) and not thesis.eliminada,
            terminal=is_terminal(thesis.estado),
            acciones_disponibles=[] if thesis.eliminada else available_actions(snapshot, actor),
            requisitos=check_snapshot(snapshot),
            progreso=progress_for_snapshot(snapshot) if thesis.ronda_actual > 0 else None,
        )

    async def get_by_codigo(self, codigo: str, actor: Actor) -> Thesis:
        thesis = await self.repo.get_by_codigo(self.db, codigo.strip().upper())
        if thesis is None or thesis.eliminada:
            raise ThesisNotFound(codigo)
        if not can_view(thesis, actor):
            raise UnauthorizedAction("No participas en esta tesis")
        return thesis

    async def list_my_theses(
        self,
        actor: Actor,
        *,
        estados: Optional[Iterable[EstadoTesis]] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Thesis]:
        return await self.repo.list_for_participant(
            self.db, actor.user_id, estados=estados, limit=limit, offset=offset,
        )

    async def list_by_estados(
        self,
        actor: Actor,
        estados: Iterable[EstadoTesis],
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Thesis]:
        """Bandeja de Mesa de Partes (o ADMIN)."""
        if not any(actor.has_role(r) for r in STAFF_ROLES):
            raise UnauthorizedAction("Solo Mesa de Partes puede consultar la bandeja por estado")
        return await self.repo.list_by_estados(self.db, estados, limit=limit, offset=offset)

    async def list_deleted(self, actor: Actor, *, limit: int = 50, offset: int = 0) -> Sequence[Thesis]:
        if not actor.has_role(RolActor.ADMIN):
            raise UnauthorizedAction("Solo un administrador puede ver tesis eliminadas")
        return await self.repo.list_deleted(self.db, limit=limit, offset=offset)

    async def count_by_estado(self, actor: Actor):
        if not any(actor.has_role(r) for r in STAFF_ROLES):
            raise UnauthorizedAction("Solo Mesa de Partes puede consultar el resumen por estado")
        return await self.repo.count_by_estado(self.db)

    # ---- Historial / documentos / jurado ----
    async def get_history(self, thesis_id: UUID, actor: Actor):
        await self._get_visible(thesis_id, actor)
        return await ThesisHistoryRepository().list_by_thesis(self.db, thesis_id)

    async def list_documents(
        self,
        thesis_id: UUID,
        actor: Actor,
        *,
        tipo: Optional[TipoDocumento] = None,
        only_current: bool = False,
    ):
        await self._get_visible(thesis_id, actor)
        return await ThesisDocumentRepository().list_by_thesis(
            self.db, thesis_id, tipo=tipo, only_current=only_current,
        )

    async def get_document(self, document_id: UUID, actor: Actor):
        from app.modules.thesis.facades.errors import DocumentNotFound

        documento = await ThesisDocumentRepository().get_by_id(self.db, document_id)
        if documento is None:
            raise DocumentNotFound(document_id)
        await self._get_visible(documento.thesis_id, actor)
        return documento

    async def get_jury_panel(self, thesis_id: UUID, actor: Actor, *, ronda: Optional[int] = None):
        """Jurado (activos e inactivos) y evaluaciones de la ronda pedida."""
        thesis = await self._get_visible(thesis_id, actor)
        ronda = thesis.ronda_actual if ronda is None else ronda
        evaluaciones = await JuryEvaluationRepository().list_by_thesis(self.db, thesis_id, ronda=ronda)
        return thesis.jurados, evaluaciones, progress_for_snapshot(build_snapshot(thesis), ronda)

    async def evaluation_progress(self, thesis_id: UUID, actor: Actor, ronda: Optional[int] = None) -> EvaluationProgress:
        thesis = await self._get_visible(thesis_id, actor)
        return progress_for_snapshot(build_snapshot(thesis), ronda)

    async def check_requirements(self, thesis_id: UUID, actor: Actor) -> RequirementCheck:
        thesis = await self._get_visible(thesis_id, actor)
        return check_snapshot(build_snapshot(thesis))

    # ---- Sustentaciones ----
    async def find_defense_conflicts(
        self,
        *,
        inicio: dt.datetime,
        lugar: Optional[str] = None,
        jurado_ids: Iterable[UUID] = (),
        exclude_thesis_id: Optional[UUID] = None,
    ) -> List[DefenseConflict]:
        """
        Cruces con otras sustentaciones programadas o realizadas. Si se
        indica `exclude_thesis_id`, su jurado activo se suma a `jurado_ids`.
        """
        inicio = as_utc(inicio)
        jurados = set(jurado_ids)
        if exclude_thesis_id is not None:
            propia = await self.repo.get_by_id(self.db, exclude_thesis_id)
            if propia is None:
                raise ThesisNotFound(exclude_thesis_id)
            jurados |= {j.user_id for j in propia.jurados if j.is_active}

        candidatas = await self.repo.list_scheduled_defenses(
            self.db,
            desde=inicio - self.duracion_sustentacion,
            hasta=inicio + self.duracion_sustentacion,
            exclude_id=exclude_thesis_id,
        )
        return find_conflicts(
            inicio,
            [slot_from_thesis(t) for t in candidatas],
            duracion=self.duracion_sustentacion,
            lugar=lugar,
            jurado_ids=jurados,
        )

    # ---- Bandeja ----
    async def list_notifications(self, actor: Actor, *, only_unread: bool = False, limit: int = 50, offset: int = 0):
        return await ThesisNotificationRepository().list_for_user(
            self.db, actor.user_id, only_unread=only_unread, limit=limit, offset=offset,
        )


__all__ = [
    "DeadlineStatus",
    "ThesisDetail",
    "deadline_status",
    "can_view",
    "ThesisQueryService",
]

# Fin del archivo backend/app/modules/thesis/services/queries.py
