# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/services/workflow.py

Orquestador del flujo de tesis.

execute(thesis_id, accion, actor, payload):
    1. SELECT ... FOR UPDATE de la tesis (populate_existing)
    2. snapshot inmutable
    3. decide() (puro: autorización, estado, precondiciones)
    4. apply_transition() (única escritura de estado + historial)
    5. commit (commit_or_raise); StaleDataError → ConcurrentModification
    6. notificaciones best-effort DESPUÉS del commit

Cualquier error en 1–5 deja la tesis intacta: rollback y error tipado.
Un fallo al notificar solo se registra en el log.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.auth_context import Actor
from app.shared.integrations.notification_sender import INotificationSender, get_notification_sender
from app.modules.thesis.enums import AccionTesis, ResultadoEvaluacion
from app.modules.thesis.facades.base import now_utc, run_locked
from app.modules.thesis.facades.document_requirements import RequirementCheck, check_snapshot
from app.modules.thesis.facades.errors import (
    ConcurrentModification,
    DuplicateEvaluation,
    InvalidJuror,
    ThesisNotFound,
    ThesisWorkflowError,
)
from app.modules.thesis.facades.jury_evaluation_aggregator import (
    EvaluationProgress,
    check_evaluation,
    progress_for_snapshot,
)
from app.modules.thesis.facades.notifications import (
    PendingNotification,
    build_evaluations_complete_notification,
    build_transition_notifications,
)
from app.modules.thesis.facades.snapshots import ThesisSnapshot, build_snapshot
from app.modules.thesis.facades.thesis_state_machine import (
    ActionPayload,
    TransitionOutcome,
    WorkflowParams,
    apply_transition,
    decide,
)
from app.modules.thesis.metrics import instrument_workflow_action
from app.modules.thesis.models import JuryEvaluation, Thesis, ThesisStatusHistory
from app.modules.thesis.repositories import ThesisRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    thesis: Thesis
    outcome: TransitionOutcome
    history: ThesisStatusHistory


@dataclass(frozen=True)
class EvaluationResult:
    thesis: Thesis
    evaluation: JuryEvaluation
    progress: EvaluationProgress


async def dispatch_notifications(
    notifier: INotificationSender,
    pending: Iterable[PendingNotification],
) -> None:
    """Entrega best-effort: un fallo se registra y nunca se propaga."""
    for item in pending:
        try:
            await notifier.notify(item.event, list(item.recipients))
        except Exception as e:
            logger.warning(
                "thesis_notification_failed tipo=%s thesis_id=%s error=%s",
                item.event.tipo, item.event.thesis_id, e,
            )


class ThesisWorkflowService:
    """Compone máquina de estados, persistencia y notificaciones."""

    def __init__(
        self,
        db: AsyncSession,
        *,
        notifier: Optional[INotificationSender] = None,
        params: Optional[WorkflowParams] = None,
    ):
        self.db = db
        self.notifier = notifier if notifier is not None else get_notification_sender()
        if params is None:
            from app.core.settings import workflow_params
            params = workflow_params()
        self.params = params
        self.repo = ThesisRepository()

    # ---- Transiciones ----
    async def execute(
        self,
        thesis_id: UUID,
        accion: AccionTesis,
        actor: Actor,
        payload: Optional[ActionPayload] = None,
        *,
        now: Optional[dt.datetime] = None,
    ) -> TransitionResult:
        """
        Ejecuta una acción del flujo sobre la tesis.

        Raises:
            ThesisNotFound, UnauthorizedAction, InvalidTransition,
            PreconditionFailed, ConcurrentModification
        """
        accion = AccionTesis(accion)
        now = now or now_utc()

        async with instrument_workflow_action(accion.value) as metrics:
            async def _work(thesis: Thesis):
                snapshot = build_snapshot(thesis)
                outcome = decide(snapshot, accion, actor, payload, now=now, params=self.params)
                history = apply_transition(thesis, outcome, actor_id=actor.user_id, now=now)
                await self.db.flush()
                return thesis, outcome, history

            try:
                thesis, outcome, history = await run_locked(self.db, thesis_id, _work)
            except ConcurrentModification:
                metrics.set_conflict()
                logger.info("thesis_action_conflict accion=%s thesis_id=%s", accion.value, thesis_id)
                raise
            except ThesisWorkflowError as e:
                metrics.set_rejected()
                logger.info(
                    "thesis_action_rejected accion=%s error_code=%s code=%s thesis_id=%s",
                    accion.value, e.error_code, e.extra.get("code"), thesis_id,
                )
                raise
            metrics.set_success()

        await dispatch_notifications(
            self.notifier,
            build_transition_notifications(build_snapshot(thesis), outcome, actor.user_id),
        )
        return TransitionResult(thesis=thesis, outcome=outcome, history=history)

    # ---- Evaluaciones ----
    async def record_evaluation(
        self,
        thesis_id: UUID,
        actor: Actor,
        resultado: ResultadoEvaluacion,
        observaciones: Optional[str] = None,
        archivo_ref: Optional[str] = None,
        *,
        now: Optional[dt.datetime] = None,
    ) -> EvaluationResult:
        """
        Registra la evaluación del jurado `actor` en la ronda vigente.

        `archivo_ref` es la referencia de storage del adjunto de observaciones
        (ThesisCommandService.store_evaluation_attachment).

        Una violación del UNIQUE (jury_member_id, ronda) por una carrera se
        reporta como DuplicateEvaluation y cuenta como conflicto en métricas.
        """
        resultado = ResultadoEvaluacion(resultado)
        now = now or now_utc()
        juror_ref = {}

        async def _work(thesis: Thesis) -> EvaluationResult:
            snapshot = build_snapshot(thesis)
            juror = snapshot.juror_for_user(actor.user_id)
            if juror is None:
                raise InvalidJuror("No eres un miembro activo del jurado de esta tesis")
            if not juror.is_voting:
                raise InvalidJuror("El accesitario solo evalúa si reemplaza a un jurado titular")
            juror_ref.update(id=juror.id, ronda=snapshot.ronda_actual)
            check_evaluation(snapshot, juror.id, snapshot.ronda_actual, resultado, observaciones)

            evaluation = JuryEvaluation(
                jury_member_id=juror.id,
                ronda=snapshot.ronda_actual,
                fase=snapshot.fase_actual,
                resultado=resultado,
                observaciones=(observaciones or "").strip() or None,
                archivo_url=archivo_ref,
                created_at=now,
            )
            thesis.evaluaciones.append(evaluation)
            thesis.updated_at = now
            await self.db.flush()
            progress = progress_for_snapshot(build_snapshot(thesis))
            return EvaluationResult(thesis=thesis, evaluation=evaluation, progress=progress)

        async with instrument_workflow_action("REGISTRAR_EVALUACION") as metrics:
            try:
                result = await run_locked(self.db, thesis_id, _work)
            except IntegrityError as e:
                metrics.set_conflict()
                raise DuplicateEvaluation(juror_ref.get("id"), juror_ref.get("ronda", 0)) from e
            except ThesisWorkflowError:
                metrics.set_rejected()
                raise
            metrics.set_success()

        logger.info(
            "thesis_evaluation_recorded thesis_id=%s ronda=%s resultado=%s progreso=%s/%s",
            thesis_id, result.evaluation.ronda, resultado.value,
            result.progress.evaluados, result.progress.total,
        )
        if result.progress.todos_evaluaron:
            pending = build_evaluations_complete_notification(build_snapshot(result.thesis))
            await dispatch_notifications(self.notifier, [pending] if pending else [])
        return result

    # ---- Lecturas derivadas ----
    async def _snapshot(self, thesis_id: UUID) -> ThesisSnapshot:
        thesis = await self.repo.get_by_id(self.db, thesis_id)
        if thesis is None:
            raise ThesisNotFound(thesis_id)
        return build_snapshot(thesis)

    async def evaluation_progress(self, thesis_id: UUID, ronda: Optional[int] = None) -> EvaluationProgress:
        return progress_for_snapshot(await self._snapshot(thesis_id), ronda)

    async def check_requirements(self, thesis_id: UUID) -> RequirementCheck:
        return check_snapshot(await self._snapshot(thesis_id))


__all__ = [
    "TransitionResult",
    "EvaluationResult",
    "ThesisWorkflowService",
    "dispatch_notifications",
]

# Fin del archivo backend/app/modules/thesis/services/workflow.py
