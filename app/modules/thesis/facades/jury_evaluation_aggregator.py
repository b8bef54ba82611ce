# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/jury_evaluation_aggregator.py

Agregador de evaluaciones del jurado.

- Valida el registro de una evaluación individual (jurado activo, ronda
  vigente, observaciones obligatorias si OBSERVADO, una por ronda).
- Calcula el progreso de la ronda y el resultado por mayoría.

Regla de mayoría: APROBADO solo si MÁS de la mitad de los jurados votantes
(PRESIDENTE, VOCAL, SECRETARIO activos) aprobó. Empate u OBSERVADO
mayoritario → OBSERVADO. El voto del ACCESITARIO no cuenta salvo que haya
sido promovido (en cuyo caso ya ocupa un rol votante).

Funciones puras: la persistencia la hace services/workflow.py.

Fecha: 2026-02-03
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple
from uuid import UUID

from app.modules.thesis.enums import EVALUATION_STATES, ResultadoEvaluacion
from app.modules.thesis.facades.errors import (
    DuplicateEvaluation,
    InvalidJuror,
    InvalidTransition,
    MissingObservations,
    PreconditionFailed,
)
from app.modules.thesis.facades.snapshots import EvaluationView, JurorView, ThesisSnapshot


@dataclass(frozen=True)
class EvaluationProgress:
    ronda: int
    evaluados: int
    total: int
    todos_evaluaron: bool
    resultado_mayoria: Optional[ResultadoEvaluacion]
    aprobados: int = 0
    observados: int = 0
    pendientes: Tuple[UUID, ...] = ()


def majority_result(
    votes: Iterable[ResultadoEvaluacion],
    total_voting: int,
) -> ResultadoEvaluacion:
    """
    Resultado por mayoría estricta sobre `total_voting` jurados votantes.

    Idempotente: no depende del orden ni del número de llamadas.
    """
    aprobados = sum(1 for v in votes if v == ResultadoEvaluacion.APROBADO)
    if total_voting > 0 and aprobados * 2 > total_voting:
        return ResultadoEvaluacion.APROBADO
    return ResultadoEvaluacion.OBSERVADO


def compute_progress(
    jurors: Sequence[JurorView],
    evaluations: Sequence[EvaluationView],
    ronda: int,
) -> EvaluationProgress:
    """
    Progreso de la ronda `ronda`.

    `resultado_mayoria` es None mientras falte algún jurado votante.
    """
    voting = [j for j in jurors if j.is_voting]
    voting_ids = {j.id for j in voting}
    votes = {
        e.jury_member_id: e.resultado
        for e in evaluations
        if e.ronda == ronda and e.jury_member_id in voting_ids
    }
    total = len(voting)
    evaluados = len(votes)
    todos = total > 0 and evaluados == total
    aprobados = sum(1 for v in votes.values() if v == ResultadoEvaluacion.APROBADO)
    return EvaluationProgress(
        ronda=ronda,
        evaluados=evaluados,
        total=total,
        todos_evaluaron=todos,
        resultado_mayoria=majority_result(votes.values(), total) if todos else None,
        aprobados=aprobados,
        observados=evaluados - aprobados,
        pendientes=tuple(j.id for j in voting if j.id not in votes),
    )


def progress_for_snapshot(snapshot: ThesisSnapshot, ronda: Optional[int] = None) -> EvaluationProgress:
    ronda = snapshot.ronda_actual if ronda is None else ronda
    return compute_progress(snapshot.jurados, snapshot.evaluaciones, ronda)


def check_evaluation(
    snapshot: ThesisSnapshot,
    jury_member_id: UUID,
    ronda: int,
    resultado: ResultadoEvaluacion,
    observaciones: Optional[str] = None,
) -> JurorView:
    """
    Valida el registro de una evaluación sin persistir nada.

    Raises:
        InvalidTransition: la tesis no está en evaluación.
        InvalidJuror: el jurado no es miembro activo de la tesis.
        PreconditionFailed(RONDA_NO_VIGENTE): la ronda no es la actual.
        MissingObservations: OBSERVADO sin observaciones.
        DuplicateEvaluation: ya existe evaluación para (jurado, ronda).

    Returns:
        La vista del jurado evaluador.
    """
    if snapshot.estado not in EVALUATION_STATES:
        raise InvalidTransition(
            "REGISTRAR_EVALUACION",
            snapshot.estado,
            "La tesis no está en etapa de evaluación",
        )

    juror = snapshot.juror_by_id(jury_member_id)
    if juror is None or not juror.is_active:
        raise InvalidJuror("No eres un miembro activo del jurado de esta tesis")

    if ronda != snapshot.ronda_actual:
        raise PreconditionFailed(
            "RONDA_NO_VIGENTE",
            f"La ronda {ronda} no es la ronda vigente ({snapshot.ronda_actual})",
        )

    if resultado == ResultadoEvaluacion.OBSERVADO and not (observaciones or "").strip():
        raise MissingObservations()

    if any(e.jury_member_id == jury_member_id and e.ronda == ronda for e in snapshot.evaluaciones):
        raise DuplicateEvaluation(jury_member_id, ronda)

    return juror


__all__ = [
    "EvaluationProgress",
    "majority_result",
    "compute_progress",
    "progress_for_snapshot",
    "check_evaluation",
]

# Fin del archivo backend/app/modules/thesis/facades/jury_evaluation_aggregator.py
