# -*- coding: utf-8 -*-
"""
backend/tests/modules/thesis/services/test_workflow_service.py

ThesisWorkflowService sobre SQLite en memoria:
- flujo completo hasta SUSTENTADA con historial consistente
- errores que no dejan rastro (estado, historial, documentos)
- evaluaciones del jurado, accesitario, plazos
- notificaciones best-effort y métricas por acción
"""

import datetime as dt
from types import SimpleNamespace
from uuid import uuid4

import pytest
from prometheus_client import REGISTRY
from sqlalchemy.orm.exc import StaleDataError

from app.modules.thesis.enums import (
    AccionTesis,
    EstadoTesis,
    FaseTesis,
    ResultadoEvaluacion,
    TipoDocumento,
    TipoJurado,
)
from app.modules.thesis.facades import thesis as thesis_ops
from app.modules.thesis.facades.base import as_utc, run_locked
from app.modules.thesis.facades.errors import (
    ConcurrentModification,
    DuplicateEvaluation,
    InvalidJuror,
    InvalidTransition,
    MissingObservations,
    PreconditionFailed,
    ThesisNotFound,
    UnauthorizedAction,
)
from app.modules.thesis.facades.thesis_state_machine import ActionPayload, WorkflowParams
from app.modules.thesis.repositories import ThesisHistoryRepository, ThesisRepository
from app.modules.thesis.services.workflow import ThesisWorkflowService
from app.shared.utils.business_days import add_business_days

A = ResultadoEvaluacion.APROBADO
O = ResultadoEvaluacion.OBSERVADO


def _actions_count(accion: str, outcome: str) -> float:
    value = REGISTRY.get_sample_value(
        "thesis_workflow_actions_total", {"accion": accion, "outcome": outcome},
    )
    return value or 0.0


async def _history(flow):
    return list(await ThesisHistoryRepository().list_by_thesis(flow.db, flow.thesis_id))


# ---------------------------------------------------------------------------
# Flujo completo
# ---------------------------------------------------------------------------
async def test_full_lifecycle_until_defended(flow):
    await flow.to_defense()
    result = await flow.act(AccionTesis.REGISTRAR_SUSTENTACION, flow.registrar)

    assert result.outcome.estado_nuevo == EstadoTesis.SUSTENTADA
    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.SUSTENTADA
    assert thesis.fase_actual == FaseTesis.INFORME_FINAL
    assert thesis.ronda_actual == 2
    assert as_utc(thesis.fecha_sustentacion) == dt.datetime(2026, 6, 15, 10, 0, tzinfo=dt.timezone.utc)
    assert thesis.lugar_sustentacion == "Auditorio A"

    historial = await _history(flow)
    assert [h.accion for h in historial] == [
        AccionTesis.ENVIAR_REVISION,
        AccionTesis.CONFIRMAR_VOUCHER,
        AccionTesis.APROBAR,
        AccionTesis.CONFIRMAR_JURADOS,
        AccionTesis.SUBIR_DICTAMEN,
        AccionTesis.SUBIR_RESOLUCION,
        AccionTesis.ENVIAR_INFORME,
        AccionTesis.SUBIR_DICTAMEN,
        AccionTesis.REGISTRAR_SUSTENTACION,
    ]
    assert [h.secuencia for h in historial] == list(range(1, 10))


async def test_history_replays_state_chain(flow):
    await flow.to_defense()
    historial = await _history(flow)

    estado = EstadoTesis.BORRADOR
    for entry in historial:
        assert entry.estado_anterior == estado
        estado = entry.estado_nuevo
    thesis = await flow.reload()
    assert estado == thesis.estado

    rondas = [h.ronda for h in historial]
    assert rondas == sorted(rondas)
    assert rondas[-1] == thesis.ronda_actual


async def test_each_transition_writes_exactly_one_history_entry(flow):
    await flow.draft_ready()
    assert await _history(flow) == []

    result = await flow.act(AccionTesis.ENVIAR_REVISION, flow.student)
    historial = await _history(flow)
    assert len(historial) == 1
    assert historial[0].id == result.history.id
    assert historial[0].changed_by_id == flow.student.user_id
    assert as_utc(historial[0].created_at) == flow.clock


async def test_workflow_documents_are_versioned(flow):
    await flow.to_defense()
    thesis = await flow.reload()
    dictamenes = sorted(
        (d for d in thesis.documentos if d.tipo == TipoDocumento.DICTAMEN), key=lambda d: d.version,
    )
    assert [d.version for d in dictamenes] == [1, 2]
    assert [d.es_version_actual for d in dictamenes] == [False, True]
    assert all(d.firmado and d.fecha_firma is not None for d in dictamenes)
    assert dictamenes[0].uploaded_by_id == flow.jurors["PRESIDENTE"].user_id

    resolucion = [d for d in thesis.documentos if d.tipo == TipoDocumento.RESOLUCION_APROBACION]
    assert len(resolucion) == 1
    assert resolucion[0].ronda == 1


# ---------------------------------------------------------------------------
# Mesa de Partes
# ---------------------------------------------------------------------------
async def test_approve_requires_physical_voucher(flow):
    await flow.to_in_review()

    with pytest.raises(PreconditionFailed) as exc:
        await flow.act(AccionTesis.APROBAR, flow.registrar)
    assert exc.value.code == "VOUCHER_NO_CONFIRMADO"
    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.EN_REVISION
    assert len(await _history(flow)) == 1

    voucher = await flow.act(AccionTesis.CONFIRMAR_VOUCHER, flow.registrar)
    assert voucher.history.estado_anterior == voucher.history.estado_nuevo == EstadoTesis.EN_REVISION

    result = await flow.act(AccionTesis.APROBAR, flow.registrar)
    assert result.thesis.estado == EstadoTesis.ASIGNANDO_JURADOS
    assert result.thesis.voucher_fisico_entregado is True


async def test_observe_needs_comment_and_records_it(flow):
    await flow.to_in_review()

    with pytest.raises(PreconditionFailed) as exc:
        await flow.act(AccionTesis.OBSERVAR, flow.registrar, ActionPayload(comentario=""))
    assert exc.value.code == "COMENTARIO_REQUERIDO"
    assert len(await _history(flow)) == 1

    await flow.act(AccionTesis.OBSERVAR, flow.registrar, ActionPayload(comentario="Falta el índice"))
    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.OBSERVADA
    ultimo = (await _history(flow))[-1]
    assert ultimo.accion == AccionTesis.OBSERVAR
    assert ultimo.comentario == "Falta el índice"


async def test_observed_thesis_can_be_fixed_and_resubmitted(flow):
    await flow.to_in_review()
    await flow.act(AccionTesis.OBSERVAR, flow.registrar, ActionPayload(comentario="Cambiar formato"))
    await flow.upload(TipoDocumento.PROYECTO)
    await flow.act(AccionTesis.ENVIAR_REVISION, flow.student)

    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.EN_REVISION
    proyectos = [d for d in thesis.documentos if d.tipo == TipoDocumento.PROYECTO]
    assert sorted(d.version for d in proyectos) == [1, 2]


async def test_rejected_thesis_is_terminal(flow):
    await flow.to_in_review()
    await flow.act(AccionTesis.RECHAZAR, flow.registrar, ActionPayload(comentario="Tema duplicado"))
    with pytest.raises(InvalidTransition):
        await flow.act(AccionTesis.ENVIAR_REVISION, flow.student)


async def test_wrong_actor_is_rejected_before_state(flow, outsider):
    await flow.draft_ready()
    with pytest.raises(UnauthorizedAction):
        await flow.act(AccionTesis.ENVIAR_REVISION, outsider)
    with pytest.raises(UnauthorizedAction):
        await flow.act(AccionTesis.APROBAR, flow.student)


async def test_deleted_thesis_is_not_found(flow):
    await flow.draft_ready()
    await thesis_ops.soft_delete(flow.db, flow.thesis_id, actor=flow.student, now=flow.tick())
    with pytest.raises(ThesisNotFound):
        await flow.act(AccionTesis.ENVIAR_REVISION, flow.student)


# ---------------------------------------------------------------------------
# Jurado
# ---------------------------------------------------------------------------
async def test_confirm_panel_requires_secretary(flow):
    await flow.to_assigning()
    await flow.assign("PRESIDENTE")
    await flow.assign("VOCAL")

    with pytest.raises(PreconditionFailed) as exc:
        await flow.act(AccionTesis.CONFIRMAR_JURADOS, flow.registrar)
    assert exc.value.code == "JURADO_INCOMPLETO"
    assert exc.value.extra["faltantes"] == ["SECRETARIO"]

    await flow.assign("SECRETARIO")
    result = await flow.act(AccionTesis.CONFIRMAR_JURADOS, flow.registrar)
    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.EN_EVALUACION_JURADO
    assert thesis.ronda_actual == 1
    assert as_utc(thesis.fecha_limite_evaluacion) == add_business_days(flow.clock, 15)
    assert result.history.ronda == 1


async def test_two_approvals_and_one_observation_reach_majority(flow, notifier):
    await flow.to_project_evaluation()
    await flow.vote("PRESIDENTE", A)
    partial = await flow.vote("VOCAL", A)
    assert partial.progress.todos_evaluaron is False
    assert "EVALUACIONES_COMPLETAS" not in notifier.tipos()

    result = await flow.vote("SECRETARIO", O, "Ampliar el marco teórico")
    assert result.progress.todos_evaluaron is True
    assert result.progress.resultado_mayoria == A
    assert result.evaluation.observaciones == "Ampliar el marco teórico"
    assert notifier.recipients_of("EVALUACIONES_COMPLETAS") == [flow.jurors["PRESIDENTE"].user_id]

    progress = await flow.wf.evaluation_progress(flow.thesis_id)
    assert progress == result.progress


async def test_juror_cannot_vote_twice_in_a_round(flow):
    await flow.to_project_evaluation()
    await flow.vote("VOCAL", A)
    before = _actions_count("REGISTRAR_EVALUACION", "rejected")

    with pytest.raises(DuplicateEvaluation) as exc:
        await flow.vote("VOCAL", O, "cambio de opinión")
    assert exc.value.extra["ronda"] == 1
    assert _actions_count("REGISTRAR_EVALUACION", "rejected") == before + 1

    thesis = await flow.reload()
    assert len(thesis.evaluaciones) == 1


async def test_observed_vote_requires_observations(flow):
    await flow.to_project_evaluation()
    with pytest.raises(MissingObservations):
        await flow.vote("VOCAL", O, "  ")


async def test_non_member_cannot_vote(flow, outsider):
    await flow.to_project_evaluation()
    with pytest.raises(InvalidJuror):
        await flow.wf.record_evaluation(flow.thesis_id, outsider, A, now=flow.tick())


async def test_evaluation_outside_evaluation_state(flow):
    await flow.to_assigning()
    await flow.assign_panel()
    with pytest.raises(InvalidTransition):
        await flow.vote("PRESIDENTE", A)


async def test_alternate_votes_only_after_promotion(flow, admin):
    await flow.to_project_evaluation()
    with pytest.raises(InvalidJuror):
        await flow.vote("ACCESITARIO", A)

    await flow.vote("PRESIDENTE", A)
    await flow.vote("VOCAL", O)

    promovido = await thesis_ops.promote_alternate(
        flow.db, flow.thesis_id, actor=admin, ausente_id=flow.juror_ids["VOCAL"], now=flow.tick(),
    )
    assert promovido.tipo == TipoJurado.VOCAL
    assert promovido.reemplaza_a_id == flow.juror_ids["VOCAL"]

    progress = await flow.wf.evaluation_progress(flow.thesis_id)
    assert (progress.evaluados, progress.total) == (1, 3)

    with pytest.raises(InvalidJuror):
        await flow.vote("VOCAL", A)

    await flow.vote("ACCESITARIO", A)
    result = await flow.vote("SECRETARIO", A)
    assert result.progress.todos_evaluaron is True
    assert result.progress.resultado_mayoria == A

    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.EN_EVALUACION_JURADO
    assert len(thesis.evaluaciones) == 4


async def test_verdict_waits_for_all_votes(flow):
    await flow.to_project_evaluation()
    await flow.vote("PRESIDENTE", A)
    with pytest.raises(PreconditionFailed) as exc:
        await flow.verdict()
    assert exc.value.code == "EVALUACION_INCOMPLETA"

    thesis = await flow.reload()
    assert not [d for d in thesis.documentos if d.tipo == TipoDocumento.DICTAMEN]


async def test_only_president_uploads_verdict(flow):
    await flow.to_project_evaluation()
    await flow.vote_all(A)
    payload = ActionPayload(documento=None)
    with pytest.raises(UnauthorizedAction):
        await flow.act(AccionTesis.SUBIR_DICTAMEN, flow.jurors["VOCAL"], payload)


# ---------------------------------------------------------------------------
# Observaciones del jurado y rondas
# ---------------------------------------------------------------------------
async def test_observed_project_round_trip(flow):
    await flow.to_project_evaluation()
    await flow.vote_all(O)
    result = await flow.verdict()
    assert result.thesis.estado == EstadoTesis.OBSERVADA_JURADO
    observado_en = flow.clock
    thesis = await flow.reload()
    assert as_utc(thesis.fecha_limite_correccion) == add_business_days(observado_en, 30)
    assert thesis.fecha_limite_evaluacion is None

    with pytest.raises(PreconditionFailed) as exc:
        await flow.act(AccionTesis.REENVIAR_CORRECCION, flow.student)
    assert exc.value.code == "DOCUMENTO_NO_CORREGIDO"

    await flow.upload(TipoDocumento.PROYECTO)
    await flow.act(AccionTesis.REENVIAR_CORRECCION, flow.student)

    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.EN_EVALUACION_JURADO
    assert thesis.ronda_actual == 2
    assert thesis.fecha_limite_correccion is None

    progress = await flow.wf.evaluation_progress(flow.thesis_id)
    assert progress.ronda == 2
    assert progress.evaluados == 0
    # El mismo jurado vuelve a evaluar en la ronda nueva
    await flow.vote("VOCAL", A)


async def test_correction_after_deadline_is_rejected(flow):
    await flow.to_project_evaluation()
    await flow.vote_all(O)
    await flow.verdict()
    await flow.upload(TipoDocumento.PROYECTO)

    thesis = await flow.reload()
    vencido = as_utc(thesis.fecha_limite_correccion) + dt.timedelta(minutes=1)
    with pytest.raises(PreconditionFailed) as exc:
        await flow.wf.execute(flow.thesis_id, AccionTesis.REENVIAR_CORRECCION, flow.student, now=vencido)
    assert exc.value.code == "PLAZO_VENCIDO"

    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.OBSERVADA_JURADO
    assert thesis.ronda_actual == 1


async def test_round_never_decreases(flow):
    rondas = []

    async def _record():
        rondas.append((await flow.reload()).ronda_actual)

    await flow.draft_ready()
    await _record()
    await flow.act(AccionTesis.ENVIAR_REVISION, flow.student)
    await _record()
    await flow.act(AccionTesis.CONFIRMAR_VOUCHER, flow.registrar)
    await flow.act(AccionTesis.APROBAR, flow.registrar)
    await _record()
    await flow.assign_panel()
    await flow.act(AccionTesis.CONFIRMAR_JURADOS, flow.registrar)
    await _record()
    await flow.vote_all(O)
    await flow.verdict()
    await _record()
    await flow.upload(TipoDocumento.PROYECTO)
    await flow.act(AccionTesis.REENVIAR_CORRECCION, flow.student)
    await _record()
    await flow.vote_all(A)
    await flow.verdict()
    await _record()

    assert rondas == sorted(rondas)
    assert rondas[-1] == 2


# ---------------------------------------------------------------------------
# Informe final
# ---------------------------------------------------------------------------
async def test_report_approval_needs_defense_schedule(flow):
    await flow.to_report_evaluation()
    await flow.vote_all(A)

    with pytest.raises(PreconditionFailed) as exc:
        await flow.verdict()
    assert exc.value.code == "SUSTENTACION_INCOMPLETA"
    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.EN_EVALUACION_INFORME

    result = await flow.verdict(sustentacion=flow.schedule())
    assert result.thesis.estado == EstadoTesis.EN_SUSTENTACION
    assert result.outcome.resultado == A


async def test_observed_report_requires_new_report(flow):
    await flow.to_report_evaluation()
    await flow.vote_all(O)
    await flow.verdict()
    assert (await flow.reload()).estado == EstadoTesis.OBSERVADA_INFORME

    await flow.upload(TipoDocumento.INFORME_FINAL_DOC)
    await flow.act(AccionTesis.REENVIAR_CORRECCION, flow.student)
    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.EN_EVALUACION_INFORME
    assert thesis.ronda_actual == 3
    assert thesis.fase_actual == FaseTesis.INFORME_FINAL


async def test_defense_can_be_archived(flow):
    await flow.to_defense()
    await flow.act(AccionTesis.ARCHIVAR, flow.admin, ActionPayload(comentario="No se presentó"))
    thesis = await flow.reload()
    assert thesis.estado == EstadoTesis.ARCHIVADA
    assert (await _history(flow))[-1].comentario == "No se presentó"


# ---------------------------------------------------------------------------
# Notificaciones y métricas
# ---------------------------------------------------------------------------
async def test_transition_notifications_exclude_actor(flow, notifier):
    await flow.to_in_review()
    assert notifier.recipients_of("TESIS_ENVIADA") == [flow.advisor.user_id]


async def test_notification_failure_does_not_roll_back(flow, failing_notifier):
    await flow.draft_ready()
    flow.wf = ThesisWorkflowService(flow.db, notifier=failing_notifier, params=WorkflowParams())

    result = await flow.act(AccionTesis.ENVIAR_REVISION, flow.student)
    assert result.thesis.estado == EstadoTesis.EN_REVISION
    assert (await flow.reload()).estado == EstadoTesis.EN_REVISION
    assert len(await _history(flow)) == 1


async def test_metrics_by_outcome(flow):
    ok_before = _actions_count("ENVIAR_REVISION", "success")
    rejected_before = _actions_count("APROBAR", "rejected")

    await flow.to_in_review()
    with pytest.raises(PreconditionFailed):
        await flow.act(AccionTesis.APROBAR, flow.registrar)

    assert _actions_count("ENVIAR_REVISION", "success") == ok_before + 1
    assert _actions_count("APROBAR", "rejected") == rejected_before + 1


# ---------------------------------------------------------------------------
# Concurrencia
# ---------------------------------------------------------------------------
async def test_run_locked_maps_stale_data_to_conflict(mocker):
    thesis = SimpleNamespace(id=uuid4())
    mocker.patch(
        "app.modules.thesis.facades.base.get_thesis_for_update",
        mocker.AsyncMock(return_value=thesis),
    )
    db = mocker.AsyncMock()
    db.commit.side_effect = StaleDataError("version mismatch")

    async def work(t):
        return t

    with pytest.raises(ConcurrentModification) as exc:
        await run_locked(db, thesis.id, work)
    assert exc.value.retryable is True
    db.rollback.assert_awaited_once()


async def test_conflict_is_counted(flow, mocker):
    await flow.draft_ready()
    mocker.patch(
        "app.modules.thesis.services.workflow.run_locked",
        mocker.AsyncMock(side_effect=ConcurrentModification(flow.thesis_id)),
    )
    before = _actions_count("ENVIAR_REVISION", "conflict")
    with pytest.raises(ConcurrentModification):
        await flow.act(AccionTesis.ENVIAR_REVISION, flow.student)
    assert _actions_count("ENVIAR_REVISION", "conflict") == before + 1


async def test_unique_violation_on_vote_counts_as_conflict(flow, mocker):
    await flow.to_project_evaluation()
    await flow.vote("VOCAL", A)
    # Sin la validación previa el segundo voto llega al UNIQUE (jury_member_id, ronda)
    mocker.patch("app.modules.thesis.services.workflow.check_evaluation")
    conflict_before = _actions_count("REGISTRAR_EVALUACION", "conflict")
    rejected_before = _actions_count("REGISTRAR_EVALUACION", "rejected")

    with pytest.raises(DuplicateEvaluation) as exc:
        await flow.vote("VOCAL", O, "cambio de opinión")
    assert exc.value.extra["ronda"] == 1
    assert _actions_count("REGISTRAR_EVALUACION", "conflict") == conflict_before + 1
    assert _actions_count("REGISTRAR_EVALUACION", "rejected") == rejected_before

    thesis = await flow.reload()
    assert len(thesis.evaluaciones) == 1


async def test_second_session_with_stale_state_loses_the_race(flow, session_factory, notifier):
    await flow.draft_ready()

    async with session_factory() as other:
        stale = await ThesisRepository().get_by_id(other, flow.thesis_id)
        assert stale.estado == EstadoTesis.BORRADOR
        # Cierra la lectura; la instancia sigue en memoria con el estado viejo
        await other.commit()

        await flow.act(AccionTesis.ENVIAR_REVISION, flow.student)

        racer = ThesisWorkflowService(other, notifier=notifier, params=WorkflowParams())
        assert stale.estado == EstadoTesis.BORRADOR
        with pytest.raises(InvalidTransition):
            await racer.execute(flow.thesis_id, AccionTesis.ENVIAR_REVISION, flow.student, now=flow.tick())

    assert (await flow.reload()).estado == EstadoTesis.EN_REVISION
    historial = await _history(flow)
    assert [h.accion for h in historial] == [AccionTesis.ENVIAR_REVISION]
    assert [h.secuencia for h in historial] == [1]

# Fin del archivo backend/tests/modules/thesis/services/test_workflow_service.py
