# -*- coding: utf-8 -*-
"""
backend/tests/modules/thesis/services/test_query_service.py

Lecturas: detalle con predicados derivados (plazos, acciones, requisitos),
visibilidad, bandejas y cruces de sustentación.
"""

import datetime as dt

import pytest

from app.modules.thesis.enums import AccionTesis, EstadoTesis, TipoDocumento
from app.modules.thesis.facades import thesis as thesis_ops
from app.modules.thesis.facades.base import as_utc
from app.modules.thesis.facades.defense_schedule import MOTIVO_JURADO, MOTIVO_LUGAR
from app.modules.thesis.facades.errors import ThesisNotFound, UnauthorizedAction
from app.modules.thesis.services.queries import ThesisQueryService, can_view, deadline_status

UTC = dt.timezone.utc


@pytest.fixture
def queries(db) -> ThesisQueryService:
    return ThesisQueryService(db, duracion_sustentacion=dt.timedelta(hours=2))


# ---------------------------------------------------------------------------
# Plazos
# ---------------------------------------------------------------------------
async def test_evaluation_deadline_status(flow):
    await flow.to_project_evaluation()
    thesis = await flow.reload()

    status = deadline_status(thesis, flow.clock)
    assert status.evaluacion_vencida is False
    assert status.correccion_vencida is False
    assert status.dias_habiles_restantes == 15

    vencido = as_utc(thesis.fecha_limite_evaluacion) + dt.timedelta(minutes=1)
    status = deadline_status(thesis, vencido)
    assert status.evaluacion_vencida is True
    assert status.dias_habiles_restantes == 0


async def test_correction_deadline_status(flow):
    await flow.to_project_evaluation()
    await flow.vote_all("OBSERVADO")
    await flow.verdict()
    thesis = await flow.reload()

    status = deadline_status(thesis, flow.clock)
    assert status.fecha_limite_evaluacion is None
    assert status.dias_habiles_restantes == 30
    assert status.correccion_vencida is False

    status = deadline_status(thesis, as_utc(thesis.fecha_limite_correccion) + dt.timedelta(seconds=1))
    assert status.correccion_vencida is True


async def test_draft_has_no_deadlines(flow):
    await flow.create()
    status = deadline_status(await flow.reload(), flow.clock)
    assert status.dias_habiles_restantes is None
    assert not status.evaluacion_vencida and not status.correccion_vencida


# ---------------------------------------------------------------------------
# Detalle y visibilidad
# ---------------------------------------------------------------------------
async def test_detail_for_author_in_draft(flow, queries):
    await flow.draft_ready()
    detail = await queries.get_thesis(flow.thesis_id, flow.student, now=flow.clock)
    assert detail.editable is True
    assert detail.terminal is False
    assert detail.acciones_disponibles == [AccionTesis.ENVIAR_REVISION]
    assert detail.requisitos.complete is True
    assert detail.progreso is None


async def test_detail_in_evaluation(flow, queries):
    await flow.to_project_evaluation()
    await flow.vote("PRESIDENTE", "APROBADO")

    detail = await queries.get_thesis(flow.thesis_id, flow.jurors["PRESIDENTE"], now=flow.clock)
    assert detail.editable is False
    assert detail.acciones_disponibles == [AccionTesis.SUBIR_DICTAMEN]
    assert (detail.progreso.evaluados, detail.progreso.total) == (1, 3)

    registrar_view = await queries.get_thesis(flow.thesis_id, flow.registrar, now=flow.clock)
    assert registrar_view.acciones_disponibles == []


async def test_visibility(flow, queries, outsider):
    await flow.create()
    thesis = await flow.reload()
    assert can_view(thesis, flow.student)
    assert can_view(thesis, flow.advisor)
    assert can_view(thesis, flow.registrar)
    assert not can_view(thesis, outsider)

    with pytest.raises(UnauthorizedAction):
        await queries.get_thesis(flow.thesis_id, outsider)


async def test_deleted_thesis_only_visible_to_admin(flow, queries):
    await flow.create()
    await thesis_ops.soft_delete(flow.db, flow.thesis_id, actor=flow.student, now=flow.tick())

    with pytest.raises(ThesisNotFound):
        await queries.get_thesis(flow.thesis_id, flow.student)

    detail = await queries.get_thesis(flow.thesis_id, flow.admin)
    assert detail.thesis.eliminada is True
    assert detail.editable is False
    assert detail.acciones_disponibles == []

    assert [t.id for t in await queries.list_deleted(flow.admin)] == [flow.thesis_id]
    with pytest.raises(UnauthorizedAction):
        await queries.list_deleted(flow.registrar)


async def test_get_by_codigo(flow, queries, outsider):
    thesis = await flow.create()
    found = await queries.get_by_codigo(thesis.codigo.lower(), flow.student)
    assert found.id == thesis.id
    with pytest.raises(UnauthorizedAction):
        await queries.get_by_codigo(thesis.codigo, outsider)
    with pytest.raises(ThesisNotFound):
        await queries.get_by_codigo("TES-1999-000000", flow.student)


# ---------------------------------------------------------------------------
# Listados
# ---------------------------------------------------------------------------
async def test_list_my_theses(flow, queries, outsider):
    await flow.to_project_evaluation()
    assert [t.id for t in await queries.list_my_theses(flow.student)] == [flow.thesis_id]
    assert [t.id for t in await queries.list_my_theses(flow.advisor)] == [flow.thesis_id]
    assert [t.id for t in await queries.list_my_theses(flow.jurors["VOCAL"])] == [flow.thesis_id]
    assert await queries.list_my_theses(outsider) == []
    assert await queries.list_my_theses(flow.student, estados=[EstadoTesis.BORRADOR]) == []


async def test_registrar_inbox(make_flow, queries):
    en_revision, borrador = make_flow(), make_flow()
    await en_revision.to_in_review()
    await borrador.create()

    inbox = await queries.list_by_estados(en_revision.registrar, [EstadoTesis.EN_REVISION])
    assert [t.id for t in inbox] == [en_revision.thesis_id]

    counts = await queries.count_by_estado(en_revision.registrar)
    assert counts == {EstadoTesis.EN_REVISION: 1, EstadoTesis.BORRADOR: 1}

    with pytest.raises(UnauthorizedAction):
        await queries.list_by_estados(en_revision.student, [EstadoTesis.EN_REVISION])
    with pytest.raises(UnauthorizedAction):
        await queries.count_by_estado(en_revision.student)


async def test_history_documents_and_panel(flow, queries):
    await flow.to_project_evaluation()
    await flow.vote("VOCAL", "APROBADO")

    historial = await queries.get_history(flow.thesis_id, flow.advisor)
    assert [h.estado_nuevo for h in historial][-1] == EstadoTesis.EN_EVALUACION_JURADO

    vigentes = await queries.list_documents(flow.thesis_id, flow.student, only_current=True)
    assert {d.tipo for d in vigentes} == {
        TipoDocumento.CARTA_ACEPTACION_ASESOR, TipoDocumento.PROYECTO, TipoDocumento.VOUCHER_PAGO,
    }
    proyectos = await queries.list_documents(flow.thesis_id, flow.student, tipo=TipoDocumento.PROYECTO)
    documento = await queries.get_document(proyectos[0].id, flow.registrar)
    assert documento.tipo == TipoDocumento.PROYECTO

    jurados, evaluaciones, progreso = await queries.get_jury_panel(flow.thesis_id, flow.registrar)
    assert len(jurados) == 4
    assert len(evaluaciones) == 1
    assert progreso.evaluados == 1

    _, anteriores, _ = await queries.get_jury_panel(flow.thesis_id, flow.registrar, ronda=0)
    assert anteriores == []


# ---------------------------------------------------------------------------
# Sustentaciones
# ---------------------------------------------------------------------------
async def test_defense_conflicts(make_flow, queries):
    programada = make_flow()
    await programada.to_defense()

    otra = make_flow()
    await otra.to_assigning()
    await otra.assign_panel()

    mismo_lugar = await queries.find_defense_conflicts(
        inicio=dt.datetime(2026, 6, 15, 11, 0, tzinfo=UTC), lugar="auditorio a",
    )
    assert [(c.thesis_id, c.motivos) for c in mismo_lugar] == [(programada.thesis_id, (MOTIVO_LUGAR,))]

    mismo_jurado = await queries.find_defense_conflicts(
        inicio=dt.datetime(2026, 6, 15, 9, 0, tzinfo=UTC), lugar="Aula 5", exclude_thesis_id=otra.thesis_id,
    )
    assert [c.motivos for c in mismo_jurado] == [(MOTIVO_JURADO,)]
    assert len(mismo_jurado[0].jurados_compartidos) == 4

    sin_cruce = await queries.find_defense_conflicts(
        inicio=dt.datetime(2026, 6, 15, 12, 0, tzinfo=UTC), lugar="Auditorio A",
    )
    assert sin_cruce == []

    # La propia sustentación no cuenta como cruce
    propia = await queries.find_defense_conflicts(
        inicio=dt.datetime(2026, 6, 15, 10, 0, tzinfo=UTC), lugar="Auditorio A",
        exclude_thesis_id=programada.thesis_id,
    )
    assert propia == []

# Fin del archivo backend/tests/modules/thesis/services/test_query_service.py
