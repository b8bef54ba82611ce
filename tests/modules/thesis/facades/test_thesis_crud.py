# -*- coding: utf-8 -*-
"""
backend/tests/modules/thesis/facades/test_thesis_crud.py

Alta, edición de metadatos, eliminación lógica y restauración.
"""

import re
from uuid import uuid4

import pytest

from app.modules.thesis.enums import (
    AccionTesis,
    EstadoParticipacion,
    EstadoTesis,
    FaseTesis,
    TipoAsesor,
    TipoAutor,
)
from app.modules.thesis.facades import thesis as thesis_ops
from app.modules.thesis.facades.errors import (
    InvalidTransition,
    ParticipantConflict,
    PreconditionFailed,
    ThesisNotFound,
    UnauthorizedAction,
)
from app.modules.thesis.facades.thesis.crud import normalize_keywords
from app.modules.thesis.repositories import ThesisRepository


def test_generate_codigo_format(now):
    codigo = thesis_ops.generate_codigo(now)
    assert re.fullmatch(r"TES-2026-[0-9A-F]{6}", codigo)


@pytest.mark.parametrize("entrada,esperado", [
    (None, []),
    (["IA", " ia ", "Machine   learning", "", "machine learning"], ["IA", "Machine learning"]),
])
def test_normalize_keywords(entrada, esperado):
    assert normalize_keywords(entrada) == esperado


async def test_create_thesis_starts_as_draft(flow, coauthor, coadvisor):
    thesis = await flow.create(
        resumen="  Resumen  ",
        palabras_clave=["deserción", "Deserción", "ML"],
        coautor_id=coauthor.user_id,
        coasesor_id=coadvisor.user_id,
    )
    assert thesis.estado == EstadoTesis.BORRADOR
    assert thesis.fase_actual == FaseTesis.PROYECTO
    assert thesis.ronda_actual == 0
    assert thesis.fecha_limite_evaluacion is None
    assert thesis.voucher_fisico_entregado is False
    assert thesis.resumen == "Resumen"
    assert thesis.palabras_clave == ["deserción", "ML"]
    assert thesis.historial == []

    principal = next(a for a in thesis.autores if a.tipo == TipoAutor.AUTOR_PRINCIPAL)
    assert principal.user_id == flow.student.user_id
    assert principal.estado == EstadoParticipacion.ACEPTADO
    coautor = next(a for a in thesis.autores if a.tipo == TipoAutor.COAUTOR)
    assert coautor.estado == EstadoParticipacion.PENDIENTE
    assert {a.tipo for a in thesis.asesores} == {TipoAsesor.ASESOR, TipoAsesor.COASESOR}
    assert all(a.estado == EstadoParticipacion.PENDIENTE for a in thesis.asesores)


async def test_only_students_create(db, advisor, coadvisor, now):
    with pytest.raises(UnauthorizedAction):
        await thesis_ops.create_thesis(db, actor=advisor, titulo="X", asesor_id=coadvisor.user_id, now=now)


async def test_same_person_cannot_hold_two_roles(flow):
    with pytest.raises(ParticipantConflict):
        await flow.create(asesor_id=flow.student.user_id)
    with pytest.raises(ParticipantConflict):
        await flow.create(coasesor_id=flow.advisor.user_id)


async def test_title_is_required(flow):
    with pytest.raises(PreconditionFailed) as exc:
        await flow.create(titulo="   ")
    assert exc.value.code == "TITULO_REQUERIDO"


async def test_codes_are_unique(make_flow):
    a, b = make_flow(), make_flow()
    t1 = await a.create()
    t2 = await b.create()
    assert t1.codigo != t2.codigo


async def test_update_metadata_whitelist(flow):
    await flow.create()
    thesis = await thesis_ops.update_metadata(
        flow.db, flow.thesis_id, actor=flow.student, now=flow.tick(),
        titulo="  Nuevo   título ", palabras_clave=["a", "A", "b"], estado="APROBADA",
    )
    assert thesis.titulo == "Nuevo título"
    assert thesis.palabras_clave == ["a", "b"]
    assert thesis.estado == EstadoTesis.BORRADOR


async def test_update_metadata_only_by_authors(flow):
    await flow.create()
    with pytest.raises(UnauthorizedAction):
        await thesis_ops.update_metadata(flow.db, flow.thesis_id, actor=flow.advisor, titulo="Otro")


async def test_update_metadata_outside_editable_state(flow):
    await flow.to_in_review()
    with pytest.raises(InvalidTransition) as exc:
        await thesis_ops.update_metadata(flow.db, flow.thesis_id, actor=flow.student, titulo="Otro")
    assert exc.value.accion == "EDITAR"
    assert (await flow.reload()).titulo != "Otro"


async def test_soft_delete_and_restore(flow, admin):
    await flow.create()
    deleted = await thesis_ops.soft_delete(flow.db, flow.thesis_id, actor=flow.student, now=flow.tick())
    assert deleted.eliminada is True
    assert deleted.estado == EstadoTesis.BORRADOR
    assert deleted.deleted_at is not None

    assert await ThesisRepository().get_by_id(flow.db, flow.thesis_id) is None
    with pytest.raises(ThesisNotFound):
        await thesis_ops.update_metadata(flow.db, flow.thesis_id, actor=flow.student, titulo="X")

    with pytest.raises(UnauthorizedAction):
        await thesis_ops.restore(flow.db, flow.thesis_id, actor=flow.student)

    restored = await thesis_ops.restore(flow.db, flow.thesis_id, actor=admin, now=flow.tick())
    assert restored.eliminada is False
    assert restored.deleted_at is None
    assert restored.historial == []

    with pytest.raises(PreconditionFailed) as exc:
        await thesis_ops.restore(flow.db, flow.thesis_id, actor=admin)
    assert exc.value.code == "TESIS_NO_ELIMINADA"


async def test_soft_delete_only_in_draft(flow):
    await flow.to_in_review()
    with pytest.raises(InvalidTransition):
        await thesis_ops.soft_delete(flow.db, flow.thesis_id, actor=flow.student)


async def test_soft_delete_only_by_principal_author(flow, coauthor):
    await flow.create(coautor_id=coauthor.user_id)
    await flow.accept_invitation(coauthor)
    with pytest.raises(UnauthorizedAction):
        await thesis_ops.soft_delete(flow.db, flow.thesis_id, actor=coauthor)


async def test_admin_soft_deletes_in_any_state(flow, admin):
    await flow.to_in_review()
    historial_previo = len((await flow.reload()).historial)

    deleted = await thesis_ops.soft_delete(flow.db, flow.thesis_id, actor=admin, now=flow.tick())
    assert deleted.eliminada is True
    assert deleted.estado == EstadoTesis.EN_REVISION
    assert len(deleted.historial) == historial_previo

    with pytest.raises(PreconditionFailed) as exc:
        await thesis_ops.soft_delete(flow.db, flow.thesis_id, actor=admin)
    assert exc.value.code == "TESIS_YA_ELIMINADA"

    restored = await thesis_ops.restore(flow.db, flow.thesis_id, actor=admin, now=flow.tick())
    assert restored.estado == EstadoTesis.EN_REVISION


async def test_admin_cannot_delete_missing_thesis(db, admin):
    with pytest.raises(ThesisNotFound):
        await thesis_ops.soft_delete(db, uuid4(), actor=admin)


async def test_restored_thesis_resumes_flow(flow, admin):
    await flow.draft_ready()
    await thesis_ops.soft_delete(flow.db, flow.thesis_id, actor=flow.student, now=flow.tick())
    await thesis_ops.restore(flow.db, flow.thesis_id, actor=admin, now=flow.tick())
    result = await flow.act(AccionTesis.ENVIAR_REVISION, flow.student)
    assert result.thesis.estado == EstadoTesis.EN_REVISION

# Fin del archivo backend/tests/modules/thesis/facades/test_thesis_crud.py
