# -*- coding: utf-8 -*-
"""
backend/tests/modules/thesis/facades/test_participants.py

Invitaciones de coautor / asesor / coasesor y su respuesta.
"""

import pytest

from app.modules.thesis.enums import EstadoParticipacion, TipoAsesor, TipoAutor, TipoDocumento
from app.modules.thesis.facades import thesis as thesis_ops
from app.modules.thesis.facades.errors import (
    InvalidTransition,
    ParticipantConflict,
    PreconditionFailed,
    UnauthorizedAction,
)
from app.modules.thesis.facades.document_requirements import check_snapshot
from app.modules.thesis.facades.snapshots import build_snapshot


async def _respond(flow, actor, aceptar, motivo=None):
    return await thesis_ops.respond_invitation(
        flow.db, flow.thesis_id, actor=actor, aceptar=aceptar, motivo=motivo, now=flow.tick(),
    )


async def test_accept_invitation(flow):
    await flow.create()
    response = await flow.accept_invitation()
    assert response.aceptada is True
    assert response.rol == "ASESOR"
    assert response.autor_principal_id == flow.student.user_id

    thesis = await flow.reload()
    asesor = thesis.asesores[0]
    assert asesor.estado == EstadoParticipacion.ACEPTADO
    assert asesor.fecha_respuesta is not None


async def test_reject_requires_reason(flow):
    await flow.create()
    with pytest.raises(PreconditionFailed) as exc:
        await _respond(flow, flow.advisor, False, "  ")
    assert exc.value.code == "MOTIVO_REQUERIDO"

    response = await _respond(flow, flow.advisor, False, "Sin carga disponible")
    assert response.aceptada is False
    assert response.motivo == "Sin carga disponible"
    thesis = await flow.reload()
    assert thesis.asesores[0].estado == EstadoParticipacion.RECHAZADO
    assert thesis.asesores[0].motivo_rechazo == "Sin carga disponible"


async def test_invitation_answered_once(flow):
    await flow.create()
    await flow.accept_invitation()
    with pytest.raises(PreconditionFailed) as exc:
        await _respond(flow, flow.advisor, False, "me arrepentí")
    assert exc.value.code == "INVITACION_YA_RESPONDIDA"


async def test_only_invited_users_respond(flow, outsider):
    await flow.create()
    with pytest.raises(UnauthorizedAction):
        await _respond(flow, outsider, True)
    with pytest.raises(UnauthorizedAction):
        await _respond(flow, flow.student, True)


async def test_team_frozen_after_submission(flow, coauthor):
    await flow.to_in_review()
    with pytest.raises(InvalidTransition):
        await thesis_ops.invite_participant(
            flow.db, flow.thesis_id, actor=flow.student, rol="COAUTOR", user_id=coauthor.user_id,
        )


async def test_invite_coauthor(flow, coauthor):
    await flow.create()
    nuevo = await thesis_ops.invite_participant(
        flow.db, flow.thesis_id, actor=flow.student, rol="coautor", user_id=coauthor.user_id, now=flow.tick(),
    )
    assert nuevo.tipo == TipoAutor.COAUTOR
    assert nuevo.estado == EstadoParticipacion.PENDIENTE

    snapshot = build_snapshot(await flow.reload())
    # Invitado pero aún no autor: no actúa y bloquea el envío
    assert not snapshot.is_author(coauthor.user_id)
    assert "COAUTOR_ACEPTADO" in check_snapshot(snapshot).missing_codes

    await flow.accept_invitation(coauthor)
    assert build_snapshot(await flow.reload()).is_author(coauthor.user_id)


async def test_invite_rules(flow, coauthor, coadvisor):
    await flow.create()
    with pytest.raises(PreconditionFailed) as exc:
        await thesis_ops.invite_participant(
            flow.db, flow.thesis_id, actor=flow.student, rol="JURADO", user_id=coauthor.user_id,
        )
    assert exc.value.code == "ROL_NO_INVITABLE"

    with pytest.raises(UnauthorizedAction):
        await thesis_ops.invite_participant(
            flow.db, flow.thesis_id, actor=flow.advisor, rol="COASESOR", user_id=coadvisor.user_id,
        )
    with pytest.raises(ParticipantConflict):
        await thesis_ops.invite_participant(
            flow.db, flow.thesis_id, actor=flow.student, rol="COASESOR", user_id=flow.advisor.user_id,
        )
    with pytest.raises(ParticipantConflict):
        await thesis_ops.invite_participant(
            flow.db, flow.thesis_id, actor=flow.student, rol="ASESOR", user_id=coadvisor.user_id,
        )


async def test_rejected_advisor_is_replaced(flow, coadvisor):
    await flow.create()
    await _respond(flow, flow.advisor, False, "Viaje de estudios")

    nuevo = await thesis_ops.invite_participant(
        flow.db, flow.thesis_id, actor=flow.student, rol="ASESOR", user_id=coadvisor.user_id, now=flow.tick(),
    )
    assert nuevo.tipo == TipoAsesor.ASESOR
    thesis = await flow.reload()
    assert [a.user_id for a in thesis.asesores] == [coadvisor.user_id]


async def test_removing_advisor_retires_letter(flow, coadvisor):
    await flow.draft_ready()
    await thesis_ops.remove_participant(flow.db, flow.thesis_id, actor=flow.student, rol="ASESOR", now=flow.tick())

    thesis = await flow.reload()
    assert thesis.asesores == []
    carta = next(d for d in thesis.documentos if d.tipo == TipoDocumento.CARTA_ACEPTACION_ASESOR)
    assert carta.es_version_actual is False

    check = await flow.wf.check_requirements(flow.thesis_id)
    assert "ASESOR_ASIGNADO" in check.missing_codes
    assert "CARTA_ASESOR_FIRMADA" in check.missing_codes


async def test_remove_missing_participant(flow):
    await flow.create()
    with pytest.raises(PreconditionFailed) as exc:
        await thesis_ops.remove_participant(flow.db, flow.thesis_id, actor=flow.student, rol="COAUTOR")
    assert exc.value.code == "PARTICIPANTE_NO_ENCONTRADO"

# Fin del archivo backend/tests/modules/thesis/facades/test_participants.py
