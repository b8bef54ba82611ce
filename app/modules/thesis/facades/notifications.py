# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/notifications.py

Construcción de notificaciones del flujo de tesis.

Funciones puras: a partir del snapshot (ya con el estado nuevo) y del
resultado de la transición arman los pares (evento, destinatarios). El
envío lo hace el orquestador después del commit.

Destinatarios:
- equipo: autores + asesores que aceptaron
- jurado: miembros activos del jurado
- El actor que ejecutó la acción nunca se notifica a sí mismo.

Fecha: 2026-02-03
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from app.shared.integrations.notification_sender import NotificationEvent
from app.modules.thesis.enums import AccionTesis, EstadoParticipacion, EstadoTesis, TipoJurado
from app.modules.thesis.facades.snapshots import ThesisSnapshot
from app.modules.thesis.facades.thesis_state_machine import TransitionOutcome


@dataclass(frozen=True)
class PendingNotification:
    event: NotificationEvent
    recipients: Tuple[UUID, ...]


def thesis_link(thesis_id: UUID) -> str:
    return f"/tesis/{thesis_id}"


def team_recipients(snapshot: ThesisSnapshot) -> List[UUID]:
    autores = [a.user_id for a in snapshot.autores if a.estado == EstadoParticipacion.ACEPTADO]
    asesores = [a.user_id for a in snapshot.asesores if a.estado == EstadoParticipacion.ACEPTADO]
    return autores + asesores


def jury_recipients(snapshot: ThesisSnapshot) -> List[UUID]:
    return [j.user_id for j in snapshot.active_jurors()]


def _pending(
    tipo: str,
    titulo: str,
    mensaje: str,
    snapshot: ThesisSnapshot,
    recipients: Iterable[UUID],
    exclude: Optional[UUID] = None,
) -> Optional[PendingNotification]:
    unique = tuple(u for u in dict.fromkeys(recipients) if u != exclude)
    if not unique:
        return None
    return PendingNotification(
        event=NotificationEvent(
            tipo=tipo,
            titulo=titulo,
            mensaje=mensaje,
            thesis_id=snapshot.id,
            enlace=thesis_link(snapshot.id),
        ),
        recipients=unique,
    )


def _dictamen_message(outcome: TransitionOutcome) -> Tuple[str, str]:
    destino = outcome.estado_nuevo
    if destino == EstadoTesis.PROYECTO_APROBADO:
        return "Proyecto aprobado por el jurado", "El jurado aprobó el proyecto de tesis. Mesa de Partes emitirá la resolución."
    if destino == EstadoTesis.EN_SUSTENTACION:
        return "Informe final aprobado", "El jurado aprobó el informe final y se programó la sustentación."
    return (
        "Observaciones del jurado",
        "El jurado observó la tesis. Revisa las observaciones y reenvía las correcciones dentro del plazo.",
    )


def _defense_message(snapshot: ThesisSnapshot, outcome: TransitionOutcome) -> str:
    schedule = outcome.sustentacion
    if schedule is None or schedule.fecha is None or schedule.hora is None:
        return f"Se programó la sustentación de la tesis {snapshot.codigo}."
    return (
        f"Sustentación de la tesis {snapshot.codigo}: {schedule.fecha:%d/%m/%Y} "
        f"{schedule.hora:%H:%M}, {schedule.lugar} ({schedule.modalidad.value})."
    )


def build_transition_notifications(
    snapshot: ThesisSnapshot,
    outcome: TransitionOutcome,
    actor_id: Optional[UUID] = None,
) -> List[PendingNotification]:
    """Notificaciones que dispara una transición aplicada."""
    accion = outcome.accion
    codigo = snapshot.codigo
    equipo = team_recipients(snapshot)
    jurado = jury_recipients(snapshot)
    items: List[Optional[PendingNotification]] = []

    if accion == AccionTesis.ENVIAR_REVISION:
        items.append(_pending(
            "TESIS_ENVIADA", "Tesis enviada a revisión",
            f"La tesis {codigo} fue enviada a Mesa de Partes.", snapshot, equipo, actor_id,
        ))
    elif accion == AccionTesis.CONFIRMAR_VOUCHER:
        items.append(_pending(
            "VOUCHER_CONFIRMADO", "Voucher confirmado",
            f"Mesa de Partes confirmó la entrega del voucher físico de la tesis {codigo}.",
            snapshot, equipo, actor_id,
        ))
    elif accion == AccionTesis.APROBAR:
        items.append(_pending(
            "TESIS_APROBADA_MESA", "Requisitos aprobados",
            f"Mesa de Partes aprobó los requisitos de la tesis {codigo}. Se conformará el jurado.",
            snapshot, equipo, actor_id,
        ))
    elif accion == AccionTesis.OBSERVAR:
        items.append(_pending(
            "TESIS_OBSERVADA", "Tesis observada por Mesa de Partes",
            outcome.comentario or "", snapshot, equipo, actor_id,
        ))
    elif accion == AccionTesis.RECHAZAR:
        items.append(_pending(
            "TESIS_RECHAZADA", "Tesis rechazada",
            outcome.comentario or "", snapshot, equipo, actor_id,
        ))
    elif accion == AccionTesis.CONFIRMAR_JURADOS:
        items.append(_pending(
            "JURADO_CONFORMADO", "Jurado conformado",
            f"Se conformó el jurado de la tesis {codigo}. Inicia la evaluación del proyecto.",
            snapshot, equipo, actor_id,
        ))
        items.append(_pending(
            "EVALUACION_ASIGNADA", "Nueva tesis para evaluar",
            f"Fuiste designado jurado de la tesis {codigo}.", snapshot, jurado, actor_id,
        ))
    elif accion == AccionTesis.SUBIR_DICTAMEN:
        titulo, mensaje = _dictamen_message(outcome)
        items.append(_pending("DICTAMEN_EMITIDO", titulo, mensaje, snapshot, equipo, actor_id))
        if outcome.estado_nuevo == EstadoTesis.EN_SUSTENTACION:
            items.append(_pending(
                "SUSTENTACION_PROGRAMADA", "Sustentación programada",
                _defense_message(snapshot, outcome), snapshot, jurado, actor_id,
            ))
    elif accion == AccionTesis.REENVIAR_CORRECCION:
        items.append(_pending(
            "CORRECCION_REENVIADA", "Correcciones recibidas",
            f"Los autores reenviaron las correcciones de la tesis {codigo} (ronda {outcome.ronda_nueva}).",
            snapshot, jurado, actor_id,
        ))
    elif accion == AccionTesis.SUBIR_RESOLUCION:
        items.append(_pending(
            "RESOLUCION_EMITIDA", "Resolución de aprobación",
            f"Se emitió la resolución de aprobación de la tesis {codigo}. Ya puedes presentar el informe final.",
            snapshot, equipo, actor_id,
        ))
    elif accion == AccionTesis.ENVIAR_INFORME:
        items.append(_pending(
            "INFORME_ENVIADO", "Informe final para evaluar",
            f"Los autores enviaron el informe final de la tesis {codigo}.", snapshot, jurado, actor_id,
        ))
    elif accion == AccionTesis.REGISTRAR_SUSTENTACION:
        items.append(_pending(
            "TESIS_SUSTENTADA", "Sustentación registrada",
            f"Se registró la sustentación de la tesis {codigo}.", snapshot, equipo, actor_id,
        ))
    elif accion == AccionTesis.ARCHIVAR:
        items.append(_pending(
            "TESIS_ARCHIVADA", "Expediente archivado",
            outcome.comentario or f"El expediente de la tesis {codigo} fue archivado.",
            snapshot, equipo, actor_id,
        ))

    return [item for item in items if item is not None]


def build_invitation_notification(
    snapshot: ThesisSnapshot, invitee_id: UUID, rol: str,
) -> Optional[PendingNotification]:
    return _pending(
        "INVITACION_RECIBIDA", "Invitación a una tesis",
        f"Fuiste invitado como {rol} en la tesis {snapshot.codigo}.",
        snapshot, [invitee_id],
    )


def build_invitation_response_notification(
    snapshot: ThesisSnapshot,
    *,
    rol: str,
    aceptada: bool,
    motivo: Optional[str],
    autor_principal_id: Optional[UUID],
) -> Optional[PendingNotification]:
    if autor_principal_id is None:
        return None
    if aceptada:
        return _pending(
            "INVITACION_ACEPTADA", "Invitación aceptada",
            f"El {rol} aceptó participar en la tesis {snapshot.codigo}.",
            snapshot, [autor_principal_id],
        )
    return _pending(
        "INVITACION_RECHAZADA", "Invitación rechazada",
        f"El {rol} rechazó participar en la tesis {snapshot.codigo}. Motivo: {motivo}",
        snapshot, [autor_principal_id],
    )


def build_evaluations_complete_notification(snapshot: ThesisSnapshot) -> Optional[PendingNotification]:
    """Aviso al presidente cuando todos los votantes evaluaron la ronda."""
    presidente = next((j for j in snapshot.voting_jurors() if j.tipo == TipoJurado.PRESIDENTE), None)
    if presidente is None:
        return None
    return _pending(
        "EVALUACIONES_COMPLETAS", "Evaluaciones completas",
        f"Todos los jurados evaluaron la tesis {snapshot.codigo}. Ya puedes subir el dictamen.",
        snapshot, [presidente.user_id],
    )


__all__ = [
    "PendingNotification",
    "thesis_link",
    "team_recipients",
    "jury_recipients",
    "build_transition_notifications",
    "build_invitation_notification",
    "build_invitation_response_notification",
    "build_evaluations_complete_notification",
]

# Fin del archivo backend/app/modules/thesis/facades/notifications.py
