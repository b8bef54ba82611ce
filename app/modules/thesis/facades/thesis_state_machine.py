# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/thesis_state_machine.py

Máquina de estados de la tesis.

Dos pasos separados:

1. decide(snapshot, accion, actor, payload, now=..., params=...)
   Función pura. Autoriza (rol global + relación con la tesis), verifica
   que la acción sea legal desde el estado actual y sus precondiciones, y
   calcula el resultado (estado, ronda, fase, plazos, documento adjunto).
   Si algo falla lanza UnauthorizedAction / InvalidTransition /
   PreconditionFailed y no toca nada.

2. apply_transition(thesis, outcome, actor_id=..., now=...)
   ÚNICO punto del código que escribe `estado`, `ronda_actual` y
   `fase_actual`. Aplica el resultado sobre el modelo ORM y agrega
   exactamente una entrada de historial.

El orquestador (services/workflow.py) compone ambos pasos dentro de una
transacción con bloqueo de fila.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Optional

from app.shared.auth_context import Actor
from app.shared.utils.business_days import add_business_days
from app.modules.thesis.enums import (
    AccionTesis,
    EstadoTesis,
    FaseTesis,
    ModalidadSustentacion,
    ResultadoEvaluacion,
    RolActor,
    TipoDocumento,
    TipoJurado,
    VOTING_JUROR_TYPES,
    validate_state_transition,
)
from app.modules.thesis.facades.document_requirements import check_snapshot
from app.modules.thesis.facades.errors import (
    InvalidTransition,
    PreconditionFailed,
    UnauthorizedAction,
)
from app.modules.thesis.facades.jury_evaluation_aggregator import progress_for_snapshot
from app.modules.thesis.facades.snapshots import ThesisSnapshot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tipos de entrada / salida
# ---------------------------------------------------------------------------
class _Unchanged:
    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED: Any = _Unchanged()


@dataclass(frozen=True)
class WorkflowParams:
    """Parámetros de plazos (días hábiles)."""
    dias_habiles_evaluacion: int = 15
    dias_habiles_correccion: int = 30

    @classmethod
    def from_settings(cls, settings) -> "WorkflowParams":
        return cls(
            dias_habiles_evaluacion=int(getattr(settings, "dias_habiles_evaluacion", 15)),
            dias_habiles_correccion=int(getattr(settings, "dias_habiles_correccion", 30)),
        )


@dataclass(frozen=True)
class NewDocument:
    """Metadatos de un archivo ya almacenado en storage."""
    nombre: str
    ruta_archivo: str
    mime_type: str = "application/pdf"
    tamano: int = 0
    firmado: bool = False
    fecha_firma: Optional[dt.datetime] = None


@dataclass(frozen=True)
class DefenseSchedule:
    fecha: Optional[dt.date] = None
    hora: Optional[dt.time] = None
    lugar: Optional[str] = None
    modalidad: Optional[ModalidadSustentacion] = None

    def missing_fields(self) -> List[str]:
        faltantes = []
        if self.fecha is None:
            faltantes.append("fecha")
        if self.hora is None:
            faltantes.append("hora")
        if not (self.lugar or "").strip():
            faltantes.append("lugar")
        if self.modalidad is None:
            faltantes.append("modalidad")
        return faltantes

    def as_datetime(self) -> dt.datetime:
        hora = self.hora
        tz = hora.tzinfo or dt.timezone.utc
        return dt.datetime.combine(self.fecha, hora.replace(tzinfo=None), tzinfo=tz)


@dataclass(frozen=True)
class ActionPayload:
    comentario: Optional[str] = None
    documento: Optional[NewDocument] = None
    sustentacion: Optional[DefenseSchedule] = None


@dataclass(frozen=True)
class TransitionOutcome:
    accion: AccionTesis
    estado_anterior: EstadoTesis
    estado_nuevo: EstadoTesis
    ronda_nueva: int
    fase_nueva: FaseTesis
    comentario: Optional[str] = None
    fecha_limite_evaluacion: Any = UNCHANGED
    fecha_limite_correccion: Any = UNCHANGED
    voucher_fisico_entregado: Any = UNCHANGED
    sustentacion: Optional[DefenseSchedule] = None
    documento: Optional[NewDocument] = None
    documento_tipo: Optional[TipoDocumento] = None
    resultado: Optional[ResultadoEvaluacion] = None


# ---------------------------------------------------------------------------
# Reglas de autorización y estados de origen
# ---------------------------------------------------------------------------
REL_AUTOR = "AUTOR"
REL_PRESIDENTE = "PRESIDENTE"


@dataclass(frozen=True)
class ActionRule:
    desde: FrozenSet[EstadoTesis]
    roles: FrozenSet[RolActor] = frozenset()
    relacion: Optional[str] = None


_MESA = frozenset({RolActor.MESA_PARTES})
_ESTUDIANTE = frozenset({RolActor.ESTUDIANTE})

ACTION_RULES: Dict[AccionTesis, ActionRule] = {
    AccionTesis.ENVIAR_REVISION: ActionRule(
        desde=frozenset({EstadoTesis.BORRADOR, EstadoTesis.OBSERVADA}),
        roles=_ESTUDIANTE, relacion=REL_AUTOR,
    ),
    AccionTesis.CONFIRMAR_VOUCHER: ActionRule(
        desde=frozenset({EstadoTesis.EN_REVISION, EstadoTesis.OBSERVADA}), roles=_MESA,
    ),
    AccionTesis.APROBAR: ActionRule(
        desde=frozenset({EstadoTesis.EN_REVISION, EstadoTesis.OBSERVADA}), roles=_MESA,
    ),
    AccionTesis.OBSERVAR: ActionRule(
        desde=frozenset({EstadoTesis.EN_REVISION}), roles=_MESA,
    ),
    AccionTesis.RECHAZAR: ActionRule(
        desde=frozenset({EstadoTesis.EN_REVISION, EstadoTesis.OBSERVADA}), roles=_MESA,
    ),
    AccionTesis.CONFIRMAR_JURADOS: ActionRule(
        desde=frozenset({EstadoTesis.ASIGNANDO_JURADOS}), roles=_MESA,
    ),
    AccionTesis.SUBIR_DICTAMEN: ActionRule(
        desde=frozenset({EstadoTesis.EN_EVALUACION_JURADO, EstadoTesis.EN_EVALUACION_INFORME}),
        relacion=REL_PRESIDENTE,
    ),
    AccionTesis.REENVIAR_CORRECCION: ActionRule(
        desde=frozenset({EstadoTesis.OBSERVADA_JURADO, EstadoTesis.OBSERVADA_INFORME}),
        roles=_ESTUDIANTE, relacion=REL_AUTOR,
    ),
    AccionTesis.SUBIR_RESOLUCION: ActionRule(
        desde=frozenset({EstadoTesis.PROYECTO_APROBADO}), roles=_MESA,
    ),
    AccionTesis.ENVIAR_INFORME: ActionRule(
        desde=frozenset({EstadoTesis.INFORME_FINAL}),
        roles=_ESTUDIANTE, relacion=REL_AUTOR,
    ),
    AccionTesis.REGISTRAR_SUSTENTACION: ActionRule(
        desde=frozenset({EstadoTesis.EN_SUSTENTACION}),
        roles=frozenset({RolActor.MESA_PARTES, RolActor.ADMIN}),
    ),
    AccionTesis.ARCHIVAR: ActionRule(
        desde=frozenset({EstadoTesis.EN_SUSTENTACION}),
        roles=frozenset({RolActor.MESA_PARTES, RolActor.ADMIN}),
    ),
}


def available_actions(snapshot: ThesisSnapshot, actor: Actor) -> List[AccionTesis]:
    """
    Acciones que el actor podría intentar en el estado actual (rol, relación
    y estado de origen). No evalúa precondiciones.
    """
    acciones = []
    for accion, rule in ACTION_RULES.items():
        if snapshot.estado not in rule.desde:
            continue
        try:
            _authorize(snapshot, accion, rule, actor)
        except UnauthorizedAction:
            continue
        acciones.append(accion)
    return acciones


def _authorize(snapshot: ThesisSnapshot, accion: AccionTesis, rule: ActionRule, actor: Actor) -> None:
    if rule.roles and not any(actor.has_role(r) for r in rule.roles):
        roles = ", ".join(sorted(r.value for r in rule.roles))
        raise UnauthorizedAction(
            f"La acción {accion.value} requiere rol: {roles}",
            accion=accion.value,
        )
    if rule.relacion == REL_AUTOR and not snapshot.is_author(actor.user_id):
        raise UnauthorizedAction(
            "Solo los autores de la tesis pueden ejecutar esta acción",
            accion=accion.value,
        )
    if rule.relacion == REL_PRESIDENTE:
        juror = snapshot.juror_for_user(actor.user_id)
        if juror is None or juror.tipo != TipoJurado.PRESIDENTE:
            raise UnauthorizedAction(
                "Solo el presidente del jurado puede subir el dictamen",
                accion=accion.value,
            )


# ---------------------------------------------------------------------------
# Helpers de precondiciones
# ---------------------------------------------------------------------------
def _require_comment(payload: ActionPayload) -> str:
    comentario = (payload.comentario or "").strip()
    if not comentario:
        raise PreconditionFailed("COMENTARIO_REQUERIDO", "comentario requerido")
    return comentario


def _panel_problems(snapshot: ThesisSnapshot) -> Dict[str, List[str]]:
    activos = snapshot.active_jurors()
    faltantes, duplicados = [], []
    for tipo in (TipoJurado.PRESIDENTE, TipoJurado.VOCAL, TipoJurado.SECRETARIO):
        n = sum(1 for j in activos if j.tipo == tipo)
        if n == 0:
            faltantes.append(tipo.value)
        elif n > 1:
            duplicados.append(tipo.value)
    return {"faltantes": faltantes, "duplicados": duplicados}


def _require_complete_panel(snapshot: ThesisSnapshot) -> None:
    problems = _panel_problems(snapshot)
    if problems["faltantes"] or problems["duplicados"]:
        partes = []
        if problems["faltantes"]:
            partes.append("falta " + ", ".join(problems["faltantes"]))
        if problems["duplicados"]:
            partes.append("duplicado " + ", ".join(problems["duplicados"]))
        raise PreconditionFailed(
            "JURADO_INCOMPLETO",
            "El jurado debe tener exactamente un PRESIDENTE, un VOCAL y un SECRETARIO ("
            + "; ".join(partes) + ")",
            **problems,
        )


def _require_documents(snapshot: ThesisSnapshot, mensaje: str) -> None:
    check = check_snapshot(snapshot)
    if not check.complete:
        raise PreconditionFailed(
            "DOCUMENTOS_INCOMPLETOS",
            mensaje + ": " + "; ".join(r.descripcion for r in check.missing),
            faltantes=check.missing_codes,
        )


def _require_schedule(payload: ActionPayload) -> DefenseSchedule:
    schedule = payload.sustentacion or DefenseSchedule()
    faltantes = schedule.missing_fields()
    if faltantes:
        raise PreconditionFailed(
            "SUSTENTACION_INCOMPLETA",
            "Debe indicar fecha, hora, lugar y modalidad de la sustentación",
            faltantes=faltantes,
        )
    return schedule


def _is_pdf(doc: NewDocument) -> bool:
    return doc.mime_type == "application/pdf" or doc.nombre.lower().endswith(".pdf")


# ---------------------------------------------------------------------------
# Handlers por acción
# ---------------------------------------------------------------------------
Handler = Callable[[ThesisSnapshot, ActionPayload, dt.datetime, WorkflowParams], TransitionOutcome]


def _outcome(snapshot: ThesisSnapshot, accion: AccionTesis, estado_nuevo: EstadoTesis, **changes) -> TransitionOutcome:
    changes.setdefault("ronda_nueva", snapshot.ronda_actual)
    changes.setdefault("fase_nueva", snapshot.fase_actual)
    return TransitionOutcome(
        accion=accion,
        estado_anterior=snapshot.estado,
        estado_nuevo=estado_nuevo,
        **changes,
    )


def _enviar_revision(snapshot, payload, now, params):
    _require_documents(snapshot, "Faltan requisitos para enviar a revisión")
    return _outcome(
        snapshot, AccionTesis.ENVIAR_REVISION, EstadoTesis.EN_REVISION,
        comentario=(payload.comentario or "").strip() or "Tesis enviada a revisión de Mesa de Partes",
    )


def _confirmar_voucher(snapshot, payload, now, params):
    if snapshot.voucher_fisico_entregado:
        raise PreconditionFailed("VOUCHER_YA_CONFIRMADO", "El voucher físico ya fue confirmado")
    return _outcome(
        snapshot, AccionTesis.CONFIRMAR_VOUCHER, snapshot.estado,
        voucher_fisico_entregado=True,
        comentario=(payload.comentario or "").strip() or "Voucher físico confirmado por Mesa de Partes",
    )


def _aprobar(snapshot, payload, now, params):
    if not snapshot.voucher_fisico_entregado:
        raise PreconditionFailed("VOUCHER_NO_CONFIRMADO", "Debe confirmar el voucher físico para aprobar")
    return _outcome(
        snapshot, AccionTesis.APROBAR, EstadoTesis.ASIGNANDO_JURADOS,
        comentario=(payload.comentario or "").strip() or "Proyecto aprobado por Mesa de Partes",
    )


def _observar(snapshot, payload, now, params):
    comentario = _require_comment(payload)
    return _outcome(snapshot, AccionTesis.OBSERVAR, EstadoTesis.OBSERVADA, comentario=comentario)


def _rechazar(snapshot, payload, now, params):
    comentario = _require_comment(payload)
    return _outcome(snapshot, AccionTesis.RECHAZAR, EstadoTesis.RECHAZADA, comentario=comentario)


def _confirmar_jurados(snapshot, payload, now, params):
    _require_complete_panel(snapshot)
    return _outcome(
        snapshot, AccionTesis.CONFIRMAR_JURADOS, EstadoTesis.EN_EVALUACION_JURADO,
        ronda_nueva=snapshot.ronda_actual + 1,
        fecha_limite_evaluacion=add_business_days(now, params.dias_habiles_evaluacion),
        fecha_limite_correccion=None,
        comentario=(payload.comentario or "").strip() or "Jurado conformado, inicia la evaluación del proyecto",
    )


def _subir_dictamen(snapshot, payload, now, params):
    progress = progress_for_snapshot(snapshot)
    if not progress.todos_evaluaron:
        raise PreconditionFailed(
            "EVALUACION_INCOMPLETA",
            f"Faltan evaluaciones del jurado ({progress.evaluados}/{progress.total})",
            evaluados=progress.evaluados,
            total=progress.total,
        )

    doc = payload.documento
    if doc is None:
        raise PreconditionFailed("DICTAMEN_REQUERIDO", "Debe adjuntar el dictamen en PDF")
    if not _is_pdf(doc):
        raise PreconditionFailed("DICTAMEN_NO_PDF", "El dictamen debe ser un archivo PDF")
    if not doc.firmado:
        raise PreconditionFailed("DICTAMEN_SIN_FIRMA", "El dictamen debe estar firmado digitalmente")

    resultado = progress.resultado_mayoria
    comentario = (payload.comentario or "").strip() or f"Dictamen del jurado: {resultado.value}"
    changes: Dict[str, Any] = dict(
        comentario=comentario,
        documento=doc,
        documento_tipo=TipoDocumento.DICTAMEN,
        resultado=resultado,
        fecha_limite_evaluacion=None,
    )

    if snapshot.fase_actual == FaseTesis.PROYECTO:
        if resultado == ResultadoEvaluacion.APROBADO:
            return _outcome(snapshot, AccionTesis.SUBIR_DICTAMEN, EstadoTesis.PROYECTO_APROBADO, **changes)
        return _outcome(
            snapshot, AccionTesis.SUBIR_DICTAMEN, EstadoTesis.OBSERVADA_JURADO,
            fecha_limite_correccion=add_business_days(now, params.dias_habiles_correccion),
            **changes,
        )

    if resultado == ResultadoEvaluacion.APROBADO:
        schedule = _require_schedule(payload)
        return _outcome(
            snapshot, AccionTesis.SUBIR_DICTAMEN, EstadoTesis.EN_SUSTENTACION,
            sustentacion=schedule,
            **changes,
        )
    return _outcome(
        snapshot, AccionTesis.SUBIR_DICTAMEN, EstadoTesis.OBSERVADA_INFORME,
        fecha_limite_correccion=add_business_days(now, params.dias_habiles_correccion),
        **changes,
    )


def _reenviar_correccion(snapshot, payload, now, params):
    deadline = snapshot.fecha_limite_correccion
    if deadline is not None and now > deadline:
        raise PreconditionFailed(
            "PLAZO_VENCIDO",
            f"El plazo de corrección venció el {deadline:%d/%m/%Y}",
            fecha_limite_correccion=deadline.isoformat(),
        )

    if snapshot.estado == EstadoTesis.OBSERVADA_JURADO:
        tipo, destino = TipoDocumento.PROYECTO, EstadoTesis.EN_EVALUACION_JURADO
    else:
        tipo, destino = TipoDocumento.INFORME_FINAL_DOC, EstadoTesis.EN_EVALUACION_INFORME

    doc = snapshot.current_document(tipo)
    observado_en = snapshot.fecha_ultima_observacion
    if doc is None or (observado_en is not None and (doc.created_at is None or doc.created_at <= observado_en)):
        raise PreconditionFailed(
            "DOCUMENTO_NO_CORREGIDO",
            "Debe subir el documento corregido antes de reenviar al jurado",
            tipo_documento=tipo.value,
        )

    _require_complete_panel(snapshot)
    return _outcome(
        snapshot, AccionTesis.REENVIAR_CORRECCION, destino,
        ronda_nueva=snapshot.ronda_actual + 1,
        fecha_limite_evaluacion=add_business_days(now, params.dias_habiles_evaluacion),
        fecha_limite_correccion=None,
        comentario=(payload.comentario or "").strip() or "Correcciones reenviadas al jurado",
    )


def _subir_resolucion(snapshot, payload, now, params):
    if payload.documento is None:
        raise PreconditionFailed("RESOLUCION_REQUERIDA", "Debe adjuntar la resolución de aprobación")
    return _outcome(
        snapshot, AccionTesis.SUBIR_RESOLUCION, EstadoTesis.INFORME_FINAL,
        fase_nueva=FaseTesis.INFORME_FINAL,
        documento=payload.documento,
        documento_tipo=TipoDocumento.RESOLUCION_APROBACION,
        comentario=(payload.comentario or "").strip() or "Resolución de aprobación emitida, inicia la fase de informe final",
    )


def _enviar_informe(snapshot, payload, now, params):
    _require_documents(snapshot, "Faltan requisitos para enviar el informe final")
    _require_complete_panel(snapshot)
    return _outcome(
        snapshot, AccionTesis.ENVIAR_INFORME, EstadoTesis.EN_EVALUACION_INFORME,
        ronda_nueva=snapshot.ronda_actual + 1,
        fecha_limite_evaluacion=add_business_days(now, params.dias_habiles_evaluacion),
        fecha_limite_correccion=None,
        comentario=(payload.comentario or "").strip() or "Informe final enviado al jurado",
    )


def _registrar_sustentacion(snapshot, payload, now, params):
    return _outcome(
        snapshot, AccionTesis.REGISTRAR_SUSTENTACION, EstadoTesis.SUSTENTADA,
        comentario=(payload.comentario or "").strip() or "Sustentación registrada",
    )


def _archivar(snapshot, payload, now, params):
    return _outcome(
        snapshot, AccionTesis.ARCHIVAR, EstadoTesis.ARCHIVADA,
        comentario=(payload.comentario or "").strip() or "Expediente archivado",
    )


_HANDLERS: Dict[AccionTesis, Handler] = {
    AccionTesis.ENVIAR_REVISION: _enviar_revision,
    AccionTesis.CONFIRMAR_VOUCHER: _confirmar_voucher,
    AccionTesis.APROBAR: _aprobar,
    AccionTesis.OBSERVAR: _observar,
    AccionTesis.RECHAZAR: _rechazar,
    AccionTesis.CONFIRMAR_JURADOS: _confirmar_jurados,
    AccionTesis.SUBIR_DICTAMEN: _subir_dictamen,
    AccionTesis.REENVIAR_CORRECCION: _reenviar_correccion,
    AccionTesis.SUBIR_RESOLUCION: _subir_resolucion,
    AccionTesis.ENVIAR_INFORME: _enviar_informe,
    AccionTesis.REGISTRAR_SUSTENTACION: _registrar_sustentacion,
    AccionTesis.ARCHIVAR: _archivar,
}


# ---------------------------------------------------------------------------
# API pública
# ---------------------------------------------------------------------------
def decide(
    snapshot: ThesisSnapshot,
    accion: AccionTesis,
    actor: Actor,
    payload: Optional[ActionPayload] = None,
    *,
    now: dt.datetime,
    params: Optional[WorkflowParams] = None,
) -> TransitionOutcome:
    """
    Valida una acción y calcula su resultado sin mutar nada.

    Orden de validación: rol/relación → estado de origen → precondiciones.

    Raises:
        UnauthorizedAction: el actor no puede ejecutar la acción.
        InvalidTransition: la acción no es legal desde el estado actual.
        PreconditionFailed: falta algún requisito del estado.
    """
    payload = payload or ActionPayload()
    params = params or WorkflowParams()
    accion = AccionTesis(accion)
    rule = ACTION_RULES[accion]

    _authorize(snapshot, accion, rule, actor)

    if snapshot.eliminada:
        raise InvalidTransition(accion.value, snapshot.estado.value, "La tesis está eliminada")
    if snapshot.estado not in rule.desde:
        raise InvalidTransition(accion.value, snapshot.estado.value)

    outcome = _HANDLERS[accion](snapshot, payload, now, params)

    try:
        validate_state_transition(outcome.estado_anterior, outcome.estado_nuevo)
    except ValueError as e:
        raise InvalidTransition(accion.value, snapshot.estado.value, str(e)) from e
    return outcome


def apply_transition(thesis, outcome: TransitionOutcome, *, actor_id, now: dt.datetime):
    """
    Aplica `outcome` sobre el modelo ORM `thesis` y agrega su historial.

    Es el único escritor de estado/ronda/fase. Debe llamarse dentro de la
    transacción que tiene bloqueada la fila de la tesis.

    Returns:
        La entrada de historial creada (ThesisStatusHistory).
    """
    from app.modules.thesis.models import ThesisStatusHistory
    from app.modules.thesis.facades.thesis.documents import add_document_version

    if thesis.estado != outcome.estado_anterior:
        raise InvalidTransition(
            outcome.accion.value,
            thesis.estado.value,
            "El estado de la tesis cambió antes de aplicar la transición",
        )
    if outcome.ronda_nueva < thesis.ronda_actual:
        raise ValueError("ronda_actual no puede disminuir")
    if thesis.fase_actual == FaseTesis.INFORME_FINAL and outcome.fase_nueva != FaseTesis.INFORME_FINAL:
        raise ValueError("fase_actual no puede retroceder")

    thesis.estado = outcome.estado_nuevo
    thesis.ronda_actual = outcome.ronda_nueva
    thesis.fase_actual = outcome.fase_nueva
    thesis.updated_at = now

    if outcome.fecha_limite_evaluacion is not UNCHANGED:
        thesis.fecha_limite_evaluacion = outcome.fecha_limite_evaluacion
    if outcome.fecha_limite_correccion is not UNCHANGED:
        thesis.fecha_limite_correccion = outcome.fecha_limite_correccion
    if outcome.voucher_fisico_entregado is not UNCHANGED:
        thesis.voucher_fisico_entregado = outcome.voucher_fisico_entregado

    if outcome.sustentacion is not None:
        thesis.fecha_sustentacion = outcome.sustentacion.as_datetime()
        thesis.lugar_sustentacion = outcome.sustentacion.lugar.strip()
        thesis.modalidad_sustentacion = outcome.sustentacion.modalidad

    if outcome.documento is not None and outcome.documento_tipo is not None:
        doc = outcome.documento
        add_document_version(
            thesis,
            outcome.documento_tipo,
            nombre=doc.nombre,
            ruta_archivo=doc.ruta_archivo,
            mime_type=doc.mime_type,
            tamano=doc.tamano,
            firmado=doc.firmado,
            fecha_firma=doc.fecha_firma or (now if doc.firmado else None),
            uploaded_by_id=actor_id,
            now=now,
        )

    entry = ThesisStatusHistory(
        secuencia=len(thesis.historial) + 1,
        estado_anterior=outcome.estado_anterior,
        estado_nuevo=outcome.estado_nuevo,
        accion=outcome.accion,
        comentario=outcome.comentario,
        ronda=outcome.ronda_nueva,
        changed_by_id=actor_id,
        created_at=now,
    )
    thesis.historial.append(entry)

    logger.info(
        "thesis_transition accion=%s from=%s to=%s ronda=%s thesis_id=%s",
        outcome.accion.value,
        outcome.estado_anterior.value,
        outcome.estado_nuevo.value,
        outcome.ronda_nueva,
        thesis.id,
    )
    return entry


__all__ = [
    "UNCHANGED",
    "WorkflowParams",
    "NewDocument",
    "DefenseSchedule",
    "ActionPayload",
    "TransitionOutcome",
    "ActionRule",
    "ACTION_RULES",
    "available_actions",
    "decide",
    "apply_transition",
]

# Fin del archivo backend/app/modules/thesis/facades/thesis_state_machine.py
