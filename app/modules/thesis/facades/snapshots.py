# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/snapshots.py

Vistas inmutables del agregado Tesis.

La máquina de estados, el verificador de requisitos y el agregador de
evaluaciones trabajan sobre estas vistas (dataclasses congeladas), nunca
sobre el modelo ORM: así no pueden mutarlo y se prueban sin base de datos.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Optional, Tuple
from uuid import UUID

from app.modules.thesis.enums import (
    EstadoParticipacion,
    EstadoTesis,
    FaseTesis,
    JURY_OBSERVED_STATES,
    ResultadoEvaluacion,
    TipoAsesor,
    TipoAutor,
    TipoDocumento,
    TipoJurado,
    VOTING_JUROR_TYPES,
)
from app.modules.thesis.facades.base import as_utc


@dataclass(frozen=True)
class ParticipantView:
    id: UUID
    user_id: UUID
    tipo: str
    estado: EstadoParticipacion
    orden: int = 1

    @property
    def accepted(self) -> bool:
        return self.estado == EstadoParticipacion.ACEPTADO


@dataclass(frozen=True)
class JurorView:
    id: UUID
    user_id: UUID
    tipo: TipoJurado
    is_active: bool = True

    @property
    def is_voting(self) -> bool:
        return self.is_active and self.tipo in VOTING_JUROR_TYPES


@dataclass(frozen=True)
class DocumentView:
    id: UUID
    tipo: TipoDocumento
    version: int = 1
    es_version_actual: bool = True
    firmado: bool = False
    mime_type: str = "application/pdf"
    ronda: int = 0
    created_at: Optional[dt.datetime] = None


@dataclass(frozen=True)
class EvaluationView:
    id: UUID
    jury_member_id: UUID
    ronda: int
    fase: FaseTesis
    resultado: ResultadoEvaluacion
    observaciones: Optional[str] = None
    created_at: Optional[dt.datetime] = None


@dataclass(frozen=True)
class ThesisParticipants:
    """Autores y asesores, insumo del verificador de requisitos."""
    autores: Tuple[ParticipantView, ...] = ()
    asesores: Tuple[ParticipantView, ...] = ()

    def advisor(self, tipo: TipoAsesor) -> Optional[ParticipantView]:
        return next((a for a in self.asesores if a.tipo == tipo), None)

    def coauthors(self) -> Tuple[ParticipantView, ...]:
        return tuple(a for a in self.autores if a.tipo == TipoAutor.COAUTOR)


@dataclass(frozen=True)
class ThesisSnapshot:
    id: UUID
    estado: EstadoTesis
    fase_actual: FaseTesis = FaseTesis.PROYECTO
    ronda_actual: int = 0
    codigo: str = ""
    fecha_limite_evaluacion: Optional[dt.datetime] = None
    fecha_limite_correccion: Optional[dt.datetime] = None
    voucher_fisico_entregado: bool = False
    eliminada: bool = False
    autores: Tuple[ParticipantView, ...] = ()
    asesores: Tuple[ParticipantView, ...] = ()
    jurados: Tuple[JurorView, ...] = ()
    documentos: Tuple[DocumentView, ...] = ()
    evaluaciones: Tuple[EvaluationView, ...] = ()
    # Momento de la última observación del jurado (para validar correcciones)
    fecha_ultima_observacion: Optional[dt.datetime] = None
    participants: ThesisParticipants = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "participants", ThesisParticipants(autores=self.autores, asesores=self.asesores)
        )

    # --- Documentos ---
    def current_document(self, tipo: TipoDocumento) -> Optional[DocumentView]:
        actuales = [d for d in self.documentos if d.tipo == tipo and d.es_version_actual]
        if not actuales:
            return None
        return max(actuales, key=lambda d: d.version)

    # --- Participantes ---
    def is_author(self, user_id: UUID) -> bool:
        """Autor con la participación aceptada (un coautor invitado aún no actúa)."""
        return any(
            a.user_id == user_id and a.estado == EstadoParticipacion.ACEPTADO for a in self.autores
        )

    def is_principal_author(self, user_id: UUID) -> bool:
        return any(
            a.user_id == user_id and a.tipo == TipoAutor.AUTOR_PRINCIPAL for a in self.autores
        )

    def advisor_for_user(self, user_id: UUID) -> Optional[ParticipantView]:
        return next((a for a in self.asesores if a.user_id == user_id), None)

    # --- Jurado ---
    def active_jurors(self) -> Tuple[JurorView, ...]:
        return tuple(j for j in self.jurados if j.is_active)

    def voting_jurors(self) -> Tuple[JurorView, ...]:
        return tuple(j for j in self.jurados if j.is_voting)

    def juror_for_user(self, user_id: UUID) -> Optional[JurorView]:
        return next((j for j in self.jurados if j.is_active and j.user_id == user_id), None)

    def juror_by_id(self, juror_id: UUID) -> Optional[JurorView]:
        return next((j for j in self.jurados if j.id == juror_id), None)

    def evaluations_for(self, ronda: int) -> Tuple[EvaluationView, ...]:
        return tuple(e for e in self.evaluaciones if e.ronda == ronda)


def build_snapshot(thesis) -> ThesisSnapshot:
    """
    Construye la vista inmutable a partir del modelo ORM `Thesis`.

    Requiere que las colecciones estén cargadas (lazy="selectin").
    """
    ultima_obs = None
    for entry in thesis.historial:
        if entry.estado_nuevo in JURY_OBSERVED_STATES:
            ultima_obs = as_utc(entry.created_at)

    return ThesisSnapshot(
        id=thesis.id,
        codigo=thesis.codigo,
        estado=thesis.estado,
        fase_actual=thesis.fase_actual,
        ronda_actual=thesis.ronda_actual,
        fecha_limite_evaluacion=as_utc(thesis.fecha_limite_evaluacion),
        fecha_limite_correccion=as_utc(thesis.fecha_limite_correccion),
        voucher_fisico_entregado=thesis.voucher_fisico_entregado,
        eliminada=thesis.eliminada,
        autores=tuple(
            ParticipantView(id=a.id, user_id=a.user_id, tipo=a.tipo, estado=a.estado, orden=a.orden)
            for a in thesis.autores
        ),
        asesores=tuple(
            ParticipantView(id=a.id, user_id=a.user_id, tipo=a.tipo, estado=a.estado)
            for a in thesis.asesores
        ),
        jurados=tuple(
            JurorView(id=j.id, user_id=j.user_id, tipo=j.tipo, is_active=j.is_active)
            for j in thesis.jurados
        ),
        documentos=tuple(
            DocumentView(
                id=d.id,
                tipo=d.tipo,
                version=d.version,
                es_version_actual=d.es_version_actual,
                firmado=d.firmado,
                mime_type=d.mime_type,
                ronda=d.ronda,
                created_at=as_utc(d.created_at),
            )
            for d in thesis.documentos
        ),
        evaluaciones=tuple(
            EvaluationView(
                id=e.id,
                jury_member_id=e.jury_member_id,
                ronda=e.ronda,
                fase=e.fase,
                resultado=e.resultado,
                observaciones=e.observaciones,
                created_at=as_utc(e.created_at),
            )
            for e in thesis.evaluaciones
        ),
        fecha_ultima_observacion=ultima_obs,
    )


__all__ = [
    "ParticipantView",
    "JurorView",
    "DocumentView",
    "EvaluationView",
    "ThesisParticipants",
    "ThesisSnapshot",
    "build_snapshot",
]

# Fin del archivo backend/app/modules/thesis/facades/snapshots.py
