# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/schemas/thesis_schemas.py

Schemas Pydantic (request/response) del módulo de tesis.

Los responses se validan directamente desde los modelos ORM
(`from_attributes=True`) o desde los dataclasses de las facades.

Fecha: 2026-02-03
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import ConfigDict, Field, computed_field, field_validator

from app.shared.utils.base_models import UTF8SafeModel
from app.modules.thesis.enums import (
    AccionTesis,
    EstadoParticipacion,
    EstadoTesis,
    FaseTesis,
    ModalidadSustentacion,
    ResultadoEvaluacion,
    TipoAsesor,
    TipoAutor,
    TipoDocumento,
    TipoJurado,
)
from app.modules.thesis.schemas.presentation import describe_estado


# ========== REQUEST SCHEMAS ==========

class ThesisCreateIn(UTF8SafeModel):
    """Registro de una tesis nueva (queda en BORRADOR)."""
    titulo: str = Field(..., min_length=1, max_length=500, description="Título de la tesis")
    asesor_id: UUID = Field(..., description="Docente invitado como asesor")
    resumen: Optional[str] = Field(None, max_length=5000)
    palabras_clave: List[str] = Field(default_factory=list, max_length=20)
    coautor_id: Optional[UUID] = Field(None, description="Estudiante invitado como coautor")
    coasesor_id: Optional[UUID] = Field(None, description="Docente invitado como coasesor")

    @field_validator("titulo")
    @classmethod
    def titulo_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("El título no puede estar vacío")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "titulo": "Modelo predictivo de deserción estudiantil",
                "asesor_id": "5b1f0c1e-2a44-4b0e-9d43-2c7b2f1d8a10",
                "resumen": "Estudio aplicado a la cohorte 2021-2024",
                "palabras_clave": ["deserción", "aprendizaje automático"],
            }
        }
    )


class ThesisUpdateIn(UTF8SafeModel):
    titulo: Optional[str] = Field(None, min_length=1, max_length=500)
    resumen: Optional[str] = Field(None, max_length=5000)
    palabras_clave: Optional[List[str]] = Field(None, max_length=20)


class ActionIn(UTF8SafeModel):
    """Cuerpo de las acciones sin archivo (comentario opcional u obligatorio)."""
    comentario: Optional[str] = Field(None, max_length=5000)


class InvitationResponseIn(UTF8SafeModel):
    aceptar: bool
    motivo: Optional[str] = Field(None, max_length=2000, description="Obligatorio al rechazar")


class InviteParticipantIn(UTF8SafeModel):
    rol: str = Field(..., description="COAUTOR | ASESOR | COASESOR")
    user_id: UUID

    @field_validator("rol")
    @classmethod
    def rol_upper(cls, v: str) -> str:
        return v.upper()


class AssignJurorIn(UTF8SafeModel):
    user_id: UUID
    tipo: TipoJurado


class PromoteAlternateIn(UTF8SafeModel):
    ausente_id: UUID = Field(..., description="ID del miembro del jurado que no asistirá")


class MarkNotificationsReadIn(UTF8SafeModel):
    ids: List[UUID] = Field(..., min_length=1)


# ========== RESPONSE SCHEMAS ==========

class EstadoInfoRead(UTF8SafeModel):
    codigo: str
    label: str
    color: str


class AuthorRead(UTF8SafeModel):
    id: UUID
    user_id: UUID
    tipo: TipoAutor
    orden: int
    estado: EstadoParticipacion
    motivo_rechazo: Optional[str] = None
    fecha_respuesta: Optional[datetime] = None


class AdvisorRead(UTF8SafeModel):
    id: UUID
    user_id: UUID
    tipo: TipoAsesor
    estado: EstadoParticipacion
    motivo_rechazo: Optional[str] = None
    fecha_respuesta: Optional[datetime] = None


class JurorRead(UTF8SafeModel):
    id: UUID
    user_id: UUID
    tipo: TipoJurado
    is_active: bool
    reemplaza_a_id: Optional[UUID] = None
    fecha_asignacion: datetime
    fecha_baja: Optional[datetime] = None


class DocumentRead(UTF8SafeModel):
    id: UUID
    thesis_id: UUID
    tipo: TipoDocumento
    nombre: str
    mime_type: str
    tamano: int
    version: int
    es_version_actual: bool
    firmado: bool
    fecha_firma: Optional[datetime] = None
    uploaded_by_id: UUID
    ronda: int
    created_at: datetime


class EvaluationRead(UTF8SafeModel):
    id: UUID
    jury_member_id: UUID
    ronda: int
    fase: FaseTesis
    resultado: ResultadoEvaluacion
    observaciones: Optional[str] = None
    archivo_url: Optional[str] = None
    created_at: datetime


class HistoryRead(UTF8SafeModel):
    id: UUID
    secuencia: int
    estado_anterior: EstadoTesis
    estado_nuevo: EstadoTesis
    accion: AccionTesis
    comentario: Optional[str] = None
    ronda: int
    changed_by_id: UUID
    created_at: datetime


class NotificationRead(UTF8SafeModel):
    id: UUID
    thesis_id: Optional[UUID] = None
    tipo: str
    titulo: str
    mensaje: str
    enlace: Optional[str] = None
    leida: bool
    created_at: datetime


class ThesisSummaryRead(UTF8SafeModel):
    """Fila de listados (sin participantes)."""
    id: UUID
    codigo: str
    titulo: str
    estado: EstadoTesis
    fase_actual: FaseTesis
    ronda_actual: int
    fecha_sustentacion: Optional[datetime] = None
    eliminada: bool = False
    updated_at: datetime

    @computed_field  # type: ignore[misc]
    @property
    def estado_info(self) -> EstadoInfoRead:
        return EstadoInfoRead(**describe_estado(self.estado)._asdict())


class ThesisRead(ThesisSummaryRead):
    resumen: Optional[str] = None
    palabras_clave: List[str] = Field(default_factory=list)
    fecha_limite_evaluacion: Optional[datetime] = None
    fecha_limite_correccion: Optional[datetime] = None
    voucher_fisico_entregado: bool = False
    lugar_sustentacion: Optional[str] = None
    modalidad_sustentacion: Optional[ModalidadSustentacion] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime
    autores: List[AuthorRead] = Field(default_factory=list)
    asesores: List[AdvisorRead] = Field(default_factory=list)
    jurados: List[JurorRead] = Field(default_factory=list)


class DeadlineStatusRead(UTF8SafeModel):
    fecha_limite_evaluacion: Optional[datetime] = None
    fecha_limite_correccion: Optional[datetime] = None
    evaluacion_vencida: bool
    correccion_vencida: bool
    dias_habiles_restantes: Optional[int] = None


class MissingRequirementRead(UTF8SafeModel):
    codigo: str
    descripcion: str
    tipo_documento: Optional[TipoDocumento] = None
    requiere_firma: bool = False


class RequirementCheckRead(UTF8SafeModel):
    complete: bool
    missing: List[MissingRequirementRead] = Field(default_factory=list)


class EvaluationProgressRead(UTF8SafeModel):
    ronda: int
    evaluados: int
    total: int
    todos_evaluaron: bool
    resultado_mayoria: Optional[ResultadoEvaluacion] = None
    aprobados: int = 0
    observados: int = 0
    pendientes: List[UUID] = Field(default_factory=list)


class ThesisDetailResponse(UTF8SafeModel):
    thesis: ThesisRead
    plazos: DeadlineStatusRead
    editable: bool
    terminal: bool
    acciones_disponibles: List[AccionTesis]
    requisitos: RequirementCheckRead
    progreso: Optional[EvaluationProgressRead] = None


class ThesisListResponse(UTF8SafeModel):
    items: List[ThesisSummaryRead]
    total: int


class TransitionResponse(UTF8SafeModel):
    accion: AccionTesis
    estado_anterior: EstadoTesis
    estado_nuevo: EstadoTesis
    ronda: int
    thesis: ThesisRead
    historial: HistoryRead


class EvaluationResponse(UTF8SafeModel):
    evaluation: EvaluationRead
    progreso: EvaluationProgressRead


class JuryPanelResponse(UTF8SafeModel):
    jurados: List[JurorRead]
    evaluaciones: List[EvaluationRead]
    progreso: EvaluationProgressRead


class InvitationResponseRead(UTF8SafeModel):
    thesis_id: UUID
    codigo: str
    rol: str
    aceptada: bool
    motivo: Optional[str] = None


class DefenseConflictRead(UTF8SafeModel):
    thesis_id: UUID
    codigo: str
    inicio: datetime
    fin: datetime
    motivos: List[str]
    jurados_compartidos: List[UUID] = Field(default_factory=list)


class DefenseConflictsResponse(UTF8SafeModel):
    inicio: datetime
    duracion_minutos: int
    conflictos: List[DefenseConflictRead]


class CountByEstadoRead(UTF8SafeModel):
    estado: EstadoTesis
    total: int

    @computed_field  # type: ignore[misc]
    @property
    def label(self) -> str:
        return describe_estado(self.estado).label


class MarkReadResponse(UTF8SafeModel):
    actualizadas: int


__all__ = [
    "ThesisCreateIn",
    "ThesisUpdateIn",
    "ActionIn",
    "InvitationResponseIn",
    "InviteParticipantIn",
    "AssignJurorIn",
    "PromoteAlternateIn",
    "MarkNotificationsReadIn",
    "EstadoInfoRead",
    "AuthorRead",
    "AdvisorRead",
    "JurorRead",
    "DocumentRead",
    "EvaluationRead",
    "HistoryRead",
    "NotificationRead",
    "ThesisSummaryRead",
    "ThesisRead",
    "DeadlineStatusRead",
    "MissingRequirementRead",
    "RequirementCheckRead",
    "EvaluationProgressRead",
    "ThesisDetailResponse",
    "ThesisListResponse",
    "TransitionResponse",
    "EvaluationResponse",
    "JuryPanelResponse",
    "InvitationResponseRead",
    "DefenseConflictRead",
    "DefenseConflictsResponse",
    "CountByEstadoRead",
    "MarkReadResponse",
]

# Fin del archivo backend/app/modules/thesis/schemas/thesis_schemas.py
