# -*- coding: utf-8 -*-
"""
backend/tests/modules/thesis/conftest.py

Fixtures del módulo de tesis.

- snapshots: fábrica de ThesisSnapshot (dominio puro, sin BD) con un
  equipo completo (autor, asesor aceptado, documentos y jurado).
- flow: ThesisFlow, constructor que lleva una tesis real (SQLite) por el
  flujo completo con el reloj avanzando en cada paso, para que historial
  y documentos queden ordenados en el tiempo.

Fecha: 2026-02-03
"""

import datetime as dt
from typing import Dict, Optional
from uuid import uuid4

import pytest

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
from app.modules.thesis.facades import thesis as thesis_ops
from app.modules.thesis.facades.snapshots import (
    DocumentView,
    EvaluationView,
    JurorView,
    ParticipantView,
    ThesisSnapshot,
)
from app.modules.thesis.facades.thesis_state_machine import (
    ActionPayload,
    DefenseSchedule,
    NewDocument,
    WorkflowParams,
)
from app.modules.thesis.repositories import ThesisRepository
from app.modules.thesis.services import ThesisWorkflowService

PDF = "application/pdf"


# =============================================================================
# Snapshots (dominio puro)
# =============================================================================
class SnapshotKit:
    """Arma snapshots coherentes con los actores de prueba."""

    def __init__(self, *, student, advisor, jurors, now):
        self.student = student
        self.advisor = advisor
        self.jurors = jurors
        self.now = now
        self.panel: Dict[str, JurorView] = {
            tipo: JurorView(id=uuid4(), user_id=actor.user_id, tipo=TipoJurado(tipo))
            for tipo, actor in jurors.items()
        }

    def author(self, estado=EstadoParticipacion.ACEPTADO) -> ParticipantView:
        return ParticipantView(
            id=uuid4(), user_id=self.student.user_id, tipo=TipoAutor.AUTOR_PRINCIPAL, estado=estado,
        )

    def advisor_view(self, estado=EstadoParticipacion.ACEPTADO, tipo=TipoAsesor.ASESOR, user_id=None) -> ParticipantView:
        return ParticipantView(id=uuid4(), user_id=user_id or self.advisor.user_id, tipo=tipo, estado=estado)

    def doc(self, tipo, *, version=1, actual=True, firmado=False, mime=PDF, created_at=None, ronda=0) -> DocumentView:
        return DocumentView(
            id=uuid4(),
            tipo=TipoDocumento(tipo),
            version=version,
            es_version_actual=actual,
            firmado=firmado,
            mime_type=mime,
            ronda=ronda,
            created_at=created_at or self.now,
        )

    def project_documents(self):
        return (
            self.doc(TipoDocumento.PROYECTO),
            self.doc(TipoDocumento.CARTA_ACEPTACION_ASESOR, firmado=True),
            self.doc(TipoDocumento.VOUCHER_PAGO),
        )

    def voting_panel(self):
        return tuple(self.panel[t] for t in ("PRESIDENTE", "VOCAL", "SECRETARIO"))

    def full_panel(self):
        return tuple(self.panel.values())

    def evaluation(self, tipo: str, resultado, *, ronda=1, fase=FaseTesis.PROYECTO, obs=None) -> EvaluationView:
        resultado = ResultadoEvaluacion(resultado)
        if resultado == ResultadoEvaluacion.OBSERVADO and obs is None:
            obs = "Revisar la metodología"
        return EvaluationView(
            id=uuid4(),
            jury_member_id=self.panel[tipo].id,
            ronda=ronda,
            fase=fase,
            resultado=resultado,
            observaciones=obs,
            created_at=self.now,
        )

    def snapshot(self, estado=EstadoTesis.BORRADOR, **overrides) -> ThesisSnapshot:
        values = dict(
            id=uuid4(),
            codigo="TES-2026-ABC123",
            estado=EstadoTesis(estado),
            autores=(self.author(),),
            asesores=(self.advisor_view(),),
            documentos=self.project_documents(),
        )
        values.update(overrides)
        return ThesisSnapshot(**values)

    def in_evaluation(self, votes: Optional[Dict[str, str]] = None, *, fase=FaseTesis.PROYECTO, ronda=1, **overrides):
        estado = EstadoTesis.EN_EVALUACION_JURADO if fase == FaseTesis.PROYECTO else EstadoTesis.EN_EVALUACION_INFORME
        evaluaciones = tuple(
            self.evaluation(tipo, resultado, ronda=ronda, fase=fase) for tipo, resultado in (votes or {}).items()
        )
        values = dict(
            fase_actual=fase,
            ronda_actual=ronda,
            jurados=self.full_panel(),
            evaluaciones=evaluaciones,
            fecha_limite_evaluacion=self.now + dt.timedelta(days=21),
        )
        values.update(overrides)
        return self.snapshot(estado, **values)


@pytest.fixture
def snapshots(student, advisor, jurors, now) -> SnapshotKit:
    return SnapshotKit(student=student, advisor=advisor, jurors=jurors, now=now)


@pytest.fixture
def signed_verdict() -> NewDocument:
    return NewDocument(nombre="dictamen.pdf", ruta_archivo="t/dictamen/1_dictamen.pdf", tamano=2048, firmado=True)


@pytest.fixture
def defense_schedule() -> DefenseSchedule:
    return DefenseSchedule(
        fecha=dt.date(2026, 6, 15),
        hora=dt.time(10, 0),
        lugar="Auditorio A",
        modalidad=ModalidadSustentacion.PRESENCIAL,
    )


# =============================================================================
# ThesisFlow (integración con SQLite)
# =============================================================================
class ThesisFlow:
    """
    Lleva una tesis por el flujo usando facades y ThesisWorkflowService.

    Cada operación usa `tick()`: el reloj avanza 5 minutos por paso.
    """

    def __init__(self, db, notifier, *, student, advisor, registrar, admin, jurors, start):
        self.db = db
        self.notifier = notifier
        self.student = student
        self.advisor = advisor
        self.registrar = registrar
        self.admin = admin
        self.jurors = jurors
        self.clock = start
        self.params = WorkflowParams()
        self.wf = ThesisWorkflowService(db, notifier=notifier, params=self.params)
        self.thesis_id = None
        self.juror_ids: Dict[str, object] = {}

    def tick(self, minutes: int = 5) -> dt.datetime:
        self.clock = self.clock + dt.timedelta(minutes=minutes)
        return self.clock

    async def reload(self):
        return await ThesisRepository().get_by_id(self.db, self.thesis_id, include_deleted=True)

    # ---- Borrador ----
    async def create(self, **kwargs):
        kwargs.setdefault("titulo", "Modelo predictivo de deserción estudiantil")
        kwargs.setdefault("asesor_id", self.advisor.user_id)
        thesis = await thesis_ops.create_thesis(self.db, actor=self.student, now=self.tick(), **kwargs)
        self.thesis_id = thesis.id
        return thesis

    async def upload(self, tipo, *, actor=None, firmado=False, mime=PDF, nombre=None):
        tipo = TipoDocumento(tipo)
        return await thesis_ops.upload_document(
            self.db,
            self.thesis_id,
            actor=actor or self.student,
            tipo=tipo,
            nombre=nombre or f"{tipo.value.lower()}.pdf",
            ruta_archivo=f"{self.thesis_id}/{tipo.value.lower()}/{uuid4().hex}.pdf",
            mime_type=mime,
            tamano=1024,
            firmado=firmado,
            now=self.tick(),
        )

    async def accept_invitation(self, actor=None):
        return await thesis_ops.respond_invitation(
            self.db, self.thesis_id, actor=actor or self.advisor, aceptar=True, now=self.tick(),
        )

    async def draft_ready(self, **create_kwargs):
        """BORRADOR con todos los requisitos para enviar a revisión."""
        await self.create(**create_kwargs)
        await self.accept_invitation()
        await self.upload(TipoDocumento.CARTA_ACEPTACION_ASESOR, actor=self.advisor, firmado=True)
        await self.upload(TipoDocumento.PROYECTO)
        await self.upload(TipoDocumento.VOUCHER_PAGO)
        return await self.reload()

    # ---- Transiciones ----
    async def act(self, accion, actor, payload: Optional[ActionPayload] = None):
        return await self.wf.execute(self.thesis_id, AccionTesis(accion), actor, payload, now=self.tick())

    async def to_in_review(self):
        await self.draft_ready()
        return await self.act(AccionTesis.ENVIAR_REVISION, self.student)

    async def to_assigning(self):
        await self.to_in_review()
        await self.act(AccionTesis.CONFIRMAR_VOUCHER, self.registrar)
        return await self.act(AccionTesis.APROBAR, self.registrar)

    async def assign(self, tipo: str, actor=None):
        juror = await thesis_ops.assign_juror(
            self.db,
            self.thesis_id,
            actor=self.registrar,
            user_id=(actor or self.jurors[tipo]).user_id,
            tipo=TipoJurado(tipo),
            now=self.tick(),
        )
        self.juror_ids[tipo] = juror.id
        return juror

    async def assign_panel(self, *, with_alternate: bool = True):
        tipos = ["PRESIDENTE", "VOCAL", "SECRETARIO"] + (["ACCESITARIO"] if with_alternate else [])
        for tipo in tipos:
            await self.assign(tipo)

    async def to_project_evaluation(self, *, with_alternate: bool = True):
        await self.to_assigning()
        await self.assign_panel(with_alternate=with_alternate)
        return await self.act(AccionTesis.CONFIRMAR_JURADOS, self.registrar)

    async def vote(self, tipo: str, resultado, observaciones: Optional[str] = None, *, actor=None):
        resultado = ResultadoEvaluacion(resultado)
        if resultado == ResultadoEvaluacion.OBSERVADO and observaciones is None:
            observaciones = f"Observaciones del {tipo.lower()}"
        return await self.wf.record_evaluation(
            self.thesis_id, actor or self.jurors[tipo], resultado, observaciones, now=self.tick(),
        )

    async def vote_all(self, resultado=ResultadoEvaluacion.APROBADO):
        result = None
        for tipo in ("PRESIDENTE", "VOCAL", "SECRETARIO"):
            result = await self.vote(tipo, resultado)
        return result

    async def verdict(self, *, sustentacion: Optional[DefenseSchedule] = None, firmado: bool = True, mime=PDF):
        documento = NewDocument(
            nombre="dictamen.pdf",
            ruta_archivo=f"{self.thesis_id}/dictamen/{uuid4().hex}.pdf",
            mime_type=mime,
            tamano=4096,
            firmado=firmado,
        )
        payload = ActionPayload(documento=documento, sustentacion=sustentacion)
        return await self.act(AccionTesis.SUBIR_DICTAMEN, self.jurors["PRESIDENTE"], payload)

    async def to_project_approved(self):
        await self.to_project_evaluation()
        await self.vote_all(ResultadoEvaluacion.APROBADO)
        return await self.verdict()

    async def to_final_report(self):
        await self.to_project_approved()
        resolucion = NewDocument(
            nombre="resolucion.pdf",
            ruta_archivo=f"{self.thesis_id}/resolucion/{uuid4().hex}.pdf",
            tamano=2048,
        )
        return await self.act(
            AccionTesis.SUBIR_RESOLUCION, self.registrar, ActionPayload(documento=resolucion),
        )

    async def to_report_evaluation(self):
        await self.to_final_report()
        await self.upload(TipoDocumento.INFORME_FINAL_DOC)
        return await self.act(AccionTesis.ENVIAR_INFORME, self.student)

    def schedule(self, **overrides) -> DefenseSchedule:
        values = dict(
            fecha=dt.date(2026, 6, 15),
            hora=dt.time(10, 0),
            lugar="Auditorio A",
            modalidad=ModalidadSustentacion.PRESENCIAL,
        )
        values.update(overrides)
        return DefenseSchedule(**values)

    async def to_defense(self, **schedule_overrides):
        await self.to_report_evaluation()
        await self.vote_all(ResultadoEvaluacion.APROBADO)
        return await self.verdict(sustentacion=self.schedule(**schedule_overrides))


@pytest.fixture
def make_flow(db, notifier, student, advisor, registrar, admin, jurors, now):
    """Fábrica: varias tesis en la misma BD (p. ej. cruces de sustentación)."""
    def _make(*, jurors_override=None, student_override=None, start=None):
        return ThesisFlow(
            db,
            notifier,
            student=student_override or student,
            advisor=advisor,
            registrar=registrar,
            admin=admin,
            jurors=jurors_override or jurors,
            start=start or now,
        )
    return _make


@pytest.fixture
def flow(make_flow) -> ThesisFlow:
    return make_flow()

# Fin del archivo backend/tests/modules/thesis/conftest.py
