# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/metrics/workflow_metrics.py

Instrumentación de acciones del flujo de tesis.

Métricas expuestas:
- thesis_workflow_actions_total{accion,outcome}
- thesis_workflow_action_latency_seconds{accion,outcome}

Labels:
- accion: AccionTesis (ENVIAR_REVISION, APROBAR, ...) o una operación
  auxiliar (REGISTRAR_EVALUACION, SUBIR_DOCUMENTO, ...)
- outcome: success | rejected | conflict | error

🚫 Prohibido: thesis_id, user_id (alta cardinalidad)

Fecha: 2026-02-03
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Literal

from prometheus_client import REGISTRY, Counter, Histogram

Outcome = Literal["success", "rejected", "conflict", "error"]

METRIC_ACTIONS = "thesis_workflow_actions_total"
METRIC_LATENCY = "thesis_workflow_action_latency_seconds"


def _existing(name: str):
    # prometheus_client registra los Counters sin el sufijo _total
    names_to_collectors = getattr(REGISTRY, "_names_to_collectors", {})
    return names_to_collectors.get(name) or names_to_collectors.get(name.removesuffix("_total"))


def _counter(name: str, description: str, labelnames: tuple) -> Counter:
    existing = _existing(name)
    if existing is not None:
        return existing
    try:
        return Counter(name, description, labelnames=labelnames)
    except ValueError:
        # Ya registrado (recarga del módulo en tests)
        return _existing(name)


def _histogram(name: str, description: str, labelnames: tuple) -> Histogram:
    existing = _existing(name)
    if existing is not None:
        return existing
    try:
        return Histogram(name, description, labelnames=labelnames)
    except ValueError:
        return _existing(name)


ACTIONS_TOTAL = _counter(
    METRIC_ACTIONS, "Acciones del flujo de tesis por resultado", ("accion", "outcome"),
)
ACTION_LATENCY = _histogram(
    METRIC_LATENCY, "Latencia de acciones del flujo de tesis (s)", ("accion", "outcome"),
)


def record_workflow_action(accion: str, outcome: Outcome, duration_seconds: float) -> None:
    accion = str(accion)
    ACTIONS_TOTAL.labels(accion, outcome).inc()
    ACTION_LATENCY.labels(accion, outcome).observe(duration_seconds)


class ActionTracker:
    def __init__(self):
        self.outcome: Outcome = "error"
        self._start = time.perf_counter()

    def set_success(self) -> None:
        self.outcome = "success"

    def set_rejected(self) -> None:
        self.outcome = "rejected"

    def set_conflict(self) -> None:
        self.outcome = "conflict"

    @property
    def duration(self) -> float:
        return time.perf_counter() - self._start


@asynccontextmanager
async def instrument_workflow_action(accion: str):
    """
    Context manager async para instrumentar una acción.

    Uso:
        async with instrument_workflow_action("APROBAR") as metrics:
            result = await do_work()
            metrics.set_success()

    Si no se marca el resultado, se registra como error.
    """
    tracker = ActionTracker()
    try:
        yield tracker
    finally:
        record_workflow_action(accion, tracker.outcome, tracker.duration)


__all__ = [
    "ACTIONS_TOTAL",
    "ACTION_LATENCY",
    "ActionTracker",
    "instrument_workflow_action",
    "record_workflow_action",
]

# Fin del archivo backend/app/modules/thesis/metrics/workflow_metrics.py
