# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/schemas/presentation.py

Etiquetas y colores de estado para la UI. No interviene en decisiones del
flujo: la máquina de estados nunca consulta este mapa.

Fecha: 2026-02-03
"""

from __future__ import annotations

from typing import Dict, NamedTuple

from app.modules.thesis.enums import EstadoTesis


class EstadoInfo(NamedTuple):
    codigo: str
    label: str
    color: str


_ESTADOS: Dict[EstadoTesis, tuple] = {
    EstadoTesis.BORRADOR: ("Borrador", "gray"),
    EstadoTesis.EN_REVISION: ("Proyecto en revisión", "blue"),
    EstadoTesis.OBSERVADA: ("Observada", "orange"),
    EstadoTesis.ASIGNANDO_JURADOS: ("Asignando jurados", "purple"),
    EstadoTesis.EN_EVALUACION_JURADO: ("En evaluación", "indigo"),
    EstadoTesis.OBSERVADA_JURADO: ("Observada por jurado", "orange"),
    EstadoTesis.PROYECTO_APROBADO: ("Proyecto aprobado", "green"),
    EstadoTesis.INFORME_FINAL: ("Informe final", "cyan"),
    EstadoTesis.EN_EVALUACION_INFORME: ("Evaluando informe", "indigo"),
    EstadoTesis.OBSERVADA_INFORME: ("Informe observado", "orange"),
    EstadoTesis.APROBADA: ("Informe aprobado", "green"),
    EstadoTesis.EN_SUSTENTACION: ("En sustentación", "purple"),
    EstadoTesis.SUSTENTADA: ("Sustentada", "emerald"),
    EstadoTesis.ARCHIVADA: ("Archivada", "slate"),
    EstadoTesis.RECHAZADA: ("Rechazada", "red"),
}


def describe_estado(estado) -> EstadoInfo:
    """Etiqueta legible; un valor desconocido se muestra tal cual en gris."""
    try:
        key = EstadoTesis(estado)
    except ValueError:
        return EstadoInfo(codigo=str(estado), label=str(estado), color="gray")
    label, color = _ESTADOS[key]
    return EstadoInfo(codigo=key.value, label=label, color=color)


__all__ = ["EstadoInfo", "describe_estado"]

# Fin del archivo backend/app/modules/thesis/schemas/presentation.py
