# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/defense_schedule.py

Detección de cruces de horario entre sustentaciones.

Dos sustentaciones se cruzan si sus franjas [inicio, inicio + duración)
se solapan y comparten el lugar (sin distinguir mayúsculas) o algún
jurado activo. Solo informa: programar no se bloquea por un cruce.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional
from uuid import UUID

from app.modules.thesis.facades.base import as_utc

MOTIVO_LUGAR = "LUGAR"
MOTIVO_JURADO = "JURADO"


@dataclass(frozen=True)
class DefenseSlot:
    thesis_id: UUID
    codigo: str
    inicio: dt.datetime
    lugar: Optional[str] = None
    jurado_ids: FrozenSet[UUID] = frozenset()


@dataclass(frozen=True)
class DefenseConflict:
    thesis_id: UUID
    codigo: str
    inicio: dt.datetime
    fin: dt.datetime
    motivos: tuple
    jurados_compartidos: FrozenSet[UUID] = frozenset()


def _same_place(a: Optional[str], b: Optional[str]) -> bool:
    if not a or not b:
        return False
    return " ".join(a.split()).casefold() == " ".join(b.split()).casefold()


def overlaps(inicio_a: dt.datetime, inicio_b: dt.datetime, duracion: dt.timedelta) -> bool:
    return inicio_a < inicio_b + duracion and inicio_b < inicio_a + duracion


def slot_from_thesis(thesis) -> DefenseSlot:
    return DefenseSlot(
        thesis_id=thesis.id,
        codigo=thesis.codigo,
        inicio=as_utc(thesis.fecha_sustentacion),
        lugar=thesis.lugar_sustentacion,
        jurado_ids=frozenset(j.user_id for j in thesis.jurados if j.is_active),
    )


def find_conflicts(
    inicio: dt.datetime,
    existing: Iterable[DefenseSlot],
    *,
    duracion: dt.timedelta,
    lugar: Optional[str] = None,
    jurado_ids: Iterable[UUID] = (),
) -> List[DefenseConflict]:
    """Sustentaciones de `existing` que chocan con la franja propuesta."""
    inicio = as_utc(inicio)
    jurados = frozenset(jurado_ids)
    conflictos = []
    for slot in existing:
        if slot.inicio is None or not overlaps(inicio, slot.inicio, duracion):
            continue
        motivos = []
        if _same_place(lugar, slot.lugar):
            motivos.append(MOTIVO_LUGAR)
        compartidos = jurados & slot.jurado_ids
        if compartidos:
            motivos.append(MOTIVO_JURADO)
        if motivos:
            conflictos.append(DefenseConflict(
                thesis_id=slot.thesis_id,
                codigo=slot.codigo,
                inicio=slot.inicio,
                fin=slot.inicio + duracion,
                motivos=tuple(motivos),
                jurados_compartidos=compartidos,
            ))
    return sorted(conflictos, key=lambda c: c.inicio)


__all__ = [
    "MOTIVO_LUGAR",
    "MOTIVO_JURADO",
    "DefenseSlot",
    "DefenseConflict",
    "overlaps",
    "slot_from_thesis",
    "find_conflicts",
]

# Fin del archivo backend/app/modules/thesis/facades/defense_schedule.py
