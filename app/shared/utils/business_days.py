# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/business_days.py

Cálculo de plazos en días hábiles (lunes a viernes).

Se usa para fijar la fecha límite de evaluación del jurado y la fecha
límite de corrección del estudiante. Los feriados institucionales NO se
consideran: solo se omiten sábados y domingos.

Funciones puras, sin I/O. Conservan la hora del día y la zona horaria
del valor de entrada.

Fecha: 2026-02-03
"""

from __future__ import annotations

import datetime as dt
from typing import Optional, TypeVar

# weekday(): lunes=0 ... sábado=5, domingo=6
_WEEKEND = frozenset({5, 6})

_D = TypeVar("_D", dt.date, dt.datetime)


def is_business_day(value: dt.date) -> bool:
    """True si la fecha cae de lunes a viernes."""
    return value.weekday() not in _WEEKEND


def add_business_days(start: _D, n: int) -> _D:
    """
    Suma `n` días hábiles a `start`.

    Avanza día a día y solo cuenta los días de lunes a viernes. Si `start`
    cae en fin de semana, el primer día contado es el lunes siguiente.

    Args:
        start: Fecha o datetime de inicio (no se cuenta).
        n: Días hábiles a sumar. Con n <= 0 se devuelve `start` sin cambios.

    Returns:
        Nueva fecha del mismo tipo que `start`.
    """
    result = start
    added = 0
    while added < n:
        result = result + dt.timedelta(days=1)
        if is_business_day(result):
            added += 1
    return result


def business_days_between(start: _D, end: _D) -> int:
    """
    Cuenta los días hábiles entre `start` (excluido) y `end` (incluido).

    Devuelve 0 cuando `end` no es posterior a `start`.
    """
    count = 0
    current = start
    while current < end:
        current = current + dt.timedelta(days=1)
        if is_business_day(current):
            count += 1
    return count


def is_past_deadline(deadline: Optional[dt.datetime], now: dt.datetime) -> bool:
    """
    Indica si un plazo ya venció en `now`.

    Se evalúa al momento de la consulta; sin plazo definido nunca vence.
    """
    if deadline is None:
        return False
    return now > deadline


__all__ = [
    "is_business_day",
    "add_business_days",
    "business_days_between",
    "is_past_deadline",
]

# Fin del archivo backend/app/shared/utils/business_days.py
