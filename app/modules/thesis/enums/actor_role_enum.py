# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/enums/actor_role_enum.py

Roles globales del actor autenticado (los entrega el servicio de auth).

El rol contextual (autor, asesor o jurado de UNA tesis) no viaja en el
token: se deriva de los participantes de la tesis al autorizar cada acción.

Fecha: 2026-02-03
"""

from enum import StrEnum


class RolActor(StrEnum):
    ESTUDIANTE = "ESTUDIANTE"
    DOCENTE = "DOCENTE"
    MESA_PARTES = "MESA_PARTES"
    ADMIN = "ADMIN"


__all__ = ["RolActor"]

# Fin del archivo backend/app/modules/thesis/enums/actor_role_enum.py
