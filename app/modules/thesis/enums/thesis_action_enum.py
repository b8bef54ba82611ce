# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/enums/thesis_action_enum.py

Acciones que disparan transiciones en la máquina de estados de tesis.
Cada entrada del historial registra la acción que la originó.

Fecha: 2026-02-03
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class AccionTesis(StrEnum):
    """
    Acciones del flujo.

    Estudiante   : ENVIAR_REVISION, REENVIAR_CORRECCION, ENVIAR_INFORME
    Mesa de Partes: CONFIRMAR_VOUCHER, APROBAR, OBSERVAR, RECHAZAR,
                    CONFIRMAR_JURADOS, SUBIR_RESOLUCION
    Jurado       : SUBIR_DICTAMEN (solo presidente)
    Administrativas: REGISTRAR_SUSTENTACION, ARCHIVAR
    """

    ENVIAR_REVISION = "ENVIAR_REVISION"
    CONFIRMAR_VOUCHER = "CONFIRMAR_VOUCHER"
    APROBAR = "APROBAR"
    OBSERVAR = "OBSERVAR"
    RECHAZAR = "RECHAZAR"
    CONFIRMAR_JURADOS = "CONFIRMAR_JURADOS"
    SUBIR_DICTAMEN = "SUBIR_DICTAMEN"
    REENVIAR_CORRECCION = "REENVIAR_CORRECCION"
    SUBIR_RESOLUCION = "SUBIR_RESOLUCION"
    ENVIAR_INFORME = "ENVIAR_INFORME"
    REGISTRAR_SUSTENTACION = "REGISTRAR_SUSTENTACION"
    ARCHIVAR = "ARCHIVAR"

    __db_enum_name__ = "accion_tesis_enum"

    @classmethod
    def as_db_enum(cls, name: str = "accion_tesis_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


__all__ = ["AccionTesis"]

# Fin del archivo backend/app/modules/thesis/enums/thesis_action_enum.py
