# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/enums/document_type_enum.py

Tipos de documento del expediente de tesis.

Fecha: 2026-02-03
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum as _as_db_enum


class TipoDocumento(StrEnum):
    """
    Valores:
    - PROYECTO                  : Proyecto de tesis (PDF)
    - CARTA_ACEPTACION_ASESOR   : Carta firmada por el asesor
    - CARTA_ACEPTACION_COASESOR : Carta firmada por el coasesor
    - VOUCHER_PAGO              : Copia digital del voucher de pago
    - INFORME_FINAL_DOC         : Informe final de tesis
    - DOCUMENTO_SUSTENTATORIO   : Anexos de sustento
    - RESOLUCION_APROBACION     : Resolución emitida por Mesa de Partes
    - DICTAMEN                  : Dictamen firmado por el presidente del jurado
    """

    PROYECTO = "PROYECTO"
    CARTA_ACEPTACION_ASESOR = "CARTA_ACEPTACION_ASESOR"
    CARTA_ACEPTACION_COASESOR = "CARTA_ACEPTACION_COASESOR"
    VOUCHER_PAGO = "VOUCHER_PAGO"
    INFORME_FINAL_DOC = "INFORME_FINAL_DOC"
    DOCUMENTO_SUSTENTATORIO = "DOCUMENTO_SUSTENTATORIO"
    RESOLUCION_APROBACION = "RESOLUCION_APROBACION"
    DICTAMEN = "DICTAMEN"

    __db_enum_name__ = "tipo_documento_enum"

    @classmethod
    def as_db_enum(cls, name: str = "tipo_documento_enum") -> SAEnum:
        return _as_db_enum(cls, name=name)


# Documentos que sube el estudiante (solo mientras la tesis es editable)
STUDENT_DOCUMENT_TYPES = frozenset({
    TipoDocumento.PROYECTO,
    TipoDocumento.VOUCHER_PAGO,
    TipoDocumento.INFORME_FINAL_DOC,
    TipoDocumento.DOCUMENTO_SUSTENTATORIO,
})

# Cartas que sube el asesor / coasesor correspondiente
ADVISOR_LETTER_TYPES = frozenset({
    TipoDocumento.CARTA_ACEPTACION_ASESOR,
    TipoDocumento.CARTA_ACEPTACION_COASESOR,
})

# Documentos que solo ingresan junto con una acción del flujo
WORKFLOW_DOCUMENT_TYPES = frozenset({
    TipoDocumento.RESOLUCION_APROBACION,
    TipoDocumento.DICTAMEN,
})


__all__ = [
    "TipoDocumento",
    "STUDENT_DOCUMENT_TYPES",
    "ADVISOR_LETTER_TYPES",
    "WORKFLOW_DOCUMENT_TYPES",
]

# Fin del archivo backend/app/modules/thesis/enums/document_type_enum.py
