# -*- coding: utf-8 -*-
"""
backend/app/modules/thesis/facades/thesis/__init__.py

Re-exporta operaciones sobre el agregado Tesis que no son transiciones
de estado (CRUD, participantes, jurado, documentos).

Fecha: 2026-02-03
"""

from .crud import (
    create_thesis,
    update_metadata,
    soft_delete,
    restore,
    generate_codigo,
    ALLOWED_UPDATE_FIELDS,
)
from .participants import (
    respond_invitation,
    invite_participant,
    remove_participant,
    InvitationResponse,
)
from .jury import (
    assign_juror,
    remove_juror,
    promote_alternate,
)
from .documents import (
    PDF,
    check_file,
    add_document_version,
    upload_document,
    register_signature,
)

__all__ = [
    # CRUD
    "create_thesis",
    "update_metadata",
    "soft_delete",
    "restore",
    "generate_codigo",
    "ALLOWED_UPDATE_FIELDS",

    # Participantes
    "respond_invitation",
    "invite_participant",
    "remove_participant",
    "InvitationResponse",

    # Jurado
    "assign_juror",
    "remove_juror",
    "promote_alternate",

    # Documentos
    "PDF",
    "check_file",
    "add_document_version",
    "upload_document",
    "register_signature",
]

# Fin del archivo backend/app/modules/thesis/facades/thesis/__init__.py
