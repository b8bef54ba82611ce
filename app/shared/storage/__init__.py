# -*- coding: utf-8 -*-
"""
backend/app/shared/storage/__init__.py

Almacenamiento de documentos de tesis (colaborador externo).
"""

from .storage_io import (
    StorageError,
    StoredFileMetadata,
    IDocumentStorage,
    LocalDocumentStorage,
    sanitize_filename,
    get_document_storage,
)

__all__ = [
    "StorageError",
    "StoredFileMetadata",
    "IDocumentStorage",
    "LocalDocumentStorage",
    "sanitize_filename",
    "get_document_storage",
]
